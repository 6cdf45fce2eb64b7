"""CLI entry point for mcp-chat.

This module provides the command-line interface. It can be invoked as
`mcp-chat` (via the script entry point) or `python -m mcp_chat`.

Commands:
    chat               interactive terminal chat (default)
    prompt <message>   answer a single message and exit
    serve              start the HTTP API
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from mcp_chat import __version__, create_app
from mcp_chat.cli import run_terminal
from mcp_chat.config import McpChatSettings
from mcp_chat.providers import get_available_providers


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="mcp-chat",
        description="Chat with MCP tools through an LLM or keyword matching",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mcp-chat {__version__}",
    )

    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=get_available_providers(),
        help="Completion provider (default: keyword, can be set via MCP_CHAT_PROVIDER)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model identifier for the provider (can be set via MCP_CHAT_MODEL)",
    )

    parser.add_argument(
        "--mcp-config",
        type=str,
        default=None,
        help="Path to an mcpServers JSON file (can be set via MCP_CHAT_MCP_CONFIG_PATH)",
    )

    parser.add_argument(
        "--mcp-server",
        type=str,
        default=None,
        help="Name of the MCP server to use (default: first configured server)",
    )

    parser.add_argument(
        "--default-tool",
        type=str,
        default=None,
        help="Tool used when no tool can be selected (can be set via MCP_CHAT_DEFAULT_TOOL)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via MCP_CHAT_LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("chat", help="Start an interactive chat session")

    prompt_parser = subparsers.add_parser("prompt", help="Send a single message")
    prompt_parser.add_argument("message", help="The message to send")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via MCP_CHAT_HOST)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 3000, can be set via MCP_CHAT_PORT)",
    )

    return parser


def build_settings(args: argparse.Namespace) -> McpChatSettings:
    """Build settings; CLI args override environment variables."""
    overrides = {
        "provider": args.provider,
        "model": args.model,
        "mcp_config_path": args.mcp_config,
        "mcp_server": args.mcp_server,
        "default_tool": args.default_tool,
        "log_level": args.log_level,
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
    }
    settings_kwargs = {key: value for key, value in overrides.items() if value is not None}
    return McpChatSettings(**settings_kwargs)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the mcp-chat CLI."""
    args = build_parser().parse_args(argv)
    settings = build_settings(args)

    if args.command == "serve":
        app = create_app(settings=settings)
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    # stdout belongs to the chat, diagnostics go to stderr
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    message = args.message if args.command == "prompt" else None
    return asyncio.run(run_terminal(settings, message=message))


if __name__ == "__main__":
    sys.exit(main())
