"""mcp-chat: chat front-end that answers messages with MCP tools.

This package routes a free-text message to a tool hosted by an MCP server,
validates the arguments a completion provider extracted for it, calls the
tool and phrases an answer grounded in the tool's result. It ships an HTTP
API and a terminal chat.
"""

from mcp_chat.app import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
