"""Terminal chat front-end.

Runs either an interactive chat loop or a single prompt against a
ChatAgent. Errors from one message are printed and the loop continues;
the agent is always closed on exit.
"""

import asyncio
import logging
import sys
from typing import Callable, TextIO

from mcp_chat.agents import ChatAgent, create_agent
from mcp_chat.config import McpChatSettings
from mcp_chat.errors import McpChatError

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit", "sair"}


class Terminal:
    """Line-oriented terminal reader and writer.

    Attributes:
        input_func: Blocking function reading one line (input() by default)
        output: Stream for regular output
        error_output: Stream for error messages
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: TextIO | None = None,
        error_output: TextIO | None = None,
    ) -> None:
        self.input_func = input_func
        self.output = output or sys.stdout
        self.error_output = error_output or sys.stderr

    async def input(self, prompt: str) -> str | None:
        """Read one line without blocking the event loop; None on end of input."""
        try:
            return await asyncio.to_thread(self.input_func, f"{prompt}: ")
        except EOFError:
            return None

    def print(self, text: str = "") -> None:
        print(text, file=self.output, flush=True)

    def print_answer(self, text: str) -> None:
        self.print(f"\nAssistant: {text}")

    def print_error(self, text: str) -> None:
        print(f"Error: {text}", file=self.error_output, flush=True)


async def run_chat_loop(agent: ChatAgent, terminal: Terminal) -> None:
    """Read messages until the user exits, answering each one."""
    terminal.print("=== MCP chat ===")
    terminal.print(f"Tools: {', '.join(tool.name for tool in agent.tools) or '(none)'}")
    terminal.print(f"Type one of {', '.join(sorted(EXIT_COMMANDS))} to leave.\n")

    while True:
        message = await terminal.input("\nYou")
        if message is None or message.strip().lower() in EXIT_COMMANDS:
            terminal.print("\nClosing chat...")
            return
        if not message.strip():
            continue

        try:
            terminal.print("\nThinking...")
            answer = await agent.send_message(message)
        except McpChatError as e:
            terminal.print_error(str(e))
            continue

        terminal.print_answer(answer)


async def run_single_prompt(agent: ChatAgent, terminal: Terminal, message: str) -> int:
    """Answer one message. Returns a process exit code."""
    try:
        answer = await agent.send_message(message)
    except McpChatError as e:
        terminal.print_error(str(e))
        return 1

    terminal.print(answer)
    return 0


async def run_terminal(
    settings: McpChatSettings,
    message: str | None = None,
    terminal: Terminal | None = None,
    agent: ChatAgent | None = None,
) -> int:
    """Build and initialize an agent, then chat or answer a single message.

    Args:
        settings: Application settings
        message: If given, answer only this message
        terminal: Terminal to use (a stdin/stdout one by default)
        agent: Prebuilt agent (built from settings by default)

    Returns:
        int: Process exit code
    """
    terminal = terminal or Terminal()

    try:
        if agent is None:
            agent = await create_agent(settings)
        await agent.initialize()
    except McpChatError as e:
        terminal.print_error(f"Initialization error: {e}")
        if agent is not None:
            await agent.close()
        return 1

    if agent.degraded:
        terminal.print_error(
            f"Provider '{settings.provider}' unavailable, using keyword matching"
        )

    try:
        if message is not None:
            return await run_single_prompt(agent, terminal, message)
        await run_chat_loop(agent, terminal)
        return 0
    finally:
        try:
            await agent.close()
        except Exception as e:
            terminal.print_error(f"Error closing agent: {e}")
