"""Tool host transport over the Model Context Protocol.

McpToolHost launches an MCP server as a subprocess, talks to it over stdio
and exposes the three operations the agent needs: list the tools, call a
tool, close the connection. The connection is a single stateful session and
must not be used for interleaved requests.
"""

import asyncio
import json
import logging
from contextlib import AsyncExitStack
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import get_default_environment, stdio_client

from mcp_chat.errors import ToolHostConnectionError, ToolInvocationError
from mcp_chat.tools.config import McpServerConfig
from mcp_chat.tools.types import Tool

logger = logging.getLogger(__name__)


def _result_field(result: Any, name: str, alias: str) -> Any:
    """Read a CallToolResult field under its snake_case or camelCase spelling."""
    value = getattr(result, name, None)
    if value is None:
        value = getattr(result, alias, None)
    return value


def _decode_text(text: str) -> Any:
    """Decode JSON text content, falling back to the plain string."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return text


def convert_call_result(result: Any) -> Any:
    """Turn an MCP CallToolResult into a plain structured or scalar value.

    Structured content wins when present. Otherwise text blocks are decoded
    (as JSON when possible); other blocks are dumped to dicts. A single block
    is returned on its own, several as a list.
    """
    structured = _result_field(result, "structured_content", "structuredContent")
    if structured is not None:
        return structured

    values = []
    for block in getattr(result, "content", None) or []:
        if getattr(block, "type", None) == "text":
            values.append(_decode_text(block.text))
        elif hasattr(block, "model_dump"):
            values.append(block.model_dump(mode="json", exclude_none=True))
        else:
            values.append(block)

    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def _error_text(result: Any) -> str:
    texts = [
        block.text
        for block in getattr(result, "content", None) or []
        if getattr(block, "type", None) == "text"
    ]
    return " ".join(texts) or "tool reported an error"


class McpToolHost:
    """Client for one MCP server launched over stdio.

    Attributes:
        server_config: How to launch the server
        client_name: Name reported to the server during the handshake
        connect_timeout: Seconds allowed for launch and handshake (None: no limit)
        call_timeout: Seconds allowed for each list/call request (None: no limit)
    """

    def __init__(
        self,
        server_config: McpServerConfig,
        client_name: str = "mcp-chat",
        connect_timeout: float | None = 30.0,
        call_timeout: float | None = 60.0,
    ) -> None:
        self.server_config = server_config
        self.client_name = client_name
        self.connect_timeout = connect_timeout
        self.call_timeout = call_timeout
        self._exit_stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def _server_parameters(self) -> StdioServerParameters:
        env = None
        if self.server_config.env:
            env = {**get_default_environment(), **self.server_config.env}
        return StdioServerParameters(
            command=self.server_config.command,
            args=list(self.server_config.args),
            env=env,
        )

    async def connect(self) -> None:
        """Launch the server and complete the MCP handshake.

        Raises:
            ToolHostConnectionError: If the server cannot be started or does
                not answer the handshake in time
        """
        if self._session is not None:
            return

        command = " ".join([self.server_config.command, *self.server_config.args])
        logger.info(f"Connecting to MCP server: {command}")

        exit_stack = AsyncExitStack()
        try:
            read, write = await exit_stack.enter_async_context(
                stdio_client(self._server_parameters())
            )
            session = await exit_stack.enter_async_context(ClientSession(read, write))
            await asyncio.wait_for(session.initialize(), timeout=self.connect_timeout)
        except Exception as e:
            await self._safe_close(exit_stack)
            logger.error(f"Failed to connect to MCP server: {e}")
            raise ToolHostConnectionError(f"Failed to initialize MCP client: {e}") from e

        self._exit_stack = exit_stack
        self._session = session
        logger.info("MCP session established")

    async def list_tools(self) -> list[Tool]:
        """List the tools the server offers.

        Raises:
            ToolHostConnectionError: If not connected or the request fails
        """
        session = self._require_session()
        try:
            response = await asyncio.wait_for(session.list_tools(), timeout=self.call_timeout)
        except Exception as e:
            raise ToolHostConnectionError(f"Failed to list tools: {e}") from e

        tools = [Tool.from_mcp_tool(tool) for tool in response.tools]
        logger.info(f"MCP server offers tools: {', '.join(t.name for t in tools)}")
        return tools

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """Invoke a tool and return its converted result.

        Raises:
            ToolInvocationError: If the call fails, times out, or the tool
                reports an error
        """
        session = self._require_session()
        logger.debug(f"Calling tool {name} with arguments {arguments}")

        try:
            result = await asyncio.wait_for(
                session.call_tool(name, arguments=arguments),
                timeout=self.call_timeout,
            )
        except asyncio.TimeoutError as e:
            raise ToolInvocationError(
                f"Tool {name} timed out after {self.call_timeout}s"
            ) from e
        except Exception as e:
            raise ToolInvocationError(f"Tool {name} failed: {e}") from e

        if _result_field(result, "is_error", "isError"):
            raise ToolInvocationError(f"Tool {name} returned an error: {_error_text(result)}")

        return convert_call_result(result)

    async def close(self) -> None:
        """Close the session and stop the server. Safe to call repeatedly."""
        exit_stack = self._exit_stack
        self._exit_stack = None
        self._session = None

        if exit_stack is None:
            return

        await self._safe_close(exit_stack)
        logger.info("MCP session closed")

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ToolHostConnectionError("MCP client not connected")
        return self._session

    @staticmethod
    async def _safe_close(exit_stack: AsyncExitStack) -> None:
        try:
            await exit_stack.aclose()
        except Exception as e:
            logger.warning(f"Error while closing MCP transport: {e}")
