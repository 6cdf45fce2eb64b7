"""Tool dispatcher: from a free-text message to a grounded answer.

For each message the dispatcher runs, in order:

1. interpret: the completion provider picks a tool and extracts arguments;
2. lookup: the tool must exist in the catalog, otherwise the fallback
   policy applies (the host is never called with an unknown name);
3. validate: arguments are checked against the tool's input schema, and
   replaced by minimal arguments if they do not fit;
4. invoke: the tool host runs the tool;
5. ground: the provider phrases the answer from the tool's result.

A failure in one step stops the exchange before the next step runs.
"""

import logging
from typing import Any, Protocol

from mcp_chat.errors import ValidationError
from mcp_chat.providers.base import CompletionProvider
from mcp_chat.tools.schema import SchemaValidator, build_validator, fallback_arguments
from mcp_chat.tools.types import Tool, ToolSelection, fallback_selection, find_tool


class ToolHost(Protocol):
    """What the dispatcher needs from a tool host transport."""

    @property
    def is_connected(self) -> bool: ...

    async def connect(self) -> None: ...

    async def list_tools(self) -> list[Tool]: ...

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any: ...

    async def close(self) -> None: ...


class ToolDispatcher:
    """Orchestrates tool selection, validation, invocation and grounding.

    Attributes:
        tool_host: Transport used to list and call tools
        provider: Completion provider used for selection and grounding
        default_tool: Tool used by the fallback policy, if any
        logger: Logger receiving the per-step diagnostics
    """

    def __init__(
        self,
        tool_host: ToolHost,
        provider: CompletionProvider,
        default_tool: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tool_host = tool_host
        self.provider = provider
        self.default_tool = default_tool
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._tools: list[Tool] = []
        self._validators: dict[str, SchemaValidator] = {}

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools)

    async def refresh_catalog(self) -> list[Tool]:
        """Fetch the tool catalog from the host and compile validators."""
        self._tools = await self.tool_host.list_tools()
        self._validators = {
            tool.name: build_validator(tool.input_schema, name=f"{tool.name}_arguments")
            for tool in self._tools
        }

        if self.default_tool and find_tool(self._tools, self.default_tool) is None:
            names = ", ".join(tool.name for tool in self._tools)
            self.logger.warning(
                f"Default tool '{self.default_tool}' is not available. Available tools: {names}"
            )

        return self.tools

    def swap_provider(self, provider: CompletionProvider) -> None:
        """Replace the completion provider (used when falling back)."""
        self.logger.info(f"Switching completion provider to {provider.name}")
        self.provider = provider

    async def interpret(self, message: str) -> ToolSelection:
        """Select a tool for the message; the result always names a catalog tool.

        Raises:
            ToolSelectionError: If no tool can be selected
        """
        selection = await self.provider.analyze_intent(message, self._tools)

        if find_tool(self._tools, selection.tool_name) is None:
            self.logger.warning(
                f"Provider selected unknown tool '{selection.tool_name}'"
            )
            selection = fallback_selection(
                message,
                self._tools,
                self.default_tool,
                f"unknown tool '{selection.tool_name}'",
            )

        self.logger.info(f"Selected tool {selection.tool_name}")
        return selection

    def validate_arguments(self, selection: ToolSelection, message: str) -> dict[str, Any]:
        """Validate the selection's arguments against the tool's schema.

        Validation failures are not raised: the minimal message-only
        arguments are returned instead.
        """
        validator = self._validators.get(selection.tool_name)
        if validator is None:
            tool = find_tool(self._tools, selection.tool_name)
            validator = build_validator(tool.input_schema if tool else None)

        try:
            return validator.validate(selection.parameters)
        except ValidationError as e:
            self.logger.warning(
                f"Arguments for {selection.tool_name} failed validation, "
                f"using minimal arguments: {e}"
            )
            return fallback_arguments(message)

    async def invoke(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        """Call the tool on the host.

        Raises:
            ToolInvocationError: If the host call fails
        """
        self.logger.debug(f"Invoking {tool_name} with {arguments}")
        return await self.tool_host.call_tool(tool_name, arguments)

    async def ground(self, message: str, tool_name: str, tool_result: Any) -> str:
        """Phrase the final answer from the tool's result."""
        return await self.provider.generate_grounded_response(message, tool_name, tool_result)

    async def dispatch(self, message: str) -> str:
        """Run the full pipeline for one message.

        Returns:
            str: The grounded answer

        Raises:
            ToolSelectionError: If no tool can be selected
            ToolInvocationError: If the tool call fails
        """
        selection = await self.interpret(message)
        arguments = self.validate_arguments(selection, message)
        result = await self.invoke(selection.tool_name, arguments)
        answer = await self.ground(message, selection.tool_name, result)
        self.logger.debug(f"Answer from {selection.tool_name}: {len(answer)} characters")
        return answer
