"""Schema-free completion provider that needs no language model.

Tools are chosen by a literal "use <toolName>" mention in the message and
the final answer is the tool's raw result.
"""

import logging
from typing import Any

from mcp_chat.providers.base import CompletionProvider
from mcp_chat.services.prompts import serialize_tool_result
from mcp_chat.tools.types import Tool, ToolSelection, fallback_selection

logger = logging.getLogger(__name__)


class KeywordProvider(CompletionProvider):
    """Selects tools by literal mention and echoes their results."""

    name = "keyword"

    async def initialize(self) -> None:
        self._initialized = True
        logger.debug("Keyword provider initialized")

    async def analyze_intent(self, message: str, tools: list[Tool]) -> ToolSelection:
        matches = [tool for tool in tools if f"use {tool.name}" in message]
        if matches:
            # "use get_weather_v2" also contains "use get_weather"
            tool = max(matches, key=lambda candidate: len(candidate.name))
            logger.debug(f"Message mentions tool {tool.name}")
            return ToolSelection(
                tool_name=tool.name,
                parameters={"message": message},
                reason=f"message mentions 'use {tool.name}'",
            )

        return fallback_selection(
            message, tools, self.default_tool, "no tool mentioned in message"
        )

    async def generate_grounded_response(
        self, message: str, tool_name: str, tool_result: Any
    ) -> str:
        return serialize_tool_result(tool_result)
