"""Completion provider abstraction.

A completion provider turns prompts into text. The agent uses it twice per
message: once to pick a tool and extract its arguments (analyze_intent) and
once to phrase the final answer from the tool's result
(generate_grounded_response).

LLMCompletionProvider holds everything the LLM-backed variants share:
credential checks, prompt rendering, JSON extraction, catalog validation and
the fallback behaviour. Concrete backends only implement client creation and
a single request.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from mcp_chat.errors import (
    ConfigurationError,
    GenerationError,
    JSONExtractionError,
    ToolSelectionError,
)
from mcp_chat.services.json_extraction import extract_json_object
from mcp_chat.services.prompts import (
    GROUNDED_RESPONSE_SYSTEM_PROMPT,
    TOOL_SELECTION_SYSTEM_PROMPT,
    grounded_response_prompt,
    serialize_tool_result,
    tool_selection_prompt,
)
from mcp_chat.tools.types import Tool, ToolSelection, fallback_selection, find_tool

logger = logging.getLogger(__name__)


@dataclass
class ProviderConfig:
    """Backend parameters for an LLM-backed provider.

    Attributes:
        backend: Backend identifier ("anthropic", "openai", "ollama")
        model: Model identifier sent with each request
        api_key: Resolved credential, if the backend needs one
        max_tokens: Maximum size of each generated answer
        timeout: Request timeout in seconds (None for the SDK default)
        host: Server URL for self-hosted backends
    """

    backend: str
    model: str
    api_key: str | None = None
    max_tokens: int = 1000
    timeout: float | None = None
    host: str | None = None


class CompletionProvider(ABC):
    """Capability set every completion provider offers."""

    name: str = "provider"

    def __init__(self, default_tool: str | None = None) -> None:
        self.default_tool = default_tool
        self._initialized = False

    def is_initialized(self) -> bool:
        return self._initialized

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the provider for use."""

    @abstractmethod
    async def analyze_intent(self, message: str, tools: list[Tool]) -> ToolSelection:
        """Pick a tool from the catalog and extract its arguments."""

    @abstractmethod
    async def generate_grounded_response(
        self, message: str, tool_name: str, tool_result: Any
    ) -> str:
        """Produce the final answer from a tool's result."""

    async def close(self) -> None:
        self._initialized = False


def parse_tool_selection(text: str, tools: list[Tool]) -> ToolSelection:
    """Parse a provider's tool selection answer.

    Args:
        text: Generated text expected to contain {toolName, reason, parameters}
        tools: The catalog the selection must refer to

    Returns:
        ToolSelection: The parsed selection

    Raises:
        JSONExtractionError: If the text contains no JSON object
        ToolSelectionError: If toolName is missing, unknown, or parameters
            is not an object
    """
    data = extract_json_object(text)

    tool_name = data.get("toolName")
    if not isinstance(tool_name, str) or not tool_name:
        raise ToolSelectionError("Response is missing 'toolName'")
    if find_tool(tools, tool_name) is None:
        raise ToolSelectionError(f"Selected tool '{tool_name}' is not in the catalog")

    parameters = data.get("parameters")
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, dict):
        raise ToolSelectionError("'parameters' must be an object")

    reason = data.get("reason")
    return ToolSelection(
        tool_name=tool_name,
        parameters=parameters,
        reason=reason if isinstance(reason, str) else None,
    )


def grounding_fallback(tool_name: str, tool_result: Any) -> str:
    """Answer used when the provider cannot phrase a response."""
    return (
        f"I could not generate a summary, but {tool_name} returned:\n"
        f"{serialize_tool_result(tool_result)}"
    )


class LLMCompletionProvider(CompletionProvider):
    """Shared behaviour of providers backed by a generative model.

    Subclasses implement _create_client() and _request().

    Attributes:
        config: Backend parameters
        requires_api_key: Whether initialize() insists on a credential
        api_key_env: Environment variable named in the missing-key error
    """

    requires_api_key: bool = True
    api_key_env: str = ""

    def __init__(self, config: ProviderConfig, default_tool: str | None = None) -> None:
        super().__init__(default_tool=default_tool)
        self.config = config
        self._client: Any = None

    async def initialize(self) -> None:
        """Create the backend client.

        Raises:
            ConfigurationError: If the backend needs a credential and none
                was configured
        """
        if self.requires_api_key and not self.config.api_key:
            raise ConfigurationError(
                f"{self.name} API key is required (set {self.api_key_env})"
            )

        self._client = self._create_client()
        self._initialized = True
        logger.info(f"{self.name} provider initialized with model {self.config.model}")

    @abstractmethod
    def _create_client(self) -> Any:
        """Construct the SDK client."""

    @abstractmethod
    async def _request(self, system: str, prompt: str, json_mode: bool) -> str:
        """Send one single-turn completion request and return its text."""

    async def _close_client(self) -> None:
        """Release SDK resources, if the client holds any."""

    async def _complete(self, system: str, prompt: str, json_mode: bool = False) -> str:
        if self._client is None:
            raise GenerationError(f"{self.name} client not initialized")

        try:
            text = await self._request(system, prompt, json_mode)
        except Exception as e:
            logger.error(f"{self.name} request failed: {e}")
            raise GenerationError(f"Failed to get response from {self.name}: {e}") from e

        if not text or not text.strip():
            raise GenerationError(f"{self.name} returned an empty response")
        return text

    async def analyze_intent(self, message: str, tools: list[Tool]) -> ToolSelection:
        """Ask the model which tool to use.

        Malformed answers, unknown tools and backend failures are resolved
        through the fallback policy (default tool, else ToolSelectionError).
        """
        prompt = tool_selection_prompt(message, tools)

        try:
            text = await self._complete(TOOL_SELECTION_SYSTEM_PROMPT, prompt, json_mode=True)
            selection = parse_tool_selection(text, tools)
        except (GenerationError, JSONExtractionError, ToolSelectionError) as e:
            logger.warning(f"{self.name} tool selection failed: {e}")
            return fallback_selection(message, tools, self.default_tool, str(e))

        logger.debug(f"{self.name} selected {selection.tool_name}: {selection.reason}")
        return selection

    async def generate_grounded_response(
        self, message: str, tool_name: str, tool_result: Any
    ) -> str:
        """Phrase the answer; never raises, falls back to the raw result."""
        prompt = grounded_response_prompt(message, tool_name, tool_result)

        try:
            text = await self._complete(GROUNDED_RESPONSE_SYSTEM_PROMPT, prompt)
        except GenerationError as e:
            logger.warning(f"Grounded response failed, returning raw result: {e}")
            return grounding_fallback(tool_name, tool_result)

        return text.strip()

    async def close(self) -> None:
        if self._client is not None:
            try:
                await self._close_client()
            finally:
                self._client = None
        await super().close()
        logger.debug(f"{self.name} provider closed")
