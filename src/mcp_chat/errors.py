"""Exception hierarchy for mcp-chat.

Only ConfigurationError and ToolHostConnectionError abort an agent's
lifecycle. Everything raised while handling a single message is reported to
the caller as one ChatExchangeError, and the agent stays usable.
"""


class McpChatError(Exception):
    """Base class for all mcp-chat errors."""


class ConfigurationError(McpChatError):
    """A credential or the tool host configuration is missing or invalid."""


class ToolHostConnectionError(McpChatError, ConnectionError):
    """The tool host transport could not be established."""


class ToolSelectionError(McpChatError):
    """No tool could be selected and no default tool applies."""


class ValidationError(McpChatError):
    """Extracted arguments do not match the tool's input schema.

    Attributes:
        errors: Human-readable descriptions of each failed field.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ToolInvocationError(McpChatError):
    """The tool host call failed or returned an error result."""


class GenerationError(McpChatError):
    """A completion provider request failed or returned nothing usable."""


class AgentNotInitializedError(McpChatError):
    """The agent was used before initialize() or after close()."""


class ChatExchangeError(McpChatError):
    """A single message exchange failed; the agent remains ready."""


class JSONExtractionError(McpChatError, ValueError):
    """No JSON object could be extracted from generated text."""
