"""Construction of completion providers from settings."""

import logging

from mcp_chat.config import McpChatSettings
from mcp_chat.errors import ConfigurationError
from mcp_chat.providers.anthropic import AnthropicProvider
from mcp_chat.providers.base import CompletionProvider, ProviderConfig
from mcp_chat.providers.keyword import KeywordProvider
from mcp_chat.providers.ollama import OllamaProvider
from mcp_chat.providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    "anthropic": "claude-3-5-sonnet-latest",
    "openai": "gpt-4o",
    "ollama": "llama3.2:latest",
}


def get_available_providers() -> list[str]:
    """Return the provider names accepted by create_provider()."""
    return ["anthropic", "openai", "ollama", "keyword"]


def create_provider(settings: McpChatSettings) -> CompletionProvider:
    """Create the completion provider selected in settings.

    Credentials are taken from the settings object, which already resolved
    them from the environment.

    Args:
        settings: Application settings

    Returns:
        CompletionProvider: An uninitialized provider

    Raises:
        ConfigurationError: If the provider name is unknown
    """
    name = settings.provider

    if name == "keyword":
        return KeywordProvider(default_tool=settings.default_tool)

    if name not in DEFAULT_MODELS:
        raise ConfigurationError(f"Unsupported provider: {name}")

    config = ProviderConfig(
        backend=name,
        model=settings.model or DEFAULT_MODELS[name],
        max_tokens=settings.max_tokens,
        timeout=settings.provider_timeout,
    )

    logger.debug(f"Creating {name} provider with model {config.model}")

    if name == "anthropic":
        config.api_key = settings.anthropic_api_key
        return AnthropicProvider(config, default_tool=settings.default_tool)
    if name == "openai":
        config.api_key = settings.openai_api_key
        return OpenAIProvider(config, default_tool=settings.default_tool)

    config.host = settings.ollama_host
    return OllamaProvider(config, default_tool=settings.default_tool)
