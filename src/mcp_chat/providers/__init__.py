"""Completion providers.

This package provides the CompletionProvider capability set and its
variants: LLM-backed adapters for Anthropic, OpenAI and Ollama, and the
schema-free KeywordProvider that needs no model at all.
"""

from mcp_chat.providers.anthropic import AnthropicProvider
from mcp_chat.providers.base import (
    CompletionProvider,
    LLMCompletionProvider,
    ProviderConfig,
)
from mcp_chat.providers.factory import create_provider, get_available_providers
from mcp_chat.providers.keyword import KeywordProvider
from mcp_chat.providers.ollama import OllamaProvider
from mcp_chat.providers.openai import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "CompletionProvider",
    "KeywordProvider",
    "LLMCompletionProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "ProviderConfig",
    "create_provider",
    "get_available_providers",
]
