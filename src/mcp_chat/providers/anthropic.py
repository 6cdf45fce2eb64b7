"""Anthropic (Claude) completion provider."""

import logging
from typing import Any

import anthropic

from mcp_chat.providers.base import LLMCompletionProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMCompletionProvider):
    """Completion provider backed by the Anthropic Messages API.

    The Messages API has no JSON response mode, so tool selection relies on
    the prompt and the JSON extraction parser.
    """

    name = "anthropic"
    api_key_env = "ANTHROPIC_API_KEY"

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {"api_key": self.config.api_key}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return anthropic.AsyncAnthropic(**kwargs)

    async def _request(self, system: str, prompt: str, json_mode: bool) -> str:
        response = await self._client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )

        parts = [
            block.text
            for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        logger.debug(f"Anthropic returned {len(parts)} text blocks")
        return "".join(parts)

    async def _close_client(self) -> None:
        await self._client.close()
