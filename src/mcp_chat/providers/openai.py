"""OpenAI completion provider."""

import logging
from typing import Any

import openai

from mcp_chat.providers.base import LLMCompletionProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMCompletionProvider):
    """Completion provider backed by the OpenAI Chat Completions API.

    Tool selection requests use the JSON object response format.
    """

    name = "openai"
    api_key_env = "OPENAI_API_KEY"

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {"api_key": self.config.api_key}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return openai.AsyncOpenAI(**kwargs)

    async def _request(self, system: str, prompt: str, json_mode: bool) -> str:
        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**kwargs)

        if response.choices and response.choices[0].message.content:
            return response.choices[0].message.content

        logger.debug("OpenAI response had no content")
        return ""

    async def _close_client(self) -> None:
        await self._client.close()
