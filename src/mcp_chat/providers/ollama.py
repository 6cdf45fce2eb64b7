"""Ollama completion provider.

This module wraps ollama.AsyncClient. Requests use Ollama's streaming chat
API and collect the chunks into one answer.
"""

import logging
from typing import Any, AsyncIterator

import ollama

from mcp_chat.errors import GenerationError
from mcp_chat.providers.base import LLMCompletionProvider

logger = logging.getLogger(__name__)


class OllamaProvider(LLMCompletionProvider):
    """Completion provider backed by a local or remote Ollama server.

    No credential is needed. initialize() checks that the server is
    reachable; an unreachable server is reported as a GenerationError so the
    agent can continue without an LLM.
    """

    name = "ollama"
    requires_api_key = False

    def _create_client(self) -> Any:
        kwargs: dict[str, Any] = {}
        if self.config.host:
            kwargs["host"] = self.config.host
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return ollama.AsyncClient(**kwargs)

    async def initialize(self) -> None:
        await super().initialize()

        if not await self.check_connection():
            await self.close()
            raise GenerationError(f"Ollama server at {self.config.host} is not reachable")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Listing models is the cheapest authenticated round trip
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat_stream(
        self,
        messages: list[dict[str, Any]],
        json_mode: bool = False,
    ) -> AsyncIterator[dict[str, Any]]:
        """Stream chat responses from Ollama.

        Args:
            messages: List of message dicts in Ollama format:
                      [{"role": "user", "content": "..."}, ...]
            json_mode: Ask Ollama to constrain the output to JSON

        Yields:
            dict: Response chunks from Ollama; the final chunk has done=True
        """
        logger.debug(f"Starting chat stream with model: {self.config.model}")

        async for chunk in await self._client.chat(
            model=self.config.model,
            messages=messages,
            stream=True,
            format="json" if json_mode else None,
            options={"num_predict": self.config.max_tokens},
        ):
            if hasattr(chunk, "model_dump"):
                chunk_dict = chunk.model_dump()
            elif isinstance(chunk, dict):
                chunk_dict = chunk
            else:
                chunk_dict = vars(chunk)

            yield chunk_dict

        logger.debug("Chat stream completed")

    async def _close_client(self) -> None:
        await self._client.close()

    async def _request(self, system: str, prompt: str, json_mode: bool) -> str:
        content_parts = []

        async for chunk in self.chat_stream(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            json_mode=json_mode,
        ):
            message = chunk.get("message") or {}
            content = message.get("content") or ""
            if content:
                content_parts.append(content)
            if chunk.get("done"):
                break

        return "".join(content_parts)
