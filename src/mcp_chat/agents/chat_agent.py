"""The chat agent consumed by the HTTP and terminal front-ends.

A ChatAgent owns one tool host connection, one catalog snapshot and one
completion provider for its whole lifetime:

    UNINITIALIZED --initialize()--> READY --close()--> CLOSED

Messages are handled one at a time; concurrent callers (e.g. HTTP requests
sharing the agent) wait on an asyncio.Lock because the tool host session
does not tolerate interleaved requests.
"""

import asyncio
import logging
from enum import Enum

from mcp_chat.errors import (
    AgentNotInitializedError,
    ChatExchangeError,
    ConfigurationError,
)
from mcp_chat.providers.base import CompletionProvider
from mcp_chat.providers.keyword import KeywordProvider
from mcp_chat.tools.dispatcher import ToolDispatcher, ToolHost
from mcp_chat.tools.types import Tool

logger = logging.getLogger(__name__)


class AgentState(str, Enum):
    """Lifecycle states of a ChatAgent."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CLOSED = "closed"


class ChatAgent:
    """Routes chat messages to tools and answers from their results.

    Attributes:
        tool_host: The tool host transport owned by this agent
        provider: The completion provider currently in use
        dispatcher: The pipeline that handles each message
    """

    def __init__(
        self,
        tool_host: ToolHost,
        provider: CompletionProvider,
        default_tool: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tool_host = tool_host
        self.dispatcher = ToolDispatcher(
            tool_host=tool_host,
            provider=provider,
            default_tool=default_tool,
            logger=logger,
        )
        self._default_tool = default_tool
        self._state = AgentState.UNINITIALIZED
        self._degraded = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> AgentState:
        return self._state

    @property
    def provider(self) -> CompletionProvider:
        return self.dispatcher.provider

    @property
    def provider_name(self) -> str:
        return self.dispatcher.provider.name

    @property
    def degraded(self) -> bool:
        """True when the configured provider failed and keyword matching is used."""
        return self._degraded

    @property
    def tools(self) -> list[Tool]:
        return self.dispatcher.tools

    async def initialize(self) -> None:
        """Connect to the tool host, load the catalog and start the provider.

        A provider that fails for any reason other than missing configuration
        is replaced by keyword matching and the agent still becomes ready.

        Raises:
            ToolHostConnectionError: If the tool host cannot be reached
            ConfigurationError: If the provider is missing its credential
            AgentNotInitializedError: If the agent was already closed
        """
        if self._state is AgentState.READY:
            return
        if self._state is AgentState.CLOSED:
            raise AgentNotInitializedError("Agent is closed and cannot be reinitialized")

        await self.tool_host.connect()
        try:
            tools = await self.dispatcher.refresh_catalog()
            await self._initialize_provider()
        except Exception:
            await self.tool_host.close()
            raise

        self._state = AgentState.READY
        logger.info(
            f"Agent ready with {len(tools)} tools using provider {self.provider_name}"
        )

    async def _initialize_provider(self) -> None:
        provider = self.dispatcher.provider
        try:
            await provider.initialize()
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(
                f"Failed to initialize {provider.name} provider, "
                f"falling back to keyword matching: {e}"
            )
            await provider.close()
            fallback = KeywordProvider(default_tool=self._default_tool)
            await fallback.initialize()
            self.dispatcher.swap_provider(fallback)
            self._degraded = True

    async def send_message(self, message: str) -> str:
        """Handle one message and return the grounded answer.

        Raises:
            AgentNotInitializedError: If the agent is not ready
            ChatExchangeError: If any step of the exchange fails
        """
        if self._state is not AgentState.READY:
            raise AgentNotInitializedError("Agent not initialized")

        async with self._lock:
            # close() may have run while this message waited for the lock
            if self._state is not AgentState.READY:
                raise AgentNotInitializedError("Agent not initialized")

            try:
                return await self.dispatcher.dispatch(message)
            except Exception as e:
                logger.error(f"Error sending message to tool host: {e}")
                raise ChatExchangeError(
                    f"Failed to get response from tool host: {e}"
                ) from e

    async def close(self) -> None:
        """Disconnect the tool host and release the provider. Idempotent.

        A message already being handled finishes first; messages still
        waiting for their turn fail with AgentNotInitializedError.
        """
        if self._state is AgentState.CLOSED:
            return
        self._state = AgentState.CLOSED

        async with self._lock:
            try:
                await self.tool_host.close()
            finally:
                await self.dispatcher.provider.close()
        logger.info("Agent closed")
