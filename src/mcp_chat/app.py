"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from mcp_chat.agents import ChatAgent, create_agent
from mcp_chat.config import McpChatSettings
from mcp_chat.routers import chat, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The chat agent is created and initialized once at startup and stored in
    app.state for reuse across all requests. It owns a single tool host
    connection, which is closed at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: McpChatSettings = app.state.settings

    agent: ChatAgent | None = app.state.agent
    if agent is None:
        agent = await create_agent(settings)

    try:
        await agent.initialize()
    except Exception as e:
        logger.error(f"Failed to initialize chat agent: {e}")
        await agent.close()
        raise

    app.state.agent = agent
    logger.info(f"Chat agent ready with provider {agent.provider_name}")

    try:
        yield
    finally:
        await agent.close()
        logger.info("Chat agent closed")


def create_app(
    settings: McpChatSettings | None = None,
    agent: ChatAgent | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied.

    Args:
        settings: Optional McpChatSettings instance. If not provided,
                  settings will be loaded from environment variables.
        agent: Optional prebuilt (uninitialized) agent. If not provided,
               one is built from settings at startup.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from mcp_chat.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="mcp-chat",
        description="Chat front-end that answers messages with MCP tools",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings and agent in app.state for lifespan access
    app.state.settings = settings
    app.state.agent = agent

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(chat.router)
    app.add_exception_handler(RequestValidationError, chat.request_validation_handler)

    return app
