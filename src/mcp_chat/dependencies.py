"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
routers to inject common dependencies like settings and the chat agent.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from mcp_chat.agents import ChatAgent
from mcp_chat.config import McpChatSettings


@lru_cache
def get_settings() -> McpChatSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the MCP_CHAT_ prefix.

    Returns:
        McpChatSettings: The application configuration settings.
    """
    return McpChatSettings()


def get_agent(request: Request) -> ChatAgent:
    """Get the chat agent from app state.

    The agent is created and initialized during application startup and
    shared by all requests.

    Args:
        request: The FastAPI request object.

    Returns:
        ChatAgent: The shared chat agent.

    Raises:
        HTTPException: If the agent is not initialized (503 Service Unavailable).
    """
    agent = getattr(request.app.state, "agent", None)
    if agent is None:
        raise HTTPException(
            status_code=503,
            detail="Chat agent not initialized",
        )
    return agent
