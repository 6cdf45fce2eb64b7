"""FastAPI routers for API endpoints.

This package contains the route handlers: the health check and the chat
endpoint that forwards messages to the agent.
"""

from mcp_chat.routers import chat, health

__all__ = [
    "chat",
    "health",
]
