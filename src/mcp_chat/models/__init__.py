"""Pydantic request and response models for the HTTP API."""

from mcp_chat.models.chat import ChatRequest, ChatResponse, ErrorResponse
from mcp_chat.models.health import HealthResponse

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
]
