"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok").
        version: The version of mcp-chat.
        agent_ready: Whether the chat agent is initialized and usable.
        provider: Name of the completion provider in use.
        degraded: Whether the agent fell back to keyword matching.
        tools: Names of the tools in the catalog.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of mcp-chat")
    agent_ready: bool = Field(default=False, description="Whether the agent is ready")
    provider: str | None = Field(default=None, description="Completion provider in use")
    degraded: bool = Field(
        default=False,
        description="Whether the agent fell back to keyword matching",
    )
    tools: list[str] = Field(default_factory=list, description="Available tool names")
