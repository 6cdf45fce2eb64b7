"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from mcp_chat.agents import AgentState, ChatAgent
from mcp_chat.models.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of mcp-chat, plus the
    state of the chat agent if one was created at startup.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and agent information.
    """
    agent: ChatAgent | None = getattr(request.app.state, "agent", None)

    if agent is None:
        logger.debug("Health check without an agent")
        return HealthResponse(status="ok", version=request.app.version)

    return HealthResponse(
        status="ok",
        version=request.app.version,
        agent_ready=agent.state is AgentState.READY,
        provider=agent.provider_name,
        degraded=agent.degraded,
        tools=[tool.name for tool in agent.tools],
    )
