"""Chat API endpoint.

POST /chat forwards one message to the shared chat agent and returns the
grounded answer. Errors are reported as {"error": "..."} bodies.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mcp_chat.agents import ChatAgent
from mcp_chat.dependencies import get_agent
from mcp_chat.errors import McpChatError
from mcp_chat.models.chat import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report a malformed chat body (not JSON, non-string message) as a 400."""
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Message is required").model_dump(),
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request_body: ChatRequest | None = None,
    agent: ChatAgent = Depends(get_agent),
) -> ChatResponse | JSONResponse:
    """Send a message to the agent and receive its answer.

    Args:
        request_body: Chat request containing the message
        agent: Injected chat agent

    Returns:
        ChatResponse with the answer, or an error body

    Raises:
        HTTPException: 503 if the agent is not available
    """
    if (
        request_body is None
        or not request_body.message
        or not request_body.message.strip()
    ):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Message is required").model_dump(),
        )

    logger.info(f"Received chat message ({len(request_body.message)} characters)")

    try:
        answer = await agent.send_message(request_body.message)
    except McpChatError as e:
        logger.error(f"Chat request failed: {e}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=f"Error processing message: {e}").model_dump(),
        )

    return ChatResponse(answer=answer)
