"""Pydantic models for the chat endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for POST /chat."""

    message: str | None = Field(
        default=None,
        description="The user message to route to a tool.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"message": "use get_weather for Lisbon"},
            ]
        }
    )


class ChatResponse(BaseModel):
    """Response body for a successful exchange."""

    answer: str = Field(description="The answer grounded in the tool's result")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "answer": "It is 21°C and sunny in Lisbon.",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Response body for a failed request."""

    error: str = Field(description="Human-readable error message")
