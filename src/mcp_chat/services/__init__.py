"""Pure helpers shared by the completion providers.

This package contains the prompt templates used for tool selection and
grounded responses, and the parser that pulls JSON objects out of
generated text.
"""

from mcp_chat.services.json_extraction import extract_json_object
from mcp_chat.services.prompts import (
    GROUNDED_RESPONSE_SYSTEM_PROMPT,
    TOOL_SELECTION_SYSTEM_PROMPT,
    grounded_response_prompt,
    serialize_tool_result,
    tool_selection_prompt,
)

__all__ = [
    "GROUNDED_RESPONSE_SYSTEM_PROMPT",
    "TOOL_SELECTION_SYSTEM_PROMPT",
    "extract_json_object",
    "grounded_response_prompt",
    "serialize_tool_result",
    "tool_selection_prompt",
]
