"""Prompt templates for tool selection and grounded responses.

Both builders are pure string transforms. The selection prompt lists the
live tool catalog and asks for one JSON object; the grounding prompt embeds
the tool's result and asks for an answer based only on that data.
"""

import json
from typing import Any

from mcp_chat.tools.types import Tool

TOOL_SELECTION_SYSTEM_PROMPT = (
    "You are a tool router. Given a user message and a list of available "
    "tools, you pick the single best tool and extract its arguments. "
    "You always answer with one JSON object and nothing else."
)

GROUNDED_RESPONSE_SYSTEM_PROMPT = (
    "You are a helpful assistant. You answer the user's question using only "
    "the data returned by a tool. You never invent facts that are not in "
    "the data."
)


def serialize_tool_result(result: Any) -> str:
    """Serialize a tool result for display or prompting.

    Structured results (dicts and lists) are pretty-printed as JSON,
    anything else is converted with str().
    """
    if isinstance(result, (dict, list)):
        return json.dumps(result, indent=2, ensure_ascii=False, default=str)
    return str(result)


def _describe_tool(tool: Tool) -> str:
    schema = tool.input_schema or {"type": "object", "properties": {}}
    lines = [
        f"- name: {tool.name}",
        f"  description: {tool.description or 'No description provided.'}",
        f"  input schema: {json.dumps(schema, ensure_ascii=False)}",
    ]
    return "\n".join(lines)


def tool_selection_prompt(message: str, tools: list[Tool]) -> str:
    """Build the prompt that asks a provider which tool to use.

    Args:
        message: The user's message
        tools: The live tool catalog

    Returns:
        str: The rendered prompt
    """
    catalog = "\n".join(_describe_tool(tool) for tool in tools) or "(no tools)"

    return f"""Available tools:
{catalog}

User message:
{message}

Choose exactly one tool from the list above. Only tools listed above may be
chosen; never invent a tool name. Extract the arguments for the chosen tool
from the user message, following its input schema.

Respond with exactly one JSON object in this format and nothing else:
{{"toolName": "<name of the chosen tool>", "reason": "<short explanation>", "parameters": {{<arguments for the tool>}}}}"""


def grounded_response_prompt(message: str, tool_name: str, tool_result: Any) -> str:
    """Build the prompt that asks a provider to answer from a tool result.

    Args:
        message: The user's original message
        tool_name: Name of the tool that produced the result
        tool_result: The raw tool result

    Returns:
        str: The rendered prompt
    """
    return f"""The user asked:
{message}

The tool "{tool_name}" returned the following data:
{serialize_tool_result(tool_result)}

Answer the user's question directly and conversationally, using only the
data above. Do not mention the tool or the data format. If the data is not
sufficient to answer the question, say so explicitly."""
