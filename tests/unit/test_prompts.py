"""Unit tests for the prompt templates."""

from mcp_chat.services.prompts import (
    grounded_response_prompt,
    serialize_tool_result,
    tool_selection_prompt,
)
from mcp_chat.tools import Tool


def flatten(text: str) -> str:
    """Collapse the line wrapping of a prompt into single spaces."""
    return " ".join(text.split())


def test_selection_prompt_lists_every_tool():
    """Test that every tool appears with its description and schema."""
    tools = [
        Tool(
            name="get_weather",
            description="Current weather",
            input_schema={"properties": {"city": {"type": "string"}}},
        ),
        Tool(name="get_employees"),
    ]

    prompt = tool_selection_prompt("Weather in Lisbon?", tools)

    assert "get_weather" in prompt
    assert "Current weather" in prompt
    assert '"city"' in prompt
    assert "get_employees" in prompt
    assert "No description provided." in prompt
    assert "Weather in Lisbon?" in prompt


def test_selection_prompt_requests_json_and_restricts_choice():
    """Test that the selection prompt asks for JSON naming a listed tool."""
    prompt = flatten(tool_selection_prompt("hi", [Tool(name="echo")]))

    assert '"toolName"' in prompt
    assert '"reason"' in prompt
    assert '"parameters"' in prompt
    assert "Only tools listed above may be" in prompt


def test_grounded_prompt_embeds_message_tool_and_result():
    """Test that the grounding prompt carries the message, tool and result."""
    prompt = grounded_response_prompt(
        "How warm is it?", "get_weather", {"temperature": 21}
    )

    assert "How warm is it?" in prompt
    assert '"get_weather"' in prompt
    assert '"temperature": 21' in prompt
    assert "not sufficient" in flatten(prompt)


def test_serialize_structured_result_is_pretty_printed():
    """Test that structured results are serialized as indented JSON."""
    assert serialize_tool_result({"a": 1}) == '{\n  "a": 1\n}'
    assert serialize_tool_result([1, 2]) == "[\n  1,\n  2\n]"


def test_serialize_scalar_result():
    """Test that scalar results are converted with str()."""
    assert serialize_tool_result("plain text") == "plain text"
    assert serialize_tool_result(42) == "42"
    assert serialize_tool_result(None) == "None"
