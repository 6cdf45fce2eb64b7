"""Extraction of JSON objects from free-form generated text.

Models often wrap their JSON answer in a markdown code fence or surround it
with prose. The parser tries, in order:

1. the body of each fenced block (```json or bare ```), first one that
   parses to an object wins;
2. a brace-balanced scan over the whole text, trying each opening brace in
   turn (quoted strings and escapes are respected);
3. failure, as JSONExtractionError.
"""

import json
import re
from typing import Any

from mcp_chat.errors import JSONExtractionError

_FENCED_BLOCK = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def _balanced_end(text: str, start: int) -> int | None:
    """Return the index just past the brace that closes text[start]."""
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1

    return None


def find_fenced_object(text: str) -> dict[str, Any] | None:
    """Return the first fenced code block that holds a JSON object."""
    for match in _FENCED_BLOCK.finditer(text):
        value = _loads_object(match.group(1).strip())
        if value is not None:
            return value
    return None


def find_balanced_object(text: str) -> dict[str, Any] | None:
    """Return the first brace-balanced span of text that is a JSON object."""
    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is not None:
            value = _loads_object(text[start:end])
            if value is not None:
                return value
        start = text.find("{", start + 1)
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """Extract the first JSON object from generated text.

    Args:
        text: Raw text returned by a completion provider

    Returns:
        dict: The decoded object

    Raises:
        JSONExtractionError: If no JSON object can be found
    """
    if not text or not text.strip():
        raise JSONExtractionError("Cannot extract JSON from empty text")

    value = find_fenced_object(text)
    if value is None:
        value = find_balanced_object(text)
    if value is None:
        preview = text.strip()[:80]
        raise JSONExtractionError(f"No JSON object found in text: {preview!r}")
    return value
