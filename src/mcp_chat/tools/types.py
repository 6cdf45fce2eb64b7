"""Type definitions for tools and tool selections.

This module contains the dataclasses used to represent the tool catalog
discovered from a tool host and the per-message selection produced by a
completion provider, plus the fallback policy applied when no confident
selection can be made.
"""

from dataclasses import dataclass, field
from typing import Any

from mcp_chat.errors import ToolSelectionError


@dataclass(frozen=True)
class Tool:
    """A named, schema-described capability exposed by a tool host.

    Attributes:
        name: Tool name, unique within a catalog
        description: Optional human-readable description
        input_schema: Optional JSON-Schema-like description of the arguments
    """

    name: str
    description: str | None = None
    input_schema: dict[str, Any] | None = None

    @staticmethod
    def from_mcp_tool(tool_data: Any) -> "Tool":
        """Create a Tool from an MCP tool listing entry.

        Args:
            tool_data: An mcp.types.Tool object or an equivalent dict

        Returns:
            Tool: The parsed tool
        """

        def get_value(obj: Any, key: str, default: Any = None) -> Any:
            if isinstance(obj, dict):
                return obj.get(key, default)
            return getattr(obj, key, default)

        input_schema = get_value(tool_data, "inputSchema")
        if input_schema is None:
            input_schema = get_value(tool_data, "input_schema")

        return Tool(
            name=get_value(tool_data, "name"),
            description=get_value(tool_data, "description"),
            input_schema=dict(input_schema) if input_schema else None,
        )


@dataclass
class ToolSelection:
    """The tool a provider picked for a message and the arguments it extracted.

    Attributes:
        tool_name: Name of the selected tool
        parameters: Extracted arguments for the tool
        reason: Optional explanation given by the provider
    """

    tool_name: str
    parameters: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None


def find_tool(tools: list[Tool], name: str) -> Tool | None:
    """Return the tool called `name` from the catalog, if present."""
    for tool in tools:
        if tool.name == name:
            return tool
    return None


def fallback_selection(
    message: str,
    tools: list[Tool],
    default_tool: str | None,
    cause: str,
) -> ToolSelection:
    """Apply the selection fallback policy.

    If a default tool is configured and present in the catalog, it is
    selected with the raw message as its only parameter. Otherwise the
    selection fails.

    Args:
        message: The original user message
        tools: The current tool catalog
        default_tool: Name of the configured default tool, if any
        cause: Why the regular selection failed, used in the error message

    Returns:
        ToolSelection: Selection of the default tool

    Raises:
        ToolSelectionError: If no default tool applies
    """
    if default_tool and find_tool(tools, default_tool) is not None:
        return ToolSelection(
            tool_name=default_tool,
            parameters={"message": message},
            reason=f"default tool ({cause})",
        )
    raise ToolSelectionError(f"Could not select a tool: {cause}")
