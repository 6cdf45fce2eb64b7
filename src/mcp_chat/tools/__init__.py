"""Tool catalog, argument validation and the MCP tool host transport.

This package provides the Tool and ToolSelection types, the schema
validator for tool arguments, the MCP server configuration sources and
the stdio client used to list and call tools. The dispatcher lives in
mcp_chat.tools.dispatcher.
"""

from mcp_chat.tools.config import (
    GistMcpConfigRepository,
    McpConfig,
    McpServerConfig,
    load_mcp_config_file,
)
from mcp_chat.tools.host import McpToolHost
from mcp_chat.tools.schema import SchemaValidator, build_validator, fallback_arguments
from mcp_chat.tools.types import Tool, ToolSelection

__all__ = [
    "GistMcpConfigRepository",
    "McpConfig",
    "McpServerConfig",
    "McpToolHost",
    "SchemaValidator",
    "Tool",
    "ToolSelection",
    "build_validator",
    "fallback_arguments",
    "load_mcp_config_file",
]
