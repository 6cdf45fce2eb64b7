"""Chat agent and its construction from settings.

This package provides the ChatAgent facade used by the HTTP and terminal
front-ends, and the factory that wires a tool host and a completion
provider into one.
"""

from mcp_chat.agents.chat_agent import AgentState, ChatAgent
from mcp_chat.agents.factory import create_agent, load_mcp_config

__all__ = ["AgentState", "ChatAgent", "create_agent", "load_mcp_config"]
