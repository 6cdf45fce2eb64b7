"""Building a ChatAgent from application settings."""

import logging

from mcp_chat.agents.chat_agent import ChatAgent
from mcp_chat.config import McpChatSettings
from mcp_chat.errors import ConfigurationError
from mcp_chat.providers.factory import create_provider
from mcp_chat.tools.config import (
    GistMcpConfigRepository,
    McpConfig,
    load_mcp_config_file,
)
from mcp_chat.tools.host import McpToolHost

logger = logging.getLogger(__name__)


async def load_mcp_config(settings: McpChatSettings) -> McpConfig:
    """Load the MCP server configuration from the configured source.

    A local file takes precedence over a GitHub Gist.

    Raises:
        ConfigurationError: If no source is configured or loading fails
    """
    config_path = settings.resolved_mcp_config_path
    if config_path is not None:
        return load_mcp_config_file(config_path)

    if settings.mcp_gist_id:
        repository = GistMcpConfigRepository(settings.mcp_gist_id, settings.github_token)
        return await repository.fetch()

    raise ConfigurationError(
        "No MCP configuration source: set MCP_CHAT_MCP_CONFIG_PATH or MCP_GIST_ID"
    )


async def create_agent(
    settings: McpChatSettings,
    mcp_config: McpConfig | None = None,
) -> ChatAgent:
    """Create an uninitialized ChatAgent.

    Args:
        settings: Application settings
        mcp_config: Preloaded MCP configuration; loaded from settings if omitted

    Returns:
        ChatAgent: The agent, ready for initialize()

    Raises:
        ConfigurationError: If the MCP configuration cannot be loaded or the
            selected server does not exist
    """
    if mcp_config is None:
        mcp_config = await load_mcp_config(settings)

    server_config = mcp_config.select(settings.mcp_server)
    tool_host = McpToolHost(
        server_config,
        connect_timeout=settings.connect_timeout,
        call_timeout=settings.tool_call_timeout,
    )
    provider = create_provider(settings)

    logger.info(f"Created agent with provider {provider.name}")
    return ChatAgent(
        tool_host=tool_host,
        provider=provider,
        default_tool=settings.default_tool,
    )
