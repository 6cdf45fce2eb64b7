"""Configuration module for mcp-chat using pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["anthropic", "openai", "ollama", "keyword"]


class McpChatSettings(BaseSettings):
    """Main configuration settings for mcp-chat.

    All settings can be overridden via environment variables with the
    MCP_CHAT_ prefix, or a .env file. For example, MCP_CHAT_PROVIDER will
    override the provider setting. Credentials and the Gist location are
    also read from their conventional unprefixed names.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Completion provider
    provider: ProviderName = "keyword"
    model: str | None = None
    max_tokens: int = 1000
    provider_timeout: float | None = 60.0
    ollama_host: str = "http://localhost:11434"
    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MCP_CHAT_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY"),
    )
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MCP_CHAT_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )

    # Tool host
    mcp_config_path: str | None = None
    mcp_gist_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MCP_CHAT_MCP_GIST_ID", "MCP_GIST_ID"),
    )
    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MCP_CHAT_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    mcp_server: str | None = None
    default_tool: str | None = None
    connect_timeout: float | None = 30.0
    tool_call_timeout: float | None = 60.0

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="MCP_CHAT_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def resolved_mcp_config_path(self) -> Path | None:
        """Get the MCP server configuration file path, if one is set."""
        if self.mcp_config_path is None:
            return None
        return Path(self.mcp_config_path).expanduser()
