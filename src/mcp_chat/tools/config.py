"""MCP server configuration and the sources it is loaded from.

The configuration uses the common `mcpServers` layout:

    {"mcpServers": {"<name>": {"command": "...", "args": [...], "env": {...}}}}

It can be read from a local JSON file or from the first file of a GitHub
Gist.
"""

import json
import logging
from pathlib import Path

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from mcp_chat.errors import ConfigurationError

logger = logging.getLogger(__name__)


class McpServerConfig(BaseModel):
    """How to launch one MCP server over stdio."""

    command: str = Field(description="Executable that starts the server")
    args: list[str] = Field(default_factory=list, description="Ordered arguments")
    env: dict[str, str] | None = Field(
        default=None, description="Extra environment variables for the server"
    )


class McpConfig(BaseModel):
    """A set of named MCP servers."""

    mcp_servers: dict[str, McpServerConfig] = Field(alias="mcpServers")

    model_config = ConfigDict(populate_by_name=True)

    def select(self, name: str | None = None) -> McpServerConfig:
        """Pick a server by name, or the first one if no name is given.

        Raises:
            ConfigurationError: If there are no servers or the name is unknown
        """
        if not self.mcp_servers:
            raise ConfigurationError("No MCP servers found in configuration")

        if name is None:
            first_name = next(iter(self.mcp_servers))
            logger.debug(f"Using first configured MCP server: {first_name}")
            return self.mcp_servers[first_name]

        if name not in self.mcp_servers:
            available = ", ".join(self.mcp_servers)
            raise ConfigurationError(
                f"MCP server '{name}' not found in configuration (available: {available})"
            )
        return self.mcp_servers[name]


def parse_mcp_config(content: str) -> McpConfig:
    """Parse MCP configuration JSON.

    Raises:
        ConfigurationError: If the content is not valid JSON or has the wrong shape
    """
    try:
        return McpConfig.model_validate(json.loads(content))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"MCP configuration is not valid JSON: {e}") from e
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid MCP configuration: {e}") from e


def load_mcp_config_file(path: Path) -> McpConfig:
    """Load MCP configuration from a JSON file.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if not path.is_file():
        raise ConfigurationError(f"MCP configuration file not found: {path}")

    logger.info(f"Loading MCP configuration from {path}")
    return parse_mcp_config(path.read_text(encoding="utf-8"))


class GistMcpConfigRepository:
    """Loads MCP configuration from the first file of a GitHub Gist.

    Attributes:
        gist_id: ID of the Gist holding the configuration
        token: GitHub token used as bearer credential
    """

    base_url = "https://api.github.com/gists"

    def __init__(
        self,
        gist_id: str | None,
        token: str | None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not gist_id or not token:
            raise ConfigurationError(
                "MCP_GIST_ID and GITHUB_TOKEN are required to load configuration from a Gist"
            )
        self.gist_id = gist_id
        self.token = token
        self._client = client

    async def fetch(self) -> McpConfig:
        """Fetch and parse the configuration.

        Raises:
            ConfigurationError: If the Gist cannot be fetched or parsed
        """
        url = f"{self.base_url}/{self.gist_id}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github.v3+json",
        }

        try:
            if self._client is not None:
                response = await self._client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=30.0) as client:
                    response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise ConfigurationError(f"Failed to fetch Gist {self.gist_id}: {e}") from e

        if response.status_code == 404:
            raise ConfigurationError(f"Gist {self.gist_id} not found")
        if response.status_code >= 400:
            raise ConfigurationError(
                f"GitHub API error for Gist {self.gist_id}: {response.status_code}"
            )

        files = response.json().get("files") or {}
        first_file = next(iter(files.values()), None)
        if not first_file or "content" not in first_file:
            raise ConfigurationError(f"Gist {self.gist_id} contains no files")

        logger.info(f"Loaded MCP configuration from Gist {self.gist_id}")
        return parse_mcp_config(first_file["content"])
