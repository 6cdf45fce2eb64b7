"""Pytest configuration and shared fixtures for mcp-chat tests.

This module provides common fixtures used across all test modules:
test settings, an in-memory tool host, a scripted completion provider,
and an app wired to a keyword-matching agent with an async client.
"""

import asyncio
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mcp_chat import create_app
from mcp_chat.agents import ChatAgent
from mcp_chat.config import McpChatSettings
from mcp_chat.errors import ToolHostConnectionError, ToolInvocationError
from mcp_chat.providers import CompletionProvider, KeywordProvider
from mcp_chat.tools import Tool, ToolSelection

WEATHER_TOOL = Tool(
    name="get_weather",
    description="Current weather for a city",
    input_schema={
        "type": "object",
        "properties": {"city": {"type": "string"}},
        "required": ["city"],
    },
)

EMPLOYEES_TOOL = Tool(
    name="get_employees",
    description="List employees",
    input_schema=None,
)


class FakeToolHost:
    """In-memory tool host recording every call."""

    def __init__(
        self,
        tools: list[Tool] | None = None,
        results: dict[str, Any] | None = None,
    ) -> None:
        self.tools = tools if tools is not None else []
        self.results = results or {}
        self.connect_error: Exception | None = None
        self.call_error: Exception | None = None
        self.call_gate: asyncio.Event | None = None
        self.call_delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.connect_count = 0
        self.close_count = 0
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.connect_count += 1
        self._connected = True

    async def list_tools(self) -> list[Tool]:
        if not self._connected:
            raise ToolHostConnectionError("MCP client not connected")
        return list(self.tools)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        self.calls.append((name, arguments))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.call_gate is not None:
                await self.call_gate.wait()
            await asyncio.sleep(self.call_delay)
            if not self._connected:
                raise ToolInvocationError(f"Tool {name} called on a closed host")
            if self.call_error is not None:
                raise self.call_error
            return self.results.get(name, {"ok": True})
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        if self._connected:
            self.close_count += 1
        self._connected = False


class ScriptedProvider(CompletionProvider):
    """Completion provider returning preset answers."""

    name = "scripted"

    def __init__(
        self,
        selection: ToolSelection | None = None,
        answer: str = "scripted answer",
        init_error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.selection = selection
        self.answer = answer
        self.init_error = init_error
        self.intent_calls: list[str] = []
        self.grounding_calls: list[tuple[str, str, Any]] = []
        self.close_count = 0

    async def initialize(self) -> None:
        if self.init_error is not None:
            raise self.init_error
        self._initialized = True

    async def analyze_intent(self, message: str, tools: list[Tool]) -> ToolSelection:
        self.intent_calls.append(message)
        if self.selection is None:
            raise AssertionError("no selection scripted")
        return self.selection

    async def generate_grounded_response(
        self, message: str, tool_name: str, tool_result: Any
    ) -> str:
        self.grounding_calls.append((message, tool_name, tool_result))
        return self.answer

    async def close(self) -> None:
        self.close_count += 1
        await super().close()


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings isolated from the environment's credentials.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        McpChatSettings: Settings instance configured for testing.
    """
    return McpChatSettings(
        host="127.0.0.1",
        port=3000,
        provider="keyword",
        anthropic_api_key=None,
        openai_api_key=None,
        mcp_config_path=str(tmp_path / "mcp.json"),
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def tool_host():
    """A fake tool host offering the weather and employees tools."""
    return FakeToolHost(
        tools=[WEATHER_TOOL, EMPLOYEES_TOOL],
        results={
            "get_weather": {"city": "Lisbon", "temperature": 21, "sky": "sunny"},
            "get_employees": [{"name": "Ana"}, {"name": "Bruno"}],
        },
    )


@pytest.fixture
def scripted_provider():
    """A provider that selects get_weather for Lisbon."""
    return ScriptedProvider(
        selection=ToolSelection(tool_name="get_weather", parameters={"city": "Lisbon"}),
        answer="It is sunny in Lisbon.",
    )


@pytest.fixture
def keyword_agent(tool_host):
    """An uninitialized agent using keyword matching."""
    return ChatAgent(tool_host=tool_host, provider=KeywordProvider())


@pytest.fixture
def test_app(test_settings, keyword_agent):
    """Create a FastAPI test application around the keyword agent.

    Args:
        test_settings: Test settings fixture.
        keyword_agent: Agent fixture; initialized by the app's lifespan.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings, agent=keyword_agent)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest_asyncio.fixture
async def unstarted_client(test_settings):
    """Create an async HTTP client for an app whose lifespan never ran.

    Args:
        test_settings: Test settings fixture.

    Yields:
        AsyncClient: Client bound to an application without an agent.
    """
    app = create_app(settings=test_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
