"""Pytest configuration for integration tests.

Provides an application wired to a scripted completion provider, so API
tests can exercise the LLM-backed path without a model server.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mcp_chat import create_app
from mcp_chat.agents import ChatAgent


@pytest.fixture
def scripted_agent(tool_host, scripted_provider):
    """An uninitialized agent using the scripted provider."""
    return ChatAgent(tool_host=tool_host, provider=scripted_provider)


@pytest_asyncio.fixture
async def scripted_client(test_settings, scripted_agent):
    """Async HTTP client for an app running the scripted agent.

    Yields:
        AsyncClient: Client bound to the started application.
    """
    app = create_app(settings=test_settings, agent=scripted_agent)

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

