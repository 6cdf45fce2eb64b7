"""Integration tests for the chat API endpoint.

Tests POST /chat with a full app setup: the lifespan initializes the agent,
requests go through routing, dependency injection and the dispatcher.
"""

import pytest
from httpx import AsyncClient

from mcp_chat.errors import ToolInvocationError
from mcp_chat.tools import ToolSelection


class TestChat:
    """Tests for POST /chat."""

    @pytest.mark.asyncio
    async def test_grounded_answer(self, scripted_client: AsyncClient, tool_host):
        """Test that a message is answered from the selected tool's result."""
        response = await scripted_client.post(
            "/chat", json={"message": "What's the weather in Lisbon?"}
        )

        assert response.status_code == 200
        assert response.json() == {"answer": "It is sunny in Lisbon."}
        assert tool_host.calls == [("get_weather", {"city": "Lisbon"})]

    @pytest.mark.asyncio
    async def test_keyword_agent_returns_raw_result(self, async_client: AsyncClient, tool_host):
        """Test the keyword path with arguments replaced by the message."""
        response = await async_client.post("/chat", json={"message": "use get_weather"})

        assert response.status_code == 200
        assert '"temperature": 21' in response.json()["answer"]
        assert tool_host.calls == [("get_weather", {"message": "use get_weather"})]

    @pytest.mark.asyncio
    async def test_missing_message(self, scripted_client: AsyncClient, scripted_provider):
        """Test that a request without a message is rejected."""
        response = await scripted_client.post("/chat", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert scripted_provider.intent_calls == []

    @pytest.mark.asyncio
    async def test_blank_message(self, scripted_client: AsyncClient):
        """Test that a whitespace-only message is rejected."""
        response = await scripted_client.post("/chat", json={"message": "   "})

        assert response.status_code == 400
        assert response.json()["error"] == "Message is required"

    @pytest.mark.asyncio
    async def test_no_body(self, scripted_client: AsyncClient, scripted_provider):
        """Test that a request without a body is rejected with 400."""
        response = await scripted_client.post("/chat")

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert scripted_provider.intent_calls == []

    @pytest.mark.asyncio
    async def test_non_string_message(self, scripted_client: AsyncClient, scripted_provider):
        """Test that a non-string message is rejected with 400."""
        response = await scripted_client.post("/chat", json={"message": 42})

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert scripted_provider.intent_calls == []

    @pytest.mark.asyncio
    async def test_malformed_json(self, scripted_client: AsyncClient, tool_host):
        """Test that a body that is not JSON is rejected with 400."""
        response = await scripted_client.post(
            "/chat",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
        assert tool_host.calls == []

    @pytest.mark.asyncio
    async def test_tool_failure(
        self, scripted_client: AsyncClient, tool_host, scripted_provider
    ):
        """Test that a failing tool is reported as a server error."""
        tool_host.call_error = ToolInvocationError("Tool get_weather failed: timeout")

        response = await scripted_client.post(
            "/chat", json={"message": "What's the weather in Lisbon?"}
        )

        assert response.status_code == 500
        error = response.json()["error"]
        assert error.startswith("Error processing message: Failed to get response")
        assert "timeout" in error
        assert scripted_provider.grounding_calls == []

    @pytest.mark.asyncio
    async def test_unknown_tool_is_not_called(
        self, scripted_client: AsyncClient, tool_host, scripted_provider
    ):
        """Test that a tool outside the catalog never reaches the tool host."""
        scripted_provider.selection = ToolSelection(tool_name="rm_rf", parameters={})

        response = await scripted_client.post("/chat", json={"message": "clean up"})

        assert response.status_code == 500
        assert tool_host.calls == []

    @pytest.mark.asyncio
    async def test_agent_not_started(self, unstarted_client: AsyncClient):
        """Test that requests fail with 503 when no agent is available."""
        response = await unstarted_client.post("/chat", json={"message": "hello"})

        assert response.status_code == 503
        assert response.json()["detail"] == "Chat agent not initialized"


class TestLifespan:
    """Tests for agent startup and shutdown in the app lifespan."""

    @pytest.mark.asyncio
    async def test_agent_closed_at_shutdown(self, test_app, keyword_agent, tool_host):
        """Test that the agent is closed when the app shuts down."""
        async with test_app.router.lifespan_context(test_app):
            assert tool_host.is_connected is True

        assert tool_host.is_connected is False
        assert tool_host.close_count == 1

    @pytest.mark.asyncio
    async def test_startup_failure_closes_agent(self, test_app, keyword_agent, tool_host):
        """Test that a failed startup still closes the agent."""
        tool_host.connect_error = ConnectionError("spawn failed")

        with pytest.raises(ConnectionError):
            async with test_app.router.lifespan_context(test_app):
                pass

        assert keyword_agent.state.value == "closed"
