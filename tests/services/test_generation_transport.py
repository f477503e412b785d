"""
Tests for the Gemini generation transports.

The Gemini client is mocked; these tests verify request parameters, chunk
ordering, early close, and error mapping to UpstreamError.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from spots_backend.agents.recommendation.types import PromptPair
from spots_backend.services.generation_transport import (
    BufferedGeminiTransport,
    StreamingGeminiTransport,
    collect_text,
)
from spots_backend.utils.errors import UpstreamError

PROMPT = PromptPair(system_prompt="You recommend places.", user_prompt="Find coffee", result_limit=3)


def make_stream(texts, state, error=None):
    """Async generator standing in for the SDK's response stream."""
    async def stream():
        try:
            for text in texts:
                state["read"].append(text)
                yield MagicMock(text=text)
            if error is not None:
                raise error
        finally:
            state["closed"] = True
    return stream()


@pytest.fixture
def stream_state():
    return {"read": [], "closed": False}


# =============================================================================
# BUFFERED
# =============================================================================

class TestBufferedGeminiTransport:
    """Tests for BufferedGeminiTransport."""

    @pytest.mark.asyncio
    async def test_returns_full_text_once(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="Try Blue Bottle."))
        transport = BufferedGeminiTransport(client=client, model="gemini-test")

        chunks = [chunk async for chunk in transport.generate(PROMPT)]

        assert chunks == ["Try Blue Bottle."]

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="ok"))
        transport = BufferedGeminiTransport(client=client, model="gemini-test")

        await collect_text(transport, PROMPT)

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "Find coffee"
        assert kwargs["config"].temperature == 0.7
        assert kwargs["config"].system_instruction == "You recommend places."

    @pytest.mark.asyncio
    async def test_none_text_becomes_empty_string(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=None))
        transport = BufferedGeminiTransport(client=client)

        assert await collect_text(transport, PROMPT) == ""

    @pytest.mark.asyncio
    async def test_provider_error_maps_to_upstream_error(self, live_mode):
        from spots_backend.config import settings

        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(
            side_effect=RuntimeError(f"401 invalid key {settings.GOOGLE_API_KEY}")
        )
        transport = BufferedGeminiTransport(client=client)

        with pytest.raises(UpstreamError) as exc_info:
            await collect_text(transport, PROMPT)

        assert "401 invalid key" in exc_info.value.message
        assert settings.GOOGLE_API_KEY not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_maps_to_upstream_error(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(side_effect=TimeoutError("read timed out"))
        transport = BufferedGeminiTransport(client=client)

        with pytest.raises(UpstreamError, match="read timed out"):
            await collect_text(transport, PROMPT)

    @pytest.mark.asyncio
    async def test_no_client_configured(self):
        with patch("spots_backend.services.generation_transport._get_gemini_client", return_value=None):
            transport = BufferedGeminiTransport()
            with pytest.raises(UpstreamError, match="not configured"):
                await collect_text(transport, PROMPT)


# =============================================================================
# STREAMING
# =============================================================================

class TestStreamingGeminiTransport:
    """Tests for StreamingGeminiTransport."""

    @pytest.mark.asyncio
    async def test_chunks_keep_provider_order(self, stream_state):
        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(
            return_value=make_stream(["Hel", "lo", " wor", "ld"], stream_state)
        )
        transport = StreamingGeminiTransport(client=client, model="gemini-test")

        chunks = [chunk async for chunk in transport.generate(PROMPT)]

        assert chunks == ["Hel", "lo", " wor", "ld"]
        assert stream_state["closed"] is True

    @pytest.mark.asyncio
    async def test_empty_chunks_are_skipped(self, stream_state):
        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(
            return_value=make_stream(["a", "", None, "b"], stream_state)
        )
        transport = StreamingGeminiTransport(client=client)

        assert [chunk async for chunk in transport.generate(PROMPT)] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_early_close_stops_upstream_reads(self, stream_state):
        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(
            return_value=make_stream(["one", "two", "three"], stream_state)
        )
        transport = StreamingGeminiTransport(client=client)

        chunks = transport.generate(PROMPT)
        first = await chunks.__anext__()
        await chunks.aclose()

        assert first == "one"
        assert stream_state["read"] == ["one"]
        assert stream_state["closed"] is True

    @pytest.mark.asyncio
    async def test_mid_stream_failure_is_terminal(self, stream_state):
        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(
            return_value=make_stream(["partial"], stream_state, error=ConnectionError("connection reset"))
        )
        transport = StreamingGeminiTransport(client=client)

        delivered = []
        with pytest.raises(UpstreamError, match="connection reset"):
            async for chunk in transport.generate(PROMPT):
                delivered.append(chunk)

        assert delivered == ["partial"]
        assert stream_state["closed"] is True

    @pytest.mark.asyncio
    async def test_open_failure_maps_to_upstream_error(self):
        client = MagicMock()
        client.aio.models.generate_content_stream = AsyncMock(side_effect=RuntimeError("429 quota exceeded"))
        transport = StreamingGeminiTransport(client=client)

        with pytest.raises(UpstreamError, match="429 quota exceeded"):
            async for _ in transport.generate(PROMPT):
                pass
