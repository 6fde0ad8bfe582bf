"""Tests for the generation engine client and response pipeline."""

from collections.abc import AsyncGenerator

import httpx
import pytest
import respx

from athey.clients.model import ModelClient, ModelClientError
from athey.schemas.requests import Message
from athey.services.generation import (
    GenerationInterruptedError,
    GenerationService,
    GenerationUnavailableError,
)

BASE_URL = "https://engine.test/v1"


class FakeModelClient:
    """Model client that replays chunks and optionally fails after some of them."""

    def __init__(self, chunks: list[str], fail_after: int | None = None):
        self.chunks = chunks
        self.fail_after = fail_after
        self.messages: list[Message] = []

    async def chat_stream(self, messages: list[Message]) -> AsyncGenerator[str, None]:
        self.messages = messages
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise ModelClientError("connection reset")
            yield chunk
        if self.fail_after is not None and self.fail_after >= len(self.chunks):
            raise ModelClientError("connection reset")


HISTORY = [
    Message(role="user", content="Where is the ISS?"),
    Message(role="assistant", content="Let me check."),
    Message(role="user", content="Thanks"),
]


class TestGenerationService:
    """Tests for the response pipeline."""

    @pytest.mark.asyncio
    async def test_chunks_pass_through_unmodified(self) -> None:
        """Test chunks are passed through exactly as produced."""
        chunks = ["The ISS ", "is over ", "London.\n<!-- SOURCES_START -->[]<!-- SOURCES_END -->"]
        client = FakeModelClient(chunks)
        service = GenerationService(client)

        received = [chunk async for chunk in service.respond("POLICY", HISTORY)]

        assert received == chunks

    @pytest.mark.asyncio
    async def test_instruction_leads_history(self) -> None:
        """Test the system instruction precedes the conversation history."""
        client = FakeModelClient(["ok"])
        service = GenerationService(client)

        [_ async for _ in service.respond("POLICY", HISTORY)]

        assert client.messages[0] == Message(role="system", content="POLICY")
        assert client.messages[1:] == HISTORY

    @pytest.mark.asyncio
    async def test_failure_before_output_is_unavailable(self) -> None:
        """Test a failure before the first chunk is reported as unavailable."""
        service = GenerationService(FakeModelClient(["never"], fail_after=0))

        with pytest.raises(GenerationUnavailableError):
            [_ async for _ in service.respond("POLICY", HISTORY)]

    @pytest.mark.asyncio
    async def test_failure_mid_stream_is_interrupted(self) -> None:
        """Test a failure after output started is reported as interrupted."""
        service = GenerationService(FakeModelClient(["one ", "two ", "three"], fail_after=2))
        received: list[str] = []

        with pytest.raises(GenerationInterruptedError):
            async for chunk in service.respond("POLICY", HISTORY):
                received.append(chunk)

        assert received == ["one ", "two "]

    @pytest.mark.asyncio
    async def test_generate_collects_response(self) -> None:
        """Test generate joins the chunks into one response."""
        service = GenerationService(FakeModelClient(["Hello", ", ", "Athey"]))

        result = await service.generate("POLICY", HISTORY)

        assert result.response == "Hello, Athey"
        assert result.latency_ms >= 0


def sse(*payloads: str) -> str:
    return "".join(f"data: {payload}\n\n" for payload in payloads)


class TestModelClient:
    """Tests for the OpenAI-compatible streaming client."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_streams_openai_deltas(self) -> None:
        """Test content deltas are yielded from the SSE stream."""
        route = respx.post(f"{BASE_URL}/chat/completions").mock(
            return_value=httpx.Response(
                200,
                text=sse(
                    '{"choices":[{"delta":{"role":"assistant"}}]}',
                    '{"choices":[{"delta":{"content":"Hello"}}]}',
                    '{"choices":[{"delta":{"content":" world"}}]}',
                    "[DONE]",
                ),
                headers={"Content-Type": "text/event-stream"},
            )
        )
        client = ModelClient(BASE_URL, "gemini-2.5-flash", api_key="secret")

        chunks = [chunk async for chunk in client.chat_stream(HISTORY)]

        assert chunks == ["Hello", " world"]
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer secret"
        body = request.read()
        assert b'"stream":true' in body.replace(b" ", b"")
        assert b'"model":"gemini-2.5-flash"' in body.replace(b" ", b"")

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises(self) -> None:
        """Test a non-2xx engine response raises ModelClientError."""
        respx.post(f"{BASE_URL}/chat/completions").mock(
            return_value=httpx.Response(401, json={"error": {"message": "bad key"}})
        )
        client = ModelClient(BASE_URL, "gemini-2.5-flash")

        with pytest.raises(ModelClientError) as exc_info:
            [_ async for _ in client.chat_stream(HISTORY)]

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_raises(self) -> None:
        """Test a connection failure raises ModelClientError."""
        respx.post(f"{BASE_URL}/chat/completions").mock(side_effect=httpx.ConnectError)
        client = ModelClient(BASE_URL, "gemini-2.5-flash")

        with pytest.raises(ModelClientError):
            [_ async for _ in client.chat_stream(HISTORY)]

    def test_parse_sse_line(self) -> None:
        """Test SSE line parsing for data, done and noise lines."""
        client = ModelClient(BASE_URL, "m")

        assert client._parse_sse_line("data: [DONE]") is None
        assert client._parse_sse_line(": keep-alive") is None
        assert client._parse_sse_line('data: {"content": "hi"}') == "hi"
        assert client._parse_sse_line('data: {"choices": []}') is None
