"""Client for the text-generation engine (OpenAI-compatible chat completions)."""

import json
from collections.abc import AsyncGenerator

import httpx

from athey.observability import get_logger
from athey.schemas.requests import ChatCompletionRequest, Message

logger = get_logger(__name__)


class ModelClientError(Exception):
    """Error from the generation engine."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ModelClient:
    """Streams completions from an OpenAI-compatible endpoint.

    The default deployment points at Gemini's OpenAI-compatible surface, but
    any server that speaks ``POST {base_url}/chat/completions`` with SSE deltas
    works.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str | None = None,
        timeout: float = 120.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout = httpx.Timeout(timeout)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def chat_stream(self, messages: list[Message]) -> AsyncGenerator[str, None]:
        """
        Send messages to the engine and stream the response.

        Args:
            messages: Conversation including the leading system instruction

        Yields:
            Response text chunks as they arrive

        Raises:
            ModelClientError: On transport failure or a non-200 status
        """
        chat_url = f"{self.base_url}/chat/completions"
        request_data = ChatCompletionRequest(
            model=self.model,
            messages=messages,
            stream=True,
        )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                async with client.stream(
                    "POST",
                    chat_url,
                    json=request_data.model_dump(),
                    headers=self._headers(),
                ) as response:
                    if response.status_code != 200:
                        error_text = await response.aread()
                        raise ModelClientError(
                            f"Model stream failed: HTTP {response.status_code} - {error_text[:200]!r}",
                            status_code=response.status_code,
                        )

                    async for line in response.aiter_lines():
                        chunk = self._parse_sse_line(line)
                        if chunk:
                            yield chunk

            except httpx.TimeoutException as e:
                raise ModelClientError("Model stream timed out") from e
            except httpx.RequestError as e:
                raise ModelClientError(f"Network error during stream: {e}") from e

    def _parse_sse_line(self, line: str) -> str | None:
        """Parse a Server-Sent Events line to extract content."""
        line = line.strip()

        if not line.startswith("data:"):
            return None

        data = line[5:].strip()
        if data == "[DONE]":
            return None

        try:
            parsed = json.loads(data)
        except json.JSONDecodeError:
            # Plain text data
            return data

        if not isinstance(parsed, dict):
            return None

        # OpenAI-style delta
        if "choices" in parsed:
            choices = parsed["choices"]
            if choices:
                delta = choices[0].get("delta") or {}
                return delta.get("content")
            return None

        if "content" in parsed:
            return parsed["content"]

        if "text" in parsed:
            return parsed["text"]

        return None
