"""Response pipeline: streams the generation engine's answer to the caller."""

import time
from collections.abc import AsyncGenerator

from athey.clients.model import ModelClient, ModelClientError
from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas.internal import GenerationResult
from athey.schemas.requests import Message

logger = get_logger(__name__)


class GenerationError(Exception):
    """Error during generation."""

    pass


class GenerationUnavailableError(GenerationError):
    """The engine could not be started; nothing was delivered."""

    pass


class GenerationInterruptedError(GenerationError):
    """The stream failed after output had already been delivered."""

    pass


class GenerationService:
    """Pass-through pipeline around the generation engine.

    Chunks are forwarded exactly as produced. The trailing sources block is
    ordinary engine output and is not inspected here.
    """

    def __init__(self, model_client: ModelClient):
        self.model_client = model_client

    async def respond(
        self,
        instruction: str,
        history: list[Message],
    ) -> AsyncGenerator[str, None]:
        """
        Stream a response governed by ``instruction`` for the given history.

        Args:
            instruction: Composed system-level directive
            history: Caller's conversation turns, oldest first

        Yields:
            Response text chunks as they arrive

        Raises:
            GenerationUnavailableError: The engine failed before producing output
            GenerationInterruptedError: The engine failed mid-stream
        """
        messages = [Message(role="system", content=instruction), *history]
        start_time = time.perf_counter()
        chunks = 0

        logger.info(LogEvents.GENERATION_STREAM_STARTED, turns=len(history))
        try:
            async for chunk in self.model_client.chat_stream(messages):
                chunks += 1
                yield chunk
        except ModelClientError as e:
            if chunks == 0:
                logger.error(LogEvents.GENERATION_STREAM_UNAVAILABLE, error=str(e))
                raise GenerationUnavailableError(f"Generation unavailable: {e}") from e
            logger.error(LogEvents.GENERATION_STREAM_INTERRUPTED, error=str(e), chunks=chunks)
            raise GenerationInterruptedError(f"Generation interrupted: {e}") from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(LogEvents.GENERATION_STREAM_COMPLETED, chunks=chunks, latency_ms=latency_ms)

    async def generate(self, instruction: str, history: list[Message]) -> GenerationResult:
        """Collect the full response for non-streaming callers."""
        start_time = time.perf_counter()
        parts = [chunk async for chunk in self.respond(instruction, history)]
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return GenerationResult(response="".join(parts), latency_ms=latency_ms)
