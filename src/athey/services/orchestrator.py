"""Orchestrator service - coordinates context aggregation and generation."""

import asyncio
import json
import time
from collections.abc import AsyncGenerator, AsyncIterator, Iterable

from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas import (
    AggregatedContext,
    ChatRequest,
    ChatResponse,
    ProviderKey,
    ProviderStatus,
    ResponseMetadata,
)
from athey.services.citations import extract_citations
from athey.services.context import ContextService
from athey.services.generation import GenerationError, GenerationService
from athey.services.prompt_builder import PromptBuilder

logger = get_logger(__name__)


class OrchestratorError(Exception):
    """Error in orchestration."""

    pass


class RequestTimeoutError(OrchestratorError):
    """The request did not finish within the configured upper bound."""

    pass


class Orchestrator:
    """
    Main orchestrator for a chat turn.

    Coordinates:
    1. Concurrent live-data aggregation from the selected providers
    2. Instruction composition (policy + context block)
    3. Streaming generation with the caller's history
    """

    def __init__(
        self,
        context_service: ContextService,
        generation_service: GenerationService,
        prompt_builder: PromptBuilder,
        selected_providers: Iterable[ProviderKey],
        provider_timeout: float = 8.0,
        request_timeout: float = 120.0,
    ):
        self.context_service = context_service
        self.generation_service = generation_service
        self.prompt_builder = prompt_builder
        self.selected_providers = list(selected_providers)
        self.provider_timeout = provider_timeout
        self.request_timeout = request_timeout

    async def prepare(self, request: ChatRequest) -> tuple[str, AggregatedContext]:
        """Aggregate live context and compose the system instruction."""
        logger.info(LogEvents.CHAT_REQUEST_STARTED, turns=len(request.messages))
        context = await self.context_service.build_context(
            self.selected_providers, self.provider_timeout
        )
        return self.prompt_builder.compose(context), context

    async def process_chat(self, request: ChatRequest) -> ChatResponse:
        """
        Process a chat request and return the complete answer.

        Raises:
            GenerationError: If the engine is unavailable or the stream breaks
            RequestTimeoutError: If the request exceeds ``request_timeout``
        """
        total_start = time.perf_counter()
        try:
            async with asyncio.timeout(self.request_timeout):
                instruction, context = await self.prepare(request)
                context_time_ms = int((time.perf_counter() - total_start) * 1000)
                result = await self.generation_service.generate(instruction, request.messages)
        except TimeoutError as e:
            logger.error(LogEvents.CHAT_REQUEST_TIMEOUT, timeout=self.request_timeout)
            raise RequestTimeoutError(
                f"Request exceeded {self.request_timeout:g}s"
            ) from e

        total_time_ms = int((time.perf_counter() - total_start) * 1000)
        logger.info(LogEvents.CHAT_REQUEST_COMPLETED, total_time_ms=total_time_ms)

        return ChatResponse(
            response=result.response,
            sources=extract_citations(result.response),
            context=self._provider_statuses(context),
            metadata=ResponseMetadata(
                context_time_ms=context_time_ms,
                generation_time_ms=result.latency_ms,
                total_time_ms=total_time_ms,
            ),
        )

    async def open_stream(self, request: ChatRequest) -> AsyncGenerator[str, None]:
        """
        Aggregate context and start the engine, then hand back the SSE stream.

        The engine is started before this returns, so a failure to start
        surfaces here as an exception rather than inside an open stream.

        Raises:
            GenerationUnavailableError: If the engine could not be started
            RequestTimeoutError: If startup exceeds ``request_timeout``
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.request_timeout
        total_start = time.perf_counter()

        try:
            async with asyncio.timeout_at(deadline):
                instruction, context = await self.prepare(request)
                context_time_ms = int((time.perf_counter() - total_start) * 1000)

                generation_start = time.perf_counter()
                tokens = self.generation_service.respond(instruction, request.messages)
                try:
                    first: str | None = await anext(tokens)
                except StopAsyncIteration:
                    first = None
        except TimeoutError as e:
            logger.error(LogEvents.CHAT_REQUEST_TIMEOUT, timeout=self.request_timeout)
            raise RequestTimeoutError(
                f"Request exceeded {self.request_timeout:g}s"
            ) from e

        return self._event_stream(
            first=first,
            tokens=tokens,
            context=context,
            deadline=deadline,
            timings=(total_start, generation_start, context_time_ms),
        )

    async def _event_stream(
        self,
        first: str | None,
        tokens: AsyncIterator[str],
        context: AggregatedContext,
        deadline: float,
        timings: tuple[float, float, int],
    ) -> AsyncGenerator[str, None]:
        """Encode engine chunks as SSE events, ending with ``done`` or ``error``."""
        total_start, generation_start, context_time_ms = timings
        loop = asyncio.get_running_loop()
        full_response: list[str] = []

        if first is not None:
            full_response.append(first)
            yield self._sse_event("token", {"content": first})

            while True:
                try:
                    chunk = await asyncio.wait_for(anext(tokens), deadline - loop.time())
                except StopAsyncIteration:
                    break
                except TimeoutError:
                    logger.error(LogEvents.CHAT_REQUEST_TIMEOUT, timeout=self.request_timeout)
                    yield self._sse_event(
                        "error", {"message": f"Request exceeded {self.request_timeout:g}s"}
                    )
                    return
                except GenerationError as e:
                    yield self._sse_event("error", {"message": str(e)})
                    return

                full_response.append(chunk)
                yield self._sse_event("token", {"content": chunk})

        generation_time_ms = int((time.perf_counter() - generation_start) * 1000)
        total_time_ms = int((time.perf_counter() - total_start) * 1000)
        logger.info(LogEvents.CHAT_REQUEST_COMPLETED, total_time_ms=total_time_ms)

        sources = extract_citations("".join(full_response))
        yield self._sse_event(
            "done",
            {
                "sources": [s.model_dump() for s in sources],
                "context": [s.model_dump() for s in self._provider_statuses(context)],
                "metadata": {
                    "context_time_ms": context_time_ms,
                    "generation_time_ms": generation_time_ms,
                    "total_time_ms": total_time_ms,
                },
            },
        )

    def _provider_statuses(self, context: AggregatedContext) -> list[ProviderStatus]:
        return [
            ProviderStatus(
                provider=key.value,
                status=result.status,
                reason=result.reason,
                latency_ms=result.latency_ms,
            )
            for key, result in context.results.items()
        ]

    def _sse_event(self, event_type: str, data: dict) -> str:
        """Format an SSE event."""
        return f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
