"""Chat endpoints for the chat API."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from athey.api.dependencies import get_orchestrator
from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas import ChatRequest, ChatResponse, ErrorResponse
from athey.services import (
    GenerationInterruptedError,
    GenerationUnavailableError,
    Orchestrator,
    RequestTimeoutError,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])
legacy_router = APIRouter(prefix="/api", tags=["chat"])

ERROR_RESPONSES = {
    502: {"model": ErrorResponse, "description": "Generation interrupted"},
    503: {"model": ErrorResponse, "description": "Generation unavailable"},
    504: {"model": ErrorResponse, "description": "Request deadline exceeded"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


@router.post("", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(
    request: ChatRequest,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
) -> ChatResponse:
    """
    Answer a conversation turn with live space data in context.

    This endpoint:
    1. Fetches live data from the configured providers (in parallel)
    2. Composes the system instruction with that context
    3. Runs the generation engine over the conversation
    4. Returns the full answer plus the parsed sources block
    """
    try:
        return await orchestrator.process_chat(request)
    except GenerationUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except GenerationInterruptedError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    except RequestTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e)) from e
    except Exception as e:
        logger.exception(LogEvents.CHAT_REQUEST_FAILED, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.post("/stream", responses=ERROR_RESPONSES)
async def chat_stream(
    request: ChatRequest,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
) -> StreamingResponse:
    """
    Answer a conversation turn as a Server-Sent Events stream.

    Event types:
    - `token`: `{"content": "..."}` - a chunk of the answer, unmodified
    - `done`: `{"sources": [...], "context": [...], "metadata": {...}}`
    - `error`: `{"message": "..."}` - the stream broke after it had started

    If the engine cannot be started, the request fails with 503 before
    any event is sent.
    """
    try:
        events = await orchestrator.open_stream(request)
    except GenerationUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except RequestTimeoutError as e:
        raise HTTPException(status_code=504, detail=str(e)) from e

    return StreamingResponse(events, media_type="text/event-stream", headers=SSE_HEADERS)


@legacy_router.post("/chat", responses=ERROR_RESPONSES)
async def chat_stream_legacy(
    request: ChatRequest,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
) -> StreamingResponse:
    """Same stream as `/api/v1/chat/stream`, at the path the web client posts to."""
    return await chat_stream(request, orchestrator)
