"""Schemas package - request/response models for the chat service."""

from athey.schemas.internal import AggregatedContext, ContextSection, GenerationResult
from athey.schemas.providers import (
    AgencyCatalogEntry,
    DailyImage,
    LaunchOutcome,
    LaunchRecord,
    ProviderKey,
    ProviderResult,
    SatelliteAbove,
    SatellitePosition,
    SatellitesAbove,
    VehicleSpec,
)
from athey.schemas.requests import ChatCompletionRequest, ChatRequest, Message
from athey.schemas.responses import (
    ChatResponse,
    ErrorResponse,
    ProviderStatus,
    ResponseMetadata,
    SourceCitation,
)

__all__ = [
    # Requests
    "ChatRequest",
    "Message",
    "ChatCompletionRequest",
    # Responses
    "ChatResponse",
    "ErrorResponse",
    "ProviderStatus",
    "ResponseMetadata",
    "SourceCitation",
    # Providers
    "ProviderKey",
    "ProviderResult",
    "SatellitePosition",
    "SatelliteAbove",
    "SatellitesAbove",
    "LaunchOutcome",
    "LaunchRecord",
    "VehicleSpec",
    "AgencyCatalogEntry",
    "DailyImage",
    # Internal
    "AggregatedContext",
    "ContextSection",
    "GenerationResult",
]
