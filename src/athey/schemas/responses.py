"""Response schemas for the chat API."""

from pydantic import BaseModel, ConfigDict, Field


class SourceCitation(BaseModel):
    """One entry of the trailing sources block in a generated answer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    domain: str
    title: str
    url: str
    description: str


class ProviderStatus(BaseModel):
    """Outcome of one provider fetch used to build the context."""

    provider: str = Field(..., description="Provider key")
    status: str = Field(..., description="present or absent")
    reason: str | None = Field(default=None, description="Why the provider was absent")
    latency_ms: int = Field(default=0, description="Fetch latency in milliseconds")


class ResponseMetadata(BaseModel):
    """Timing metadata about a chat response."""

    context_time_ms: int = Field(..., description="Time spent aggregating context")
    generation_time_ms: int = Field(..., description="Time spent generating the response")
    total_time_ms: int = Field(..., description="Total request time")


class ChatResponse(BaseModel):
    """Non-streaming chat response."""

    response: str = Field(..., description="The generated response")
    sources: list[SourceCitation] = Field(
        default_factory=list, description="Citations parsed from the response"
    )
    context: list[ProviderStatus] = Field(
        default_factory=list, description="Providers consulted for live context"
    )
    metadata: ResponseMetadata = Field(..., description="Timing metadata")


class ErrorResponse(BaseModel):
    """Error response from the service."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict | None = Field(default=None, description="Additional error details")
