"""Internal DTOs used within the chat service."""

from pydantic import BaseModel, ConfigDict, Field

from athey.schemas.providers import ProviderKey, ProviderResult

CONTEXT_HEADER = "\n\n## REAL-TIME SPACE DATA (Use this for accurate responses):\n"


class ContextSection(BaseModel):
    """Rendered text for one provider that returned data."""

    model_config = ConfigDict(frozen=True)

    key: ProviderKey
    text: str


class AggregatedContext(BaseModel):
    """Context block assembled from all successful provider fetches.

    ``sections`` is ordered by render priority, never by completion order.
    """

    sections: list[ContextSection] = Field(default_factory=list)
    results: dict[ProviderKey, ProviderResult] = Field(default_factory=dict)
    total_latency_ms: int = Field(default=0, description="Wall time of the fan-out")

    @property
    def is_empty(self) -> bool:
        return not self.sections

    def render(self) -> str:
        """Return the prompt-ready block, or an empty string."""
        if self.is_empty:
            return ""
        return CONTEXT_HEADER + "".join(section.text for section in self.sections)


class GenerationResult(BaseModel):
    """Result of a fully collected generation."""

    response: str = Field(..., description="Generated response text")
    latency_ms: int = Field(..., description="Generation time in milliseconds")
