"""Typed records produced by the space-data provider clients."""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ProviderKey(str, Enum):
    """Identifies one provider fetch the aggregator can fan out to.

    Declaration order is the render priority of the context block.
    """

    ISS_POSITION = "iss_position"
    SATELLITES_ABOVE = "satellites_above"
    LATEST_LAUNCH = "latest_launch"
    UPCOMING_LAUNCHES = "upcoming_launches"
    PAST_LAUNCHES = "past_launches"
    ROCKETS = "rockets"
    ISRO_SPACECRAFTS = "isro_spacecrafts"
    ISRO_LAUNCHERS = "isro_launchers"
    ISRO_CENTRES = "isro_centres"
    APOD = "apod"


RENDER_PRIORITY: tuple[ProviderKey, ...] = tuple(ProviderKey)


class ProviderResult(BaseModel, Generic[T]):
    """Outcome of a single provider call: either present data or absent.

    Failures never surface as exceptions; they collapse to ``absent`` with a
    diagnostic ``reason`` that is only meant for logs.
    """

    model_config = ConfigDict(frozen=True)

    provider: str = Field(..., description="Provider operation name")
    status: Literal["present", "absent"] = Field(..., description="Result state")
    value: T | None = Field(default=None, description="Payload when present")
    reason: str | None = Field(default=None, description="Why the result is absent")
    latency_ms: int = Field(default=0, description="Call latency in milliseconds")

    @classmethod
    def present(cls, provider: str, value: Any, latency_ms: int = 0) -> "ProviderResult":
        return cls(provider=provider, status="present", value=value, latency_ms=latency_ms)

    @classmethod
    def absent(cls, provider: str, reason: str, latency_ms: int = 0) -> "ProviderResult":
        return cls(provider=provider, status="absent", reason=reason, latency_ms=latency_ms)

    @property
    def is_present(self) -> bool:
        return self.status == "present"


# ---------------------------------------------------------------------------
# Satellites (N2YO)
# ---------------------------------------------------------------------------


class SatelliteInfo(BaseModel):
    """Header block N2YO returns with position queries."""

    satid: int
    satname: str
    transactionscount: int = 0


class SatellitePosition(BaseModel):
    """Live position of a satellite relative to the fixed observer."""

    model_config = ConfigDict(frozen=True)

    satid: int | None = None
    satname: str | None = None
    satlatitude: float
    satlongitude: float
    sataltitude: float
    azimuth: float = 0.0
    elevation: float = 0.0
    timestamp: int


class SatellitePositions(BaseModel):
    info: SatelliteInfo
    positions: list[SatellitePosition] = Field(default_factory=list)


class SatelliteAbove(BaseModel):
    """A satellite currently above the observer."""

    satid: int
    satname: str
    intDesignator: str = ""
    launchDate: str = ""
    satlat: float
    satlng: float
    satalt: float


class AboveInfo(BaseModel):
    category: str = ""
    satcount: int = 0


class SatellitesAbove(BaseModel):
    info: AboveInfo
    above: list[SatelliteAbove] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Launches and vehicles (SpaceX)
# ---------------------------------------------------------------------------


class LaunchOutcome(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"
    PENDING = "Pending"

    @classmethod
    def from_flag(cls, success: bool | None) -> "LaunchOutcome":
        if success is None:
            return cls.PENDING
        return cls.SUCCESS if success else cls.FAILURE


class PatchLinks(BaseModel):
    small: str | None = None
    large: str | None = None


class LaunchLinks(BaseModel):
    patch: PatchLinks = Field(default_factory=PatchLinks)
    webcast: str | None = None
    wikipedia: str | None = None
    article: str | None = None


class LaunchRecord(BaseModel):
    """A single launch, past or upcoming."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    date_utc: datetime
    date_local: str | None = None
    outcome: LaunchOutcome = LaunchOutcome.PENDING
    upcoming: bool = False
    details: str | None = None
    rocket: str | None = None
    flight_number: int | None = None
    links: LaunchLinks = Field(default_factory=LaunchLinks)


class Length(BaseModel):
    meters: float | None = None
    feet: float | None = None


class Mass(BaseModel):
    kg: float | None = None
    lb: float | None = None


class VehicleSpec(BaseModel):
    """A launch vehicle from the provider catalog."""

    id: str
    name: str
    type: str = ""
    active: bool = False
    stages: int | None = None
    boosters: int | None = None
    cost_per_launch: int | None = None
    success_rate_pct: float | None = None
    first_flight: str | None = None
    country: str | None = None
    company: str | None = None
    description: str | None = None
    height: Length = Field(default_factory=Length)
    diameter: Length = Field(default_factory=Length)
    mass: Mass = Field(default_factory=Mass)


# ---------------------------------------------------------------------------
# Agency catalog (ISRO)
# ---------------------------------------------------------------------------


class AgencyCatalogEntry(BaseModel):
    """A spacecraft, launcher or centre from the agency catalog.

    Centres carry a location; other entries leave it unset.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    name: str
    place: str | None = Field(default=None, alias="Place")
    state: str | None = Field(default=None, alias="State")


# ---------------------------------------------------------------------------
# Daily image (NASA APOD)
# ---------------------------------------------------------------------------


class DailyImage(BaseModel):
    """Astronomy Picture of the Day."""

    title: str
    explanation: str = ""
    url: str | None = None
    hdurl: str | None = None
    media_type: str = "image"
    date: str
    copyright: str | None = None
