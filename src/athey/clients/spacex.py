"""Client for the public SpaceX REST API (v4)."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from athey.clients.base import ProviderClient
from athey.schemas.providers import (
    LaunchOutcome,
    LaunchRecord,
    ProviderResult,
    VehicleSpec,
)

SPACEX_BASE_URL = "https://api.spacexdata.com/v4"


class SpaceXClient(ProviderClient):
    """Launches and vehicles. Unauthenticated."""

    name = "spacex"
    base_url = SPACEX_BASE_URL

    def __init__(
        self,
        timeout: float = 10.0,
        base_url: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        super().__init__(timeout=timeout, base_url=base_url)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def latest_launch(self) -> ProviderResult:
        return await self._fetch("latest_launch", f"{self.base_url}/launches/latest", parse_launch)

    async def upcoming_launches(self, limit: int = 5) -> ProviderResult:
        """Future-dated launches, soonest first, at most ``limit``."""
        now = self.clock()

        def parse(data: Any) -> list[LaunchRecord]:
            launches = [parse_launch(item) for item in data]
            future = [launch for launch in launches if launch.date_utc > now]
            future.sort(key=lambda launch: launch.date_utc)
            return future[:limit]

        return await self._fetch("upcoming_launches", f"{self.base_url}/launches/upcoming", parse)

    async def past_launches(self, limit: int = 10) -> ProviderResult:
        """Most recent launches first, at most ``limit``."""

        def parse(data: Any) -> list[LaunchRecord]:
            launches = [parse_launch(item) for item in data]
            launches.sort(key=lambda launch: launch.date_utc, reverse=True)
            return launches[:limit]

        return await self._fetch("past_launches", f"{self.base_url}/launches/past", parse)

    async def rockets(self) -> ProviderResult:
        def parse(data: Any) -> list[VehicleSpec]:
            return [VehicleSpec.model_validate(item) for item in data]

        return await self._fetch("rockets", f"{self.base_url}/rockets", parse)

    async def rocket(self, rocket_id: str) -> ProviderResult:
        return await self._fetch(
            "rocket", f"{self.base_url}/rockets/{rocket_id}", VehicleSpec.model_validate
        )


def parse_launch(data: dict[str, Any]) -> LaunchRecord:
    """Map a raw launch document; a missing ``success`` flag means pending."""
    return LaunchRecord(
        id=data["id"],
        name=data["name"],
        date_utc=data["date_utc"],
        date_local=data.get("date_local"),
        outcome=LaunchOutcome.from_flag(data.get("success")),
        upcoming=bool(data.get("upcoming", False)),
        details=data.get("details"),
        rocket=data.get("rocket"),
        flight_number=data.get("flight_number"),
        links=data.get("links") or {},
    )
