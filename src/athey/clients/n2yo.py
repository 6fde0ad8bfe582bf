"""Client for the N2YO satellite tracking API."""

from typing import Any

from athey.clients.base import ProviderClient
from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas.providers import (
    ProviderResult,
    SatellitePositions,
    SatellitesAbove,
)

logger = get_logger(__name__)

N2YO_BASE_URL = "https://api.n2yo.com/rest/v1/satellite"


class SatelliteClient(ProviderClient):
    """Real-time satellite positions keyed by NORAD catalog id.

    N2YO needs an API key. Without one the client logs once, at construction,
    and every call returns an absent result without touching the network.

    Observer coordinates are fixed per client; N2YO reports azimuth and
    elevation relative to them.
    """

    name = "n2yo"
    base_url = N2YO_BASE_URL

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 10.0,
        observer: tuple[float, float, float] = (0.0, 0.0, 0.0),
        base_url: str | None = None,
    ):
        super().__init__(timeout=timeout, base_url=base_url)
        self.api_key = api_key
        self.observer = observer
        if not api_key:
            logger.warning(
                LogEvents.PROVIDER_CREDENTIAL_MISSING,
                provider=self.name,
                setting="n2yo_api_key",
            )

    def _url(self, path: str) -> str:
        # N2YO expects the key appended to the path, not as a query string
        return f"{self.base_url}/{path}&apiKey={self.api_key}"

    async def positions(self, norad_id: int, seconds: int = 1) -> ProviderResult:
        """Positions for the next ``seconds`` seconds (one per second)."""
        if not self.api_key:
            return ProviderResult.absent("satellite_positions", "n2yo_api_key not set")

        lat, lng, alt = self.observer
        url = self._url(f"positions/{norad_id}/{lat}/{lng}/{alt}/{seconds}")
        return await self._fetch("satellite_positions", url, _parse_positions)

    async def position(self, norad_id: int) -> ProviderResult:
        """Current position of one satellite."""
        result = await self.positions(norad_id)
        if not result.is_present:
            return result
        positions: SatellitePositions = result.value
        if not positions.positions:
            return self._absent("satellite_position", "No positions returned", result.latency_ms)
        return ProviderResult.present(
            "satellite_position", positions.positions[0], result.latency_ms
        )

    async def above(
        self,
        lat: float = 28.6139,
        lng: float = 77.209,
        search_radius: int = 70,
        category_id: int = 0,
    ) -> ProviderResult:
        """Satellites currently above a location.

        Categories: 0=All, 18=Amateur radio, 21=Cubesat, 52=Space stations.
        """
        if not self.api_key:
            return ProviderResult.absent("satellites_above", "n2yo_api_key not set")

        url = self._url(f"above/{lat}/{lng}/0/{search_radius}/{category_id}")
        return await self._fetch("satellites_above", url, _parse_above)


def _parse_positions(data: Any) -> SatellitePositions | None:
    if "error" in data:
        raise ValueError(data["error"])
    positions = SatellitePositions.model_validate(data)
    # Position records omit the id/name carried by the info block
    enriched = [
        p.model_copy(update={"satid": positions.info.satid, "satname": positions.info.satname})
        for p in positions.positions
    ]
    return positions.model_copy(update={"positions": enriched})


def _parse_above(data: Any) -> SatellitesAbove | None:
    if "error" in data:
        raise ValueError(data["error"])
    return SatellitesAbove.model_validate(data)

