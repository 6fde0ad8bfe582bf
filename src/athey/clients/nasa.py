"""Client for NASA's Astronomy Picture of the Day."""

from athey.clients.base import ProviderClient
from athey.schemas.providers import DailyImage, ProviderResult

NASA_BASE_URL = "https://api.nasa.gov"
DEMO_API_KEY = "DEMO_KEY"


class ApodClient(ProviderClient):
    """Daily astronomy image.

    Falls back to NASA's shared, heavily rate-limited ``DEMO_KEY`` when no
    key is configured.
    """

    name = "nasa"
    base_url = NASA_BASE_URL

    def __init__(self, api_key: str | None = None, timeout: float = 10.0, base_url: str | None = None):
        super().__init__(timeout=timeout, base_url=base_url)
        self.api_key = api_key or DEMO_API_KEY

    async def picture_of_the_day(self) -> ProviderResult:
        return await self._fetch(
            "apod",
            f"{self.base_url}/planetary/apod",
            DailyImage.model_validate,
            params={"api_key": self.api_key},
        )
