"""Client for the community ISRO catalog API."""

from typing import Any

from athey.clients.base import ProviderClient
from athey.schemas.providers import AgencyCatalogEntry, ProviderResult

ISRO_BASE_URL = "https://isro.vercel.app/api"


class IsroClient(ProviderClient):
    """Spacecraft, launch vehicle and centre catalogs. Unauthenticated.

    Each endpoint wraps its list in a named key; a body without that key is an
    empty catalog, not a failure.
    """

    name = "isro"
    base_url = ISRO_BASE_URL

    async def spacecrafts(self) -> ProviderResult:
        return await self._catalog("isro_spacecrafts", "spacecrafts")

    async def launchers(self) -> ProviderResult:
        return await self._catalog("isro_launchers", "launchers")

    async def centres(self) -> ProviderResult:
        return await self._catalog("isro_centres", "centres")

    async def _catalog(self, provider: str, collection: str) -> ProviderResult:
        def parse(data: Any) -> list[AgencyCatalogEntry]:
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return [AgencyCatalogEntry.model_validate(item) for item in data.get(collection) or []]

        return await self._fetch(provider, f"{self.base_url}/{collection}", parse)
