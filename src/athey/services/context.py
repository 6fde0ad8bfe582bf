"""Context aggregation: concurrent provider fan-out folded into one text block."""

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from functools import partial
from typing import Any

from athey.clients import ApodClient, IsroClient, SatelliteClient, SpaceXClient
from athey.core.config import Settings
from athey.observability import get_logger
from athey.observability.constants import LogEvents
from athey.schemas.internal import AggregatedContext, ContextSection
from athey.schemas.providers import RENDER_PRIORITY, ProviderKey, ProviderResult
from athey.services.rendering import RENDERERS

logger = get_logger(__name__)

ProviderFetch = Callable[[], Awaitable[ProviderResult]]


class ContextService:
    """Builds the live-data context block for a request.

    All selected providers start together. Each one is bounded by its own
    deadline, and a slow or failing provider only loses its own section.
    Sections are emitted in ``RENDER_PRIORITY`` order regardless of which
    fetch finished first.
    """

    def __init__(
        self,
        providers: Mapping[ProviderKey, ProviderFetch],
        renderers: Mapping[ProviderKey, Callable[[Any], str]] | None = None,
    ):
        self.providers = dict(providers)
        self.renderers = dict(renderers or RENDERERS)

    async def build_context(
        self,
        selected_providers: Iterable[ProviderKey],
        per_call_timeout: float,
    ) -> AggregatedContext:
        """
        Fetch the selected providers concurrently and render what succeeded.

        Args:
            selected_providers: Provider keys to query (duplicates ignored)
            per_call_timeout: Deadline in seconds applied to each provider

        Returns:
            AggregatedContext; empty when every provider was absent
        """
        selected = list(dict.fromkeys(selected_providers))
        if not selected:
            return AggregatedContext()

        logger.info(LogEvents.CONTEXT_BUILD_STARTED, providers=[key.value for key in selected])
        start_time = time.perf_counter()

        results: list[ProviderResult] = await asyncio.gather(
            *(self._fetch_with_deadline(key, per_call_timeout) for key in selected)
        )
        by_key = dict(zip(selected, results, strict=True))

        total_latency_ms = int((time.perf_counter() - start_time) * 1000)

        sections: list[ContextSection] = []
        for key in RENDER_PRIORITY:
            result = by_key.get(key)
            if result is None or not result.is_present:
                continue
            text = self._render(key, result)
            if text:
                sections.append(ContextSection(key=key, text=text))

        present = sum(1 for r in results if r.is_present)
        logger.info(
            LogEvents.CONTEXT_BUILD_COMPLETED,
            present=present,
            requested=len(selected),
            sections=len(sections),
            latency_ms=total_latency_ms,
        )

        return AggregatedContext(
            sections=sections,
            results=by_key,
            total_latency_ms=total_latency_ms,
        )

    async def _fetch_with_deadline(self, key: ProviderKey, timeout: float) -> ProviderResult:
        fetch = self.providers.get(key)
        if fetch is None:
            return ProviderResult.absent(key.value, "Provider not configured")

        start_time = time.perf_counter()
        try:
            return await asyncio.wait_for(fetch(), timeout=timeout)
        except TimeoutError:
            latency_ms = int((time.perf_counter() - start_time) * 1000)
            logger.warning(LogEvents.CONTEXT_PROVIDER_TIMEOUT, provider=key.value, timeout=timeout)
            return ProviderResult.absent(key.value, "timeout", latency_ms)
        except Exception as e:
            # Clients never raise; this only guards against a misbehaving fetch callable
            latency_ms = int((time.perf_counter() - start_time) * 1000)
            logger.exception(LogEvents.CONTEXT_PROVIDER_CRASHED, provider=key.value)
            return ProviderResult.absent(key.value, f"Unexpected error: {e}", latency_ms)

    def _render(self, key: ProviderKey, result: ProviderResult) -> str:
        renderer = self.renderers.get(key)
        if renderer is None:
            return ""
        try:
            return renderer(result.value)
        except Exception:
            logger.exception(LogEvents.CONTEXT_PROVIDER_CRASHED, provider=key.value, stage="render")
            return ""


def build_provider_registry(
    settings: Settings,
    satellite_client: SatelliteClient,
    spacex_client: SpaceXClient,
    isro_client: IsroClient,
    apod_client: ApodClient,
) -> dict[ProviderKey, ProviderFetch]:
    """Bind every provider key to a zero-argument fetch using configured parameters."""
    return {
        ProviderKey.ISS_POSITION: partial(satellite_client.position, settings.iss_norad_id),
        ProviderKey.SATELLITES_ABOVE: partial(
            satellite_client.above,
            settings.above_latitude,
            settings.above_longitude,
            settings.above_radius,
            settings.above_category,
        ),
        ProviderKey.LATEST_LAUNCH: spacex_client.latest_launch,
        ProviderKey.UPCOMING_LAUNCHES: partial(
            spacex_client.upcoming_launches, settings.upcoming_launch_limit
        ),
        ProviderKey.PAST_LAUNCHES: partial(spacex_client.past_launches, settings.past_launch_limit),
        ProviderKey.ROCKETS: spacex_client.rockets,
        ProviderKey.ISRO_SPACECRAFTS: isro_client.spacecrafts,
        ProviderKey.ISRO_LAUNCHERS: isro_client.launchers,
        ProviderKey.ISRO_CENTRES: isro_client.centres,
        ProviderKey.APOD: apod_client.picture_of_the_day,
    }
