"""Shared plumbing for the space-data provider clients."""

import time
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from athey.observability import get_logger, sanitize, sanitize_url
from athey.observability.constants import LogEvents
from athey.schemas.providers import ProviderResult

logger = get_logger(__name__)

# Raised by the parse callables when the payload does not have the expected shape
PARSE_ERRORS = (ValidationError, AttributeError, KeyError, IndexError, TypeError, ValueError)


class ProviderClient:
    """Base class for clients of a single external data source.

    Every public operation performs exactly one GET and returns a
    ``ProviderResult``. Transport errors, non-2xx statuses, undecodable bodies
    and unexpected shapes are logged and collapse to an absent result; nothing
    is raised past the client boundary and nothing is retried.
    """

    name = "provider"
    base_url = ""

    def __init__(self, timeout: float = 10.0, base_url: str | None = None):
        self.timeout = httpx.Timeout(timeout)
        if base_url:
            self.base_url = base_url.rstrip("/")

    def _absent(self, provider: str, reason: str, latency_ms: int = 0) -> ProviderResult:
        logger.warning(
            LogEvents.PROVIDER_FETCH_FAILED,
            provider=provider,
            reason=reason,
            latency_ms=latency_ms,
        )
        return ProviderResult.absent(provider, reason, latency_ms)

    async def _fetch(
        self,
        provider: str,
        url: str,
        parse: Callable[[Any], Any | None],
        params: dict[str, Any] | None = None,
    ) -> ProviderResult:
        """GET ``url`` and map the JSON body through ``parse``.

        ``parse`` returns the typed payload, or None when the upstream answered
        without usable data.
        """
        start_time = time.perf_counter()

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url, params=params)
                latency_ms = int((time.perf_counter() - start_time) * 1000)

                if not response.is_success:
                    return self._absent(provider, f"HTTP {response.status_code}", latency_ms)

                data = response.json()

            except httpx.TimeoutException:
                latency_ms = int((time.perf_counter() - start_time) * 1000)
                return self._absent(provider, "Request timed out", latency_ms)

            except httpx.RequestError as e:
                latency_ms = int((time.perf_counter() - start_time) * 1000)
                return self._absent(provider, f"Network error: {e}", latency_ms)

            except ValueError as e:
                latency_ms = int((time.perf_counter() - start_time) * 1000)
                return self._absent(provider, f"Malformed JSON: {e}", latency_ms)

            except Exception as e:
                latency_ms = int((time.perf_counter() - start_time) * 1000)
                logger.exception(f"Unexpected error querying provider: {provider}")
                return ProviderResult.absent(provider, f"Unexpected error: {e}", latency_ms)

        try:
            value = parse(data)
        except PARSE_ERRORS as e:
            return self._absent(provider, f"Unexpected payload: {e}", latency_ms)

        if value is None:
            return self._absent(provider, "No data in response", latency_ms)

        logger.info(
            LogEvents.PROVIDER_FETCH_COMPLETED,
            provider=provider,
            url=sanitize_url(url),
            params=sanitize(params) if params else None,
            latency_ms=latency_ms,
        )
        return ProviderResult.present(provider, value, latency_ms)
