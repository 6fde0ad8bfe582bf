"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from athey.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, Any]:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": get_settings().service_name}


@router.get("/ready")
async def ready() -> dict[str, Any]:
    """
    Readiness check - the service is always ready.

    Missing credentials degrade the answer (their providers are skipped)
    but never block a request, so they are reported rather than failed.
    """
    settings = get_settings()
    missing = set(settings.missing_credentials())
    return {
        "status": "ready",
        "checks": {
            name: "missing" if name in missing else "configured"
            for name in ("n2yo_api_key", "nasa_api_key", "model_api_key")
        },
    }
