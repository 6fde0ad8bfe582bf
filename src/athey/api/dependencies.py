"""FastAPI dependencies for the chat API."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from athey.clients import ApodClient, IsroClient, ModelClient, SatelliteClient, SpaceXClient
from athey.core.config import get_settings
from athey.services import (
    ContextService,
    GenerationService,
    Orchestrator,
    PromptBuilder,
    build_provider_registry,
)


@lru_cache
def get_satellite_client() -> SatelliteClient:
    """Get the N2YO client singleton (logs once if the key is missing)."""
    settings = get_settings()
    return SatelliteClient(
        api_key=settings.n2yo_api_key,
        timeout=settings.provider_timeout,
        observer=(
            settings.observer_latitude,
            settings.observer_longitude,
            settings.observer_altitude,
        ),
    )


@lru_cache
def get_spacex_client() -> SpaceXClient:
    """Get the SpaceX client singleton."""
    return SpaceXClient(timeout=get_settings().provider_timeout)


@lru_cache
def get_isro_client() -> IsroClient:
    """Get the ISRO client singleton."""
    return IsroClient(timeout=get_settings().provider_timeout)


@lru_cache
def get_apod_client() -> ApodClient:
    """Get the NASA APOD client singleton."""
    settings = get_settings()
    return ApodClient(api_key=settings.nasa_api_key, timeout=settings.provider_timeout)


@lru_cache
def get_model_client() -> ModelClient:
    """Get the generation engine client singleton."""
    settings = get_settings()
    return ModelClient(
        base_url=settings.model_base_url,
        model=settings.model_name,
        api_key=settings.model_api_key,
        timeout=settings.generation_timeout,
    )


@lru_cache
def get_context_service() -> ContextService:
    """Get the context aggregation service with every provider registered."""
    return ContextService(
        build_provider_registry(
            get_settings(),
            satellite_client=get_satellite_client(),
            spacex_client=get_spacex_client(),
            isro_client=get_isro_client(),
            apod_client=get_apod_client(),
        )
    )


def get_prompt_builder() -> PromptBuilder:
    """Get a prompt builder instance."""
    return PromptBuilder()


def get_generation_service(
    model_client: Annotated[ModelClient, Depends(get_model_client)],
) -> GenerationService:
    """Get the generation service."""
    return GenerationService(model_client)


def get_orchestrator(
    context_service: Annotated[ContextService, Depends(get_context_service)],
    generation_service: Annotated[GenerationService, Depends(get_generation_service)],
    prompt_builder: Annotated[PromptBuilder, Depends(get_prompt_builder)],
) -> Orchestrator:
    """Get the orchestrator service."""
    settings = get_settings()
    return Orchestrator(
        context_service=context_service,
        generation_service=generation_service,
        prompt_builder=prompt_builder,
        selected_providers=settings.context_providers,
        provider_timeout=settings.provider_timeout,
        request_timeout=settings.request_timeout,
    )
