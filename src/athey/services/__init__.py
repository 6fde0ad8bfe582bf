"""Services package - business logic for the chat service."""

from athey.services.citations import extract_citations
from athey.services.context import ContextService, build_provider_registry
from athey.services.generation import (
    GenerationError,
    GenerationInterruptedError,
    GenerationService,
    GenerationUnavailableError,
)
from athey.services.orchestrator import Orchestrator, OrchestratorError, RequestTimeoutError
from athey.services.prompt_builder import ATHEY_POLICY, PromptBuilder, compose

__all__ = [
    "ATHEY_POLICY",
    "ContextService",
    "GenerationError",
    "GenerationInterruptedError",
    "GenerationService",
    "GenerationUnavailableError",
    "Orchestrator",
    "OrchestratorError",
    "PromptBuilder",
    "RequestTimeoutError",
    "build_provider_registry",
    "compose",
    "extract_citations",
]
