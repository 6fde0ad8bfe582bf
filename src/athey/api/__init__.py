"""API package - FastAPI routes and dependencies."""

from athey.api.router import api_router, chat_router, health_router

__all__ = ["api_router", "chat_router", "health_router"]
