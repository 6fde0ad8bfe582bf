"""API router configuration."""

from fastapi import APIRouter

from athey.api.endpoints import chat, health

# Versioned API router
api_router = APIRouter(prefix="/api/v1")
api_router.include_router(chat.router)

# Unversioned chat route used by the web client
chat_router = chat.legacy_router

# Health router at root level
health_router = health.router
