"""Clients package - HTTP clients for external services."""

from athey.clients.base import ProviderClient
from athey.clients.isro import IsroClient
from athey.clients.model import ModelClient, ModelClientError
from athey.clients.n2yo import SatelliteClient
from athey.clients.nasa import ApodClient
from athey.clients.spacex import SpaceXClient

__all__ = [
    "ProviderClient",
    "SatelliteClient",
    "SpaceXClient",
    "IsroClient",
    "ApodClient",
    "ModelClient",
    "ModelClientError",
]
