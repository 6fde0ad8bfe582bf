"""Shared pytest fixtures and configuration."""

import os

# Keep tests independent of developer credentials - must be set before athey imports
for _var in ("N2YO_API_KEY", "NASA_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"):
    os.environ.pop(_var, None)

from collections.abc import Iterator
from typing import Any

import pytest
import structlog
from fastapi.testclient import TestClient

from athey.main import app

# capture_logs needs loggers that re-read the configuration on every call
structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Test client with dependency overrides cleared afterwards."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def n2yo_positions_payload() -> dict[str, Any]:
    return {
        "info": {"satname": "SPACE STATION", "satid": 25544, "transactionscount": 3},
        "positions": [
            {
                "satlatitude": 51.5074,
                "satlongitude": -0.1278,
                "sataltitude": 408.0,
                "azimuth": 12.5,
                "elevation": -40.2,
                "ra": 10.1,
                "dec": 2.3,
                "timestamp": 1700000000,
                "eclipsed": False,
            }
        ],
    }


@pytest.fixture
def n2yo_above_payload() -> dict[str, Any]:
    return {
        "info": {"category": "ANY", "transactionscount": 4, "satcount": 2},
        "above": [
            {
                "satid": 20185,
                "satname": "USA 47",
                "intDesignator": "1989-061A",
                "launchDate": "1989-08-08",
                "satlat": 29.1,
                "satlng": 76.5,
                "satalt": 35786.2,
            },
            {
                "satid": 25544,
                "satname": "SPACE STATION",
                "intDesignator": "1998-067A",
                "launchDate": "1998-11-20",
                "satlat": 27.9,
                "satlng": 78.0,
                "satalt": 417.3,
            },
        ],
    }


def make_launch(
    launch_id: str,
    name: str,
    date_utc: str,
    success: bool | None = True,
    flight_number: int = 1,
    upcoming: bool = False,
) -> dict[str, Any]:
    """Raw SpaceX v4 launch document."""
    return {
        "id": launch_id,
        "name": name,
        "date_utc": date_utc,
        "date_local": date_utc.replace("Z", "-05:00"),
        "success": success,
        "upcoming": upcoming,
        "details": None,
        "rocket": "5e9d0d95eda69973a809d1ec",
        "flight_number": flight_number,
        "links": {
            "patch": {"small": None, "large": None},
            "webcast": "https://youtu.be/example",
            "wikipedia": None,
            "article": None,
            "reddit": {"campaign": None},
        },
    }


@pytest.fixture
def latest_launch_payload() -> dict[str, Any]:
    return make_launch(
        "62dd70d5202306255024d139",
        "Crew-5",
        "2022-10-05T16:00:00.000Z",
        success=True,
        flight_number=187,
    )


@pytest.fixture
def upcoming_launches_payload() -> list[dict[str, Any]]:
    # Deliberately unsorted and including one launch that has already slipped into the past
    return [
        make_launch("u3", "Starlink 9-9", "2099-03-01T00:00:00.000Z", None, 203, True),
        make_launch("u1", "USSF-44", "2099-01-01T00:00:00.000Z", None, 201, True),
        make_launch("u0", "Slipped", "2001-01-01T00:00:00.000Z", None, 200, True),
        make_launch("u2", "Crew-9", "2099-02-01T00:00:00.000Z", None, 202, True),
        make_launch("u4", "Transporter-20", "2099-04-01T00:00:00.000Z", None, 204, True),
    ]


@pytest.fixture
def past_launches_payload() -> list[dict[str, Any]]:
    # The API returns past launches oldest first
    return [
        make_launch("p1", "FalconSat", "2006-03-24T22:30:00.000Z", False, 1),
        make_launch("p2", "DemoSat", "2007-03-21T01:10:00.000Z", False, 2),
        make_launch("p3", "RatSat", "2008-09-28T23:15:00.000Z", True, 4),
        make_launch("p4", "Crew-5", "2022-10-05T16:00:00.000Z", True, 187),
    ]


@pytest.fixture
def rockets_payload() -> list[dict[str, Any]]:
    return [
        {
            "id": "5e9d0d95eda69973a809d1ec",
            "name": "Falcon 9",
            "type": "rocket",
            "active": True,
            "stages": 2,
            "boosters": 0,
            "cost_per_launch": 50000000,
            "success_rate_pct": 98,
            "first_flight": "2010-06-04",
            "country": "United States",
            "company": "SpaceX",
            "description": "Falcon 9 is a two-stage rocket.",
            "height": {"meters": 70, "feet": 229.6},
            "diameter": {"meters": 3.7, "feet": 12},
            "mass": {"kg": 549054, "lb": 1207920},
        }
    ]


@pytest.fixture
def apod_payload() -> dict[str, Any]:
    return {
        "title": "The Pillars of Creation",
        "explanation": "Towers of gas and dust in the Eagle Nebula.",
        "url": "https://apod.nasa.gov/apod/image/pillars.jpg",
        "hdurl": "https://apod.nasa.gov/apod/image/pillars_big.jpg",
        "media_type": "image",
        "date": "2024-05-01",
        "copyright": "NASA, ESA",
        "service_version": "v1",
    }


@pytest.fixture
def isro_centres_payload() -> dict[str, Any]:
    return {
        "centres": [
            {"id": 1, "name": "Semi-Conductor Laboratory (SCL)", "Place": "Chandigarh", "State": "Punjab/Haryana"},
            {"id": 2, "name": "Space Applications Centre (SAC)", "Place": "Ahmedabad", "State": "Gujarat"},
        ]
    }
