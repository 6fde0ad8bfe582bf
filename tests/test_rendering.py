"""Tests for provider section rendering."""

from datetime import datetime, timezone

from athey.schemas.providers import (
    AboveInfo,
    AgencyCatalogEntry,
    DailyImage,
    LaunchOutcome,
    LaunchRecord,
    SatelliteAbove,
    SatellitePosition,
    SatellitesAbove,
    VehicleSpec,
)
from athey.services.rendering import (
    iso_from_epoch_ms,
    render_apod,
    render_iss_position,
    render_isro_centres,
    render_isro_spacecrafts,
    render_latest_launch,
    render_past_launches,
    render_rockets,
    render_satellites_above,
    render_upcoming_launches,
)


def launch(name: str, day: int, outcome: LaunchOutcome = LaunchOutcome.PENDING) -> LaunchRecord:
    return LaunchRecord(
        id=name.lower(),
        name=name,
        date_utc=datetime(2099, 1, day, 12, tzinfo=timezone.utc),
        outcome=outcome,
        flight_number=200 + day,
    )


class TestIssPosition:
    """Tests for the ISS position section."""

    def test_fixed_layout(self) -> None:
        """Test the section layout."""
        position = SatellitePosition(
            satlatitude=51.5074,
            satlongitude=-0.1278,
            sataltitude=408.0,
            timestamp=1700000000,
        )

        assert render_iss_position(position) == (
            "\n### ISS Current Position:\n"
            "- Latitude: 51.5074°\n"
            "- Longitude: -0.1278°\n"
            "- Altitude: 408.00 km\n"
            "- Updated: 2023-11-14T22:13:20.000Z\n"
        )

    def test_coordinates_rounded_to_four_places(self) -> None:
        """Test coordinates are rounded to four decimal places."""
        position = SatellitePosition(
            satlatitude=12.345678,
            satlongitude=98.7654321,
            sataltitude=417.123,
            timestamp=0,
        )

        text = render_iss_position(position)

        assert "- Latitude: 12.3457°" in text
        assert "- Longitude: 98.7654°" in text
        assert "- Altitude: 417.12 km" in text
        assert "- Updated: 1970-01-01T00:00:00.000Z" in text


def test_iso_from_epoch_ms_keeps_milliseconds() -> None:
    """Test epoch milliseconds convert to ISO-8601 with milliseconds."""
    assert iso_from_epoch_ms(1700000000123) == "2023-11-14T22:13:20.123Z"


class TestLaunches:
    """Tests for launch sections."""

    def test_latest_launch(self) -> None:
        """Test the latest launch section."""
        text = render_latest_launch(launch("Crew-9", 1, LaunchOutcome.SUCCESS))

        assert text == (
            "\n### Latest SpaceX Launch:\n"
            "- Mission: Crew-9\n"
            "- Flight #: 201\n"
            "- Date: 2099-01-01\n"
            "- Success: Yes\n"
        )

    def test_outcome_labels(self) -> None:
        """Test outcome labels for each launch outcome."""
        assert "- Success: No" in render_latest_launch(launch("A", 1, LaunchOutcome.FAILURE))
        assert "- Success: Pending" in render_latest_launch(launch("B", 1))

    def test_upcoming_launches_numbered(self) -> None:
        """Test upcoming launches are numbered."""
        text = render_upcoming_launches([launch("USSF-44", 1), launch("Crew-9", 2)])

        assert text == (
            "\n### Upcoming SpaceX Launches:\n"
            "1. USSF-44 - 2099-01-01\n"
            "2. Crew-9 - 2099-01-02\n"
        )

    def test_empty_lists_render_nothing(self) -> None:
        """Test empty launch lists render nothing."""
        assert render_upcoming_launches([]) == ""
        assert render_past_launches([]) == ""

    def test_past_launches_show_outcome(self) -> None:
        """Test past launches show their outcome."""
        text = render_past_launches([launch("RatSat", 3, LaunchOutcome.SUCCESS)])

        assert "1. RatSat - 2099-01-03 (Success)" in text


def test_satellites_above_lists_each_satellite() -> None:
    """Test the overhead section lists each satellite."""
    above = SatellitesAbove(
        info=AboveInfo(category="ANY", satcount=1),
        above=[
            SatelliteAbove(satid=25544, satname="SPACE STATION", satlat=27.9, satlng=78.0, satalt=417.3)
        ],
    )

    text = render_satellites_above(above)

    assert "Satellites Overhead (ANY, 1 total)" in text
    assert "- SPACE STATION (NORAD 25544): 27.9000°, 78.0000°, 417.30 km" in text
    assert render_satellites_above(SatellitesAbove(info=AboveInfo())) == ""


def test_rockets_skip_unknown_fields() -> None:
    """Test unknown rocket fields are skipped."""
    rocket = VehicleSpec(id="f1", name="Falcon 1", active=False, stages=2)

    assert render_rockets([rocket]) == "\n### SpaceX Rockets:\n- Falcon 1: retired, 2 stages\n"


def test_isro_catalog_and_centres() -> None:
    """Test the ISRO catalog and centre sections."""
    crafts = [AgencyCatalogEntry(id=i, name=f"Sat-{i}") for i in range(1, 13)]
    centres = [AgencyCatalogEntry(id=1, name="SAC", place="Ahmedabad", state="Gujarat")]

    catalog = render_isro_spacecrafts(crafts)

    assert "- Count: 12" in catalog
    # only the ten most recent entries are named
    assert "Sat-3, Sat-4" in catalog
    assert "Sat-2," not in catalog
    assert render_isro_centres(centres) == "\n### ISRO Centres:\n- SAC (Ahmedabad, Gujarat)\n"


def test_apod() -> None:
    """Test the APOD section."""
    image = DailyImage(title="The Pillars of Creation", date="2024-05-01")

    assert render_apod(image) == (
        "\n### NASA Astronomy Picture of the Day:\n"
        "- Title: The Pillars of Creation\n"
        "- Date: 2024-05-01\n"
    )
