"""Fixed-format text sections for each provider payload.

The layout is stable key/value text so identical upstream data always
produces an identical context block.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from athey.schemas.providers import (
    AgencyCatalogEntry,
    DailyImage,
    LaunchOutcome,
    LaunchRecord,
    ProviderKey,
    SatellitePosition,
    SatellitesAbove,
    VehicleSpec,
)

MAX_LISTED = 10

_OUTCOME_LABELS = {
    LaunchOutcome.SUCCESS: "Yes",
    LaunchOutcome.FAILURE: "No",
    LaunchOutcome.PENDING: "Pending",
}


def iso_from_epoch_ms(epoch_ms: float) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def launch_date(launch: LaunchRecord) -> str:
    return launch.date_utc.astimezone(timezone.utc).strftime("%Y-%m-%d")


def render_iss_position(position: SatellitePosition) -> str:
    return (
        "\n### ISS Current Position:\n"
        f"- Latitude: {position.satlatitude:.4f}°\n"
        f"- Longitude: {position.satlongitude:.4f}°\n"
        f"- Altitude: {position.sataltitude:.2f} km\n"
        f"- Updated: {iso_from_epoch_ms(position.timestamp * 1000)}\n"
    )


def render_satellites_above(above: SatellitesAbove) -> str:
    if not above.above:
        return ""
    category = above.info.category or "All"
    lines = [f"\n### Satellites Overhead ({category}, {above.info.satcount} total):\n"]
    for sat in above.above[:MAX_LISTED]:
        lines.append(
            f"- {sat.satname} (NORAD {sat.satid}): "
            f"{sat.satlat:.4f}°, {sat.satlng:.4f}°, {sat.satalt:.2f} km\n"
        )
    return "".join(lines)


def render_latest_launch(launch: LaunchRecord) -> str:
    return (
        "\n### Latest SpaceX Launch:\n"
        f"- Mission: {launch.name}\n"
        f"- Flight #: {launch.flight_number}\n"
        f"- Date: {launch_date(launch)}\n"
        f"- Success: {_OUTCOME_LABELS[launch.outcome]}\n"
    )


def render_upcoming_launches(launches: list[LaunchRecord]) -> str:
    if not launches:
        return ""
    lines = ["\n### Upcoming SpaceX Launches:\n"]
    for i, launch in enumerate(launches, 1):
        lines.append(f"{i}. {launch.name} - {launch_date(launch)}\n")
    return "".join(lines)


def render_past_launches(launches: list[LaunchRecord]) -> str:
    if not launches:
        return ""
    lines = ["\n### Recent SpaceX Launches:\n"]
    for i, launch in enumerate(launches, 1):
        lines.append(
            f"{i}. {launch.name} - {launch_date(launch)} ({launch.outcome.value})\n"
        )
    return "".join(lines)


def render_rockets(rockets: list[VehicleSpec]) -> str:
    if not rockets:
        return ""
    lines = ["\n### SpaceX Rockets:\n"]
    for rocket in rockets:
        status = "active" if rocket.active else "retired"
        details = [status]
        if rocket.stages is not None:
            details.append(f"{rocket.stages} stages")
        if rocket.success_rate_pct is not None:
            details.append(f"success rate {rocket.success_rate_pct:g}%")
        if rocket.cost_per_launch is not None:
            details.append(f"cost ${rocket.cost_per_launch:,} per launch")
        if rocket.height.meters is not None:
            details.append(f"height {rocket.height.meters:g} m")
        if rocket.mass.kg is not None:
            details.append(f"mass {rocket.mass.kg:,.0f} kg")
        lines.append(f"- {rocket.name}: {', '.join(details)}\n")
    return "".join(lines)


def _render_catalog(title: str, entries: list[AgencyCatalogEntry]) -> str:
    if not entries:
        return ""
    recent = ", ".join(entry.name for entry in entries[-MAX_LISTED:])
    return f"\n### {title}:\n- Count: {len(entries)}\n- Most recent: {recent}\n"


def render_isro_spacecrafts(entries: list[AgencyCatalogEntry]) -> str:
    return _render_catalog("ISRO Spacecraft", entries)


def render_isro_launchers(entries: list[AgencyCatalogEntry]) -> str:
    return _render_catalog("ISRO Launch Vehicles", entries)


def render_isro_centres(entries: list[AgencyCatalogEntry]) -> str:
    if not entries:
        return ""
    lines = ["\n### ISRO Centres:\n"]
    for centre in entries[:MAX_LISTED]:
        location = ", ".join(part for part in (centre.place, centre.state) if part)
        lines.append(f"- {centre.name} ({location})\n" if location else f"- {centre.name}\n")
    return "".join(lines)


def render_apod(image: DailyImage) -> str:
    return (
        "\n### NASA Astronomy Picture of the Day:\n"
        f"- Title: {image.title}\n"
        f"- Date: {image.date}\n"
    )


RENDERERS: dict[ProviderKey, Callable[[Any], str]] = {
    ProviderKey.ISS_POSITION: render_iss_position,
    ProviderKey.SATELLITES_ABOVE: render_satellites_above,
    ProviderKey.LATEST_LAUNCH: render_latest_launch,
    ProviderKey.UPCOMING_LAUNCHES: render_upcoming_launches,
    ProviderKey.PAST_LAUNCHES: render_past_launches,
    ProviderKey.ROCKETS: render_rockets,
    ProviderKey.ISRO_SPACECRAFTS: render_isro_spacecrafts,
    ProviderKey.ISRO_LAUNCHERS: render_isro_launchers,
    ProviderKey.ISRO_CENTRES: render_isro_centres,
    ProviderKey.APOD: render_apod,
}
