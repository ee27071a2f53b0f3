"""Seismic event data model and row parsing - Pure functions.

This module turns raw catalog rows (string values keyed by CSV column
name) into typed SeismicEvent objects. All functions are pure with no
side effects; reading the file is the shell's job.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# Columns cast to float when present. Unparseable values become None.
NUMERIC_COLUMNS = (
    "magnitude",
    "latitude",
    "longitude",
    "depth",
    "felt",
    "cdi",
    "mmi",
    "sig",
    "nst",
    "dmin",
    "rms",
    "gap",
    "distanceKM",
)

TIME_COLUMN = "time"

# A row missing any of these is dropped.
REQUIRED_COLUMNS = ("latitude", "longitude", "magnitude", TIME_COLUMN)


@dataclass(frozen=True)
class SeismicEvent:
    """Immutable historical earthquake record.

    Attributes:
        time: Event timestamp (UTC)
        latitude: Epicenter latitude in decimal degrees
        longitude: Epicenter longitude in decimal degrees
        magnitude: Event magnitude
        depth: Depth in kilometers (optional)
        felt: Number of "felt" reports (optional)
        cdi: Community decimal intensity (optional)
        mmi: Modified Mercalli intensity (optional)
        sig: Significance score (optional)
        nst: Number of reporting stations (optional)
        dmin: Distance to nearest station in degrees (optional)
        rms: Travel time residual (optional)
        gap: Azimuthal gap in degrees (optional)
        distance_km: Catalog-provided distance column (optional)
        extras: Remaining non-numeric columns as (name, value) pairs
    """
    time: datetime
    latitude: float
    longitude: float
    magnitude: float
    depth: float | None = None
    felt: float | None = None
    cdi: float | None = None
    mmi: float | None = None
    sig: float | None = None
    nst: float | None = None
    dmin: float | None = None
    rms: float | None = None
    gap: float | None = None
    distance_km: float | None = None
    extras: tuple[tuple[str, str], ...] = ()

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def get_extra(self, name: str, default: str | None = None) -> str | None:
        """Look up a preserved text column such as 'place' or 'magType'."""
        for key, value in self.extras:
            if key == name:
                return value
        return default


def parse_float(value: Any) -> float | None:
    """Cast a raw cell to a finite float, or None if it can't be parsed.

    Pure function.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_epoch_millis(value: Any) -> datetime | None:
    """Cast an epoch-milliseconds cell to a UTC datetime.

    Fractional milliseconds are truncated. Returns None for unparseable
    or out-of-range values.

    Pure function.
    """
    number = parse_float(value)
    if number is None:
        return None
    try:
        return datetime.fromtimestamp(int(number) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _is_blank(value: Any) -> bool:
    # pandas fills cells missing from short rows with float NaN
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return str(value) == ""


def parse_event(row: Mapping[str, Any]) -> SeismicEvent | None:
    """Parse a single catalog row into a SeismicEvent.

    Pure function: takes a raw row, returns a typed event or None if any
    required field (latitude, longitude, magnitude, time) fails to parse.

    Args:
        row: Mapping of column name to raw cell value

    Returns:
        SeismicEvent or None if the row is incomplete
    """
    numbers = {column: parse_float(row.get(column)) for column in NUMERIC_COLUMNS}
    event_time = parse_epoch_millis(row.get(TIME_COLUMN))

    if (
        numbers["latitude"] is None
        or numbers["longitude"] is None
        or numbers["magnitude"] is None
        or event_time is None
    ):
        return None

    extras = tuple(
        (str(key), str(value))
        for key, value in row.items()
        if key not in NUMERIC_COLUMNS
        and key != TIME_COLUMN
        and not _is_blank(value)
    )

    return SeismicEvent(
        time=event_time,
        latitude=numbers["latitude"],
        longitude=numbers["longitude"],
        magnitude=numbers["magnitude"],
        depth=numbers["depth"],
        felt=numbers["felt"],
        cdi=numbers["cdi"],
        mmi=numbers["mmi"],
        sig=numbers["sig"],
        nst=numbers["nst"],
        dmin=numbers["dmin"],
        rms=numbers["rms"],
        gap=numbers["gap"],
        distance_km=numbers["distanceKM"],
        extras=extras,
    )


def parse_events(rows: Iterable[Mapping[str, Any]]) -> list[SeismicEvent]:
    """Parse catalog rows into SeismicEvents.

    Pure function: drops incomplete rows, returns valid events.

    Args:
        rows: Raw catalog rows

    Returns:
        List of valid SeismicEvent objects, sorted by time (newest first).
        Events with equal timestamps keep their row order.
    """
    events = []

    for row in rows:
        event = parse_event(row)
        if event is not None:
            events.append(event)

    # Sort by time, newest first
    return sorted(events, key=lambda e: e.time, reverse=True)
