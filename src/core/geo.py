"""Geographic calculations - Pure functions.

This module provides the Haversine distance and the proximity filter that
selects historical events near a query coordinate.
All functions are pure with no side effects.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from src.core.earthquake import SeismicEvent


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Only events within this radius count as "nearby"
DEFAULT_MAX_DISTANCE_KM = 100.0

# Cap on events handed to the prompt
DEFAULT_MAX_RESULTS = 10


@dataclass(frozen=True)
class ScoredEvent:
    """A stored event paired with its distance from a query point.

    Attributes:
        event: The historical event
        distance_km: Great-circle distance to the query point
    """
    event: SeismicEvent
    distance_km: float

    @property
    def magnitude(self) -> float:
        return self.event.magnitude

    @property
    def depth(self) -> float | None:
        return self.event.depth


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for near-antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def score_event(event: SeismicEvent, latitude: float, longitude: float) -> ScoredEvent:
    """Attach the distance from (latitude, longitude) to an event.

    Pure function.
    """
    event_lat, event_lon = event.coordinates
    distance = calculate_distance(latitude, longitude, event_lat, event_lon)
    return ScoredEvent(event=event, distance_km=distance)


def find_nearby_events(
    events: Sequence[SeismicEvent],
    latitude: float,
    longitude: float,
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[ScoredEvent]:
    """Find the stored events closest to a point.

    Pure function. Scans every event, keeps those within the radius and
    returns them nearest first. The sort is stable, so events at the same
    distance keep their store order.

    Args:
        events: Events to search (store order)
        latitude: Query latitude, already range-checked
        longitude: Query longitude, already range-checked
        max_distance_km: Inclusive search radius
        max_results: Maximum number of events to return

    Returns:
        Up to max_results scored events, sorted by distance ascending
    """
    if not events or max_results <= 0:
        return []

    scored = [score_event(e, latitude, longitude) for e in events]
    nearby = [s for s in scored if s.distance_km <= max_distance_km]
    nearby.sort(key=lambda s: s.distance_km)

    return nearby[:max_results]
