"""Prediction request validation - Pure functions.

Turns the raw values of a /predict request into a validated
QueryCoordinate, or raises InvalidQueryError.
"""

from dataclasses import dataclass
from typing import Any

from src.core.earthquake import parse_float


INVALID_QUERY_MESSAGE = (
    "Invalid input parameters. Provide dateTime (ISO format), "
    "latitude (-90 to 90), and longitude (-180 to 180)."
)


class InvalidQueryError(ValueError):
    """Raised when a request's coordinate or timestamp is unusable."""

    def __init__(self, message: str = INVALID_QUERY_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class QueryCoordinate:
    """A validated location/time query.

    Attributes:
        latitude: Decimal degrees in [-90, 90]
        longitude: Decimal degrees in [-180, 180]
        date_time: Requested timestamp as sent by the caller
    """
    latitude: float
    longitude: float
    date_time: str


def is_valid_latitude(latitude: float) -> bool:
    return -90 <= latitude <= 90


def is_valid_longitude(longitude: float) -> bool:
    return -180 <= longitude <= 180


def parse_query(date_time: Any, latitude: Any, longitude: Any) -> QueryCoordinate:
    """Validate raw request values.

    Pure function.

    Args:
        date_time: Requested timestamp (ISO-8601 string)
        latitude: Number or numeric string
        longitude: Number or numeric string

    Returns:
        QueryCoordinate with float coordinates

    Raises:
        InvalidQueryError: If a coordinate is unparseable or out of range,
            or the timestamp is missing or not a string
    """
    lat = parse_float(latitude)
    lon = parse_float(longitude)

    if lat is None or lon is None:
        raise InvalidQueryError()

    if not is_valid_latitude(lat) or not is_valid_longitude(lon):
        raise InvalidQueryError()

    if not isinstance(date_time, str) or date_time.strip() == "":
        raise InvalidQueryError()

    return QueryCoordinate(latitude=lat, longitude=lon, date_time=date_time)
