"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Catalog row parsing into seismic events
- Haversine distance and the proximity filter
- Request validation
- Historical context and prompt formatting
- Configuration validation

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import SeismicEvent, parse_event, parse_events
from src.core.geo import ScoredEvent, calculate_distance, find_nearby_events
from src.core.query import InvalidQueryError, QueryCoordinate, parse_query
from src.core.formatter import (
    build_assessment_prompt,
    format_historical_context,
    summarize_context,
)
from src.core.config import Config, validate_config

__all__ = [
    # Events
    "SeismicEvent",
    "parse_event",
    "parse_events",
    # Geo
    "ScoredEvent",
    "calculate_distance",
    "find_nearby_events",
    # Query
    "InvalidQueryError",
    "QueryCoordinate",
    "parse_query",
    # Formatter
    "build_assessment_prompt",
    "format_historical_context",
    "summarize_context",
    # Config
    "Config",
    "validate_config",
]
