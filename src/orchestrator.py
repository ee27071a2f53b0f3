"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates one risk assessment: it runs the pure proximity
filter and formatters against the event store, then hands the prompt to
the Gemini client. It's the "glue" that makes the application work.
"""

import logging
from dataclasses import dataclass
from typing import Any

from src.core.config import Config
from src.core.formatter import (
    build_assessment_prompt,
    format_historical_context,
    summarize_context,
)
from src.core.geo import ScoredEvent, find_nearby_events
from src.core.query import QueryCoordinate
from src.shell.event_store import EventStore
from src.shell.gemini_client import GeminiClient


logger = logging.getLogger(__name__)


FALLBACK_ASSESSMENT = "Gemini assessment could not be generated."


class StoreUnavailableError(Exception):
    """Raised when there are no historical events to assess against."""


@dataclass
class AssessmentResult:
    """Result of a single risk assessment.

    Attributes:
        query: The validated request
        nearby_events: Nearby events, nearest first
        historical_context: Full context text given to the prompt
        assessment: Generated text (may be empty)
    """
    query: QueryCoordinate
    nearby_events: list[ScoredEvent]
    historical_context: str
    assessment: str

    @property
    def summary(self) -> str:
        """One-line historical summary."""
        return summarize_context(self.historical_context)

    def to_response(self) -> dict[str, Any]:
        """Build the /predict JSON envelope."""
        return {
            "request": {
                "dateTime": self.query.date_time,
                "latitude": self.query.latitude,
                "longitude": self.query.longitude,
            },
            "historical_context_summary": self.summary,
            "nearby_events_count": len(self.nearby_events),
            "gemini_assessment": self.assessment or FALLBACK_ASSESSMENT,
        }


class Orchestrator:
    """Coordinates historical lookup and risk text generation.

    This class wires together:
    - Event store (historical earthquakes, loaded once)
    - Core functions (proximity filter, context and prompt formatting)
    - Gemini client (text generation)
    """

    def __init__(
        self,
        config: Config,
        store: EventStore,
        gemini_client: GeminiClient | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            config: Application configuration
            store: Loaded event store
            gemini_client: Gemini client (created from config if not provided)
        """
        self.config = config
        self.store = store
        self.gemini_client = gemini_client or GeminiClient(
            api_key=config.gemini_api_key or "",
            model=config.gemini_model,
            timeout=config.request_timeout_seconds,
        )

    def find_nearby(self, query: QueryCoordinate) -> list[ScoredEvent]:
        """Run the proximity filter for a query (pure core function)."""
        return find_nearby_events(
            self.store.all(),
            query.latitude,
            query.longitude,
            max_distance_km=self.config.max_distance_km,
            max_results=self.config.max_results,
        )

    def assess(self, query: QueryCoordinate) -> AssessmentResult:
        """Produce a risk assessment for a location.

        Args:
            query: Validated request

        Returns:
            AssessmentResult with nearby events and generated text

        Raises:
            StoreUnavailableError: If the store holds no events
            GenerationError: If text generation fails; nothing is returned
                for the historical lookup in that case
        """
        if self.store.is_empty:
            raise StoreUnavailableError(
                "Earthquake data not loaded or unavailable"
            )

        nearby = self.find_nearby(query)
        context = format_historical_context(nearby, self.config.max_distance_km)

        logger.info(
            "Found %d nearby events for (%s, %s)",
            len(nearby),
            query.latitude,
            query.longitude,
        )

        prompt = build_assessment_prompt(
            query.latitude,
            query.longitude,
            context,
            max_distance_km=self.config.max_distance_km,
            max_results=self.config.max_results,
        )

        assessment = self.gemini_client.generate(prompt)

        return AssessmentResult(
            query=query,
            nearby_events=nearby,
            historical_context=context,
            assessment=assessment,
        )
