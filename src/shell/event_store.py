"""Historical Event Store - Imperative Shell.

Holds the validated, immutable collection of seismic events loaded once
at startup. The store is owned by the application and handed to the
orchestrator; there is no module-level event list.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from src.core.earthquake import SeismicEvent, parse_events
from src.shell.catalog_loader import CatalogLoadError, read_catalog_rows


logger = logging.getLogger(__name__)


class EventStore:
    """Read-only store of historical earthquakes.

    The collection is replaced wholesale by load() and never mutated
    otherwise. A readiness gate lets request handlers wait until the
    first load has finished.
    """

    def __init__(self, events: Iterable[SeismicEvent] | None = None) -> None:
        """Initialize the store.

        Args:
            events: Preloaded events. When given, the store is ready
                immediately and events are ordered newest first.
        """
        self._events: tuple[SeismicEvent, ...] = ()
        self._ready = threading.Event()

        if events is not None:
            self._events = tuple(sorted(events, key=lambda e: e.time, reverse=True))
            self._ready.set()

    def load(self, source: str | Path) -> int:
        """Load events from a catalog CSV, replacing the current collection.

        This method performs file I/O. Rows missing latitude, longitude,
        magnitude or time are dropped. A fatal read error leaves the store
        empty rather than partially populated; it is logged, not raised.

        Args:
            source: Path to the catalog CSV

        Returns:
            Number of events loaded
        """
        logger.info("Loading earthquake data from %s...", source)

        try:
            rows = read_catalog_rows(source)
        except CatalogLoadError as e:
            logger.error("Error parsing CSV: %s", e)
            self._events = ()
            self._ready.set()
            return 0

        events = parse_events(rows)
        dropped = len(rows) - len(events)
        if dropped:
            logger.debug("Dropped %d incomplete rows", dropped)

        self._events = tuple(events)
        self._ready.set()

        logger.info(
            "Finished loading %d valid earthquake records.",
            len(self._events),
        )
        return len(self._events)

    def all(self) -> tuple[SeismicEvent, ...]:
        """Return every event, most recent first."""
        return self._events

    @property
    def ready(self) -> bool:
        """True once a load has completed (even if it failed)."""
        return self._ready.is_set()

    @property
    def is_empty(self) -> bool:
        return not self._events

    def wait_until_ready(self, timeout: float | None = None) -> bool:
        """Block until the first load has finished.

        Args:
            timeout: Seconds to wait, None to wait forever

        Returns:
            True if the store is ready, False on timeout
        """
        return self._ready.wait(timeout)

    def __len__(self) -> int:
        return len(self._events)
