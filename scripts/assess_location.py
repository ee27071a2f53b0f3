#!/usr/bin/env python3
"""Run a risk assessment for one location from the command line.

Loads the historical catalog, finds nearby earthquakes and (unless
--nearby-only is given) asks Gemini for an assessment, exactly as the
/predict endpoint does.

Usage:
    # Nearby historical events only (no Gemini call, no API key needed)
    python scripts/assess_location.py --latitude 34.05 --longitude -118.25 --nearby-only

    # Full assessment
    python scripts/assess_location.py --latitude 34.05 --longitude -118.25

    # Use another catalog
    python scripts/assess_location.py --latitude 35.68 --longitude 139.69 --csv data/japan.csv

Environment:
    CONFIG_PATH: Optional YAML config file
    GEMINI_API_KEY: Required unless --nearby-only
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.core.config import validate_config
from src.core.formatter import format_historical_context, strip_disclaimer
from src.core.query import InvalidQueryError, parse_query
from src.orchestrator import Orchestrator, StoreUnavailableError
from src.shell.config_loader import load_config
from src.shell.event_store import EventStore
from src.shell.gemini_client import GenerationError

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Assess natural disaster risk for a location",
    )
    parser.add_argument("--latitude", required=True, help="Latitude (-90 to 90)")
    parser.add_argument("--longitude", required=True, help="Longitude (-180 to 180)")
    parser.add_argument(
        "--datetime",
        default=datetime.now(timezone.utc).isoformat(),
        help="Requested timestamp (ISO-8601, default: now)",
    )
    parser.add_argument("--csv", help="Catalog CSV (overrides config)")
    parser.add_argument(
        "--nearby-only",
        action="store_true",
        help="Only list nearby historical events; skip the Gemini call",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the same JSON envelope the API returns",
    )
    args = parser.parse_args()

    config = load_config(os.environ.get("CONFIG_PATH"))
    if args.csv:
        config.csv_path = args.csv

    try:
        query = parse_query(args.datetime, args.latitude, args.longitude)
    except InvalidQueryError as e:
        logger.error("%s", e.message)
        return 2

    store = EventStore()
    store.load(config.csv_path)

    if args.nearby_only:
        orchestrator = Orchestrator(config, store, gemini_client=None)
        nearby = orchestrator.find_nearby(query)
        print(format_historical_context(nearby, config.max_distance_km))
        places = [s.event.get_extra("place") for s in nearby]
        if any(places):
            print()
            print("Places: " + "; ".join(p for p in places if p))
        return 0

    result = validate_config(config)
    if not result.valid:
        for error in result.critical_errors:
            logger.error("Error: %s (%s)", error.message, error.field)
        return 1

    orchestrator = Orchestrator(config, store)

    try:
        assessment = orchestrator.assess(query)
    except StoreUnavailableError as e:
        logger.error("%s", e)
        return 1
    except GenerationError as e:
        logger.error("Assessment failed: %s", e)
        return 1

    if args.json:
        print(json.dumps(assessment.to_response(), indent=2))
        return 0

    print(assessment.historical_context)
    print()
    print(strip_disclaimer(assessment.to_response()["gemini_assessment"]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
