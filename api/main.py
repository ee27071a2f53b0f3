"""Seismic Risk API - FastAPI service.

Serves the prediction form and the POST /predict endpoint, which combines
nearby historical earthquakes with a Gemini risk assessment.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from src.core.config import Config
from src.core.query import INVALID_QUERY_MESSAGE, InvalidQueryError, parse_query
from src.orchestrator import Orchestrator, StoreUnavailableError
from src.shell.event_store import EventStore
from src.shell.gemini_client import ContentSafetyError, GeminiClient

logger = logging.getLogger(__name__)


STORE_UNAVAILABLE_MESSAGE = (
    "Earthquake data not loaded or unavailable. Please try again later."
)
SAFETY_FAILURE_MESSAGE = (
    "Gemini assessment failed due to safety settings. "
    "The prompt might have triggered content filters."
)
PREDICTION_FAILURE_MESSAGE = "An error occurred while processing the prediction."


# ===== Data Models =====

class PredictRequest(BaseModel):
    """Body of POST /predict. Values are validated by the core, not here."""
    dateTime: Any = None
    latitude: Any = None
    longitude: Any = None


# ===== Helper Functions =====

def _error(status_code: int, message: str) -> JSONResponse:
    """Build an error envelope."""
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    config: Config,
    store: EventStore | None = None,
    gemini_client: GeminiClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    The store is loaded from config.csv_path during startup unless a
    ready store is passed in.

    Args:
        config: Application configuration
        store: Event store (created empty and loaded at startup if not provided)
        gemini_client: Gemini client (created from config if not provided)

    Returns:
        Configured FastAPI app
    """
    store = store if store is not None else EventStore()
    orchestrator = Orchestrator(config, store, gemini_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not store.ready:
            store.load(config.csv_path)
        yield

    app = FastAPI(
        title="Seismic Risk API",
        description="Historical earthquake context and AI risk assessment by location",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.orchestrator = orchestrator

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected malformed request body: %s", exc.errors())
        return _error(400, INVALID_QUERY_MESSAGE)

    # ===== Public Endpoints =====

    @app.post("/predict")
    def predict(body: PredictRequest):
        """Assess natural disaster risk for a location."""
        logger.info("Received prediction request: %s", body.model_dump())

        if not store.wait_until_ready(config.readiness_timeout_seconds) or store.is_empty:
            return _error(503, STORE_UNAVAILABLE_MESSAGE)

        try:
            query = parse_query(body.dateTime, body.latitude, body.longitude)
        except InvalidQueryError as e:
            return _error(400, e.message)

        try:
            result = orchestrator.assess(query)
        except StoreUnavailableError:
            return _error(503, STORE_UNAVAILABLE_MESSAGE)
        except ContentSafetyError:
            logger.exception("Gemini blocked the assessment")
            return _error(500, SAFETY_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Error during prediction")
            return _error(500, PREDICTION_FAILURE_MESSAGE)

        return result.to_response()

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "events_loaded": len(store)}

    # Mounted last so the API routes above take precedence
    static_dir = Path(config.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found, form page disabled", static_dir)

    return app
