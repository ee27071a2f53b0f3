"""Tests for the FastAPI service.

Uses FastAPI's TestClient with an in-memory store and a mocked Gemini client.
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from api.main import (
    PREDICTION_FAILURE_MESSAGE,
    SAFETY_FAILURE_MESSAGE,
    STORE_UNAVAILABLE_MESSAGE,
    create_app,
)
from src.core.config import Config
from src.core.earthquake import SeismicEvent
from src.core.query import INVALID_QUERY_MESSAGE
from src.orchestrator import FALLBACK_ASSESSMENT
from src.shell.event_store import EventStore
from src.shell.gemini_client import ContentSafetyError, GeminiClient, GenerationError


VALID_BODY = {
    "dateTime": "2024-01-01T00:00:00Z",
    "latitude": 34.05,
    "longitude": -118.25,
}


@pytest.fixture
def config(tmp_path):
    return Config(gemini_api_key="test-key", static_dir=str(tmp_path / "no-static"))


@pytest.fixture
def la_store():
    """Store holding one M5.0 event at the query coordinate."""
    return EventStore([
        SeismicEvent(
            time=datetime(2019, 7, 6, 3, 19, 53, tzinfo=timezone.utc),
            latitude=34.05,
            longitude=-118.25,
            magnitude=5.0,
            depth=8.0,
        )
    ])


@pytest.fixture
def mock_gemini():
    client = Mock(spec=GeminiClient)
    client.generate.return_value = "**Disclaimer:** general info.\n\nModerate risk."
    return client


@pytest.fixture
def client(config, la_store, mock_gemini):
    return TestClient(create_app(config, la_store, mock_gemini))


class TestPredictSuccess:
    """Tests for successful POST /predict."""

    def test_returns_envelope(self, client):
        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["request"] == {
            "dateTime": "2024-01-01T00:00:00Z",
            "latitude": 34.05,
            "longitude": -118.25,
        }
        assert data["nearby_events_count"] == 1
        assert data["historical_context_summary"].startswith("Found 1 historical earthquakes")
        assert data["gemini_assessment"] == "**Disclaimer:** general info.\n\nModerate risk."

    def test_accepts_string_coordinates(self, client):
        body = {**VALID_BODY, "latitude": "34.05", "longitude": "-118.25"}

        response = client.post("/predict", json=body)

        assert response.status_code == 200
        assert response.json()["request"]["latitude"] == 34.05

    def test_empty_generation_uses_fallback(self, client, mock_gemini):
        mock_gemini.generate.return_value = ""

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json()["gemini_assessment"] == FALLBACK_ASSESSMENT

    def test_no_nearby_events(self, client):
        body = {**VALID_BODY, "latitude": 0, "longitude": 0}

        response = client.post("/predict", json=body)

        assert response.status_code == 200
        assert response.json()["nearby_events_count"] == 0

    def test_antipodal_event_is_excluded(self, config, mock_gemini):
        store = EventStore([
            SeismicEvent(
                time=datetime(2020, 1, 1, tzinfo=timezone.utc),
                latitude=-0.08,
                longitude=180.0,
                magnitude=6.0,
            )
        ])
        client = TestClient(create_app(config, store, mock_gemini))

        response = client.post("/predict", json={**VALID_BODY, "latitude": 0.08, "longitude": 0})

        assert response.status_code == 200
        assert response.json()["nearby_events_count"] == 0


class TestPredictValidation:
    """Tests for 400 responses."""

    @pytest.mark.parametrize("override", [
        {"latitude": 999},
        {"latitude": -90.5},
        {"longitude": 181},
        {"latitude": "abc"},
        {"longitude": None},
        {"dateTime": None},
        {"dateTime": ""},
        {"dateTime": 0},
        {"dateTime": False},
    ])
    def test_invalid_input_returns_400(self, client, override, mock_gemini):
        response = client.post("/predict", json={**VALID_BODY, **override})

        assert response.status_code == 400
        assert response.json() == {"error": INVALID_QUERY_MESSAGE}
        mock_gemini.generate.assert_not_called()

    def test_missing_fields_returns_400(self, client):
        response = client.post("/predict", json={})

        assert response.status_code == 400

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            "/predict",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestPredictUnavailable:
    """Tests for 503 responses."""

    def test_empty_store_returns_503(self, config, mock_gemini):
        client = TestClient(create_app(config, EventStore([]), mock_gemini))

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 503
        assert response.json() == {"error": STORE_UNAVAILABLE_MESSAGE}

    def test_empty_store_returns_503_for_invalid_input(self, config, mock_gemini):
        client = TestClient(create_app(config, EventStore([]), mock_gemini))

        response = client.post("/predict", json={**VALID_BODY, "latitude": 999})

        assert response.status_code == 503

    def test_store_never_loaded_returns_503(self, mock_gemini, tmp_path):
        config = Config(
            gemini_api_key="k",
            readiness_timeout_seconds=0.01,
            static_dir=str(tmp_path),
        )
        client = TestClient(create_app(config, EventStore(), mock_gemini))

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 503


class TestPredictGenerationFailure:
    """Tests for 500 responses."""

    def test_safety_block_returns_specific_message(self, client, mock_gemini):
        mock_gemini.generate.side_effect = ContentSafetyError("blocked")

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": SAFETY_FAILURE_MESSAGE}

    def test_generation_error_returns_500(self, client, mock_gemini):
        mock_gemini.generate.side_effect = GenerationError("upstream down")

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": PREDICTION_FAILURE_MESSAGE}

    def test_unexpected_error_returns_500(self, client, mock_gemini):
        mock_gemini.generate.side_effect = RuntimeError("bug")

        response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": PREDICTION_FAILURE_MESSAGE}


class TestStartup:
    """Tests for loading the store during app startup."""

    def test_loads_catalog_on_startup(self, tmp_path, mock_gemini):
        csv_path = tmp_path / "earthquakes.csv"
        csv_path.write_text(
            "time,latitude,longitude,depth,magnitude\n"
            "1703001600000,34.05,-118.25,10,5.0\n"
            "1703001600000,,-118.25,10,5.0\n"
        )
        config = Config(gemini_api_key="k", csv_path=str(csv_path), static_dir=str(tmp_path))
        app = create_app(config, gemini_client=mock_gemini)

        with TestClient(app) as client:
            health = client.get("/health")
            response = client.post("/predict", json=VALID_BODY)

        assert health.json() == {"status": "healthy", "events_loaded": 1}
        assert response.status_code == 200
        assert response.json()["nearby_events_count"] == 1

    def test_missing_catalog_serves_503(self, tmp_path, mock_gemini):
        config = Config(
            gemini_api_key="k",
            csv_path=str(tmp_path / "missing.csv"),
            static_dir=str(tmp_path),
        )
        app = create_app(config, gemini_client=mock_gemini)

        with TestClient(app) as client:
            response = client.post("/predict", json=VALID_BODY)

        assert response.status_code == 503


class TestStaticAndHealth:
    """Tests for the form page and health check."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "events_loaded": 1}

    def test_serves_form_page(self, tmp_path, la_store, mock_gemini):
        static_dir = tmp_path / "public"
        static_dir.mkdir()
        (static_dir / "index.html").write_text("<form id='prediction-form'></form>")
        config = Config(gemini_api_key="k", static_dir=str(static_dir))
        client = TestClient(create_app(config, la_store, mock_gemini))

        response = client.get("/")

        assert response.status_code == 200
        assert "prediction-form" in response.text
        assert client.post("/predict", json=VALID_BODY).status_code == 200
