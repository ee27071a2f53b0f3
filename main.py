"""Server Entry Point - Root Module.

Loads configuration, refuses to start without a Gemini API key, and
serves the FastAPI app with uvicorn.
"""

import logging
import os
import sys

import uvicorn

from api.main import create_app
from src.core.config import validate_config
from src.shell.config_loader import load_config


# Levels understood by both logging and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _resolve_log_level(name: str | None) -> str:
    """Normalize LOG_LEVEL, falling back to INFO for unknown names."""
    level = (name or "INFO").strip().upper()
    return level if level in LOG_LEVELS else "INFO"


# Configure logging
log_level = _resolve_log_level(os.environ.get("LOG_LEVEL"))
logging.basicConfig(
    level=getattr(logging, log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config():
    """Load configuration from CONFIG_PATH or config/config.yaml, then environment."""
    return load_config(os.environ.get("CONFIG_PATH"))


def main() -> int:
    config = _get_config()

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("%s: %s", warning.field, warning.message)
    if not result.valid:
        for error in result.critical_errors:
            logger.error("Error: %s (%s)", error.message, error.field)
        return 1

    app = create_app(config)

    logger.info("Server listening on port %d", config.port)
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
