"""Configuration Loader - Imperative Shell.

This module handles loading configuration from an optional YAML file,
a .env file and environment variables. All I/O is contained here.

The Config model is defined in src/core/config.py.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.core.config import Config


logger = logging.getLogger(__name__)


# Environment variable -> (Config field, cast)
ENV_OVERRIDES: dict[str, tuple[str, Any]] = {
    "GEMINI_API_KEY": ("gemini_api_key", str),
    "GEMINI_MODEL": ("gemini_model", str),
    "PORT": ("port", int),
    "EARTHQUAKE_CSV_PATH": ("csv_path", str),
    "MAX_DISTANCE_KM": ("max_distance_km", float),
    "MAX_HISTORICAL_EVENTS": ("max_results", int),
    "GEMINI_TIMEOUT_SECONDS": ("request_timeout_seconds", float),
    "READINESS_TIMEOUT_SECONDS": ("readiness_timeout_seconds", float),
    "STATIC_DIR": ("static_dir", str),
}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-strings and plain strings are returned unchanged; an unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary (keys are Config field names)

    Returns:
        Parsed Config object
    """
    defaults = Config()
    gemini = data.get("gemini", {}) or {}

    return Config(
        gemini_api_key=_resolve_value(gemini.get("api_key", defaults.gemini_api_key)),
        gemini_model=_resolve_value(gemini.get("model", defaults.gemini_model)),
        port=int(_resolve_value(data.get("port", defaults.port))),
        csv_path=_resolve_value(data.get("csv_path", defaults.csv_path)),
        max_distance_km=float(data.get("max_distance_km", defaults.max_distance_km)),
        max_results=int(data.get("max_results", defaults.max_results)),
        request_timeout_seconds=float(
            gemini.get("timeout_seconds", defaults.request_timeout_seconds)
        ),
        readiness_timeout_seconds=float(
            data.get("readiness_timeout_seconds", defaults.readiness_timeout_seconds)
        ),
        static_dir=_resolve_value(data.get("static_dir", defaults.static_dir)),
    )


def apply_env_overrides(config: Config) -> Config:
    """Overwrite config fields with any environment variables that are set.

    Args:
        config: Base configuration

    Returns:
        The same Config object, updated in place
    """
    for env_var, (field_name, cast) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_var)
        if raw is None or raw == "":
            continue
        try:
            setattr(config, field_name, cast(raw))
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", env_var, raw)

    return config


def load_config_from_env(dotenv_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Reads a .env file first (existing environment variables win).

    Environment variables:
        GEMINI_API_KEY: API key for the generation service (required)
        GEMINI_MODEL: Model name
        PORT: Listening port (default 3000)
        EARTHQUAKE_CSV_PATH: Historical catalog CSV
        MAX_DISTANCE_KM: Search radius
        MAX_HISTORICAL_EVENTS: Nearby event cap
        GEMINI_TIMEOUT_SECONDS: Generation request timeout
        READINESS_TIMEOUT_SECONDS: Wait for the event store before answering 503
        STATIC_DIR: Directory with the form page

    Returns:
        Config object from environment
    """
    load_dotenv(dotenv_path)
    return apply_env_overrides(Config())


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file, then apply environment overrides.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    load_dotenv()

    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using environment only", path)
        return load_config_from_env()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using environment only")
        return load_config_from_env()

    config = apply_env_overrides(load_config_from_dict(data))

    logger.info(
        "Loaded config: model=%s, radius=%skm, max_results=%d",
        config.gemini_model,
        config.max_distance_km,
        config.max_results,
    )

    return config
