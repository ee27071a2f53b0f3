"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Catalog CSV reading (file)
- Historical event store (in-memory, loaded from file)
- Gemini client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.event_store import EventStore
from src.shell.gemini_client import GeminiClient, GenerationError, ContentSafetyError
from src.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "EventStore",
    "GeminiClient",
    "GenerationError",
    "ContentSafetyError",
    "load_config",
    "load_config_from_env",
]
