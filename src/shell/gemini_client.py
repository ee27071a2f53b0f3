"""Gemini API Client - Imperative Shell.

This module handles HTTP communication with the Gemini generateContent API.
All I/O is contained here; prompt building is in the core module.
"""

import logging
from typing import Any

import requests

from src.core.config import DEFAULT_GEMINI_MODEL


logger = logging.getLogger(__name__)


GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"

# Default timeout for generation requests (seconds)
DEFAULT_TIMEOUT = 60

SAFETY_REASON = "SAFETY"


class GenerationError(Exception):
    """Raised when the generation service fails to produce text."""


class ContentSafetyError(GenerationError):
    """Raised when the generation service blocks content on safety grounds."""


def extract_text(data: dict[str, Any]) -> str:
    """Pull the generated text out of a generateContent response body.

    Args:
        data: Decoded JSON response

    Returns:
        Concatenated text of the first candidate ("" if there is none)

    Raises:
        ContentSafetyError: If the prompt or the candidate was blocked for safety
        GenerationError: If the prompt was blocked for another reason
    """
    feedback = data.get("promptFeedback") or {}
    block_reason = feedback.get("blockReason")
    if block_reason:
        if SAFETY_REASON in str(block_reason):
            raise ContentSafetyError(f"Prompt blocked: {block_reason}")
        raise GenerationError(f"Prompt blocked: {block_reason}")

    candidates = data.get("candidates") or []
    if not candidates:
        return ""

    candidate = candidates[0]
    if candidate.get("finishReason") == SAFETY_REASON:
        raise ContentSafetyError("Response blocked: SAFETY")

    parts = (candidate.get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)


class GeminiClient:
    """Client for generating text with the Gemini API.

    This is part of the imperative shell - it handles HTTP I/O.
    One attempt per call; no retries.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = GEMINI_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name (e.g., 'gemini-1.5-flash')
            base_url: Models endpoint base URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

    @property
    def url(self) -> str:
        """generateContent URL for the configured model."""
        return f"{self.base_url}/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Generate text for a prompt.

        This method performs HTTP I/O.

        Args:
            prompt: Prompt text

        Returns:
            Generated text, possibly empty

        Raises:
            ContentSafetyError: If the content was blocked for safety
            GenerationError: On transport errors, non-2xx responses or
                undecodable bodies
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        logger.info("Sending prompt to Gemini model %s", self.model)

        try:
            response = requests.post(
                self.url,
                json=payload,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
            )
        except requests.Timeout as e:
            logger.error("Gemini request timed out")
            raise GenerationError("Request timed out") from e
        except requests.RequestException as e:
            logger.error("Gemini request failed: %s", str(e))
            raise GenerationError(str(e)) from e

        if not response.ok:
            error_text = response.text
            logger.warning(
                "Gemini returned non-2xx: %d - %s",
                response.status_code,
                error_text,
            )
            raise GenerationError(
                f"Gemini returned {response.status_code}: {error_text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("Gemini returned a non-JSON body") from e

        text = extract_text(data)
        logger.info("Received %d characters from Gemini", len(text))
        return text
