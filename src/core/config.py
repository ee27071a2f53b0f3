"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.geo import DEFAULT_MAX_DISTANCE_KM, DEFAULT_MAX_RESULTS


DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_PORT = 3000
DEFAULT_CSV_PATH = "./earthquakes.csv"


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        gemini_api_key: API key for the Gemini generation service (required)
        gemini_model: Gemini model name
        port: HTTP listening port
        csv_path: Path to the historical earthquake CSV
        max_distance_km: Radius for nearby events
        max_results: Maximum nearby events fed to the prompt
        request_timeout_seconds: Timeout for the Gemini HTTP call
        readiness_timeout_seconds: How long a request waits for the store to load
        static_dir: Directory holding the form page and script
    """
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    port: int = DEFAULT_PORT
    csv_path: str = DEFAULT_CSV_PATH
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    max_results: int = DEFAULT_MAX_RESULTS
    request_timeout_seconds: float = 60.0
    readiness_timeout_seconds: float = 30.0
    static_dir: str = "public"


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.gemini_api_key or config.gemini_api_key.startswith("${"):
        errors.append(ValidationError(
            field="gemini_api_key",
            message="GEMINI_API_KEY not found in environment variables",
        ))

    if not 1 <= config.port <= 65535:
        errors.append(ValidationError(
            field="port",
            message=f"Port {config.port} out of range [1, 65535]",
        ))

    if config.max_distance_km <= 0:
        errors.append(ValidationError(
            field="max_distance_km",
            message=f"Search radius must be positive, got {config.max_distance_km}",
        ))

    if config.max_results <= 0:
        errors.append(ValidationError(
            field="max_results",
            message=f"Result cap must be positive, got {config.max_results}",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if not config.csv_path:
        errors.append(ValidationError(
            field="csv_path",
            message="No earthquake CSV path configured, store will be empty",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
