"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.feed import USGS_FEED_BASE, TimeRange


DEFAULT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"


@dataclass
class MapSettings:
    """Map view settings.

    Attributes:
        center_latitude: Initial map center latitude
        center_longitude: Initial map center longitude
        zoom: Initial zoom level (0-18)
        tile_url: Tile URL template ({z}/{x}/{y})
        attribution: Tile attribution text
        snapshot_width: Static snapshot width in pixels
        snapshot_height: Static snapshot height in pixels
    """
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 2
    tile_url: str = DEFAULT_TILE_URL
    attribution: str = "&copy; OpenStreetMap contributors"
    snapshot_width: int = 800
    snapshot_height: int = 400


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_base_url: Base URL of the USGS summary feeds
        default_time_range: Time range loaded on startup
        request_timeout_seconds: Timeout for a single feed fetch
        display_timezone: IANA timezone for event times (None = host local time)
        output_dir: Directory the CLI writes rendered files to
        map: Map view settings
        allowed_origins: CORS origins for the HTTP service
    """
    feed_base_url: str = USGS_FEED_BASE
    default_time_range: TimeRange = TimeRange.DAY
    request_timeout_seconds: int = 30
    display_timezone: str | None = None
    output_dir: str = "output"
    map: MapSettings = field(default_factory=MapSettings)
    allowed_origins: list[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://localhost:8000",
    ])


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


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_map_settings(settings: MapSettings) -> list[ValidationError]:
    """Validate map view settings.

    Pure function.
    """
    errors = validate_coordinates(
        settings.center_latitude,
        settings.center_longitude,
        "map.center",
    )

    if not 0 <= settings.zoom <= 18:
        errors.append(ValidationError(
            field="map.zoom",
            message=f"Zoom {settings.zoom} out of range [0, 18]",
        ))

    for name in ("{z}", "{x}", "{y}"):
        if name not in settings.tile_url:
            errors.append(ValidationError(
                field="map.tile_url",
                message=f"Tile URL is missing the {name} placeholder",
            ))

    if settings.snapshot_width <= 0 or settings.snapshot_height <= 0:
        errors.append(ValidationError(
            field="map.snapshot_size",
            message=(
                f"Snapshot size must be positive, got "
                f"{settings.snapshot_width}x{settings.snapshot_height}"
            ),
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_base_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_base_url",
            message=f"Feed base URL must be http(s), got {config.feed_base_url!r}",
        ))
    elif config.feed_base_url.startswith("http://"):
        errors.append(ValidationError(
            field="feed_base_url",
            message="Feed base URL is not using https",
            severity="warning",
        ))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    errors.extend(validate_map_settings(config.map))

    if not config.allowed_origins:
        errors.append(ValidationError(
            field="allowed_origins",
            message="No CORS origins configured; browsers on other origins are blocked",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
