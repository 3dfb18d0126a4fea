"""Static Map Client - Imperative Shell.

This module renders a static PNG snapshot of all earthquake markers using
OpenStreetMap tiles. All I/O is contained here; marker styling is in the
core module.
"""

import io
import logging
from dataclasses import dataclass

from staticmap import StaticMap, CircleMarker

from src.core.config import MapSettings
from src.core.presentation import MARKER_BORDER_COLOR, MarkerView


logger = logging.getLogger(__name__)


# Width of the border ring drawn behind each marker (pixels)
BORDER_WIDTH = 2


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class StaticMapClient:
    """Client for generating static map snapshots.

    This is part of the imperative shell - it handles I/O (fetching map tiles
    and rendering images).
    """

    def __init__(self, settings: MapSettings | None = None) -> None:
        """Initialize static map client.

        Args:
            settings: Map view settings. Defaults to a world view on
                OpenStreetMap tiles.
        """
        self.settings = settings or MapSettings()

    @property
    def tile_url(self) -> str:
        return self.settings.tile_url

    def _build_markers(self, marker: MarkerView) -> list[CircleMarker]:
        """Build the border ring and fill circle for one marker."""
        radius = max(int(round(marker.style.size_px / 2)), 1)
        # staticmap takes (lon, lat) order
        coord = (marker.longitude, marker.latitude)
        return [
            CircleMarker(coord, MARKER_BORDER_COLOR, radius + BORDER_WIDTH),
            CircleMarker(coord, marker.style.color.value, radius),
        ]

    def generate_snapshot(self, markers: list[MarkerView]) -> MapImageResult:
        """Generate a static snapshot of all markers.

        This method performs I/O (fetches map tiles from tile server).

        Args:
            markers: Marker view models from the core module

        Returns:
            MapImageResult with image bytes or error
        """
        settings = self.settings

        logger.info(
            "Generating static snapshot with %d markers at zoom %d",
            len(markers),
            settings.zoom,
        )

        try:
            static_map = StaticMap(
                settings.snapshot_width,
                settings.snapshot_height,
                url_template=settings.tile_url,
            )

            # Smaller markers are drawn last so they stay visible on top
            ordered = sorted(markers, key=lambda m: m.style.size_px, reverse=True)
            for marker in ordered:
                for circle in self._build_markers(marker):
                    static_map.add_marker(circle)

            image = static_map.render(
                zoom=settings.zoom,
                center=[settings.center_longitude, settings.center_latitude],
            )

            # Convert to PNG bytes
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated snapshot image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to generate snapshot: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )
