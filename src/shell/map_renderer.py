"""Interactive Map Renderer - Imperative Shell.

This module renders earthquake markers onto a clustered Leaflet map using
folium. Marker styling comes from the core module; this layer only draws.
"""

import logging
from pathlib import Path

import folium
from folium.plugins import MarkerCluster

from src.core.classifier import SeverityTier
from src.core.config import MapSettings
from src.core.presentation import MarkerView, format_marker_icon_html, format_popup_html


logger = logging.getLogger(__name__)


POPUP_MAX_WIDTH = 300

LEGEND_HTML = """
<div style="
    position: fixed;
    bottom: 30px; right: 30px;
    background-color: black;
    color: #FFD700;
    border: 1px solid #FFD700;
    z-index: 9999;
    font-size: 13px;
    padding: 8px;
">
<b>Magnitude</b><br>
<span style="color:{red};">&#9679;</span> 5.0 and above<br>
<span style="color:{orange};">&#9679;</span> 3.0 - 4.9<br>
<span style="color:{green};">&#9679;</span> below 3.0<br>
</div>
""".format(
    red=SeverityTier.HIGH.color.value,
    orange=SeverityTier.MEDIUM.color.value,
    green=SeverityTier.LOW.color.value,
)


class FoliumMapRenderer:
    """Renders markers as a clustered interactive map.

    This is part of the imperative shell - it produces HTML documents and
    writes them to disk.
    """

    def __init__(self, settings: MapSettings | None = None) -> None:
        """Initialize map renderer.

        Args:
            settings: Map view settings. Defaults to a world view on
                OpenStreetMap tiles.
        """
        self.settings = settings or MapSettings()

    def _add_marker(self, marker: MarkerView, layer: folium.Element) -> None:
        """Add a single earthquake marker to a layer."""
        size = marker.style.size_px
        icon = folium.DivIcon(
            html=format_marker_icon_html(marker.style),
            icon_size=(size, size),
            icon_anchor=(size / 2, size / 2),
            class_name="",
        )

        folium.Marker(
            location=[marker.latitude, marker.longitude],
            icon=icon,
            popup=folium.Popup(format_popup_html(marker), max_width=POPUP_MAX_WIDTH),
            tooltip=f"M{marker.magnitude:g} - {marker.place}",
        ).add_to(layer)

    def render(self, markers: list[MarkerView]) -> folium.Map:
        """Render markers onto a new map.

        Args:
            markers: Marker view models from the core module

        Returns:
            folium Map with a marker cluster layer
        """
        settings = self.settings

        fmap = folium.Map(
            location=[settings.center_latitude, settings.center_longitude],
            zoom_start=settings.zoom,
            tiles=None,
        )
        folium.TileLayer(
            tiles=settings.tile_url,
            attr=settings.attribution,
            name="Base map",
        ).add_to(fmap)

        cluster = MarkerCluster(name="Earthquakes").add_to(fmap)
        for marker in markers:
            self._add_marker(marker, cluster)

        fmap.get_root().html.add_child(folium.Element(LEGEND_HTML))

        logger.info("Rendered map with %d markers", len(markers))

        return fmap

    def render_html(self, markers: list[MarkerView]) -> str:
        """Render markers to a standalone HTML document."""
        return self.render(markers).get_root().render()

    def save(self, markers: list[MarkerView], path: str | Path) -> Path:
        """Render markers and write the HTML document to disk.

        This method performs file I/O.

        Args:
            markers: Marker view models
            path: Output file path

        Returns:
            Path the map was written to
        """
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        self.render(markers).save(str(output))

        logger.info("Saved map to %s", output)

        return output
