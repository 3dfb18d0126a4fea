"""Chart Renderer - Imperative Shell.

This module draws the magnitude histogram as a PNG bar chart with
matplotlib. Chart data is built in the core module.
"""

import io
import logging
from dataclasses import dataclass

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.ticker import MaxNLocator  # noqa: E402

from src.core.presentation import ChartData  # noqa: E402


logger = logging.getLogger(__name__)


TEXT_COLOR = "#FFD700"
GRID_COLOR = "#444"
BACKGROUND_COLOR = "black"


@dataclass
class ChartImageResult:
    """Result of chart image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class ChartRenderer:
    """Renders histogram bar charts.

    This is part of the imperative shell - it produces image files.
    """

    def __init__(self, width_in: float = 8.0, height_in: float = 4.0, dpi: int = 100) -> None:
        """Initialize chart renderer.

        Args:
            width_in: Figure width in inches
            height_in: Figure height in inches
            dpi: Output resolution
        """
        self.width_in = width_in
        self.height_in = height_in
        self.dpi = dpi

    def _style_axes(self, ax) -> None:
        """Apply the dashboard's gold-on-black theme."""
        ax.set_facecolor(BACKGROUND_COLOR)
        ax.tick_params(colors=TEXT_COLOR)
        ax.grid(axis="y", color=GRID_COLOR)
        ax.set_axisbelow(True)
        for spine in ax.spines.values():
            spine.set_color(GRID_COLOR)

    def render(self, chart: ChartData) -> ChartImageResult:
        """Render chart data to a PNG image.

        Args:
            chart: Chart series from the core module

        Returns:
            ChartImageResult with image bytes or error
        """
        logger.info(
            "Rendering chart '%s' with %d bars",
            chart.title,
            len(chart.labels),
        )

        fig = None
        try:
            fig, ax = plt.subplots(figsize=(self.width_in, self.height_in))
            fig.patch.set_facecolor(BACKGROUND_COLOR)
            self._style_axes(ax)

            ax.bar(chart.labels, chart.counts, color=chart.colors, label=chart.dataset_label)
            ax.set_title(chart.title, color=TEXT_COLOR)
            ax.yaxis.set_major_locator(MaxNLocator(integer=True))

            legend = ax.legend(facecolor=BACKGROUND_COLOR, edgecolor=GRID_COLOR)
            for text in legend.get_texts():
                text.set_color(TEXT_COLOR)

            fig.tight_layout()

            buffer = io.BytesIO()
            fig.savefig(buffer, format="png", dpi=self.dpi, facecolor=fig.get_facecolor())
            image_bytes = buffer.getvalue()

            logger.info("Rendered chart image: %d bytes", len(image_bytes))

            return ChartImageResult(success=True, image_bytes=image_bytes)

        except Exception as e:
            logger.error("Failed to render chart: %s", str(e))
            return ChartImageResult(success=False, error=str(e))

        finally:
            if fig is not None:
                plt.close(fig)
