"""Command-line Entry Point.

This module renders the dashboard for one time range to files.
It's a thin wrapper that loads configuration and invokes the dashboard.
"""

import argparse
import logging
import os
import sys

from src.core.config import validate_config
from src.core.feed import parse_time_range
from src.core.state import FeedStatus
from src.dashboard import Dashboard
from src.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config(config_path: str | None = None):
    """Load configuration from file or environment."""
    config_path = config_path or os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FEED_BASE_URL") or os.environ.get("TIME_RANGE"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Render the earthquake dashboard (map + magnitude chart) to files.",
    )
    parser.add_argument(
        "--range",
        dest="time_range",
        type=parse_time_range,
        metavar="{day,week,month}",
        help="Time range to load (default: from config)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory to write map.html and chart.png to (default: from config)",
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Also write a static snapshot.png of the map",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Process exit code (0 ok or empty feed, 1 feed error, 2 bad config)
    """
    args = build_parser().parse_args(argv)

    config = _get_config(args.config)

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        return 2

    dashboard = Dashboard(config)
    time_range = args.time_range or config.default_time_range
    state = dashboard.select_time_range(time_range)

    if state.status == FeedStatus.ERROR:
        print(f"Error: {state.message}", file=sys.stderr)
        return 1

    result = dashboard.render_to_directory(
        args.output_dir or config.output_dir,
        include_snapshot=args.snapshot,
    )

    print(result.summary)
    for path in (result.map_path, result.chart_path, result.snapshot_path):
        if path is not None:
            print(f"  wrote {path}")
    for error in result.errors:
        print(f"  {error}", file=sys.stderr)

    if state.status == FeedStatus.READY:
        histogram = dashboard.histogram()
        for b in histogram.bins:
            print(f"  {b.label:>6}  {b.count}")

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
