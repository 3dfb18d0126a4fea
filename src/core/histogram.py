"""Magnitude histogram - Pure functions.

Buckets earthquakes into six fixed magnitude bins for the summary chart.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Iterable

from src.core.classifier import Color
from src.core.earthquake import Earthquake


# Events without a usable magnitude are counted as M0 (the "<2" bin).
# Note this differs from map markers, which draw them as M1.
DEFAULT_HISTOGRAM_MAGNITUDE = 0.0


@dataclass(frozen=True)
class MagnitudeBin:
    """A half-open magnitude range [lower, upper).

    Attributes:
        label: Display label
        lower: Inclusive lower bound, None for unbounded below
        upper: Exclusive upper bound, None for unbounded above
        color: Chart bar color group
    """
    label: str
    lower: float | None
    upper: float | None
    color: Color

    def contains(self, magnitude: float) -> bool:
        """Check whether a magnitude falls in this bin."""
        if self.lower is not None and magnitude < self.lower:
            return False
        if self.upper is not None and magnitude >= self.upper:
            return False
        return True


# Canonical display order. Bins are contiguous, so together they cover
# every real number exactly once.
MAGNITUDE_BINS: tuple[MagnitudeBin, ...] = (
    MagnitudeBin("<2", None, 2.0, Color.GREEN),
    MagnitudeBin("2-2.9", 2.0, 3.0, Color.GREEN),
    MagnitudeBin("3-3.9", 3.0, 4.0, Color.ORANGE),
    MagnitudeBin("4-4.9", 4.0, 5.0, Color.ORANGE),
    MagnitudeBin("5-5.9", 5.0, 6.0, Color.RED),
    MagnitudeBin("6+", 6.0, None, Color.RED),
)

BIN_LABELS: tuple[str, ...] = tuple(b.label for b in MAGNITUDE_BINS)


@dataclass(frozen=True)
class HistogramBin:
    """Count of events in one magnitude bin.

    Attributes:
        label: Bin display label
        count: Number of events in the bin
        color: Chart bar color group
    """
    label: str
    count: int
    color: Color


@dataclass(frozen=True)
class Histogram:
    """Immutable six-bin magnitude histogram in canonical order."""
    bins: tuple[HistogramBin, ...]

    @property
    def labels(self) -> list[str]:
        return [b.label for b in self.bins]

    @property
    def counts(self) -> list[int]:
        return [b.count for b in self.bins]

    @property
    def colors(self) -> list[Color]:
        return [b.color for b in self.bins]

    @property
    def total(self) -> int:
        """Total number of events counted."""
        return sum(self.counts)

    def count_for(self, label: str) -> int:
        """Get the count for a bin label.

        Raises:
            KeyError: If the label is not one of the six bins
        """
        for b in self.bins:
            if b.label == label:
                return b.count
        raise KeyError(label)

    def as_dict(self) -> dict[str, int]:
        """Ordered mapping of bin label to count."""
        return {b.label: b.count for b in self.bins}


def effective_histogram_magnitude(magnitude: float | None) -> float:
    """Resolve the magnitude an event is binned with.

    Pure function. Absent and NaN fall back to DEFAULT_HISTOGRAM_MAGNITUDE.
    Infinities are kept and land in the outer bins.
    """
    if magnitude is None or math.isnan(magnitude):
        return DEFAULT_HISTOGRAM_MAGNITUDE
    return float(magnitude)


def bin_index_for_magnitude(magnitude: float | None) -> int:
    """Get the index into MAGNITUDE_BINS for a magnitude.

    Pure function. Total: every input maps to exactly one bin.
    """
    value = effective_histogram_magnitude(magnitude)
    for index, magnitude_bin in enumerate(MAGNITUDE_BINS):
        if magnitude_bin.contains(value):
            return index
    # Unreachable: the last bin is unbounded above
    return len(MAGNITUDE_BINS) - 1


def bin_for_magnitude(magnitude: float | None) -> MagnitudeBin:
    """Get the magnitude bin an event falls in.

    Pure function.

    Args:
        magnitude: Earthquake magnitude, or None if absent

    Returns:
        The single matching MagnitudeBin
    """
    return MAGNITUDE_BINS[bin_index_for_magnitude(magnitude)]


def aggregate_magnitudes(magnitudes: Iterable[float | None]) -> Histogram:
    """Count magnitudes per bin.

    Pure function. Single pass, order-independent. Empty input gives all
    six bins with a count of zero.

    Args:
        magnitudes: Magnitude values, None for absent

    Returns:
        Histogram with all six bins in canonical order
    """
    counts = [0] * len(MAGNITUDE_BINS)
    for magnitude in magnitudes:
        counts[bin_index_for_magnitude(magnitude)] += 1

    return Histogram(bins=tuple(
        HistogramBin(label=b.label, count=count, color=b.color)
        for b, count in zip(MAGNITUDE_BINS, counts)
    ))


def aggregate(earthquakes: Iterable[Earthquake]) -> Histogram:
    """Build the magnitude histogram for a snapshot of earthquakes.

    Pure function.

    Args:
        earthquakes: Earthquakes to count

    Returns:
        Histogram with all six bins in canonical order
    """
    return aggregate_magnitudes(e.magnitude for e in earthquakes)
