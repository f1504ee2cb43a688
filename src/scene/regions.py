"""
Maps the globe's yaw to the region currently facing the viewer.
"""
import logging
import math
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi


class RegionLabel(Enum):
    AMERICAS = "Americas"
    PACIFIC = "Pacific"
    ASIA = "Asia"
    EUROPE_AFRICA = "Europe/Africa"
    ATLANTIC = "Atlantic"
    SCANNING = "Scanning..."  # Before the first classification


# Closed-open degree ranges; anything else is Atlantic
REGION_BUCKETS = [
    (30.0, 100.0, RegionLabel.AMERICAS),
    (100.0, 190.0, RegionLabel.PACIFIC),
    (190.0, 280.0, RegionLabel.ASIA),
    (280.0, 340.0, RegionLabel.EUROPE_AFRICA),
]


def normalize_yaw(yaw: float) -> float:
    """Wrap yaw into [0, 2 pi)."""
    normalized = yaw % TWO_PI
    # Tiny negative inputs can round up to exactly 2 pi
    return 0.0 if normalized >= TWO_PI else normalized


def region_for_degrees(degrees: float) -> RegionLabel:
    for lo, hi, label in REGION_BUCKETS:
        if lo <= degrees < hi:
            return label
    return RegionLabel.ATLANTIC


def classify_region(yaw: float) -> RegionLabel:
    return region_for_degrees(math.degrees(normalize_yaw(yaw)))


class RegionTracker:
    """
    Throttled region classification.

    Recomputes when elapsed % interval < delta, i.e. once per interval
    window whatever the frame rate, and reports label changes.
    """

    def __init__(self, interval: float = 0.5,
                 on_change: Optional[Callable[[RegionLabel], None]] = None):
        self._interval = interval
        self._on_change = on_change
        self._current = RegionLabel.SCANNING

    @property
    def current(self) -> RegionLabel:
        return self._current

    def update(self, yaw: float, elapsed: float, delta: float) -> Optional[RegionLabel]:
        """
        Returns:
            The recomputed label if this frame was due, else None.
        """
        if elapsed % self._interval >= delta:
            return None

        label = classify_region(yaw)
        if label is not self._current:
            logger.info("Region: %s -> %s", self._current.value, label.value)
            self._current = label
            if self._on_change is not None:
                self._on_change(label)
        return label
