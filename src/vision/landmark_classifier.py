"""
Turns raw detector output into HandReadings.
Computes the mirrored palm centroid and the thumb/index pinch.
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import GestureConfig
from .interaction import Handedness, HandReading, HandSlot, PinchState

logger = logging.getLogger(__name__)

# MediaPipe hand landmark indices
WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
PINKY_MCP = 17
NUM_LANDMARKS = 21


@dataclass
class DetectedHand:
    """
    One hand from the detector.

    Attributes:
        keypoints: 21 normalized (x, y, z) tuples in MediaPipe order
        handedness: Detector label, 'Left' or 'Right'
        score: Handedness confidence 0-1
    """
    keypoints: List[Tuple[float, ...]]
    handedness: str
    score: float = 1.0


@dataclass(frozen=True)
class Viewport:
    """Display area in pixels used for screen-space mapping."""
    width: float
    height: float

    def to_screen(self, position: Tuple[float, float]) -> Tuple[float, float]:
        return (position[0] * self.width, position[1] * self.height)


def palm_centroid(keypoints: Sequence[Sequence[float]]) -> Tuple[float, float]:
    """Approximate palm center from wrist, index MCP and pinky MCP."""
    pts = [keypoints[i] for i in (WRIST, INDEX_MCP, PINKY_MCP)]
    x = sum(p[0] for p in pts) / 3
    y = sum(p[1] for p in pts) / 3
    return (x, y)


def pinch_distance(keypoints: Sequence[Sequence[float]]) -> float:
    """2D distance between thumb tip and index tip."""
    thumb = keypoints[THUMB_TIP]
    index = keypoints[INDEX_TIP]
    return math.hypot(thumb[0] - index[0], thumb[1] - index[1])


class LandmarkClassifier:
    """
    Classifies detected hands into per-slot readings.

    The user's right hand (detector label 'Right') drives the UI panel,
    any other hand drives the globe.
    """

    def __init__(self, config: Optional[GestureConfig] = None):
        self._config = config or GestureConfig()

    def classify_hand(self, keypoints: Sequence[Sequence[float]],
                      viewport: Viewport) -> Optional[HandReading]:
        """
        Build a reading for one hand.

        Returns:
            HandReading, or None if the keypoint set is malformed.
        """
        if keypoints is None or len(keypoints) < NUM_LANDMARKS:
            return None

        try:
            points = [(float(p[0]), float(p[1])) for p in keypoints[:NUM_LANDMARKS]]
        except (IndexError, TypeError, ValueError):
            return None
        if not all(math.isfinite(v) for p in points for v in p):
            return None

        raw_x, raw_y = palm_centroid(points)
        distance = pinch_distance(points)

        # Mirror horizontally so the scene reacts like a mirror
        position = (1.0 - raw_x, raw_y)

        return HandReading(
            present=True,
            position=position,
            pinch=PinchState(
                active=distance < self._config.pinch_threshold,
                distance=distance,
            ),
            screen_position=viewport.to_screen(position),
        )

    def classify(self, hands: Iterable[DetectedHand],
                 viewport: Viewport) -> Dict[HandSlot, HandReading]:
        """
        Classify one detector frame.

        Only the first hand of each handedness is used; malformed hands are
        skipped.
        """
        readings: Dict[HandSlot, HandReading] = {}

        for i, hand in enumerate(hands):
            slot = HandSlot.for_handedness(Handedness.from_label(hand.handedness))
            if slot in readings:
                continue

            reading = self.classify_hand(hand.keypoints, viewport)
            if reading is None:
                logger.debug("Skipping malformed hand %d (%s, score %.2f)",
                             i, hand.handedness, hand.score)
                continue

            readings[slot] = reading

        return readings
