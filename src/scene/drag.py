"""
Pinch-to-drag state machine for the floating panel.
"""
import logging
from enum import Enum, auto
from typing import Tuple

from vision.interaction import HandReading

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = auto()
    ENGAGED = auto()


class DragController:
    """
    IDLE -> ENGAGED as soon as the UI hand is present and pinching.
    While engaged the position eases toward the hand's screen position by a
    fixed fraction per display frame. Losing the pinch or the hand returns
    to IDLE and the position stays where it is.

    The grab offset is not kept: the panel anchor follows the hand itself.
    """

    def __init__(self, position: Tuple[float, float] = (0.0, 0.0), follow: float = 0.2):
        self._position = (float(position[0]), float(position[1]))
        self._follow = follow
        self._state = DragState.IDLE

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def engaged(self) -> bool:
        return self._state is DragState.ENGAGED

    @property
    def position(self) -> Tuple[float, float]:
        return self._position

    def move_to(self, position: Tuple[float, float]) -> None:
        """Place the panel directly (layout, not gestures)."""
        self._position = (float(position[0]), float(position[1]))

    def update(self, reading: HandReading) -> Tuple[float, float]:
        """Advance one display frame; returns the current position."""
        grabbing = reading.present and reading.pinch.active

        if grabbing and self._state is DragState.IDLE:
            self._state = DragState.ENGAGED
            logger.info("Panel grabbed at (%.0f, %.0f)", *reading.screen_position)
        elif not grabbing and self._state is DragState.ENGAGED:
            self._state = DragState.IDLE
            logger.info("Panel released at (%.0f, %.0f)", *self._position)

        if self._state is DragState.ENGAGED:
            tx, ty = reading.screen_position
            x, y = self._position
            self._position = (
                x + (tx - x) * self._follow,
                y + (ty - y) * self._follow,
            )

        return self._position
