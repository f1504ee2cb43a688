"""
Interaction state shared between the vision loop and the render loops.

The vision loop is the only writer. Every publish binds a brand new
InteractionSnapshot, so a reader holding the previous one never observes a
half-updated pair of hands.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple


class Handedness(Enum):
    """Handedness as reported by the detector."""
    LEFT = "Left"
    RIGHT = "Right"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Handedness":
        """Map a detector label; anything other than 'Right' counts as left."""
        return cls.RIGHT if label == cls.RIGHT.value else cls.LEFT


class HandSlot(Enum):
    """Logical hand roles."""
    CONTROL = "control"  # Drives the globe
    UI = "ui"            # Drives the floating panel

    @classmethod
    def for_handedness(cls, handedness: Handedness) -> "HandSlot":
        return cls.UI if handedness is Handedness.RIGHT else cls.CONTROL


@dataclass(frozen=True)
class PinchState:
    active: bool = False
    distance: float = 0.0


@dataclass(frozen=True)
class HandReading:
    """
    One hand's interpretation for a single frame.

    Attributes:
        present: Whether the hand was detected in the latest frame
        position: Mirrored palm centroid, normalized 0-1
        pinch: Thumb/index pinch state
        screen_position: position mapped to viewport pixels
    """
    present: bool = False
    position: Tuple[float, float] = (0.5, 0.5)
    pinch: PinchState = field(default_factory=PinchState)
    screen_position: Tuple[float, float] = (0.0, 0.0)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


@dataclass(frozen=True)
class InteractionSnapshot:
    """Both hands at one instant."""
    control: HandReading = field(default_factory=HandReading)
    ui: HandReading = field(default_factory=HandReading)

    def reading(self, slot: HandSlot) -> HandReading:
        return self.control if slot is HandSlot.CONTROL else self.ui


class InteractionStore:
    """
    Single-writer, multi-reader cell holding the latest InteractionSnapshot.
    """

    def __init__(self, initial: Optional[InteractionSnapshot] = None):
        self._snapshot = initial or InteractionSnapshot()
        self._publish_count = 0

    @property
    def snapshot(self) -> InteractionSnapshot:
        """Latest published snapshot. Never blocks."""
        return self._snapshot

    @property
    def publish_count(self) -> int:
        return self._publish_count

    def publish(self, readings: Dict[HandSlot, HandReading]) -> InteractionSnapshot:
        """
        Publish one frame's readings.

        Slots with a present reading take it as-is. Slots without one keep
        their previous position and pinch but are marked absent.
        """
        previous = self._snapshot
        control = self._merge(previous.control, readings.get(HandSlot.CONTROL))
        ui = self._merge(previous.ui, readings.get(HandSlot.UI))

        # Single assignment: readers see the old snapshot or the new one
        self._snapshot = InteractionSnapshot(control=control, ui=ui)
        self._publish_count += 1
        return self._snapshot

    def clear(self) -> InteractionSnapshot:
        """Mark both hands absent (same as publishing an empty frame)."""
        return self.publish({})

    @staticmethod
    def _merge(previous: HandReading, current: Optional[HandReading]) -> HandReading:
        if current is not None and current.present:
            return current
        if not previous.present:
            return previous
        return replace(previous, present=False)
