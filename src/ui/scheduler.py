"""
Qt-backed frame scheduler: one single-shot QTimer per loop.
"""
from typing import Callable, Optional

from PyQt5.QtCore import QObject, Qt, QTimer

from vision.frame_loop import FrameScheduler


class QtFrameScheduler(FrameScheduler):
    """
    Requests the next frame through a single-shot timer on the Qt event loop.

    Args:
        interval_ms: Delay before the callback (0 = next event loop pass)
        parent: Owner of the timer
    """

    def __init__(self, interval_ms: int = 0, parent: Optional[QObject] = None):
        self._interval_ms = interval_ms
        self._callback: Optional[Callable[[], None]] = None
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._fire)

    @classmethod
    def for_fps(cls, fps: int, parent: Optional[QObject] = None) -> "QtFrameScheduler":
        return cls(max(0, int(1000 / fps)) if fps > 0 else 0, parent)

    def request(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(self._interval_ms)

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self):
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()
