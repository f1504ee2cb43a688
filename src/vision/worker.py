"""
Vision loop: camera frame -> detector -> classifier -> interaction store.
Runs cooperatively on the host's frame scheduler, one frame per tick.
"""
import logging
from typing import Callable, List, Optional

import numpy as np

from .frame_loop import FrameLoop, FrameScheduler, FrameTick
from .interaction import InteractionStore
from .landmark_classifier import DetectedHand, LandmarkClassifier, Viewport

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


class VisionLoop:
    """
    Single writer of the InteractionStore.

    Faults inside a tick are logged and degrade to "no hands detected"; they
    never reach the render loops.
    """

    def __init__(self, tracker, classifier: LandmarkClassifier, store: InteractionStore,
                 scheduler: FrameScheduler, viewport: Viewport,
                 on_frame: Optional[FrameCallback] = None):
        """
        Args:
            tracker: HandTracker (or anything with start/stop/read_frame/detect)
            classifier: Landmark classifier
            store: Interaction store to publish into
            scheduler: Next-frame primitive for the loop
            viewport: Initial viewport for screen-space mapping
            on_frame: Optional preview sink, receives the annotated frame
        """
        self._tracker = tracker
        self._classifier = classifier
        self._store = store
        self._viewport = viewport
        self._on_frame = on_frame
        self._loop = FrameLoop(self._tick, scheduler, name="vision")
        self._fault_count = 0

    @property
    def is_running(self) -> bool:
        return self._loop.is_running

    @property
    def fault_count(self) -> int:
        return self._fault_count

    def set_viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport

    def start(self) -> bool:
        """
        Start the tracker and the loop.

        Returns:
            False if the tracker could not start; the loop then never runs
            and consumers keep seeing absent hands.
        """
        if self._loop.is_running:
            return True
        if not self._tracker.start():
            logger.error("Vision loop not started: hand tracker failed to initialize")
            return False
        self._loop.start()
        logger.info("Vision loop started")
        return True

    def stop(self) -> None:
        """Stop rescheduling and release the camera."""
        was_running = self._loop.is_running
        self._loop.stop()
        self._tracker.stop()
        if was_running:
            self._store.clear()
            logger.info("Vision loop stopped")

    def _tick(self, tick: FrameTick) -> None:
        try:
            frame = self._tracker.read_frame()
            if frame is None:
                return  # No new video frame yet

            hands: List[DetectedHand] = self._tracker.detect(frame)
            self._store.publish(self._classifier.classify(hands, self._viewport))

            if self._on_frame is not None:
                preview = self._tracker.get_frame_with_landmarks(hands)
                if preview is not None:
                    self._on_frame(preview)
        except Exception:
            self._fault_count += 1
            logger.exception("Vision tick %d failed; treating as no hands", tick.index)
            self._store.publish({})
