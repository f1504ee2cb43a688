import numpy as np
import pytest

from conftest import make_hand, reading
from vision.interaction import HandSlot, InteractionStore
from vision.landmark_classifier import LandmarkClassifier, Viewport
from vision.worker import VisionLoop


class FakeTracker:
    """Scripted stand-in for HandTracker: one detection list per frame."""

    def __init__(self, frames, start_ok=True):
        self.frames = list(frames)
        self.start_ok = start_ok
        self.started = False
        self.released = False

    def start(self):
        self.started = self.start_ok
        return self.start_ok

    def stop(self):
        self.released = True

    def read_frame(self):
        if not self.frames:
            return None
        self._current = self.frames.pop(0)
        return np.zeros((4, 4, 3), dtype=np.uint8)

    def detect(self, frame):
        if isinstance(self._current, Exception):
            raise self._current
        return self._current

    def get_frame_with_landmarks(self, hands):
        return np.zeros((4, 4, 3), dtype=np.uint8)


@pytest.fixture
def store():
    return InteractionStore()


def make_loop(tracker, store, scheduler, on_frame=None):
    return VisionLoop(tracker, LandmarkClassifier(), store, scheduler,
                      Viewport(1000, 500), on_frame=on_frame)


def test_frame_updates_store(store, scheduler):
    tracker = FakeTracker([[make_hand("Left", palm=(0.75, 0.5))]])
    loop = make_loop(tracker, store, scheduler)

    assert loop.start()
    scheduler.fire()

    assert store.snapshot.control.present
    assert store.snapshot.control.x == pytest.approx(0.25)
    assert store.snapshot.ui.present is False


def test_no_new_frame_keeps_snapshot(store, scheduler):
    tracker = FakeTracker([[make_hand("Right")]])
    loop = make_loop(tracker, store, scheduler)
    loop.start()
    scheduler.fire()
    count = store.publish_count

    scheduler.fire()  # Camera has nothing new

    assert store.publish_count == count
    assert store.snapshot.ui.present
    assert scheduler.pending is not None


def test_hand_leaving_decays_to_absent(store, scheduler):
    tracker = FakeTracker([[make_hand("Left", palm=(0.4, 0.6))], []])
    loop = make_loop(tracker, store, scheduler)
    loop.start()

    scheduler.fire()
    scheduler.fire()

    control = store.snapshot.control
    assert control.present is False
    assert control.position == pytest.approx((0.6, 0.6))


def test_detector_fault_degrades_to_no_hands(store, scheduler):
    tracker = FakeTracker([
        [make_hand("Left")],
        RuntimeError("detector exploded"),
        [make_hand("Right")],
    ])
    loop = make_loop(tracker, store, scheduler)
    loop.start()

    scheduler.fire()
    scheduler.fire()

    assert loop.fault_count == 1
    assert store.snapshot.control.present is False
    assert loop.is_running

    scheduler.fire()
    assert store.snapshot.ui.present


def test_init_failure_never_starts_loop(store, scheduler):
    tracker = FakeTracker([[make_hand()]], start_ok=False)
    loop = make_loop(tracker, store, scheduler)

    assert loop.start() is False
    assert not loop.is_running
    assert scheduler.pending is None
    assert store.snapshot.control.present is False


def test_stop_releases_camera_and_cancels(store, scheduler):
    tracker = FakeTracker([[make_hand()]])
    loop = make_loop(tracker, store, scheduler)
    loop.start()
    scheduler.fire()

    loop.stop()

    assert tracker.released
    assert scheduler.pending is None
    assert not loop.is_running
    assert store.snapshot.control.present is False


def test_viewport_change_applies_to_next_frame(store, scheduler):
    tracker = FakeTracker([[make_hand("Right", palm=(0.5, 0.5))]])
    loop = make_loop(tracker, store, scheduler)
    loop.start()

    loop.set_viewport(Viewport(200, 100))
    scheduler.fire()

    assert store.snapshot.ui.screen_position == pytest.approx((100.0, 50.0))


def test_preview_frames_are_forwarded(store, scheduler):
    frames = []
    tracker = FakeTracker([[make_hand()], []])
    loop = make_loop(tracker, store, scheduler, on_frame=frames.append)
    loop.start()

    scheduler.fire()
    scheduler.fire()

    assert len(frames) == 2


class FailingCameraTracker(FakeTracker):
    def read_frame(self):
        raise OSError("camera unplugged")


class FailingPreviewTracker(FakeTracker):
    def get_frame_with_landmarks(self, hands):
        raise ValueError("cannot convert float NaN to integer")


def assert_degraded(loop, store, scheduler):
    assert loop.fault_count == 1
    assert store.snapshot.control.present is False
    assert store.snapshot.ui.present is False
    assert loop.is_running
    assert scheduler.pending is not None


def test_camera_read_fault_degrades_to_no_hands(store, scheduler, caplog):
    store.publish({HandSlot.UI: reading(pinching=True)})
    loop = make_loop(FailingCameraTracker([]), store, scheduler)
    loop.start()

    scheduler.fire()

    assert_degraded(loop, store, scheduler)
    assert "Vision tick 0 failed" in caplog.text


def test_preview_fault_degrades_to_no_hands(store, scheduler, caplog):
    frames = []
    tracker = FailingPreviewTracker([[make_hand("Right")]])
    loop = make_loop(tracker, store, scheduler, on_frame=frames.append)
    loop.start()

    scheduler.fire()

    assert_degraded(loop, store, scheduler)
    assert frames == []
    assert "Vision tick 0 failed" in caplog.text


def test_preview_consumer_fault_degrades_to_no_hands(store, scheduler, caplog):
    def on_frame(frame):
        raise RuntimeError("window is gone")

    tracker = FakeTracker([[make_hand("Left")], [make_hand("Left")]])
    loop = make_loop(tracker, store, scheduler, on_frame=on_frame)
    loop.start()

    scheduler.fire()

    assert_degraded(loop, store, scheduler)
    assert "Vision tick 0 failed" in caplog.text

    # Following frames keep being processed
    scheduler.fire()
    assert loop.fault_count == 2
    assert loop.is_running
