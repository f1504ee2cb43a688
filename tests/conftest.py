import pytest

from vision.frame_loop import FrameScheduler
from vision.interaction import HandReading, PinchState
from vision.landmark_classifier import DetectedHand, Viewport


class ManualScheduler(FrameScheduler):
    """Holds the pending callback until the test fires it."""

    def __init__(self):
        self.pending = None
        self.requests = 0
        self.cancels = 0

    def request(self, callback):
        self.pending = callback
        self.requests += 1

    def cancel(self):
        self.pending = None
        self.cancels += 1

    def fire(self):
        callback, self.pending = self.pending, None
        assert callback is not None, "no frame requested"
        callback()


class FakeClock:
    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_keypoints(palm=(0.5, 0.5), thumb=(0.4, 0.4), index=(0.6, 0.4)):
    """21 keypoints with the palm landmarks at `palm` and the given tips."""
    points = [(palm[0], palm[1], 0.0)] * 21
    points[4] = (thumb[0], thumb[1], 0.0)
    points[8] = (index[0], index[1], 0.0)
    return points


def make_hand(handedness="Left", **kwargs):
    return DetectedHand(keypoints=make_keypoints(**kwargs), handedness=handedness)


def reading(x=0.5, y=0.5, pinching=False, distance=0.2, screen=(0.0, 0.0)):
    return HandReading(
        present=True,
        position=(x, y),
        pinch=PinchState(active=pinching, distance=distance),
        screen_position=screen,
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def viewport():
    return Viewport(1000, 500)
