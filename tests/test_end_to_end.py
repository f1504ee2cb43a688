"""Detector output through to the globe transform."""
import math

import pytest

from conftest import make_hand
from scene.orbital import OrbitalController
from vision.interaction import InteractionStore
from vision.landmark_classifier import LandmarkClassifier, Viewport


def test_left_pinch_drives_globe():
    classifier = LandmarkClassifier()
    store = InteractionStore()
    orbit = OrbitalController()

    hand = make_hand("Left", palm=(0.75, 0.5), thumb=(0.50, 0.30), index=(0.52, 0.30))
    store.publish(classifier.classify([hand], Viewport(1280, 720)))

    control = store.snapshot.control
    assert control.present
    assert control.x == pytest.approx(0.25)
    assert control.y == pytest.approx(0.5)
    assert control.pinch.active
    assert control.pinch.distance == pytest.approx(0.02)

    target = (0.25 - 0.5) * 4 * math.pi
    t = orbit.update(control, 1 / 60)

    assert t.target_yaw == pytest.approx(-math.pi)
    assert target < t.yaw < 0.0

    # Keeps closing in without passing the target
    previous = t.yaw
    for _ in range(300):
        yaw = orbit.update(store.snapshot.control, 1 / 60).yaw
        assert target <= yaw <= previous
        previous = yaw
    assert previous == pytest.approx(target, abs=1e-3)
