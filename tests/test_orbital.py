import math

import pytest

from conftest import reading
from scene.orbital import OrbitalController, OrbitalTransform, clamp, lerp
from vision.config import OrbitConfig
from vision.interaction import HandReading

DELTA = 1 / 60
ABSENT = HandReading()


@pytest.fixture
def orbit():
    return OrbitalController(OrbitConfig())


def test_lerp_clamps_factor():
    assert lerp(0.0, 10.0, 0.5) == 5.0
    assert lerp(0.0, 10.0, 3.0) == 10.0
    assert lerp(0.0, 10.0, -1.0) == 0.0
    assert clamp(7.0, 0.5, 2.5) == 2.5


def test_starts_at_rest(orbit):
    t = orbit.transform
    assert (t.yaw, t.pitch, t.scale) == (0.0, 0.0, 1.0)
    assert t.target_scale == pytest.approx(1.2)


def test_hand_sets_targets(orbit):
    t = orbit.update(reading(x=1.0, y=0.0, distance=0.2), DELTA)

    assert t.target_yaw == pytest.approx(2 * math.pi)
    assert t.target_pitch == pytest.approx(-math.pi / 2)
    assert t.target_scale == pytest.approx(1.0)


@pytest.mark.parametrize("distance, expected", [
    (0.0, 0.5),
    (0.05, 0.5),
    (0.2, 1.0),
    (0.5, 2.5),
    (0.9, 2.5),
])
def test_pinch_zoom_is_clamped(orbit, distance, expected):
    t = orbit.update(reading(distance=distance), DELTA)
    assert t.target_scale == pytest.approx(expected)


def test_damping_rates(orbit):
    t = orbit.update(reading(x=1.0, y=1.0, distance=0.4), DELTA)

    # Rotation closes delta * 2 of the gap, scale delta * 3
    assert t.yaw == pytest.approx(2 * math.pi * DELTA * 2)
    assert t.pitch == pytest.approx(math.pi / 2 * DELTA * 2)
    assert t.scale == pytest.approx(1.0 + (2.0 - 1.0) * DELTA * 3)


def test_long_frame_does_not_overshoot(orbit):
    t = orbit.update(reading(x=0.0, y=0.5, distance=0.1), 2.0)

    assert t.yaw == pytest.approx(-2 * math.pi)
    assert t.scale == pytest.approx(0.5)


def test_idle_yaw_strictly_increases(orbit):
    previous = orbit.transform.yaw
    for _ in range(600):
        yaw = orbit.update(ABSENT, DELTA).yaw
        assert yaw > previous
        previous = yaw


def test_idle_relaxes_to_rest(orbit):
    orbit.update(reading(x=0.5, y=1.0, distance=0.5), DELTA)

    for _ in range(60 * 20):
        t = orbit.update(ABSENT, DELTA)

    assert t.target_pitch == pytest.approx(0.2, abs=1e-3)
    assert t.target_scale == pytest.approx(1.2, abs=1e-3)
    assert t.pitch == pytest.approx(0.2, abs=1e-2)
    assert t.scale == pytest.approx(1.2, abs=1e-2)


def test_idle_spin_continues_from_last_target(orbit):
    orbit.update(reading(x=0.75), DELTA)
    target = orbit.transform.target_yaw

    t = orbit.update(ABSENT, DELTA)

    assert t.target_yaw == pytest.approx(target + 0.1 * DELTA)


def test_stale_fields_ignored_when_absent(orbit):
    stale = HandReading(present=False, position=(0.0, 0.0))
    t = orbit.update(stale, DELTA)
    assert t.target_yaw == pytest.approx(0.1 * DELTA)


def test_decorative_layers_spin_opposite(orbit):
    for _ in range(60):
        t = orbit.update(ABSENT, DELTA)

    assert t.cloud_yaw == pytest.approx(0.05)
    assert t.wireframe_yaw == pytest.approx(-0.02)


def test_custom_transform_is_used():
    transform = OrbitalTransform(yaw=1.0, target_yaw=1.0)
    orbit = OrbitalController(transform=transform)
    assert orbit.update(ABSENT, 0.0) is transform
    assert transform.yaw == 1.0
