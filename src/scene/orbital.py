"""
Orbital controller for the globe.
Maps the control hand to yaw/pitch/zoom targets and damps toward them.
"""
import math
from dataclasses import dataclass
from typing import Optional

from vision.config import OrbitConfig
from vision.interaction import HandReading


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def lerp(current: float, target: float, t: float) -> float:
    """Move current toward target by fraction t (clamped to 0-1)."""
    return current + (target - current) * clamp(t, 0.0, 1.0)


@dataclass
class OrbitalTransform:
    """Globe transform plus the targets it is damped toward."""
    yaw: float = 0.0
    pitch: float = 0.0
    scale: float = 1.0
    target_yaw: float = 0.0
    target_pitch: float = 0.0
    target_scale: float = 1.2
    cloud_yaw: float = 0.0      # Decorative, forward
    wireframe_yaw: float = 0.0  # Decorative, backward


class OrbitalController:
    """
    Three-channel tracking filter driven by the control hand.

    With a hand present, x spins the globe (+/- 2 pi), y tilts it (+/- pi/2)
    and pinch distance zooms. Without one, the globe idles: yaw keeps
    advancing while pitch and scale relax to their resting values.
    """

    def __init__(self, config: Optional[OrbitConfig] = None,
                 transform: Optional[OrbitalTransform] = None):
        self._config = config or OrbitConfig()
        self._transform = transform or OrbitalTransform(target_scale=self._config.rest_scale)

    @property
    def transform(self) -> OrbitalTransform:
        return self._transform

    def update(self, reading: HandReading, delta: float) -> OrbitalTransform:
        """Advance one display frame."""
        cfg = self._config
        t = self._transform

        if reading.present:
            t.target_yaw = (reading.x - 0.5) * cfg.yaw_range * math.pi
            t.target_pitch = (reading.y - 0.5) * cfg.pitch_range * math.pi
            t.target_scale = clamp(reading.pinch.distance * cfg.zoom_gain,
                                   cfg.min_scale, cfg.max_scale)
        else:
            t.target_yaw += delta * cfg.idle_spin
            t.target_pitch = lerp(t.target_pitch, cfg.rest_pitch, delta)
            t.target_scale = lerp(t.target_scale, cfg.rest_scale, delta)

        t.yaw = lerp(t.yaw, t.target_yaw, delta * cfg.rotation_damping)
        t.pitch = lerp(t.pitch, t.target_pitch, delta * cfg.rotation_damping)
        t.scale = lerp(t.scale, t.target_scale, delta * cfg.scale_damping)

        t.cloud_yaw += delta * cfg.cloud_spin
        t.wireframe_yaw -= delta * cfg.wireframe_spin

        return t
