"""
Holographic globe widget.
Paints a wireframe sphere with the orbital transform applied.
"""
import math
from typing import Optional

import numpy as np
from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QColor, QPainter, QPen, QRadialGradient
from PyQt5.QtWidgets import QWidget

from .orbital import OrbitalTransform

CYAN = QColor(0, 255, 255)


def _circle(n: int, radius: float = 1.0) -> np.ndarray:
    """Unit circle in the XZ plane as (n, 3) points, closed."""
    a = np.linspace(0.0, 2 * math.pi, n + 1)
    return np.stack([np.cos(a) * radius, np.zeros_like(a), np.sin(a) * radius], axis=1)


def _sphere_lines(meridians: int, parallels: int, segments: int, radius: float = 1.0):
    """Meridian and parallel polylines of a sphere."""
    lines = []
    ring = _circle(segments)
    for i in range(meridians):
        a = math.pi * i / meridians
        # Meridian: circle in the XY plane rotated around Y
        pts = np.stack([ring[:, 0] * math.cos(a), ring[:, 2], ring[:, 0] * math.sin(a)], axis=1)
        lines.append(pts * radius)
    for j in range(1, parallels):
        lat = math.pi * j / parallels - math.pi / 2
        pts = ring * math.cos(lat)
        pts[:, 1] = math.sin(lat)
        lines.append(pts * radius)
    return lines


def rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


class GlobeView(QWidget):
    """
    Transparent widget drawing the globe.

    The core sphere and the orbital rings follow yaw/pitch/scale; the outer
    wireframe and the cloud band add their own decorative spin on top.
    """

    def __init__(self, parent=None, center: tuple = (0.3, 0.5)):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setObjectName("GlobeView")

        self._center = center
        self._transform: Optional[OrbitalTransform] = None

        self._core = _sphere_lines(meridians=12, parallels=9, segments=48)
        self._shell = _sphere_lines(meridians=8, parallels=6, segments=32, radius=1.05)
        self._clouds = [_circle(64, 1.02) @ rotation_x(0.4).T]
        self._rings = [
            _circle(96, 1.4),
            _circle(96, 1.6) @ rotation_x(math.pi / 2.2 - math.pi / 2).T,
        ]

    def set_transform(self, transform: OrbitalTransform) -> None:
        self._transform = transform
        self.update()

    def paintEvent(self, event):
        t = self._transform
        if t is None:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        w, h = self.width(), self.height()
        cx, cy = w * self._center[0], h * self._center[1]
        radius = min(w, h) * 0.22 * t.scale

        # Glow
        glow = QRadialGradient(QPointF(cx, cy), radius * 1.3)
        glow.setColorAt(0.0, QColor(0, 80, 90, 90))
        glow.setColorAt(1.0, QColor(0, 0, 0, 0))
        painter.setBrush(glow)
        painter.setPen(Qt.NoPen)
        painter.drawEllipse(QPointF(cx, cy), radius * 1.3, radius * 1.3)

        group = rotation_x(t.pitch) @ rotation_y(t.yaw)
        layers = [
            (self._rings, group, 60, 1.0),
            (self._core, group, 200, 1.2),
            (self._shell, group @ rotation_y(t.wireframe_yaw), 50, 1.0),
            (self._clouds, group @ rotation_y(t.cloud_yaw), 140, 2.0),
        ]
        for lines, matrix, alpha, width in layers:
            self._draw_lines(painter, lines, matrix, cx, cy, radius, alpha, width)

    def _draw_lines(self, painter: QPainter, lines, matrix: np.ndarray,
                    cx: float, cy: float, radius: float, alpha: int, width: float):
        front = QPen(QColor(CYAN.red(), CYAN.green(), CYAN.blue(), alpha))
        front.setWidthF(width)
        back = QPen(QColor(CYAN.red(), CYAN.green(), CYAN.blue(), alpha // 4))
        back.setWidthF(width * 0.6)

        for pts in lines:
            p = pts @ matrix.T
            sx = cx + p[:, 0] * radius
            sy = cy - p[:, 1] * radius
            visible = p[:, 2] >= 0.0
            for k in range(len(p) - 1):
                painter.setPen(front if visible[k] else back)
                painter.drawLine(QPointF(sx[k], sy[k]), QPointF(sx[k + 1], sy[k + 1]))
