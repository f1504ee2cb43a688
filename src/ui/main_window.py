"""
Main window - camera preview, globe, floating panel and HUD layers.
"""
import logging
from typing import Optional

import numpy as np
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap
from PyQt5.QtWidgets import QApplication, QLabel, QMainWindow, QWidget

from scene.drag import DragController
from scene.globe_view import GlobeView
from scene.orbital import OrbitalController
from scene.regions import RegionLabel, RegionTracker
from vision.config import Config
from vision.frame_loop import FrameLoop, FrameTick
from vision.interaction import InteractionStore
from vision.landmark_classifier import Viewport

from .hud import HudOverlay
from .panel import DraggablePanel
from .scheduler import QtFrameScheduler

logger = logging.getLogger(__name__)


class HoloWindow(QMainWindow):
    """
    Hosts the render loops.

    The globe loop (orbit + region) and the panel loop (drag) each run on
    their own display-rate timer and only read the interaction store.
    """

    viewport_changed = pyqtSignal(object)  # Emits Viewport

    def __init__(self, config: Config, store: InteractionStore, parent=None):
        super().__init__(parent)
        self._config = config
        self._store = store

        self._orbit = OrbitalController(config.orbit)
        self._regions = RegionTracker(config.orbit.region_interval, on_change=self._handle_region)
        self._drag: Optional[DragController] = None

        self._setup_window()
        self._setup_ui()

        fps = config.ui.display_fps
        self._globe_loop = FrameLoop(self._globe_step, QtFrameScheduler.for_fps(fps, self), name="globe")
        self._panel_loop = FrameLoop(self._panel_step, QtFrameScheduler.for_fps(fps, self), name="panel")

    def _setup_window(self):
        self.setWindowTitle("HoloHand")
        self.setObjectName("HoloWindow")
        self.setStyleSheet("#HoloWindow, #CentralWidget { background-color: black; }")
        self.setCursor(Qt.BlankCursor)

    def _setup_ui(self):
        """Build the layers, back to front."""
        central = QWidget()
        central.setObjectName("CentralWidget")
        self.setCentralWidget(central)

        # 1. Camera preview
        self.preview = QLabel(central)
        self.preview.setObjectName("CameraPreview")
        self.preview.setScaledContents(True)
        self.preview.setVisible(self._config.ui.show_preview)

        # 2. Globe
        self.globe = GlobeView(central)

        # 3. Floating panel
        self.panel = DraggablePanel(central)
        self.panel.set_region(RegionLabel.SCANNING.value)

        # 4. HUD
        self.hud = HudOverlay(self._store, central)

    @property
    def viewport(self) -> Viewport:
        central = self.centralWidget()
        return Viewport(central.width(), central.height())

    def resizeEvent(self, event):
        """Keep every layer full size and report the new viewport."""
        super().resizeEvent(event)
        rect = self.centralWidget().rect()
        for layer in (self.preview, self.globe, self.hud):
            layer.setGeometry(rect)
        self.panel.raise_()
        self.hud.raise_()
        self.viewport_changed.emit(self.viewport)

    def start(self):
        """Place the panel and start the render loops."""
        if self._drag is None:
            viewport = self.viewport
            self._drag = DragController(
                position=(viewport.width - self._config.panel.margin_right,
                          self._config.panel.margin_top),
                follow=self._config.panel.follow,
            )
            self.panel.set_position(self._drag.position)
        self._globe_loop.start()
        self._panel_loop.start()
        self.hud.start()
        logger.info("Render loops started at %d fps", self._config.ui.display_fps)

    def shutdown(self):
        self._globe_loop.stop()
        self._panel_loop.stop()
        self.hud.stop()

    def closeEvent(self, event):
        self.shutdown()
        super().closeEvent(event)

    def _globe_step(self, tick: FrameTick):
        transform = self._orbit.update(self._store.snapshot.control, tick.delta)
        self._regions.update(transform.yaw, tick.elapsed, tick.delta)
        self.globe.set_transform(transform)

    def _panel_step(self, tick: FrameTick):
        position = self._drag.update(self._store.snapshot.ui)
        self.panel.set_position(position)
        self.panel.set_engaged(self._drag.engaged)

    def _handle_region(self, region: RegionLabel):
        self.panel.set_region(region.value)

    def set_camera_frame(self, frame: np.ndarray):
        """
        Update the camera preview.

        Args:
            frame: BGR numpy array, already mirrored
        """
        if frame is None:
            self.preview.clear()
            return

        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.preview.setPixmap(QPixmap.fromImage(qimg))

    def show_for_config(self):
        if self._config.ui.fullscreen:
            self.showFullScreen()
            return
        screen = QApplication.primaryScreen()
        if screen is not None:
            geo = screen.availableGeometry()
            self.resize(int(geo.width() * 0.8), int(geo.height() * 0.8))
        self.show()
