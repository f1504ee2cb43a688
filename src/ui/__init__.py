"""
HoloHand UI Module

PyQt5 window, floating panel and HUD.
"""

from .hud import HudOverlay
from .main_window import HoloWindow
from .panel import DraggablePanel
from .scheduler import QtFrameScheduler

__all__ = [
    'HudOverlay',
    'HoloWindow',
    'DraggablePanel',
    'QtFrameScheduler',
]
