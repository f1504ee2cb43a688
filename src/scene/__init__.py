"""
HoloHand Scene Module

Globe orbit control, region classification and panel dragging.
"""
from .drag import DragController, DragState
from .orbital import OrbitalController, OrbitalTransform
from .regions import RegionLabel, RegionTracker, classify_region

__all__ = [
    'DragController',
    'DragState',
    'OrbitalController',
    'OrbitalTransform',
    'RegionLabel',
    'RegionTracker',
    'classify_region',
]
