"""
HoloHand Vision Module

Hand tracking with MediaPipe and the shared interaction state.
"""
from .config import Config, load_config
from .frame_loop import FrameLoop, FrameScheduler, FrameTick
from .interaction import (
    Handedness,
    HandReading,
    HandSlot,
    InteractionSnapshot,
    InteractionStore,
    PinchState,
)
from .landmark_classifier import DetectedHand, LandmarkClassifier, Viewport
from .log import setup_logging

__all__ = [
    'Config',
    'load_config',
    'FrameLoop',
    'FrameScheduler',
    'FrameTick',
    'Handedness',
    'HandReading',
    'HandSlot',
    'InteractionSnapshot',
    'InteractionStore',
    'PinchState',
    'DetectedHand',
    'LandmarkClassifier',
    'Viewport',
    'setup_logging',
]
