"""
Config loader for HoloHand.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    model_path: Optional[str] = None  # None = models/hand_landmarker.task
    num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    use_gpu: bool = True


@dataclass
class GestureConfig:
    pinch_threshold: float = 0.05  # Normalized thumb-index distance, exclusive


@dataclass
class OrbitConfig:
    yaw_range: float = 4.0          # x swing in multiples of pi
    pitch_range: float = 1.0        # y swing in multiples of pi
    zoom_gain: float = 5.0
    min_scale: float = 0.5
    max_scale: float = 2.5
    rotation_damping: float = 2.0   # lerp factor per second
    scale_damping: float = 3.0
    idle_spin: float = 0.1          # rad/s when no hand
    rest_pitch: float = 0.2
    rest_scale: float = 1.2
    cloud_spin: float = 0.05
    wireframe_spin: float = 0.02
    region_interval: float = 0.5    # Seconds between region updates


@dataclass
class PanelConfig:
    follow: float = 0.2             # Blend per display frame
    margin_right: int = 350
    margin_top: int = 150


@dataclass
class UIConfig:
    display_fps: int = 60
    show_preview: bool = True
    fullscreen: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    orbit: OrbitConfig = field(default_factory=OrbitConfig)
    panel: PanelConfig = field(default_factory=PanelConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        orbit=_dict_to_dataclass(OrbitConfig, data.get('orbit')),
        panel=_dict_to_dataclass(PanelConfig, data.get('panel')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
        logging=_dict_to_dataclass(LoggingConfig, data.get('logging')),
    )
