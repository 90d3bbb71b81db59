"""
Configuration management for the gesture effects system.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field, fields

from .types import GestureKind


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe HandLandmarker configuration settings."""
    model_path: str = "hand_landmarker.task"
    model_url: str = (
        "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
        "hand_landmarker/float16/1/hand_landmarker.task"
    )
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class ClassifierConfig:
    """Thumbs-up pose thresholds."""
    thumb_extension_ratio: float = 1.3
    extension_score_span: float = 0.5  # ratio above threshold that scores 1.0
    finger_curl_ratio: float = 1.2
    max_thumb_angle_deg: float = 75.0
    min_confidence: float = 0.55
    extension_weight: float = 0.3
    curl_weight: float = 0.4
    orientation_weight: float = 0.3


@dataclass
class StateMachineConfig:
    """Debounce and rate-limit timing, in milliseconds."""
    candidate_duration_ms: float = 100.0
    cooldown_duration_ms: float = 1000.0


@dataclass
class EffectsConfig:
    """Effect lifecycle timing (ms) and size scaling."""
    fade_in_ms: float = 150.0
    hold_ms: float = 1500.0
    fade_out_ms: float = 300.0
    size_fraction: float = 0.14
    min_size_fraction: float = 0.06
    max_size_fraction: float = 0.8
    reference_hand_scale: float = 0.07
    y_offset: float = 0.15
    min_y_offset: float = 0.05
    max_y_offset: float = 0.2

    @property
    def total_ms(self) -> float:
        return self.fade_in_ms + self.hold_ms + self.fade_out_ms


@dataclass
class AudioConfig:
    """Audio clip set and selection policy."""
    clips: Dict[str, str] = field(default_factory=lambda: {
        "default": "assets/audio/thumbs_up.wav",
        "extended": "assets/audio/thumbs_up_extended.wav",
    })
    default_clip: str = "default"
    extended_clip: str = "extended"
    randomize: bool = True
    double_trigger_max_delay_ms: float = 300.0
    volume: float = 1.0


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = False
    show_debug: bool = False
    mirror: bool = True
    window_name: str = "Thumbs Up Effects"


@dataclass
class AppConfig:
    """Which gesture the effect and audio consumers respond to."""
    selected_gesture: GestureKind = GestureKind.THUMBS_UP


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    state_machine: StateMachineConfig = field(default_factory=StateMachineConfig)
    effects: EffectsConfig = field(default_factory=EffectsConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    app: AppConfig = field(default_factory=AppConfig)


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If a setting is out of range
    """
    config_path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    cfg = _dict_to_config(data)
    validate_config(cfg)
    return cfg


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build one config section, keeping dataclass defaults for missing keys."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return cls(**data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    app_data = dict(data.get('app') or {})
    if 'selected_gesture' in app_data:
        app_data['selected_gesture'] = GestureKind(app_data['selected_gesture'])

    audio_data = dict(data.get('audio') or {})
    if 'clips' in audio_data:
        audio_data['clips'] = {str(k): str(v) for k, v in audio_data['clips'].items()}

    return Cfg(
        camera=_section(CameraConfig, data.get('camera')),
        mediapipe=_section(MediaPipeConfig, data.get('mediapipe')),
        classifier=_section(ClassifierConfig, data.get('classifier')),
        state_machine=_section(StateMachineConfig, data.get('state_machine')),
        effects=_section(EffectsConfig, data.get('effects')),
        audio=_section(AudioConfig, audio_data),
        display=_section(DisplayConfig, data.get('display')),
        app=_section(AppConfig, app_data),
    )


def validate_config(cfg: Cfg) -> None:
    """
    Check cross-field constraints that the dataclasses cannot express.

    Raises:
        ValueError: On the first invalid setting found
    """
    sm = cfg.state_machine
    if sm.candidate_duration_ms < 0 or sm.cooldown_duration_ms < 0:
        raise ValueError("state_machine durations must be non-negative")

    fx = cfg.effects
    if min(fx.fade_in_ms, fx.hold_ms, fx.fade_out_ms) < 0:
        raise ValueError("effects phase durations must be non-negative")
    if fx.reference_hand_scale <= 0:
        raise ValueError("effects.reference_hand_scale must be positive")
    if fx.min_size_fraction > fx.max_size_fraction:
        raise ValueError("effects.min_size_fraction exceeds max_size_fraction")
    if fx.min_y_offset > fx.max_y_offset:
        raise ValueError("effects.min_y_offset exceeds max_y_offset")

    audio = cfg.audio
    if not audio.clips:
        raise ValueError("audio.clips must not be empty")
    for key in ('default_clip', 'extended_clip'):
        name = getattr(audio, key)
        if name not in audio.clips:
            raise ValueError(f"audio.{key} '{name}' is not in audio.clips")
    if audio.double_trigger_max_delay_ms < 0:
        raise ValueError("audio.double_trigger_max_delay_ms must be non-negative")

    clf = cfg.classifier
    if clf.finger_curl_ratio <= 0 or clf.max_thumb_angle_deg <= 0 or clf.extension_score_span <= 0:
        raise ValueError("classifier thresholds must be positive")
