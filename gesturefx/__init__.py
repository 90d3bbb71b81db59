"""
Thumbs-Up Gesture Effects

Turns per-frame MediaPipe hand landmarks into debounced thumbs-up events and
drives short-lived visual effects and audio clips from them.
"""

__version__ = "0.1.0"

from .types import (
    AudioBackendProto,
    EffectInstance,
    EffectPhase,
    GestureKind,
    GesturePhase,
    GestureSnapshot,
    GestureState,
    GestureTickResult,
    HandSnapshot,
    ThumbsUpDetection,
    TrackedHand,
)
from .config import load_config, Cfg
from .classifier import classify_thumbs_up
from .state_machine import create_initial_state, tick_gesture_state
from .gestures import GestureProcessor
from .effects import EffectManager, tick_effect_lifecycle
from .audio import AudioTrigger, select_clip
from .audio_mock import MockAudioBackend
from .pipeline import EffectsPipeline, TickResult

__all__ = [
    "AudioBackendProto",
    "EffectInstance",
    "EffectPhase",
    "GestureKind",
    "GesturePhase",
    "GestureSnapshot",
    "GestureState",
    "GestureTickResult",
    "HandSnapshot",
    "ThumbsUpDetection",
    "TrackedHand",
    "load_config",
    "Cfg",
    "classify_thumbs_up",
    "create_initial_state",
    "tick_gesture_state",
    "GestureProcessor",
    "EffectManager",
    "tick_effect_lifecycle",
    "AudioTrigger",
    "select_clip",
    "MockAudioBackend",
    "EffectsPipeline",
    "TickResult",
]
