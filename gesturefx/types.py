"""
Type definitions for the thumbs-up gesture effects system.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Literal, Optional, Protocol, Tuple, runtime_checkable


Handedness = Literal["Left", "Right"]
GestureEvent = Literal["confirmed"]

Point = Tuple[float, float, float]


class GestureKind(str, Enum):
    """Gesture classes an effect can be bound to."""
    NONE = "none"
    THUMBS_UP = "thumbs-up"


class GesturePhase(str, Enum):
    """Phase of a hand's gesture state machine."""
    IDLE = "IDLE"
    CANDIDATE = "CANDIDATE"
    CONFIRMED = "CONFIRMED"
    COOLDOWN = "COOLDOWN"


class EffectPhase(str, Enum):
    """Lifecycle phase of a spawned effect instance."""
    FADE_IN = "fade-in"
    HOLD = "hold"
    FADE_OUT = "fade-out"
    DONE = "done"


@dataclass(frozen=True)
class ThumbsUpDetection:
    """Single-frame thumbs-up classification result for one hand."""
    detected: bool
    confidence: float
    thumb_tip_position: Tuple[float, float]
    palm_angle_deg: float  # palm rotation, 0 = facing camera, normalized 0-360
    thumb_tilt_deg: float  # signed, positive = leaning toward +x
    hand_scale: float  # wrist to middle MCP in normalized coords, larger = closer


@dataclass(frozen=True)
class GestureState:
    """Per-hand gesture state tracked across frames."""
    phase: GesturePhase
    phase_started_at: float
    confirmed_data: Optional[ThumbsUpDetection]
    hand: Handedness


@dataclass(frozen=True)
class GestureTickResult:
    """Result of advancing one hand's state machine by a frame."""
    state: GestureState
    event: Optional[GestureEvent] = None  # set only on the tick CONFIRMED is entered


@dataclass(frozen=True)
class HandSnapshot:
    """State, raw detection and event for one hand on one tick."""
    state: GestureState
    detection: Optional[ThumbsUpDetection]
    event: Optional[GestureEvent]

    @property
    def confirmed(self) -> bool:
        return self.event == "confirmed" and self.state.confirmed_data is not None


@dataclass(frozen=True)
class GestureSnapshot:
    """Aggregate gesture info for both hands, rebuilt every tick."""
    left: HandSnapshot
    right: HandSnapshot
    timestamp: float

    def hands(self) -> Iterator[HandSnapshot]:
        yield self.left
        yield self.right


@dataclass
class EffectInstance:
    """A single active effect. All coordinates are normalized 0-1."""
    id: int
    x: float  # fixed at spawn
    y: float  # fixed at spawn (thumb tip)
    size_fraction: float  # fraction of frame height, frozen at spawn
    y_offset: float  # how far above the thumb tip to draw, frozen at spawn
    spawn_time: float
    hand: Handedness
    phase: EffectPhase = EffectPhase.FADE_IN
    opacity: float = 0.0


@dataclass
class TrackedHand:
    """One hand reported by the landmark tracker for a single frame."""
    handedness: Handedness
    landmarks: List[Point] = field(default_factory=list)  # normalized image coords
    world_landmarks: List[Point] = field(default_factory=list)  # meters


@runtime_checkable
class AudioBackendProto(Protocol):
    """Abstract protocol for backends that play audio clips."""

    def play(self, clip: str) -> None:
        """Start playback of the given clip. Overlapping calls may overlap audibly."""
        ...
