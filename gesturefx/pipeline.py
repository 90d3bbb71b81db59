"""
One-tick wiring of gesture processing and its downstream consumers.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .audio import AudioTrigger
from .config import Cfg
from .effects import EffectManager
from .gestures import GestureProcessor
from .types import AudioBackendProto, EffectInstance, GestureKind, GestureSnapshot, TrackedHand


@dataclass(frozen=True)
class TickResult:
    """Everything renderers need after one tick."""
    snapshot: GestureSnapshot
    instances: Tuple[EffectInstance, ...]
    clip: Optional[str]


class EffectsPipeline:
    """
    Runs classification, both state machines, the effect manager and the audio
    trigger, in that order, once per tick.

    The pipeline has no scheduler of its own; callers invoke tick() from
    whatever loop drives their frames.
    """

    def __init__(self, cfg: Cfg, audio_backend: AudioBackendProto,
                 swap_handedness: bool = False):
        self.cfg = cfg
        self.processor = GestureProcessor(cfg, swap_handedness=swap_handedness)
        self.effects = EffectManager(cfg.effects, cfg.app.selected_gesture)
        self.audio = AudioTrigger(cfg.audio, audio_backend, cfg.app.selected_gesture)

    def select_gesture(self, gesture: GestureKind) -> None:
        self.effects.select_gesture(gesture)
        self.audio.selected_gesture = gesture

    def tick(self, hands: Optional[Iterable[TrackedHand]], t_now: float) -> TickResult:
        """
        Advance everything by one frame.

        Args:
            hands: Hands tracked this frame (None or empty if none)
            t_now: Current timestamp in milliseconds

        Returns:
            TickResult with the snapshot, live effect instances and the clip
            requested this tick (None if no clip was played)
        """
        snapshot = self.processor.process_frame(hands, t_now)
        instances = self.effects.update(snapshot, t_now)
        clip = self.audio.update(snapshot, t_now)
        return TickResult(snapshot=snapshot, instances=instances, clip=clip)
