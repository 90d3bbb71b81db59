"""
Lifecycle management for effect instances spawned by confirmed gestures.
"""
import logging
from typing import List, Optional, Tuple

from .config import EffectsConfig
from .geometry import clamp
from .types import EffectInstance, EffectPhase, GestureKind, GestureSnapshot, HandSnapshot


logger = logging.getLogger(__name__)


def tick_effect_lifecycle(instance: EffectInstance, now: float, cfg: EffectsConfig) -> None:
    """
    Advance an effect instance's phase and opacity in place.

    Phase and opacity depend only on the time elapsed since spawn.

    Args:
        instance: The effect instance to tick
        now: Current timestamp in milliseconds
        cfg: Phase durations
    """
    elapsed = now - instance.spawn_time
    hold_end = cfg.fade_in_ms + cfg.hold_ms

    if elapsed < cfg.fade_in_ms:
        instance.phase = EffectPhase.FADE_IN
        instance.opacity = clamp(elapsed / cfg.fade_in_ms, 0.0, 1.0)
    elif elapsed < hold_end:
        instance.phase = EffectPhase.HOLD
        instance.opacity = 1.0
    elif elapsed < cfg.total_ms:
        instance.phase = EffectPhase.FADE_OUT
        instance.opacity = 1.0 - (elapsed - hold_end) / cfg.fade_out_ms
    else:
        instance.phase = EffectPhase.DONE
        instance.opacity = 0.0


class EffectManager:
    """
    Owns the active effect instances.

    Each update() spawns one instance per confirmed hand, advances every
    instance and drops the ones that are done.
    """

    def __init__(self, cfg: EffectsConfig,
                 selected_gesture: GestureKind = GestureKind.THUMBS_UP):
        self.cfg = cfg
        self.selected_gesture = selected_gesture
        self._instances: List[EffectInstance] = []
        self._next_id = 0

    @property
    def instances(self) -> Tuple[EffectInstance, ...]:
        """Active instances, oldest first. Read-only view for renderers."""
        return tuple(self._instances)

    def select_gesture(self, gesture: GestureKind) -> None:
        self.selected_gesture = gesture

    def clear(self) -> None:
        self._instances = []

    def update(self, snapshot: Optional[GestureSnapshot], now: float) -> Tuple[EffectInstance, ...]:
        """
        Spawn, advance and prune effect instances for one frame.

        Args:
            snapshot: Latest gesture snapshot, or None before the first frame
            now: Current timestamp in milliseconds

        Returns:
            The surviving instances
        """
        if snapshot is not None and self.selected_gesture is GestureKind.THUMBS_UP:
            for hand in snapshot.hands():
                if hand.confirmed:
                    self._instances.append(self._spawn(hand, now))

        for instance in self._instances:
            tick_effect_lifecycle(instance, now, self.cfg)

        self._instances = [inst for inst in self._instances if inst.phase is not EffectPhase.DONE]
        return self.instances

    def _spawn(self, hand: HandSnapshot, now: float) -> EffectInstance:
        data = hand.state.confirmed_data
        scale_ratio = data.hand_scale / self.cfg.reference_hand_scale

        instance = EffectInstance(
            id=self._next_id,
            x=data.thumb_tip_position[0],
            y=data.thumb_tip_position[1],
            size_fraction=clamp(self.cfg.size_fraction * scale_ratio,
                                self.cfg.min_size_fraction, self.cfg.max_size_fraction),
            y_offset=clamp(self.cfg.y_offset * scale_ratio,
                           self.cfg.min_y_offset, self.cfg.max_y_offset),
            spawn_time=now,
            hand=hand.state.hand,
        )
        self._next_id += 1
        logger.debug("Spawned effect %d for %s hand at (%.3f, %.3f), size %.3f",
                     instance.id, instance.hand, instance.x, instance.y, instance.size_fraction)
        return instance
