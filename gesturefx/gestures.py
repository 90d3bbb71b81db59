"""
Per-frame gesture processing: classify each tracked hand, tick both hands'
state machines and publish a snapshot for downstream consumers.
"""
import logging
from typing import Dict, Iterable, Optional

from .classifier import classify_thumbs_up
from .config import Cfg
from .state_machine import create_initial_state, tick_gesture_state
from .types import (
    GestureSnapshot,
    GestureState,
    Handedness,
    HandSnapshot,
    ThumbsUpDetection,
    TrackedHand,
)


logger = logging.getLogger(__name__)

_SWAPPED: Dict[str, Handedness] = {"Left": "Right", "Right": "Left"}


class GestureProcessor:
    """
    Main gesture processor that owns the left and right hand state machines.

    Call process_frame() once per frame, even when no hands are tracked, so
    phase timers keep advancing.
    """

    def __init__(self, cfg: Cfg, swap_handedness: bool = False):
        """
        Initialize gesture processor with configuration.

        Args:
            cfg: Application configuration
            swap_handedness: Swap Left/Right labels, for input that is not
                mirrored the way the tracker expects
        """
        self.cfg = cfg
        self.swap_handedness = swap_handedness
        self.left_state: GestureState = create_initial_state("Left")
        self.right_state: GestureState = create_initial_state("Right")
        self._snapshot: Optional[GestureSnapshot] = None

    @property
    def snapshot(self) -> Optional[GestureSnapshot]:
        """Snapshot published by the latest process_frame() call."""
        return self._snapshot

    def reset(self) -> None:
        """Return both hands to IDLE and forget the last snapshot."""
        self.left_state = create_initial_state("Left")
        self.right_state = create_initial_state("Right")
        self._snapshot = None

    def process_frame(self, hands: Optional[Iterable[TrackedHand]], t_now: float) -> GestureSnapshot:
        """
        Process a frame and return the gesture snapshot.

        Args:
            hands: Hands reported by the tracker this frame (None or empty if none).
                A hand with a malformed landmark set is logged and treated as absent.
            t_now: Current timestamp in milliseconds

        Returns:
            GestureSnapshot for both hands
        """
        detections: Dict[str, Optional[ThumbsUpDetection]] = {"Left": None, "Right": None}

        for hand in hands or ():
            label = _SWAPPED.get(hand.handedness) if self.swap_handedness else hand.handedness
            if label not in detections:
                logger.debug("Ignoring hand with unknown handedness %r", hand.handedness)
                continue
            try:
                detections[label] = classify_thumbs_up(
                    hand.landmarks, hand.world_landmarks, self.cfg.classifier)
            except ValueError as e:
                logger.warning("Skipping malformed %s hand: %s", label, e)
                detections[label] = None

        left_tick = tick_gesture_state(
            self.left_state, _detected_only(detections["Left"]), t_now, self.cfg.state_machine)
        right_tick = tick_gesture_state(
            self.right_state, _detected_only(detections["Right"]), t_now, self.cfg.state_machine)

        self.left_state = left_tick.state
        self.right_state = right_tick.state

        for tick in (left_tick, right_tick):
            if tick.event == "confirmed":
                logger.info("👍 %s hand thumbs-up confirmed (confidence %.2f)",
                            tick.state.hand, tick.state.confirmed_data.confidence)

        self._snapshot = GestureSnapshot(
            left=HandSnapshot(left_tick.state, detections["Left"], left_tick.event),
            right=HandSnapshot(right_tick.state, detections["Right"], right_tick.event),
            timestamp=t_now,
        )
        return self._snapshot


def _detected_only(detection: Optional[ThumbsUpDetection]) -> Optional[ThumbsUpDetection]:
    return detection if detection is not None and detection.detected else None
