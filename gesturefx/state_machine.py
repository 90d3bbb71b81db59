"""
Per-hand debouncing state machine for thumbs-up detections.

IDLE -> CANDIDATE -> CONFIRMED -> COOLDOWN -> IDLE

CANDIDATE filters out single-frame flicker; COOLDOWN stops a held pose from
re-triggering. CONFIRMED lasts exactly one tick and is the only transition
that emits an event.
"""
import logging
from dataclasses import replace
from typing import Optional

from .config import StateMachineConfig
from .types import GesturePhase, GestureState, GestureTickResult, Handedness, ThumbsUpDetection


logger = logging.getLogger(__name__)

_DEFAULT_CFG = StateMachineConfig()


def create_initial_state(hand: Handedness) -> GestureState:
    """Create the starting state for one hand slot."""
    return GestureState(
        phase=GesturePhase.IDLE,
        phase_started_at=0.0,
        confirmed_data=None,
        hand=hand,
    )


def tick_gesture_state(state: GestureState,
                       detection: Optional[ThumbsUpDetection],
                       now: float,
                       cfg: Optional[StateMachineConfig] = None) -> GestureTickResult:
    """
    Advance one hand's state machine by a frame.

    Pure: the only clock is the `now` argument.

    Args:
        state: Current state for the hand
        detection: This frame's detection, or None when the hand is absent.
            A detection with detected=False is treated as None.
        now: Current timestamp in milliseconds
        cfg: Timing settings. Defaults to StateMachineConfig()

    Returns:
        GestureTickResult with the next state; event is "confirmed" only on
        the tick that enters CONFIRMED
    """
    cfg = cfg or _DEFAULT_CFG
    if detection is not None and not detection.detected:
        detection = None
    elapsed = now - state.phase_started_at

    if state.phase is GesturePhase.IDLE:
        if detection is not None:
            return _enter(state, GesturePhase.CANDIDATE, now)
        return GestureTickResult(state)

    elif state.phase is GesturePhase.CANDIDATE:
        if detection is None:
            return _enter(state, GesturePhase.IDLE, now, confirmed_data=None)
        if elapsed >= cfg.candidate_duration_ms:
            return _enter(state, GesturePhase.CONFIRMED, now,
                          confirmed_data=detection, event="confirmed")
        return GestureTickResult(state)

    elif state.phase is GesturePhase.CONFIRMED:
        # cooldown is timed from entering CONFIRMED, so the timer is kept
        return _enter(state, GesturePhase.COOLDOWN, state.phase_started_at)

    elif state.phase is GesturePhase.COOLDOWN:
        if elapsed >= cfg.cooldown_duration_ms:
            return _enter(state, GesturePhase.IDLE, now, confirmed_data=None)
        return GestureTickResult(state)

    raise ValueError(f"Unknown gesture phase: {state.phase!r}")


_KEEP = object()


def _enter(state: GestureState, phase: GesturePhase, started_at: float,
           confirmed_data=_KEEP, event=None) -> GestureTickResult:
    changes = {'phase': phase, 'phase_started_at': started_at}
    if confirmed_data is not _KEEP:
        changes['confirmed_data'] = confirmed_data
    logger.debug("%s hand: %s -> %s (phase timer %.1f ms)", state.hand, state.phase.value, phase.value,
                 started_at)
    return GestureTickResult(replace(state, **changes), event)
