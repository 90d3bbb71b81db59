"""
Test cases for the per-hand gesture state machine with synthetic timestamps.
"""
import unittest
import sys
from pathlib import Path
from typing import List, Optional, Tuple

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesturefx.config import StateMachineConfig
from gesturefx.state_machine import create_initial_state, tick_gesture_state
from gesturefx.types import GesturePhase, GestureState, ThumbsUpDetection


CFG = StateMachineConfig(candidate_duration_ms=100.0, cooldown_duration_ms=1000.0)
FRAME_MS = 10.0


def detection(confidence: float = 0.9, detected: bool = True) -> ThumbsUpDetection:
    return ThumbsUpDetection(
        detected=detected,
        confidence=confidence if detected else 0.0,
        thumb_tip_position=(0.5, 0.4),
        palm_angle_deg=0.0,
        thumb_tilt_deg=0.0,
        hand_scale=0.07,
    )


def run(state: GestureState, frames: List[Tuple[float, Optional[ThumbsUpDetection]]]):
    """Feed (timestamp, detection) pairs and collect (timestamp, state, event)."""
    trace = []
    for t, det in frames:
        result = tick_gesture_state(state, det, t, CFG)
        state = result.state
        trace.append((t, state, result.event))
    return state, trace


def frames(start: float, stop: float, det: Optional[ThumbsUpDetection]):
    """Frames every FRAME_MS from start up to and including stop."""
    count = int(round((stop - start) / FRAME_MS)) + 1
    return [(start + i * FRAME_MS, det) for i in range(count)]


class TestInitialState(unittest.TestCase):

    def test_initial_state(self):
        state = create_initial_state("Left")
        self.assertEqual(state.phase, GesturePhase.IDLE)
        self.assertEqual(state.phase_started_at, 0.0)
        self.assertIsNone(state.confirmed_data)
        self.assertEqual(state.hand, "Left")

    def test_idle_without_detection(self):
        state = create_initial_state("Right")
        result = tick_gesture_state(state, None, 500.0, CFG)
        self.assertIs(result.state, state)
        self.assertIsNone(result.event)


class TestDebounce(unittest.TestCase):
    """CANDIDATE phase filtering."""

    def test_detection_enters_candidate(self):
        result = tick_gesture_state(create_initial_state("Right"), detection(), 40.0, CFG)
        self.assertEqual(result.state.phase, GesturePhase.CANDIDATE)
        self.assertEqual(result.state.phase_started_at, 40.0)
        self.assertIsNone(result.event)

    def test_negative_detection_counts_as_absent(self):
        result = tick_gesture_state(create_initial_state("Right"), detection(detected=False), 40.0, CFG)
        self.assertEqual(result.state.phase, GesturePhase.IDLE)

    def test_drop_one_tick_short_of_candidate_duration(self):
        """Held for the debounce window minus one tick, then dropped: no event."""
        state, trace = run(create_initial_state("Right"),
                           frames(0.0, 90.0, detection()) + [(100.0, None)])

        self.assertTrue(all(event is None for _, _, event in trace))
        self.assertEqual(state.phase, GesturePhase.IDLE)
        self.assertEqual(state.phase_started_at, 100.0)
        self.assertIsNone(state.confirmed_data)

    def test_confirms_on_first_tick_meeting_duration(self):
        state, trace = run(create_initial_state("Right"), frames(0.0, 100.0, detection()))

        events = [(t, event) for t, _, event in trace if event]
        self.assertEqual(events, [(100.0, "confirmed")])
        self.assertEqual(state.phase, GesturePhase.CONFIRMED)
        self.assertEqual(state.confirmed_data, detection())

    def test_never_skips_candidate(self):
        _, trace = run(create_initial_state("Right"), frames(0.0, 300.0, detection()))
        phases = [s.phase for _, s, _ in trace]
        self.assertEqual(phases[0], GesturePhase.CANDIDATE)
        self.assertLess(phases.index(GesturePhase.CANDIDATE), phases.index(GesturePhase.CONFIRMED))


class TestCooldown(unittest.TestCase):
    """CONFIRMED flash and COOLDOWN rate limiting."""

    def test_confirmed_lasts_one_tick(self):
        state, _ = run(create_initial_state("Left"), frames(0.0, 100.0, detection()))
        result = tick_gesture_state(state, None, 110.0, CFG)

        self.assertEqual(result.state.phase, GesturePhase.COOLDOWN)
        self.assertIsNone(result.event)
        self.assertEqual(result.state.confirmed_data, detection())

    def test_single_event_per_activation(self):
        """A pose held through cooldown does not trigger again."""
        state, trace = run(create_initial_state("Left"), frames(0.0, 1090.0, detection()))

        events = [t for t, _, event in trace if event]
        self.assertEqual(events, [100.0])
        self.assertEqual(state.phase, GesturePhase.COOLDOWN)

    def test_cooldown_timed_from_confirmation(self):
        state, trace = run(create_initial_state("Left"), frames(0.0, 1100.0, detection()))

        self.assertEqual(state.phase, GesturePhase.IDLE)
        self.assertEqual(state.phase_started_at, 1100.0)
        self.assertIsNone(state.confirmed_data)
        phase_at = {t: s.phase for t, s, _ in trace}
        self.assertEqual(phase_at[1090.0], GesturePhase.COOLDOWN)

    def test_held_pose_retriggers_after_full_cycle(self):
        _, trace = run(create_initial_state("Left"), frames(0.0, 1300.0, detection()))

        events = [t for t, _, event in trace if event]
        # IDLE at 1100, CANDIDATE at 1110, CONFIRMED at 1210
        self.assertEqual(events, [100.0, 1210.0])

    def test_cooldown_ignores_detection_changes(self):
        state, _ = run(create_initial_state("Left"), frames(0.0, 110.0, detection()))
        flicker = [(t, detection() if i % 2 else None)
                   for i, t in enumerate(range(120, 1100, 10))]
        state, trace = run(state, flicker)

        self.assertTrue(all(s.phase is GesturePhase.COOLDOWN for _, s, _ in trace))
        self.assertTrue(all(event is None for _, _, event in trace))

    def test_custom_timing(self):
        cfg = StateMachineConfig(candidate_duration_ms=0.0, cooldown_duration_ms=50.0)
        state = create_initial_state("Right")
        state = tick_gesture_state(state, detection(), 0.0, cfg).state
        result = tick_gesture_state(state, detection(), 10.0, cfg)
        self.assertEqual(result.event, "confirmed")
        state = tick_gesture_state(result.state, None, 20.0, cfg).state
        self.assertEqual(state.phase, GesturePhase.COOLDOWN)
        state = tick_gesture_state(state, None, 60.0, cfg).state
        self.assertEqual(state.phase, GesturePhase.IDLE)


if __name__ == '__main__':
    unittest.main()
