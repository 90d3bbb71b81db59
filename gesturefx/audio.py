"""
Audio clip selection for confirmed gestures.
"""
import logging
import random
from typing import Optional

from .config import AudioConfig
from .types import AudioBackendProto, GestureKind, GestureSnapshot


logger = logging.getLogger(__name__)


def select_clip(last_trigger: Optional[float], now: float, cfg: AudioConfig,
                rng: Optional[random.Random] = None) -> str:
    """
    Pick the clip to play for a trigger at `now`.

    A trigger within the double-trigger delay of the previous one always gets
    the extended clip. Otherwise the clip is random when randomization is
    enabled, or the default clip.

    Args:
        last_trigger: Timestamp (ms) of the previous trigger, or None
        now: Current timestamp in milliseconds
        cfg: Clip set and policy settings
        rng: Random source. Defaults to the random module

    Returns:
        Name of the clip, a key of cfg.clips
    """
    if last_trigger is not None and now - last_trigger <= cfg.double_trigger_max_delay_ms:
        return cfg.extended_clip

    if cfg.randomize:
        return (rng or random).choice(list(cfg.clips))

    return cfg.default_clip


class AudioTrigger:
    """Plays a clip through the backend for every confirmed hand in a snapshot."""

    def __init__(self, cfg: AudioConfig, backend: AudioBackendProto,
                 selected_gesture: GestureKind = GestureKind.THUMBS_UP,
                 rng: Optional[random.Random] = None):
        self.cfg = cfg
        self.backend = backend
        self.selected_gesture = selected_gesture
        self.rng = rng
        self.last_trigger: Optional[float] = None
        self._muted = False

    @property
    def muted(self) -> bool:
        return self._muted

    def set_muted(self, muted: bool) -> None:
        self._muted = muted
        setter = getattr(self.backend, "set_muted", None)
        if setter is not None:
            setter(muted)
        logger.info("Audio %s", "muted" if muted else "unmuted")

    def toggle_mute(self) -> bool:
        self.set_muted(not self._muted)
        return self._muted

    def update(self, snapshot: Optional[GestureSnapshot], now: float) -> Optional[str]:
        """
        Play clips for this frame's confirmed events.

        Args:
            snapshot: Latest gesture snapshot, or None before the first frame
            now: Current timestamp in milliseconds

        Returns:
            The last clip requested this frame, or None
        """
        if snapshot is None or self.selected_gesture is not GestureKind.THUMBS_UP:
            return None

        played = None
        for hand in snapshot.hands():
            if not hand.confirmed:
                continue
            clip = select_clip(self.last_trigger, now, self.cfg, self.rng)
            self.backend.play(clip)
            self.last_trigger = now
            played = clip
            logger.debug("Triggered clip %r for %s hand", clip, hand.state.hand)
        return played
