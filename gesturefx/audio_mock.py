"""
Mock audio backend for running without sound hardware and for tests.
"""
import logging
from typing import List


logger = logging.getLogger(__name__)


class MockAudioBackend:
    """Mock backend that logs clips instead of playing them."""

    def __init__(self):
        """Initialize the mock backend."""
        self.played: List[str] = []
        self.muted = False

    def play(self, clip: str) -> None:
        """Record and log the clip instead of playing it."""
        self.played.append(clip)
        logger.info("[MockAudioBackend] Play: clip=%s%s (call #%d)",
                    clip, " (muted)" if self.muted else "", len(self.played))

    def set_muted(self, muted: bool) -> None:
        self.muted = muted

    def reset_counters(self) -> None:
        """Forget recorded clips."""
        self.played.clear()
