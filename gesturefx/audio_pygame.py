"""
Audio backend that plays clips through pygame.mixer.
"""
import logging
import os
from typing import Dict, Mapping

import pygame


logger = logging.getLogger(__name__)


class PygameAudioBackend:
    """
    Plays named clips with pygame.mixer.

    Each clip is loaded once up front. play() starts a new channel every call,
    so rapid triggers overlap instead of cutting each other off.
    """

    def __init__(self, clips: Mapping[str, str], volume: float = 1.0):
        """
        Initialize the mixer and pre-load clips.

        Args:
            clips: Clip name -> sound file path
            volume: Playback volume (0.0 to 1.0)
        """
        pygame.mixer.init()
        self.volume = max(0.0, min(1.0, volume))
        self.muted = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}

        for name, path in clips.items():
            if not os.path.exists(path):
                logger.warning("Sound file not found for clip %r: %s", name, path)
                continue
            try:
                self._sounds[name] = pygame.mixer.Sound(path)
            except pygame.error as ex:
                logger.warning("Failed to load sound %s: %s", path, ex)
        self._apply_volume()

    @property
    def loaded_clips(self) -> Dict[str, pygame.mixer.Sound]:
        """Clips that loaded successfully, by name."""
        return dict(self._sounds)

    def play(self, clip: str) -> None:
        """Play a clip by name. Unknown or unloaded clips are skipped."""
        sound = self._sounds.get(clip)
        if sound is None:
            logger.debug("Clip %r is not loaded, skipping", clip)
            return
        sound.play()

    def set_muted(self, muted: bool) -> None:
        self.muted = muted
        self._apply_volume()

    def close(self) -> None:
        pygame.mixer.quit()

    def _apply_volume(self) -> None:
        level = 0.0 if self.muted else self.volume
        for sound in self._sounds.values():
            sound.set_volume(level)
