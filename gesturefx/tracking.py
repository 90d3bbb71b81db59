"""
Hand landmark tracking using the MediaPipe Tasks HandLandmarker.
"""
import logging
import os
import urllib.request
from typing import List

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .config import MediaPipeConfig
from .types import TrackedHand


logger = logging.getLogger(__name__)


class HandsTracker:
    """Hand landmark tracker producing 2D and world landmarks per hand."""

    def __init__(self, cfg: MediaPipeConfig):
        """
        Initialize the hands tracker, downloading the model if needed.

        Args:
            cfg: MediaPipe settings (model location, hand count, confidences)

        Raises:
            RuntimeError: If the model cannot be downloaded or loaded
        """
        self.cfg = cfg
        if not os.path.exists(cfg.model_path):
            logger.info("Downloading hand landmarker model to %s...", cfg.model_path)
            try:
                urllib.request.urlretrieve(cfg.model_url, cfg.model_path)
            except OSError as e:
                raise RuntimeError(f"Failed to download hand landmarker model: {e}") from e

        try:
            self.detector = vision.HandLandmarker.create_from_options(
                vision.HandLandmarkerOptions(
                    base_options=python.BaseOptions(model_asset_path=cfg.model_path),
                    running_mode=vision.RunningMode.VIDEO,
                    num_hands=cfg.max_num_hands,
                    min_hand_detection_confidence=cfg.min_detection_confidence,
                    min_tracking_confidence=cfg.min_tracking_confidence,
                )
            )
        except (RuntimeError, ValueError) as e:
            raise RuntimeError(f"Failed to load hand landmarker model {cfg.model_path}: {e}") from e
        self._last_timestamp_ms = -1

    def process(self, frame_bgr: np.ndarray, timestamp_ms: int) -> List[TrackedHand]:
        """
        Process a frame and return the tracked hands.

        Args:
            frame_bgr: Input frame in BGR format
            timestamp_ms: Frame timestamp; must increase between calls

        Returns:
            One TrackedHand per detected hand, empty if none
        """
        # VIDEO mode rejects non-increasing timestamps
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)
        results = self.detector.detect_for_video(mp_image, timestamp_ms)

        hands = []
        for i, hand_landmarks in enumerate(results.hand_landmarks):
            if i >= len(results.hand_world_landmarks) or i >= len(results.handedness):
                break
            categories = results.handedness[i]
            label = categories[0].category_name if categories else None
            if label not in ("Left", "Right"):
                continue
            hands.append(TrackedHand(
                handedness=label,
                landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                world_landmarks=[(lm.x, lm.y, lm.z) for lm in results.hand_world_landmarks[i]],
            ))
        return hands

    def close(self) -> None:
        self.detector.close()
