"""
Main application: webcam thumbs-up detection with visual and audio effects.
"""
import argparse
import logging
import sys
import time
from typing import Optional

import cv2

from .audio_mock import MockAudioBackend
from .config import load_config
from .pipeline import EffectsPipeline
from .render import draw_debug_panel, draw_effects, draw_landmarks
from .tracking import HandsTracker


logger = logging.getLogger(__name__)


class GestureEffectsApp:
    """Main application class for thumbs-up effects."""

    def __init__(self, config_path: Optional[str] = None, mock_audio: bool = False):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = None
        self.audio_backend = None

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.cap.release()
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

        try:
            self.tracker = HandsTracker(self.config.mediapipe)

            if mock_audio:
                self.audio_backend = MockAudioBackend()
                logger.info("🔇 Using mock audio backend")
            else:
                from .audio_pygame import PygameAudioBackend
                self.audio_backend = PygameAudioBackend(self.config.audio.clips,
                                                        self.config.audio.volume)
        except Exception:
            self.close()
            raise

        self.mirror = self.config.display.mirror
        self.show_debug = self.config.display.show_debug
        # MediaPipe labels handedness assuming a mirrored (selfie) image
        self.pipeline = EffectsPipeline(self.config, self.audio_backend,
                                        swap_handedness=not self.mirror)

    def toggle_mirror(self) -> None:
        self.mirror = not self.mirror
        self.pipeline.processor.swap_handedness = not self.mirror
        logger.info("Mirror %s", "on" if self.mirror else "off")

    def run(self) -> None:
        """Run the main application loop."""
        logger.info("Starting %s", self.config.display.window_name)
        logger.info("👍 Hold a thumbs-up to trigger an effect. Keys: q quit, m mute, d debug, f mirror")

        start = time.monotonic()
        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                if self.mirror:
                    frame = cv2.flip(frame, 1)

                t_now = (time.monotonic() - start) * 1000.0
                hands = self.tracker.process(frame, int(t_now))
                result = self.pipeline.tick(hands, t_now)

                if self.config.display.show_landmarks:
                    for hand in hands:
                        draw_landmarks(frame, hand.landmarks)
                draw_effects(frame, result.instances)
                if self.show_debug:
                    draw_debug_panel(frame, result.snapshot, hands)

                status = f"Hands: {len(hands)}  Effects: {len(result.instances)}"
                if self.pipeline.audio.muted:
                    status += "  [muted]"
                cv2.putText(frame, status, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                cv2.putText(frame, "q quit | m mute | d debug | f mirror", (10, frame.shape[0] - 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                elif key == ord('m'):
                    self.pipeline.audio.toggle_mute()
                elif key == ord('d'):
                    self.show_debug = not self.show_debug
                elif key == ord('f'):
                    self.toggle_mirror()
        finally:
            self.close()

    def close(self) -> None:
        """Release camera, tracker and audio resources."""
        if self.cap.isOpened():
            self.cap.release()
        if self.tracker is not None:
            self.tracker.close()
        close_audio = getattr(self.audio_backend, "close", None)
        if close_audio is not None:
            close_audio()
        cv2.destroyAllWindows()


def main(argv=None) -> int:
    """Entry point for the application."""
    parser = argparse.ArgumentParser(description="Thumbs-up gesture effects")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--mock-audio", action="store_true", help="Log clips instead of playing them")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = GestureEffectsApp(config_path=args.config, mock_audio=args.mock_audio)
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("❌ %s", e)
        return 1

    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
