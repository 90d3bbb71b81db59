"""
Test cases for application startup and cleanup, with camera and tracker mocked.
"""
import unittest
import sys
from pathlib import Path
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesturefx import main as app_main


class TestAppStartup(unittest.TestCase):

    def setUp(self):
        cv2_patch = mock.patch.object(app_main, "cv2")
        tracker_patch = mock.patch.object(app_main, "HandsTracker")
        self.cv2 = cv2_patch.start()
        self.tracker_cls = tracker_patch.start()
        self.addCleanup(mock.patch.stopall)

        self.cap = self.cv2.VideoCapture.return_value
        self.cap.isOpened.return_value = True

    def test_camera_failure_skips_tracker(self):
        self.cap.isOpened.return_value = False

        with self.assertRaises(RuntimeError):
            app_main.GestureEffectsApp(mock_audio=True)

        self.tracker_cls.assert_not_called()
        self.cap.release.assert_called_once()

    def test_tracker_failure_releases_camera(self):
        self.tracker_cls.side_effect = RuntimeError("no model")

        with self.assertRaises(RuntimeError):
            app_main.GestureEffectsApp(mock_audio=True)

        self.cap.release.assert_called_once()

    def test_audio_failure_closes_tracker_and_camera(self):
        with mock.patch("gesturefx.audio_pygame.PygameAudioBackend",
                        side_effect=RuntimeError("no audio device")):
            with self.assertRaises(RuntimeError):
                app_main.GestureEffectsApp(mock_audio=False)

        self.tracker_cls.return_value.close.assert_called_once()
        self.cap.release.assert_called_once()

    def test_startup_with_mock_audio(self):
        app = app_main.GestureEffectsApp(mock_audio=True)

        self.assertIsInstance(app.audio_backend, app_main.MockAudioBackend)
        self.assertEqual(app.pipeline.processor.swap_handedness, not app.mirror)

        app.close()
        self.tracker_cls.return_value.close.assert_called_once()
        self.cap.release.assert_called_once()


if __name__ == '__main__':
    unittest.main()
