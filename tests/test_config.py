"""
Test cases for YAML configuration loading.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gesturefx.config import Cfg, load_config, validate_config
from gesturefx.types import GestureKind


class TestLoadConfig(unittest.TestCase):

    def write_config(self, text: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_default_file_matches_dataclass_defaults(self):
        self.assertEqual(load_config(), Cfg())

    def test_default_thresholds(self):
        cfg = load_config()
        self.assertEqual(cfg.classifier.thumb_extension_ratio, 1.3)
        self.assertEqual(cfg.classifier.finger_curl_ratio, 1.2)
        self.assertEqual(cfg.classifier.max_thumb_angle_deg, 75.0)
        self.assertEqual(cfg.classifier.min_confidence, 0.55)
        self.assertEqual(cfg.audio.double_trigger_max_delay_ms, 300.0)
        self.assertEqual(cfg.app.selected_gesture, GestureKind.THUMBS_UP)

    def test_partial_file_keeps_defaults(self):
        path = self.write_config("state_machine:\n  cooldown_duration_ms: 2500\n")
        cfg = load_config(path)

        self.assertEqual(cfg.state_machine.cooldown_duration_ms, 2500)
        self.assertEqual(cfg.state_machine.candidate_duration_ms, 100.0)
        self.assertEqual(cfg.effects, Cfg().effects)

    def test_empty_file(self):
        self.assertEqual(load_config(self.write_config("")), Cfg())

    def test_selected_gesture_parsed(self):
        cfg = load_config(self.write_config("app:\n  selected_gesture: none\n"))
        self.assertEqual(cfg.app.selected_gesture, GestureKind.NONE)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/gesturefx.yaml")

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            load_config(self.write_config("effects:\n  sparkle: true\n"))

    def test_unknown_gesture(self):
        with self.assertRaises(ValueError):
            load_config(self.write_config("app:\n  selected_gesture: wave\n"))

    def test_extended_clip_must_exist(self):
        text = "audio:\n  clips:\n    only: x.wav\n  default_clip: only\n"
        with self.assertRaises(ValueError):
            load_config(self.write_config(text))

    def test_negative_duration(self):
        with self.assertRaises(ValueError):
            load_config(self.write_config("effects:\n  hold_ms: -1\n"))

    def test_inverted_size_bounds(self):
        cfg = Cfg()
        cfg.effects.min_size_fraction = 0.9
        with self.assertRaises(ValueError):
            validate_config(cfg)


if __name__ == '__main__':
    unittest.main()
