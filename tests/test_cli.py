"""
Tests for the command line interface and debug window helpers.
"""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import cv2
import numpy as np

from frame_trigger.cli import parse_args, print_presets, run_validate
from frame_trigger.display import DebugWindow, format_rate

CONFIG_TEXT = """\
events:
  - name: you-died
    detector: dark_souls_you_died
    action:
      type: webhook
      url: http://hub.local/api/webhook/you-died
"""


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = parse_args([])

        self.assertEqual(args.config, "config.yaml")
        self.assertFalse(args.debug_window)
        self.assertFalse(args.validate)

    def test_flags(self):
        args = parse_args(["-c", "games.yaml", "--debug-window", "-v"])

        self.assertEqual(args.config, "games.yaml")
        self.assertTrue(args.debug_window)
        self.assertTrue(args.verbose)


class TestValidateMode(unittest.TestCase):
    """Test --validate against files on disk."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.config_path = self.dir / "config.yaml"
        self.config_path.write_text(CONFIG_TEXT, encoding="utf-8")

    def tearDown(self):
        self.temp_dir.cleanup()

    def run_validate(self) -> tuple[int, str]:
        out = io.StringIO()
        with patch.dict("os.environ", {}, clear=True), redirect_stdout(out):
            status = run_validate(str(self.config_path))
        return status, out.getvalue()

    def test_valid_with_reference(self):
        banner = np.zeros((162, 768, 3), dtype=np.uint8)
        cv2.imwrite(str(self.dir / "youdied.png"), banner)

        status, output = self.run_validate()

        self.assertEqual(status, 0)
        self.assertIn("you-died", output)
        self.assertIn("Configuration valid", output)

    def test_missing_reference(self):
        status, output = self.run_validate()

        self.assertEqual(status, 1)
        self.assertIn("Reference image errors", output)

    def test_invalid_config(self):
        self.config_path.write_text("events: 5\n", encoding="utf-8")

        status, _ = self.run_validate()

        self.assertEqual(status, 1)

    def test_malformed_pointer_file(self):
        self.config_path.write_text("use: 5\n", encoding="utf-8")

        status, _ = self.run_validate()

        self.assertEqual(status, 1)


class TestPresetListing(unittest.TestCase):
    def test_lists_you_died(self):
        out = io.StringIO()
        with redirect_stdout(out):
            print_presets()

        self.assertIn("dark_souls_you_died", out.getvalue())
        self.assertIn("sense=similar", out.getvalue())


class TestDisplay(unittest.TestCase):
    def test_format_rate(self):
        self.assertEqual(format_rate(None), "-- fps")
        self.assertEqual(format_rate(50.0), "50.0 fps (20.00ms)")

    @patch("frame_trigger.display.cv2")
    def test_show_leaves_frame_untouched(self, mock_cv2):
        mock_cv2.waitKey.return_value = ord("q")
        frame = np.zeros((100, 100, 3), dtype=np.uint8)

        window = DebugWindow()
        quit_requested = window.show(frame, "30.0 fps")
        window.close()

        self.assertTrue(quit_requested)
        self.assertFalse(frame.any())
        mock_cv2.imshow.assert_called_once()
        mock_cv2.destroyWindow.assert_called_once_with("frame-trigger")


if __name__ == "__main__":
    unittest.main()
