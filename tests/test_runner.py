"""
Tests for the watch loop
"""

import tempfile
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

import cv2
import numpy as np

from frame_trigger.actions import ActionWorker
from frame_trigger.config import validate_config
from frame_trigger.counter import RateCounter
from frame_trigger.errors import FrameSourceError, ReferenceLoadError
from frame_trigger.runner import build_watched_events, build_worker, run_watch

BLACK = np.zeros((20, 20, 3), dtype=np.uint8)
WHITE = np.full((20, 20, 3), 255, dtype=np.uint8)


class FakeSource:
    """Yields queued frames, then sets the shutdown event or fails."""

    def __init__(self, frames, shutdown_event=None, fail_at_end=False):
        self.frames = list(frames)
        self.shutdown_event = shutdown_event
        self.fail_at_end = fail_at_end
        self.opened = False
        self.released = False

    def open(self):
        self.opened = True

    def read(self):
        if not self.frames:
            raise FrameSourceError("no more frames")
        frame = self.frames.pop(0)
        if not self.frames and not self.fail_at_end:
            self.shutdown_event.set()
        return frame

    def release(self):
        self.released = True


class RecordingDispatcher:
    def __init__(self):
        self.executed = []

    def execute(self, action):
        self.executed.append(action)


class TestRunWatch(unittest.TestCase):
    """Test the frame loop end to end with fake frames."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        cv2.imwrite(str(self.dir / "black.png"), np.zeros((10, 10, 3), dtype=np.uint8))

        self.config = validate_config(
            {
                "events": [
                    {
                        "name": "screen-black",
                        "detector": {
                            "region": {
                                "center_x": 0.5,
                                "center_y": 0.5,
                                "width_frac": 1.0,
                                "height_frac": 1.0,
                            },
                            "channel": 0,
                            "cutoff": 128,
                            "distance_threshold": 100,
                        },
                        "reference": "black.png",
                        "cooldown_seconds": 60,
                        "action": {"type": "webhook", "url": "http://hub.local/hook"},
                    }
                ]
            },
            base_dir=self.dir,
        )
        self.dispatcher = RecordingDispatcher()
        self.worker = build_worker(self.config, self.dispatcher)
        self.shutdown = threading.Event()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_one_action_per_rising_edge(self):
        source = FakeSource([WHITE, BLACK, BLACK, BLACK, WHITE], self.shutdown)

        stats = run_watch(self.config, self.shutdown, source=source, worker=self.worker)

        self.assertEqual(stats.reason, "signal")
        self.assertEqual(stats.frames, 5)
        self.assertEqual(stats.events_fired, 1)
        self.assertEqual(stats.actions_executed, 1)
        self.assertEqual(len(self.dispatcher.executed), 1)
        self.assertTrue(source.opened)
        self.assertTrue(source.released)
        self.assertFalse(self.worker.running)

    def test_rate_counter_seeded_after_open(self):
        """Test time spent opening the source is not part of the frame rate."""
        source = FakeSource([BLACK], self.shutdown)
        opened_at_seed = []

        def make_counter(*args, **kwargs):
            opened_at_seed.append(source.opened)
            return RateCounter(*args, **kwargs)

        with patch("frame_trigger.runner.RateCounter", side_effect=make_counter):
            run_watch(self.config, self.shutdown, source=source, worker=self.worker)

        self.assertEqual(opened_at_seed, [True])

    def test_stops_before_reading_when_signalled(self):
        self.shutdown.set()
        source = FakeSource([BLACK], self.shutdown)

        stats = run_watch(self.config, self.shutdown, source=source, worker=self.worker)

        self.assertEqual(stats.frames, 0)
        self.assertEqual(self.dispatcher.executed, [])

    def test_source_failure_is_fatal(self):
        """Test a dead source stops the loop and still drains the worker."""
        source = FakeSource([BLACK], self.shutdown, fail_at_end=True)

        with self.assertRaises(FrameSourceError):
            run_watch(self.config, self.shutdown, source=source, worker=self.worker)

        self.assertTrue(source.released)
        self.assertFalse(self.worker.running)
        self.assertEqual(len(self.dispatcher.executed), 1)

    def test_missing_reference_is_fatal(self):
        self.config.set_base_dir(self.dir / "elsewhere")

        with self.assertRaises(ReferenceLoadError):
            run_watch(self.config, self.shutdown, source=FakeSource([], self.shutdown))


class TestBuilders(unittest.TestCase):
    def test_disabled_events_skipped(self):
        config = validate_config(
            {
                "events": [
                    {
                        "name": "you-died",
                        "enabled": False,
                        "detector": "dark_souls_you_died",
                    }
                ]
            }
        )

        self.assertEqual(build_watched_events(config), [])

    def test_worker_uses_dispatch_settings(self):
        config = validate_config(
            {"dispatch": {"queue_size": 3, "when_full": "drop_oldest"}}
        )

        worker = build_worker(config)

        self.assertIsInstance(worker, ActionWorker)
        self.assertEqual(worker.policy.value, "drop_oldest")
        self.assertEqual(worker._queue.maxsize, 3)


if __name__ == "__main__":
    unittest.main()
