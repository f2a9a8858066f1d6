"""
Tests for the event rate counter
"""

import math
import unittest

from frame_trigger.counter import RateCounter


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestRateCounter(unittest.TestCase):
    """Test sliding window rate estimation."""

    def test_seeded_with_construction_time(self):
        counter = RateCounter(clock=FakeClock(0.0))

        self.assertEqual(len(counter), 1)
        self.assertIsNone(counter.rate())

    def test_rate_after_first_feed(self):
        counter = RateCounter(clock=FakeClock(0.0))

        counter.feed(1.0)

        self.assertEqual(len(counter), 2)
        self.assertAlmostEqual(counter.rate(), 2.0)

    def test_window_bounded_by_span(self):
        """Test old timestamps are evicted once the span exceeds max_span."""
        counter = RateCounter(max_span=10.0, clock=FakeClock(0.0))

        for t in range(1, 101):
            counter.feed(float(t))

        self.assertLessEqual(counter.span(), 10.0)
        self.assertEqual(len(counter), 11)
        self.assertAlmostEqual(counter.rate(), 1.1)

    def test_span_equal_to_max_is_kept(self):
        counter = RateCounter(max_span=2.0, clock=FakeClock(0.0))

        counter.feed(1.0)
        counter.feed(2.0)

        self.assertEqual(len(counter), 3)

    def test_never_fewer_than_two(self):
        """Test two samples are kept even when further apart than max_span."""
        counter = RateCounter(max_span=1.0, clock=FakeClock(0.0))

        counter.feed(100.0)
        self.assertEqual(len(counter), 2)

        counter.feed(200.0)
        self.assertEqual(len(counter), 2)
        self.assertAlmostEqual(counter.span(), 100.0)

    def test_rate_finite_and_positive(self):
        counter = RateCounter(max_span=5.0, clock=FakeClock(0.0))

        for i in range(1, 500):
            counter.feed(i * 0.033)
            rate = counter.rate()
            self.assertTrue(math.isfinite(rate))
            self.assertGreater(rate, 0)

    def test_zero_span_has_no_rate(self):
        counter = RateCounter(clock=FakeClock(5.0))

        counter.feed(5.0)

        self.assertIsNone(counter.rate())

    def test_feed_uses_clock(self):
        clock = FakeClock(0.0)
        counter = RateCounter(clock=clock)

        clock.now = 0.5
        counter.feed()

        self.assertAlmostEqual(counter.span(), 0.5)

    def test_invalid_span(self):
        with self.assertRaises(ValueError):
            RateCounter(max_span=0)


if __name__ == "__main__":
    unittest.main()
