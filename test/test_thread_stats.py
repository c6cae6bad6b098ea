"""Test suite for per-thread statistics accumulation and progress output."""

import io
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from configuration import REPORT_THRESHOLDS, INITIAL_NEXT_REPORT
from stats import OpStats, ThreadStats


def fake_clock(*timestamps):
    """Clock that returns the given timestamps in order."""
    return iter(timestamps).__next__


def progress_counts(stream):
    """Completed counts printed to a progress stream."""
    counts = []
    for line in stream.getvalue().split('\r'):
        if line.startswith('... finished '):
            counts.append(int(line.split()[2]))
    return counts


class TestAccumulation:
    """Running totals of a single thread."""

    def test_initial_state(self):
        stats = ThreadStats()
        assert stats.done == 0
        assert stats.bytes == 0
        assert stats.accumulated_elapsed_time == 0.0
        assert stats.start_ts is None
        assert stats.finish_ts is None
        assert stats.next_report == INITIAL_NEXT_REPORT
        assert stats.threshold_index == 0

    def test_sums_match_outcomes(self):
        outcomes = [OpStats(i * 7, i * 0.0005) for i in range(50)]
        stats = ThreadStats(progress_stream=io.StringIO())
        stats.start()
        for i, outcome in enumerate(outcomes, start=1):
            stats.update(outcome, i)
        stats.stop()

        assert stats.done == len(outcomes)
        assert stats.bytes == sum(o.transferred_bytes for o in outcomes)
        assert stats.accumulated_elapsed_time == pytest.approx(
            sum(o.elapsed_time for o in outcomes))

    def test_done_increments_by_one(self):
        stats = ThreadStats(progress_stream=io.StringIO())
        for i in range(1, 6):
            stats.update(OpStats(0, 0.0), i)
            assert stats.done == i

    def test_zero_byte_outcomes(self):
        stats = ThreadStats(progress_stream=io.StringIO())
        stats.update(OpStats(transferred_bytes=0, elapsed_time=0.25), 1)
        stats.update(OpStats(transferred_bytes=0, elapsed_time=0.25), 2)
        assert stats.bytes == 0
        assert stats.accumulated_elapsed_time == pytest.approx(0.5)

    def test_start_and_stop_use_clock(self):
        stats = ThreadStats(clock=fake_clock(5.0, 7.5))
        stats.start()
        stats.stop()
        assert stats.start_ts == 5.0
        assert stats.finish_ts == 7.5
        assert stats.finish_ts >= stats.start_ts

    def test_single_worker_scenario(self):
        """Two 1KB outcomes of 1ms each between t=0 and t=2ms."""
        stats = ThreadStats(clock=fake_clock(0.0, 0.002), progress_stream=io.StringIO())
        stats.start()
        stats.update(OpStats(transferred_bytes=1024, elapsed_time=0.001), 1)
        stats.update(OpStats(transferred_bytes=1024, elapsed_time=0.001), 2)
        stats.stop()

        assert stats.done == 2
        assert stats.bytes == 2048
        assert stats.accumulated_elapsed_time == pytest.approx(0.002)


class TestProgressCadence:
    """Progress lines printed while operations complete."""

    def test_no_progress_below_first_report(self):
        stream = io.StringIO()
        stats = ThreadStats(progress_stream=stream)
        for i in range(1, INITIAL_NEXT_REPORT):
            stats.update(OpStats(1, 0.0), i)
        assert stream.getvalue() == ""

    def test_line_format(self):
        stream = io.StringIO()
        stats = ThreadStats(progress_stream=stream)
        stats.update(OpStats(1, 0.0), INITIAL_NEXT_REPORT)
        assert stream.getvalue() == f"... finished {INITIAL_NEXT_REPORT} ops{' ' * 30}\r"

    def test_cadence_advances_through_tiers(self):
        stream = io.StringIO()
        stats = ThreadStats(progress_stream=stream)
        for i in range(1, 2001):
            stats.update(OpStats(1, 0.0), i)

        # Every 100 ops up to the first tier, then every 500
        expected = list(range(100, 1001, 100)) + [1100, 1600]
        assert progress_counts(stream) == expected
        assert stats.threshold_index == 1
        assert stats.next_report == 2100

    def test_cadence_does_not_reset_between_calls(self):
        stream = io.StringIO()
        stats = ThreadStats(progress_stream=stream)
        for i in range(1, 20001):
            stats.update(OpStats(0, 0.0), i)

        counts = progress_counts(stream)
        gaps = [b - a for a, b in zip(counts, counts[1:])]
        # Gaps only ever widen
        assert gaps == sorted(gaps)
        assert max(gaps) == REPORT_THRESHOLDS[3] // 10
        assert stats.threshold_index == 3

    def test_threshold_index_capped_at_last_tier(self):
        stats = ThreadStats(progress_stream=io.StringIO())
        stats.threshold_index = len(REPORT_THRESHOLDS) - 1
        stats.next_report = REPORT_THRESHOLDS[-1] + 1

        for _ in range(5):
            stats.update(OpStats(0, 0.0), stats.next_report)

        assert stats.threshold_index == len(REPORT_THRESHOLDS) - 1
        assert stats.next_report == REPORT_THRESHOLDS[-1] + 1 + 5 * (REPORT_THRESHOLDS[-1] // 10)

    def test_one_report_per_update(self):
        """A far-ahead global count advances the watermark by a single step."""
        stream = io.StringIO()
        stats = ThreadStats(progress_stream=stream)
        stats.update(OpStats(0, 0.0), 10_000)
        assert progress_counts(stream) == [10_000]
        assert stats.next_report == INITIAL_NEXT_REPORT + REPORT_THRESHOLDS[0] // 10

    def test_broken_stream_does_not_fail_update(self):
        stream = io.StringIO()
        stream.close()
        stats = ThreadStats(progress_stream=stream)

        stats.update(OpStats(10, 0.001), INITIAL_NEXT_REPORT)

        assert stats.done == 1
        assert stats.bytes == 10

    def test_defaults_to_stderr(self, capsys):
        stats = ThreadStats()
        stats.update(OpStats(0, 0.0), INITIAL_NEXT_REPORT)
        captured = capsys.readouterr()
        assert f"... finished {INITIAL_NEXT_REPORT} ops" in captured.err
        assert captured.out == ""


class TestLifecycleWarnings:
    """Misuse is logged but never raised."""

    def test_double_start_warns(self, caplog):
        stats = ThreadStats(clock=fake_clock(1.0, 2.0))
        stats.start()
        stats.start()
        assert stats.start_ts == 2.0
        assert "started more than once" in caplog.text

    def test_stop_without_start_warns(self, caplog):
        stats = ThreadStats(clock=fake_clock(3.0))
        stats.stop()
        assert stats.finish_ts == 3.0
        assert "stopped without being started" in caplog.text
