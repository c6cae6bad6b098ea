"""
Per-thread benchmark statistics with cross-thread merge and final reporting.

Each worker thread owns one ThreadStats and is the only writer to it, so no
locking happens here. Once every worker has stopped, a single controlling
thread folds all of them into one with merge_thread_stats() and calls
report() on the result.
"""

import sys
import time
import logging
from functools import reduce
from typing import Callable, Iterable, Optional, TextIO

from configuration import (
    REPORT_THRESHOLDS,
    INITIAL_NEXT_REPORT,
    PROGRESS_PADDING,
    LABEL_WIDTH,
)
from common.metrics_utils import (
    microseconds_per_operation,
    wall_clock_seconds,
    calculate_bytes_per_second,
    bytes_to_kb,
)
from persistence.record import WorkloadSummary
from stats.op_stats import OpStats

logger = logging.getLogger(__name__)


class ThreadStats:
    """Running totals of the operations executed by one worker thread.

    Attributes:
        start_ts: Timestamp of start(), None until called
        finish_ts: Timestamp of stop(), None until called
        accumulated_elapsed_time: Sum of per-operation elapsed seconds
        done: Number of operations recorded
        bytes: Sum of transferred bytes
        next_report: Completed count at which progress is printed next
        threshold_index: Current tier in REPORT_THRESHOLDS
    """

    def __init__(
        self,
        clock: Callable[[], float] = None,
        progress_stream: Optional[TextIO] = None,
        result_stream: Optional[TextIO] = None,
    ):
        """Initialize empty statistics.

        Args:
            clock: Returns the current time in seconds (default: time.time)
            progress_stream: Where progress lines go (default: sys.stderr)
            result_stream: Where report lines go (default: sys.stdout)
        """
        self.clock = clock or time.time
        self.progress_stream = progress_stream
        self.result_stream = result_stream

        self.start_ts: Optional[float] = None
        self.finish_ts: Optional[float] = None
        self.accumulated_elapsed_time: float = 0.0
        self.done: int = 0
        self.bytes: int = 0
        self.next_report: int = INITIAL_NEXT_REPORT
        self.threshold_index: int = 0

    def start(self) -> None:
        """Record when this thread began executing operations."""
        if self.start_ts is not None:
            logger.warning("ThreadStats started more than once, keeping latest start")
        self.start_ts = self.clock()

    def update(self, op_stats: OpStats, approx_total_done: int) -> None:
        """Add one operation outcome and print progress when it is due.

        Args:
            op_stats: Outcome of the operation just completed
            approx_total_done: Approximate completed count across all threads
        """
        self.bytes += op_stats.transferred_bytes
        self.accumulated_elapsed_time += op_stats.elapsed_time
        self.done += 1

        if approx_total_done < self.next_report:
            return

        threshold = REPORT_THRESHOLDS[self.threshold_index]
        self.next_report += threshold // 10
        if (self.next_report > threshold
                and self.threshold_index < len(REPORT_THRESHOLDS) - 1):
            self.threshold_index += 1

        self._print_progress(approx_total_done)

    def _print_progress(self, approx_total_done: int) -> None:
        stream = self.progress_stream or sys.stderr
        try:
            stream.write(f"... finished {approx_total_done} ops{'':{PROGRESS_PADDING}}\r")
            stream.flush()
        except (OSError, ValueError) as e:
            # Progress output must never fail the run
            logger.debug(f"Failed to write progress: {e}")

    def stop(self) -> None:
        """Record when this thread finished executing operations."""
        if self.start_ts is None:
            logger.warning("ThreadStats stopped without being started")
        if self.finish_ts is not None:
            logger.warning("ThreadStats stopped more than once, keeping latest finish")
        self.finish_ts = self.clock()

    def merge(self, other: "ThreadStats") -> "ThreadStats":
        """Fold another thread's statistics into this one.

        Counters are summed, the start is the earliest of both and the finish
        the latest of both.

        Args:
            other: Statistics of a thread that has completed start/stop

        Returns:
            self, so merge can be used as a reduce step

        Raises:
            ValueError: If other was never started or stopped
        """
        if other.start_ts is None or other.finish_ts is None:
            raise ValueError("Cannot merge ThreadStats that was not started and stopped")

        self.done += other.done
        self.bytes += other.bytes
        self.accumulated_elapsed_time += other.accumulated_elapsed_time

        self.start_ts = other.start_ts if self.start_ts is None else min(self.start_ts, other.start_ts)
        self.finish_ts = other.finish_ts if self.finish_ts is None else max(self.finish_ts, other.finish_ts)
        return self

    def report(self, label: str,
               workload_summary: Optional[WorkloadSummary] = None) -> Optional[WorkloadSummary]:
        """Compute latency and throughput and print the result line.

        Throughput uses the wall-clock span from the earliest start to the
        latest finish rather than the summed per-thread elapsed time.

        Args:
            label: Workload label printed at the start of the line
            workload_summary: Summary to fill in (default: a new one)

        Returns:
            The filled summary, or None if no operation was ever recorded
        """
        if self.done == 0:
            logger.error("Current workload has not been executed even once!")
            return None

        micros_per_op = microseconds_per_operation(self.accumulated_elapsed_time, self.done)

        elapsed_seconds = 0.0
        if self.start_ts is not None and self.finish_ts is not None:
            elapsed_seconds = wall_clock_seconds(self.start_ts, self.finish_ts)

        bytes_per_second = 0.0
        rate = ""
        # Not every workload transfers bytes
        if self.bytes > 0:
            bytes_per_second = calculate_bytes_per_second(self.bytes, elapsed_seconds)
            rate = f" {bytes_to_kb(bytes_per_second):6.1f} KB/s"

        stream = self.result_stream or sys.stdout
        stream.write(f"{label:<{LABEL_WIDTH}} : {micros_per_op:11.3f} micros/op;{rate}\n")
        stream.flush()

        if workload_summary is None:
            workload_summary = WorkloadSummary()
        workload_summary.label = label
        workload_summary.bytes_per_second = bytes_per_second
        workload_summary.microseconds_per_operation = micros_per_op
        workload_summary.num_operations = self.done
        workload_summary.total_bytes = self.bytes
        workload_summary.wall_time_seconds = elapsed_seconds

        logger.debug(f"Reported {label}: {self.done} ops, {self.bytes} bytes "
                     f"over {elapsed_seconds:.6f}s")
        return workload_summary

    def __repr__(self) -> str:
        return (f"ThreadStats(done={self.done}, bytes={self.bytes}, "
                f"elapsed={self.accumulated_elapsed_time:.6f}s)")


def merge_thread_stats(stats_list: Iterable[ThreadStats], **kwargs) -> ThreadStats:
    """Fold per-thread statistics into a fresh ThreadStats.

    The inputs are left untouched. Merging is associative and commutative, so
    the order of stats_list does not change the result.

    Args:
        stats_list: Statistics of threads that all completed start/stop
        **kwargs: Passed to the ThreadStats constructor of the result

    Returns:
        Merged statistics (done == 0 for an empty input)
    """
    return reduce(lambda merged, other: merged.merge(other), stats_list, ThreadStats(**kwargs))
