"""
Thread pool driver that runs a workload concurrently and reports merged statistics.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, TextIO

from configuration import DEFAULT_NUM_THREADS, DEFAULT_NUM_OPERATIONS, MAX_THREADS
from persistence.parquet import ParquetPersistence
from persistence.prom import SimplePrometheusExporter
from persistence.record import WorkloadSummary
from stats.thread_stats import ThreadStats, merge_thread_stats
from workloads.base import Workload

logger = logging.getLogger(__name__)


class ThreadRunner:
    """Runs a workload's operations across a fixed number of threads.

    Operations 0..num_operations-1 are split into contiguous slices, one per
    thread. Every thread owns its ThreadStats; the only state the threads
    share is the completed-operations counter that drives progress output.
    """

    def __init__(
        self,
        workload: Workload,
        num_threads: int = None,
        num_operations: int = None,
        exporter: Optional[SimplePrometheusExporter] = None,
        persistence: Optional[ParquetPersistence] = None,
        clock: Callable[[], float] = None,
        progress_stream: Optional[TextIO] = None,
        result_stream: Optional[TextIO] = None,
    ):
        """Initialize the thread runner.

        Args:
            workload: Workload whose run_op() is executed
            num_threads: Number of worker threads (default: from configuration)
            num_operations: Total operations across all threads (default: from configuration)
            exporter: Optional Prometheus exporter fed with outcomes and the summary
            persistence: Optional store that receives the reported summary
            clock: Timestamp source for the thread statistics (default: time.time)
            progress_stream: Where progress lines go (default: sys.stderr)
            result_stream: Where the report line goes (default: sys.stdout)
        """
        self.workload = workload
        self.num_threads = DEFAULT_NUM_THREADS if num_threads is None else num_threads
        self.num_operations = DEFAULT_NUM_OPERATIONS if num_operations is None else num_operations
        self.exporter = exporter
        self.persistence = persistence
        self.clock = clock
        self.progress_stream = progress_stream
        self.result_stream = result_stream

        if not 1 <= self.num_threads <= MAX_THREADS:
            raise ValueError(f"num_threads must be between 1 and {MAX_THREADS}, got {self.num_threads}")
        if self.num_operations < 0:
            raise ValueError(f"num_operations must be non-negative, got {self.num_operations}")

        self._completed = 0
        self._completed_lock = threading.Lock()
        self.failed_operations = 0
        self._failed_lock = threading.Lock()

        logger.info(
            f"Initialized ThreadRunner for '{workload.name}': "
            f"{self.num_threads} threads, {self.num_operations} operations"
        )

    def _partition(self) -> List[range]:
        """Split the operation indices into one contiguous range per thread."""
        per_thread, extra = divmod(self.num_operations, self.num_threads)
        ranges = []
        begin = 0
        for thread_id in range(self.num_threads):
            size = per_thread + (1 if thread_id < extra else 0)
            ranges.append(range(begin, begin + size))
            begin += size
        return ranges

    def _increment_completed(self) -> int:
        with self._completed_lock:
            self._completed += 1
            return self._completed

    def _increment_failed(self) -> None:
        with self._failed_lock:
            self.failed_operations += 1

    def _thread_task(self, thread_id: int, op_range: range) -> ThreadStats:
        """Execute one thread's slice of operations and return its statistics."""
        thread_stats = ThreadStats(clock=self.clock, progress_stream=self.progress_stream)
        thread_stats.start()

        for op_index in op_range:
            try:
                op_stats = self.workload.run_op(op_index)
            except Exception as e:
                logger.warning(f"Thread {thread_id} operation {op_index} failed: {e}")
                self._increment_failed()
                continue

            approx_total_done = self._increment_completed()
            thread_stats.update(op_stats, approx_total_done)
            if self.exporter is not None:
                self.exporter.record_outcome(op_stats)

        thread_stats.stop()
        logger.debug(f"Thread {thread_id} finished: {thread_stats}")
        return thread_stats

    def run(self, label: str = None) -> Optional[WorkloadSummary]:
        """Run the workload and report the merged statistics.

        Args:
            label: Label for the report line (default: the workload name)

        Returns:
            The workload summary, or None if no operation succeeded
        """
        label = label or self.workload.name
        logger.info(f"Starting workload '{label}' on {self.num_threads} threads")

        self.workload.setup()
        try:
            all_thread_stats: List[ThreadStats] = []
            with ThreadPoolExecutor(max_workers=self.num_threads,
                                    thread_name_prefix="opbench") as executor:
                futures = [
                    executor.submit(self._thread_task, thread_id, op_range)
                    for thread_id, op_range in enumerate(self._partition())
                ]
                for thread_id, future in enumerate(futures):
                    try:
                        all_thread_stats.append(future.result())
                    except Exception as e:
                        logger.error(f"Thread {thread_id} fatal error: {e}")
                        raise
        finally:
            self.workload.teardown()

        if self.failed_operations:
            logger.warning(f"{self.failed_operations} operations failed and were not recorded")

        merged = merge_thread_stats(all_thread_stats, result_stream=self.result_stream)
        summary = merged.report(label)
        if summary is None:
            return None

        if self.exporter is not None:
            self.exporter.update_summary(summary)
        if self.persistence is not None:
            self.persistence.store_summary(summary)

        logger.info(f"Workload '{label}' completed: {summary}")
        return summary
