"""
Synthetic workload that simulates an operation with a fixed latency and payload.
"""

import time
import logging

from configuration import DEFAULT_BYTES_PER_OP, DEFAULT_OP_LATENCY_MS, DEFAULT_LABEL, MILLIS_PER_SECOND
from stats.op_stats import OpStats
from workloads.base import Workload

logger = logging.getLogger(__name__)


class SyntheticWorkload(Workload):
    """Sleeps for op_latency_ms and produces bytes_per_op bytes per operation."""

    def __init__(
        self,
        bytes_per_op: int = None,
        op_latency_ms: float = None,
        name: str = DEFAULT_LABEL,
    ):
        super().__init__(name)
        self.bytes_per_op = DEFAULT_BYTES_PER_OP if bytes_per_op is None else bytes_per_op
        self.op_latency_ms = DEFAULT_OP_LATENCY_MS if op_latency_ms is None else op_latency_ms

        if self.bytes_per_op < 0:
            raise ValueError(f"bytes_per_op must be non-negative, got {self.bytes_per_op}")
        if self.op_latency_ms < 0:
            raise ValueError(f"op_latency_ms must be non-negative, got {self.op_latency_ms}")

        logger.info(
            f"Initialized synthetic workload '{name}': {self.bytes_per_op} bytes/op, "
            f"{self.op_latency_ms}ms latency"
        )

    def run_op(self, op_index: int) -> OpStats:
        start = time.perf_counter()

        if self.op_latency_ms > 0:
            time.sleep(self.op_latency_ms / MILLIS_PER_SECOND)
        payload = bytearray(self.bytes_per_op)

        elapsed = time.perf_counter() - start
        return OpStats(transferred_bytes=len(payload), elapsed_time=elapsed)
