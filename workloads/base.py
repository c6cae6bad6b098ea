"""
Base class for benchmark workloads.
"""

import logging
from abc import ABC, abstractmethod

from stats.op_stats import OpStats

logger = logging.getLogger(__name__)


class Workload(ABC):
    """One kind of operation the thread runner executes repeatedly.

    Subclasses implement run_op(), which performs a single operation, times
    it and returns its OpStats. run_op() may be called concurrently from
    several threads, so it must not mutate shared state without its own
    synchronization.
    """

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        """Label used when the workload is reported."""
        return self._name

    def setup(self) -> None:
        """Prepare anything the operations need (called once, before the run)."""
        logger.debug(f"Setting up workload {self._name}")

    @abstractmethod
    def run_op(self, op_index: int) -> OpStats:
        """Execute operation number op_index and return its outcome."""

    def teardown(self) -> None:
        """Release what setup() acquired (called once, after the run)."""
        logger.debug(f"Tearing down workload {self._name}")
