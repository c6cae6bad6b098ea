"""
Outcome of a single benchmark operation.
"""

from typing import NamedTuple


class OpStats(NamedTuple):
    """What one completed operation reports back to its thread's stats.

    Attributes:
        transferred_bytes: Bytes moved by the operation (0 if none)
        elapsed_time: Seconds the operation took, measured by its worker
    """

    transferred_bytes: int = 0
    elapsed_time: float = 0.0
