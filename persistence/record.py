"""
Summary record produced by reporting a workload's merged statistics.
"""

import time
from typing import Any, Dict


class WorkloadSummary:
    """Performance result of one reported workload."""

    def __init__(self, label: str = "", bytes_per_second: float = 0.0,
                 microseconds_per_operation: float = 0.0, num_operations: int = 0,
                 total_bytes: int = 0, wall_time_seconds: float = 0.0,
                 created_ts: float = None):
        self.label = label
        self.bytes_per_second = bytes_per_second
        self.microseconds_per_operation = microseconds_per_operation
        self.num_operations = num_operations
        self.total_bytes = total_bytes
        self.wall_time_seconds = wall_time_seconds
        self.created_ts = created_ts or time.time()

    def to_dict(self) -> Dict[str, Any]:
        """Flat row used for persistence."""
        return {
            'label': self.label,
            'bytes_per_second': self.bytes_per_second,
            'microseconds_per_operation': self.microseconds_per_operation,
            'num_operations': self.num_operations,
            'total_bytes': self.total_bytes,
            'wall_time_seconds': self.wall_time_seconds,
            'created_ts': self.created_ts,
        }

    def __repr__(self) -> str:
        return (f"WorkloadSummary(label='{self.label}', "
                f"micros_per_op={self.microseconds_per_operation:.3f}, "
                f"bytes_per_second={self.bytes_per_second:.1f})")
