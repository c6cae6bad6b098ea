"""
Shared utilities for benchmark metrics calculations: latency per operation, wall-clock span, throughput and unit conversions.
"""

import logging

import pandas as pd

from configuration import BYTES_PER_KB, MICROS_PER_SECOND

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    'label',
    'runs',
    'total_operations',
    'avg_microseconds_per_operation',
    'avg_bytes_per_second',
    'max_bytes_per_second',
]


def microseconds_per_operation(accumulated_elapsed_seconds: float, done: int) -> float:
    """
    Average latency of one operation in microseconds.

    Args:
        accumulated_elapsed_seconds: Sum of per-operation elapsed times in seconds
        done: Number of operations that contributed to the sum

    Returns:
        Microseconds per operation

    Raises:
        ZeroDivisionError: If no operations were recorded
    """
    return accumulated_elapsed_seconds * MICROS_PER_SECOND / done


def wall_clock_seconds(start: float, finish: float) -> float:
    """
    Wall-clock span between two timestamps, truncated to microsecond granularity.

    The span is first expressed in whole microseconds and then converted back
    to seconds, so sub-microsecond clock noise does not leak into throughput.

    Args:
        start: Earliest start timestamp in seconds
        finish: Latest finish timestamp in seconds

    Returns:
        Span in seconds (0.0 if finish is not after start)
    """
    elapsed_micros = round((finish - start) * MICROS_PER_SECOND)
    if elapsed_micros <= 0:
        return 0.0
    return elapsed_micros / MICROS_PER_SECOND


def calculate_bytes_per_second(total_bytes: float, duration_seconds: float) -> float:
    """
    Calculate throughput in bytes per second from bytes and duration.

    Args:
        total_bytes: Total bytes transferred
        duration_seconds: Duration in seconds

    Returns:
        Throughput in bytes per second (0.0 for a non-positive duration)
    """
    if duration_seconds <= 0:
        return 0.0
    return total_bytes / duration_seconds


def bytes_to_kb(total_bytes: float) -> float:
    """Convert bytes to kilobytes (KB, 1024 bytes)."""
    return total_bytes / BYTES_PER_KB


def summarize_summaries(data: pd.DataFrame) -> pd.DataFrame:
    """
    Aggregate persisted workload summaries per label.

    Args:
        data: DataFrame of WorkloadSummary rows (see WorkloadSummary.to_dict)

    Returns:
        DataFrame with one row per label and the columns in SUMMARY_COLUMNS
    """
    if len(data) == 0:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    missing_cols = [
        col for col in ('label', 'num_operations', 'microseconds_per_operation', 'bytes_per_second')
        if col not in data.columns
    ]
    if missing_cols:
        logger.error(f"Missing required columns: {missing_cols}")
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = data.groupby('label', sort=True)
    result = pd.DataFrame({
        'runs': grouped.size(),
        'total_operations': grouped['num_operations'].sum(),
        'avg_microseconds_per_operation': grouped['microseconds_per_operation'].mean(),
        'avg_bytes_per_second': grouped['bytes_per_second'].mean(),
        'max_bytes_per_second': grouped['bytes_per_second'].max(),
    }).reset_index()

    return result[SUMMARY_COLUMNS]
