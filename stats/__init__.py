"""
Per-thread statistics accumulation, merging and reporting.
"""

from .op_stats import OpStats
from .thread_stats import ThreadStats, merge_thread_stats

__all__ = ['OpStats', 'ThreadStats', 'merge_thread_stats']
