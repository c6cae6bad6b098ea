"""
Persistence and export of workload summaries.
"""

from .record import WorkloadSummary
from .parquet import ParquetPersistence

__all__ = ['WorkloadSummary', 'ParquetPersistence']
