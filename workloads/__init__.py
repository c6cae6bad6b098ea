"""
Workloads executed by the thread runner.
"""

from .base import Workload
from .synthetic import SyntheticWorkload

__all__ = ['Workload', 'SyntheticWorkload']
