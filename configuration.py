"""
Configuration constants for the operation benchmark harness.

This module contains all configuration parameters including:
- Progress reporting cadence
- Report formatting and unit conversion factors
- Default run parameters (threads, operations, payload sizes)
- Output and observability settings
"""

import os
from typing import Tuple

# =============================================================================
# PROGRESS REPORTING
# =============================================================================

# Tiers of the progress cadence: while the completed count is below a tier,
# progress is printed every tier/10 operations
REPORT_THRESHOLDS: Tuple[int, ...] = (
    1000,
    5000,
    10000,
    50000,
    100000,
    500000,
    1000000,
)
INITIAL_NEXT_REPORT: int = 100  # First completed count that prints progress
PROGRESS_PADDING: int = 30  # Trailing blanks that clear the previous line

# =============================================================================
# REPORT FORMATTING
# =============================================================================

LABEL_WIDTH: int = 12  # Left-aligned width of the workload label column

# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

MICROS_PER_SECOND: int = 1_000_000
BYTES_PER_KB: float = 1024.0
MILLIS_PER_SECOND: int = 1000

# =============================================================================
# RUN DEFAULTS
# =============================================================================

DEFAULT_NUM_THREADS: int = int(os.getenv("OPBENCH_NUM_THREADS", "4"))
DEFAULT_NUM_OPERATIONS: int = int(os.getenv("OPBENCH_NUM_OPERATIONS", "1000"))
DEFAULT_BYTES_PER_OP: int = 1024
DEFAULT_OP_LATENCY_MS: float = 1.0
DEFAULT_LABEL: str = "synthetic"
MAX_THREADS: int = 256  # Upper bound accepted by the thread runner

# =============================================================================
# OUTPUT AND OBSERVABILITY
# =============================================================================

DEFAULT_OUTPUT_DIR: str = os.getenv("OPBENCH_OUTPUT_DIR", "results")
DEFAULT_FILENAME_PREFIX: str = "opbench"
PROMETHEUS_PORT: int = int(os.getenv("OPBENCH_PROMETHEUS_PORT", "9100"))
LOG_LEVEL: str = os.getenv("OPBENCH_LOG_LEVEL", "INFO")
