"""
Parquet persistence for workload summaries.
"""

import os
import logging
from typing import List, Optional
from datetime import datetime

import pandas as pd

from configuration import DEFAULT_OUTPUT_DIR, DEFAULT_FILENAME_PREFIX
from persistence.record import WorkloadSummary

logger = logging.getLogger(__name__)


class ParquetPersistence:
    """Parquet file persistence for workload summaries.

    Summaries are kept in memory while the benchmark runs and written out
    together for later analysis.

    Attributes:
        output_dir: Directory where Parquet files will be saved
        summaries: Workload summaries accumulated during the benchmark
    """

    def __init__(self, output_dir: str = DEFAULT_OUTPUT_DIR):
        """Initialize Parquet persistence.

        Args:
            output_dir: Directory for saving Parquet files (default: from configuration)
        """
        self.output_dir: str = output_dir
        self.summaries: List[WorkloadSummary] = []

        # Ensure output directory exists
        os.makedirs(output_dir, exist_ok=True)

    def store_summary(self, summary: WorkloadSummary) -> None:
        """Store a workload summary in memory.

        Args:
            summary: Summary to store
        """
        self.summaries.append(summary)

    def to_dataframe(self) -> pd.DataFrame:
        """Stored summaries as a DataFrame, one row per summary."""
        return pd.DataFrame([summary.to_dict() for summary in self.summaries])

    def save_to_file(self, filename_prefix: str = DEFAULT_FILENAME_PREFIX) -> Optional[str]:
        """Save all summaries to a Parquet file.

        Args:
            filename_prefix: Prefix for the generated filename

        Returns:
            Path to the saved file, or None if no summaries to save
        """
        if not self.summaries:
            return None

        logger.info(f"Saving {len(self.summaries)} summaries to file")
        df = self.to_dataframe()

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{filename_prefix}_{timestamp}.parquet"
        filepath = os.path.join(self.output_dir, filename)

        df.to_parquet(filepath, index=False)

        return filepath

    @staticmethod
    def load_from_file(filepath: str) -> pd.DataFrame:
        """Load summaries previously written by save_to_file.

        Args:
            filepath: Path to the Parquet file

        Returns:
            DataFrame with one row per stored summary
        """
        return pd.read_parquet(filepath)
