import os
import sys
import logging
import argparse

# Add the current directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from configuration import (
    DEFAULT_NUM_THREADS, DEFAULT_NUM_OPERATIONS, DEFAULT_BYTES_PER_OP,
    DEFAULT_OP_LATENCY_MS, DEFAULT_LABEL, DEFAULT_OUTPUT_DIR, LOG_LEVEL
)

# Set up logging (only if not already configured)
if not logging.root.handlers:
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


class OpBenchCLI:
    """Simple CLI interface for the operation benchmark."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description='Operation Benchmark CLI',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Run 10000 synthetic operations of 4KB on 8 threads
  python cli.py run --threads 8 --operations 10000 --bytes-per-op 4096

  # Same, exporting live metrics to Prometheus on port 9100
  python cli.py run --threads 8 --operations 10000 --prometheus-port 9100

  # Show the per-label aggregate of saved summaries
  python cli.py show --parquet-file results/opbench_20241201_120000.parquet
            """
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Run command
        run_parser = subparsers.add_parser('run', help='Run the synthetic workload')
        run_parser.add_argument('--threads', type=int, default=DEFAULT_NUM_THREADS,
                                help=f'Number of worker threads (default: {DEFAULT_NUM_THREADS})')
        run_parser.add_argument('--operations', type=int, default=DEFAULT_NUM_OPERATIONS,
                                help=f'Total operations across all threads (default: {DEFAULT_NUM_OPERATIONS})')
        run_parser.add_argument('--bytes-per-op', type=int, default=DEFAULT_BYTES_PER_OP,
                                help=f'Bytes transferred per operation (default: {DEFAULT_BYTES_PER_OP})')
        run_parser.add_argument('--op-latency-ms', type=float, default=DEFAULT_OP_LATENCY_MS,
                                help=f'Simulated latency per operation in ms (default: {DEFAULT_OP_LATENCY_MS})')
        run_parser.add_argument('--label', type=str, default=DEFAULT_LABEL,
                                help=f'Label of the reported workload (default: {DEFAULT_LABEL})')
        run_parser.add_argument('--output-dir', type=str, default=DEFAULT_OUTPUT_DIR,
                                help=f'Output directory for the Parquet summary (default: {DEFAULT_OUTPUT_DIR})')
        run_parser.add_argument('--no-save', action='store_true',
                                help='Do not write the summary to a Parquet file')
        run_parser.add_argument('--prometheus-port', type=int, default=None,
                                help='Expose Prometheus metrics on this port (default: disabled)')

        # Show command
        show_parser = subparsers.add_parser('show', help='Show saved workload summaries')
        show_parser.add_argument('--parquet-file', type=str, required=True,
                                 help='Path to the Parquet file containing workload summaries')

        return parser

    def run_workload(self, args):
        """Run the synthetic workload through the thread runner."""
        try:
            from common.thread_runner import ThreadRunner
            from persistence.parquet import ParquetPersistence
            from persistence.prom import SimplePrometheusExporter
            from workloads.synthetic import SyntheticWorkload

            logger.info("=== Run Workload ===")

            exporter = None
            if args.prometheus_port is not None:
                exporter = SimplePrometheusExporter(port=args.prometheus_port)
                exporter.start_server()

            persistence = None if args.no_save else ParquetPersistence(args.output_dir)

            workload = SyntheticWorkload(
                bytes_per_op=args.bytes_per_op,
                op_latency_ms=args.op_latency_ms,
                name=args.label,
            )
            runner = ThreadRunner(
                workload,
                num_threads=args.threads,
                num_operations=args.operations,
                exporter=exporter,
                persistence=persistence,
            )

            summary = runner.run()
            if summary is None:
                logger.error("Workload produced no summary")
                return 1

            if persistence is not None:
                filepath = persistence.save_to_file()
                logger.info(f"Saved summary to {filepath}")

            logger.info("Run completed successfully")
            return 0

        except Exception as e:
            logger.error(f"Error in run phase: {e}")
            return 1

    def run_show(self, args):
        """Log the per-label aggregate of saved summaries."""
        try:
            from common.metrics_utils import summarize_summaries, bytes_to_kb
            from persistence.parquet import ParquetPersistence

            logger.info("=== Saved Summaries ===")

            # Check if parquet file exists
            if not os.path.exists(args.parquet_file):
                logger.error(f"Parquet file not found: {args.parquet_file}")
                return 1

            data = ParquetPersistence.load_from_file(args.parquet_file)
            aggregate = summarize_summaries(data)

            if len(aggregate) == 0:
                logger.error("No summaries found")
                return 1

            for _, row in aggregate.iterrows():
                logger.info(
                    f"{row['label']}: {row['runs']} runs, {row['total_operations']} ops, "
                    f"{row['avg_microseconds_per_operation']:.3f} micros/op, "
                    f"{bytes_to_kb(row['avg_bytes_per_second']):.1f} KB/s avg, "
                    f"{bytes_to_kb(row['max_bytes_per_second']):.1f} KB/s max"
                )
            return 0

        except Exception as e:
            logger.error(f"Error in show phase: {e}")
            return 1

    def run(self, args=None):
        """Run the CLI with the given arguments."""
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            if parsed_args.command == 'run':
                return self.run_workload(parsed_args)
            elif parsed_args.command == 'show':
                return self.run_show(parsed_args)
            else:
                logger.error(f"Unknown command: {parsed_args.command}")
                return 1

        except KeyboardInterrupt:
            logger.info("Operation interrupted by user")
            return 1


def main():
    """Main entry point."""
    cli = OpBenchCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
