"""
Simple Prometheus metrics exporter for the operation benchmark.
"""

import logging
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

from configuration import PROMETHEUS_PORT

logger = logging.getLogger(__name__)


class SimplePrometheusExporter:
    """Simple Prometheus metrics exporter.

    Metrics live on a private registry so several exporters can coexist in
    one process (e.g. in tests).
    """

    def __init__(self, port: int = PROMETHEUS_PORT, registry: CollectorRegistry = None):
        self.port = port
        self.server_started = False
        self.registry = registry or CollectorRegistry()

        # Define metrics
        self.operations_total = Counter(
            'opbench_operations_total', 'Total operations recorded', registry=self.registry)
        self.bytes_total = Counter(
            'opbench_bytes_total', 'Total bytes transferred', registry=self.registry)
        self.operation_duration = Histogram(
            'opbench_operation_duration_seconds', 'Operation duration', registry=self.registry)
        self.bytes_per_second = Gauge(
            'opbench_bytes_per_second', 'Reported throughput in bytes/s',
            ['workload'], registry=self.registry)
        self.microseconds_per_operation = Gauge(
            'opbench_microseconds_per_operation', 'Reported latency in micros/op',
            ['workload'], registry=self.registry)

    def start_server(self):
        """Start the Prometheus HTTP server."""
        if not self.server_started:
            try:
                start_http_server(self.port, registry=self.registry)
                self.server_started = True
                logger.info(f"Prometheus server started on port {self.port}")
            except Exception as e:
                logger.error(f"Failed to start Prometheus server: {e}")

    def record_outcome(self, op_stats):
        """Record one operation outcome."""
        try:
            self.operations_total.inc()
            self.bytes_total.inc(op_stats.transferred_bytes)
            self.operation_duration.observe(op_stats.elapsed_time)
        except Exception as e:
            logger.error(f"Failed to record operation metric: {e}")

    def update_summary(self, summary):
        """Publish a reported workload summary."""
        try:
            self.bytes_per_second.labels(workload=summary.label).set(summary.bytes_per_second)
            self.microseconds_per_operation.labels(workload=summary.label).set(
                summary.microseconds_per_operation)
        except Exception as e:
            logger.error(f"Failed to update summary metrics: {e}")
