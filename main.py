"""Entry point for the HTTP Log Exporter."""

import logging
import signal
import sys
import threading

from src.aggregator import MetricAggregator
from src.config import load_config
from src.log_source import KubernetesLogSource, LogSourceError
from src.metrics import ExporterMetrics
from src.scheduler import start_scheduler
from src.scraper import LogScraper
from src.server import create_app, start_server_thread

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    shutdown_event = threading.Event()
    server_stopped = threading.Event()

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        source = KubernetesLogSource(config.namespace, config.pod_selector, config.scrape_timeout)
    except LogSourceError as exc:
        logger.error("Failed to create HTTP log exporter: %s", exc)
        sys.exit(1)

    metrics = ExporterMetrics()
    aggregator = MetricAggregator(metrics, config.namespace)
    scraper = LogScraper(source, aggregator, metrics, config.namespace, config.log_lines)

    logger.info(
        "Configuration: namespace=%s, scrape_interval=%ds, log_lines=%d, pod_selector=%s",
        config.namespace, config.scrape_interval, config.log_lines, config.pod_selector,
    )

    scheduler = start_scheduler(scraper, config.scrape_interval)

    app = create_app(metrics)
    start_server_thread(app, config.host, config.port, server_stopped)
    logger.info("HTTP Log Exporter listening on %s:%d", config.host, config.port)
    logger.info("Metrics available at: http://localhost:%d/metrics", config.port)
    logger.info("Health check available at: http://localhost:%d/health", config.port)

    # Either a signal or a dead metrics server ends the process.
    while not shutdown_event.is_set() and not server_stopped.is_set():
        shutdown_event.wait(timeout=0.5)

    scheduler.shutdown(wait=False)
    if server_stopped.is_set() and not shutdown_event.is_set():
        logger.error("HTTP server stopped, exiting")
        sys.exit(1)
    logger.info("HTTP Log Exporter stopped.")


if __name__ == "__main__":
    main()
