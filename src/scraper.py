"""One scrape cycle: tail every target container and feed parsed lines to the aggregator."""

import logging

from src.aggregator import MetricAggregator
from src.log_source import LogSourceError
from src.metrics import ExporterMetrics
from src.models import ContainerScrapeResult, ScrapeSummary, ScrapeTarget
from src.parsers import parse_line

logger = logging.getLogger(__name__)


class LogScraper:
    def __init__(self, source, aggregator: MetricAggregator, metrics: ExporterMetrics,
                 namespace: str, log_lines: int):
        self._source = source
        self._aggregator = aggregator
        self._metrics = metrics
        self._namespace = namespace
        self._log_lines = log_lines

    def scrape_container(self, target: ScrapeTarget) -> ContainerScrapeResult:
        """Tail one container and count every parsed line. Raises LogSourceError."""
        lines = self._source.tail(target.pod, target.container, self._log_lines)

        events = 0
        for line in lines:
            event = parse_line(line, target.pod, target.container)
            if event is not None:
                self._aggregator.process(event)
                events += 1

        self._metrics.last_scrape_timestamp.labels(
            self._namespace, target.pod, target.container,
        ).set_to_current_time()

        logger.info(
            "Processed %d log lines (%d events) from pod %s, container %s",
            len(lines), events, target.pod, target.container,
        )
        return ContainerScrapeResult(target=target, lines_read=len(lines), events=events)

    def scrape_once(self) -> ScrapeSummary:
        """Scrape every running container once. Never raises LogSourceError."""
        try:
            targets = self._source.list_targets()
        except LogSourceError as exc:
            logger.error("Scrape failed: %s", exc)
            return ScrapeSummary(listed=False)

        summary = ScrapeSummary()
        for target in targets:
            try:
                result = self.scrape_container(target)
            except LogSourceError as exc:
                logger.warning(
                    "Error scraping logs from pod %s, container %s: %s",
                    target.pod, target.container, exc,
                )
                self._metrics.scrape_errors_total.labels(
                    self._namespace, target.pod, target.container, "scrape_failed",
                ).inc()
                summary.containers_failed += 1
                continue

            summary.containers_scraped += 1
            summary.lines_read += result.lines_read
            summary.events += result.events

        logger.info(
            "Scrape complete: %d containers, %d failed, %d lines, %d events",
            summary.containers_scraped, summary.containers_failed,
            summary.lines_read, summary.events,
        )
        return summary
