"""Prometheus metric families exported by the service, on a private registry."""

from prometheus_client import CollectorRegistry, Counter, Gauge


class ExporterMetrics:
    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests scraped from container logs",
            ["namespace", "pod", "container", "status_code"],
            registry=self.registry,
        )
        self.http_errors_total = Counter(
            "http_errors_total",
            "Total number of HTTP errors scraped from container logs",
            ["namespace", "pod", "container", "status_code", "error_class"],
            registry=self.registry,
        )
        self.last_scrape_timestamp = Gauge(
            "http_log_scraper_last_scrape_timestamp_seconds",
            "Unix timestamp of the last successful log scrape",
            ["namespace", "pod", "container"],
            registry=self.registry,
        )
        self.scrape_errors_total = Counter(
            "http_log_scraper_errors_total",
            "Total number of errors encountered while scraping logs",
            ["namespace", "pod", "container", "error_type"],
            registry=self.registry,
        )
