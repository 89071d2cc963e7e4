"""Turns parsed LogEvents into cumulative request/error counters."""

from src.metrics import ExporterMetrics
from src.models import LogEvent


def classify_status(status_code: int) -> str | None:
    """Return '4xx' or '5xx' for error codes, None for everything else."""
    if 400 <= status_code < 500:
        return "4xx"
    if 500 <= status_code < 600:
        return "5xx"
    return None


class MetricAggregator:
    """Counter sink keyed by (namespace, pod, container, status_code[, error_class]).

    Counter children are created on first use and are internally locked by
    prometheus_client, so process() is safe to call from several threads.
    """

    def __init__(self, metrics: ExporterMetrics, namespace: str):
        self._metrics = metrics
        self._namespace = namespace

    def process(self, event: LogEvent):
        """Count one request, plus one error when the status is 4xx/5xx."""
        status = str(event.status_code)
        self._metrics.http_requests_total.labels(
            self._namespace, event.pod, event.container, status,
        ).inc()

        error_class = classify_status(event.status_code)
        if error_class is not None:
            self._metrics.http_errors_total.labels(
                self._namespace, event.pod, event.container, status, error_class,
            ).inc()
