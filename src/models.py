"""Data types shared by the parser, aggregator and scraper."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LogEvent:
    status_code: int
    pod: str
    container: str
    source_format: str  # "combined", "common", "keyvalue", "fallback"

    timestamp: str = ""
    method: str = ""
    path: str = ""
    response_size: int = 0


@dataclass(frozen=True)
class ScrapeTarget:
    pod: str
    container: str


@dataclass(frozen=True)
class ContainerScrapeResult:
    target: ScrapeTarget
    lines_read: int
    events: int


@dataclass
class ScrapeSummary:
    listed: bool = True
    containers_scraped: int = 0
    containers_failed: int = 0
    lines_read: int = 0
    events: int = 0
