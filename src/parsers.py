"""Cascading HTTP status parsers for container log lines.

Strategies are tried in a fixed order and the first one that matches wins:
  1. Combined access log  — 'host ident user [time] "METHOD path proto" status size'
  2. Common access log    — literal '- -' placeholders, loose request tail
  3. Key/value            — '"status": 500' (or bare 'status: 500') anywhere
  4. Fallback             — first standalone 4xx/5xx token anywhere
Lines that match none of them are dropped silently.
"""

import re
from dataclasses import dataclass
from typing import Callable

from src.models import LogEvent

# ---------------------------------------------------------------------------
# Compiled regex patterns
# ---------------------------------------------------------------------------

_COMBINED_RE = re.compile(
    r'^(?P<host>\S+) \S+ \S+ '
    r'\[(?P<time>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>\S+) \S+" '
    r'(?P<status>\d+) '
    r'(?P<size>\d+)',
    re.ASCII,
)

_COMMON_RE = re.compile(
    r'^(?P<host>\S+) - - '
    r'\[(?P<time>[^\]]+)\] '
    r'"(?P<method>\S+) (?P<path>\S+) [^"]*" '
    r'(?P<status>\d+) '
    r'(?P<size>\d+)',
    re.ASCII,
)

_KEYVALUE_RE = re.compile(r'(?:"status"|\bstatus\b)\s*:\s*(?P<status>\d+)', re.ASCII)

# 2xx/3xx tokens are ambiguous in free text, so only error codes qualify.
_FALLBACK_RE = re.compile(r'\b(?P<status>[45]\d{2})\b', re.ASCII)

# ---------------------------------------------------------------------------
# Extractors
#
# Numeric groups are ASCII \d+, so int() cannot fail here. An extractor may
# still return None to reject a match; parse_line then tries the next strategy.
# ---------------------------------------------------------------------------


def _extract_access_log(m: re.Match, fmt: str, pod: str, container: str) -> LogEvent | None:
    return LogEvent(
        status_code=int(m.group("status")),
        pod=pod,
        container=container,
        source_format=fmt,
        timestamp=m.group("time"),
        method=m.group("method"),
        path=m.group("path"),
        response_size=int(m.group("size")),
    )


def _extract_status_only(m: re.Match, fmt: str, pod: str, container: str) -> LogEvent | None:
    return LogEvent(
        status_code=int(m.group("status")), pod=pod, container=container, source_format=fmt,
    )


# ---------------------------------------------------------------------------
# Strategy table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Strategy:
    name: str
    find: Callable[[str], re.Match | None]
    extract: Callable[[re.Match, str, str, str], LogEvent | None]


STRATEGIES: tuple[Strategy, ...] = (
    Strategy("combined", _COMBINED_RE.match, _extract_access_log),
    Strategy("common", _COMMON_RE.match, _extract_access_log),
    Strategy("keyvalue", _KEYVALUE_RE.search, _extract_status_only),
    Strategy("fallback", _FALLBACK_RE.search, _extract_status_only),
)


def parse_line(line: str, pod: str, container: str,
               strategies: tuple[Strategy, ...] = STRATEGIES) -> LogEvent | None:
    """Parse one log line into a LogEvent, or None if no strategy matched.

    Pure function: no I/O, no shared state, never raises for a str input.
    """
    if not line:
        return None

    for strategy in strategies:
        m = strategy.find(line)
        if not m:
            continue
        event = strategy.extract(m, strategy.name, pod, container)
        if event is not None:
            return event

    return None
