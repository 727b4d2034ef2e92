# FILE: unloggarr/logs/parser.py
"""
Log line parsing.

Turns raw syslog-style lines into LogRecords. Parsing never fails: anything
unrecognised degrades to INFO with the current wall-clock time.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable, Optional

from unloggarr.logs.schemas import LEVEL_ALL, LogRecord, Severity

# First matching rule wins
_SEVERITY_RULES = (
    (Severity.ERROR, ("error", "fail", "critical")),
    (Severity.WARN, ("warn",)),
    (Severity.DEBUG, ("debug", "trace")),
)

# "May 23 20:00:01" or "Jan  5 08:00:00"
_SYSLOG_PREFIX = re.compile(r"^([A-Za-z]{3})\s+(\d{1,2})\s+(\d{2}):(\d{2}):(\d{2})")

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def classify_severity(line: str) -> Severity:
    lowered = (line or "").lower()
    for severity, keywords in _SEVERITY_RULES:
        if any(k in lowered for k in keywords):
            return severity
    return Severity.INFO


def parse_timestamp(line: str, now: Optional[datetime] = None) -> datetime:
    """
    Extract the syslog timestamp prefix from a line.

    The year is always the current calendar year, so logs spanning a new
    year are misdated. Lines without a recognised prefix get `now`.
    """
    now = now or datetime.now()
    match = _SYSLOG_PREFIX.match(line or "")
    if not match:
        return now

    month, day, hh, mm, ss = match.groups()
    if month not in _MONTHS:
        return now

    try:
        return datetime(now.year, _MONTHS.index(month) + 1, int(day), int(hh), int(mm), int(ss))
    except ValueError:
        return now


def parse_log_line(line: str, index: int) -> LogRecord:
    return LogRecord(
        sequence=index + 1,
        timestamp=parse_timestamp(line),
        severity=classify_severity(line),
        message=line,
    )


def parse_log_lines(lines: Iterable[str]) -> list[LogRecord]:
    return [parse_log_line(line, i) for i, line in enumerate(lines)]


def filter_logs(records: Iterable[LogRecord], search: str = "", level: str = LEVEL_ALL) -> list[LogRecord]:
    """Keep records matching a case-insensitive search term and a level (or ALL)."""
    needle = (search or "").lower()
    wanted = (level or LEVEL_ALL).upper()

    result = []
    for r in records:
        matches_search = needle in r.message.lower() or (r.source is not None and needle in r.source.lower())
        matches_level = wanted == LEVEL_ALL or r.severity.value == wanted
        if matches_search and matches_level:
            result.append(r)
    return result


__all__ = [
    "classify_severity",
    "parse_timestamp",
    "parse_log_line",
    "parse_log_lines",
    "filter_logs",
]
