# FILE: unloggarr/scheduler/cron.py
"""
Minimal cron evaluation for the analysis scheduler.

Only the first two fields of a five-field pattern are evaluated:
- minute: literal (0-59), `*`, or `*/N`
- hour:   literal (0-23) or `*`
Day-of-month, month and weekday are accepted but ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

# Two days of minutes covers every minute/hour combination
_SEARCH_LIMIT_MINUTES = 2 * 24 * 60


@dataclass(frozen=True)
class CronPattern:
    minute: str
    hour: str
    raw: str

    def minute_matches(self, minute: int) -> bool:
        if self.minute == "*":
            return True
        if self.minute.startswith("*/"):
            return minute % int(self.minute[2:]) == 0
        return int(self.minute) == minute

    def hour_matches(self, hour: int) -> bool:
        return self.hour == "*" or int(self.hour) == hour


def _validate_minute(field: str) -> None:
    if field == "*":
        return
    if field.startswith("*/"):
        step = field[2:]
        if not step.isdigit() or int(step) < 1:
            raise ValueError(f"Invalid minute step: {field!r}")
        return
    if not field.isdigit() or not 0 <= int(field) <= 59:
        raise ValueError(f"Invalid minute field: {field!r}")


def _validate_hour(field: str) -> None:
    if field == "*":
        return
    if not field.isdigit() or not 0 <= int(field) <= 23:
        raise ValueError(f"Unsupported hour field: {field!r} (use a literal hour or '*')")


def parse_pattern(pattern: str) -> CronPattern:
    """
    Parse a cron pattern, validating the minute and hour fields.

    Raises:
        ValueError: fewer than two fields, or an unsupported minute/hour form
    """
    fields = (pattern or "").split()
    if len(fields) < 2 or len(fields) > 5:
        raise ValueError(f"Invalid cron pattern: {pattern!r}")

    minute, hour = fields[0], fields[1]
    _validate_minute(minute)
    _validate_hour(hour)
    return CronPattern(minute=minute, hour=hour, raw=pattern)


def matches(pattern: str, now: datetime) -> bool:
    cron = parse_pattern(pattern)
    return cron.minute_matches(now.minute) and cron.hour_matches(now.hour)


def next_run_time(pattern: str, now: Optional[datetime] = None) -> datetime:
    """First whole minute strictly after `now` that matches the pattern."""
    cron = parse_pattern(pattern)
    now = now or datetime.now()
    candidate = now.replace(second=0, microsecond=0) + timedelta(minutes=1)

    for _ in range(_SEARCH_LIMIT_MINUTES):
        if cron.minute_matches(candidate.minute) and cron.hour_matches(candidate.hour):
            return candidate
        candidate += timedelta(minutes=1)

    raise ValueError(f"No run time found for pattern {pattern!r}")


__all__ = ["CronPattern", "parse_pattern", "matches", "next_run_time"]
