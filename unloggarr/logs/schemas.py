# FILE: unloggarr/logs/schemas.py
"""
Schemas for log retrieval and display.

Records are immutable; a fetch always produces a fresh batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from unloggarr.settings import DEFAULT_TAIL_LINES


class Severity(str, Enum):
    """Severity buckets, in sampling priority order."""
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"


SEVERITY_ORDER = (Severity.ERROR, Severity.WARN, Severity.INFO, Severity.DEBUG)

LEVEL_ALL = "ALL"


class LogRecord(BaseModel):
    """Single parsed log line.

    Serialised with the dashboard's field names (`id`, `level`).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sequence: int = Field(alias="id")
    timestamp: datetime
    severity: Severity = Field(alias="level")
    message: str
    source: Optional[str] = None


@dataclass(frozen=True)
class SampledBatch:
    """Read-only subset of a batch selected for analysis."""
    records: tuple[LogRecord, ...]
    total_count: int
    severity_counts: dict[str, int] = field(default_factory=dict)
    strategy: str = "complete"

    @property
    def sampled_count(self) -> int:
        return len(self.records)


class LogFetchRequest(BaseModel):
    log_file_path: str
    tail_lines: int = Field(default=DEFAULT_TAIL_LINES, ge=1, le=100000)
    level: str = LEVEL_ALL
    search: str = ""


class LogFetchResponse(BaseModel):
    success: bool
    logs: list[str] = Field(default_factory=list)
    records: list[dict] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)
    total_lines: int = 0
    using_sample_data: bool = False
    error: Optional[str] = None


class AvailableLogsResponse(BaseModel):
    success: bool
    available_logs: list[str]


__all__ = [
    "Severity",
    "SEVERITY_ORDER",
    "LEVEL_ALL",
    "LogRecord",
    "SampledBatch",
    "LogFetchRequest",
    "LogFetchResponse",
    "AvailableLogsResponse",
]
