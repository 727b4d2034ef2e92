# FILE: unloggarr/scheduler/schemas.py
"""
Schemas for the analysis scheduler.

Serialised in camelCase, the shape the dashboard reads.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from unloggarr.llm.usage import TokenUsage


class ScheduleStatus(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"


class SchedulerAction(str, Enum):
    START = "start"
    STOP = "stop"
    TRIGGER = "trigger"
    STATUS = "status"


class ScheduleConfig(BaseModel):
    """Process-lifetime scheduler state; reset on restart."""
    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = False
    pattern: str
    last_run_at: Optional[datetime] = Field(default=None, alias="lastRunAt")
    next_run_at: Optional[datetime] = Field(default=None, alias="nextRunAt")
    status: ScheduleStatus = ScheduleStatus.STOPPED


class ScheduleControlRequest(BaseModel):
    action: str
    schedule: Optional[str] = None


class ScheduledAnalysisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    log_file: Optional[str] = Field(default=None, alias="logFile")
    tail_lines: Optional[int] = Field(default=None, alias="tailLines", ge=1)
    send_notification: bool = Field(default=True, alias="sendNotification")


class ScheduledAnalysisReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    log_file: str = Field(alias="logFile")
    logs_analyzed: int = Field(alias="logsAnalyzed")
    error_count: int = Field(alias="errorCount")
    warn_count: int = Field(alias="warnCount")
    summary: str
    token_usage: Optional[TokenUsage] = Field(default=None, alias="tokenUsage")
    timestamp: datetime


__all__ = [
    "ScheduleStatus",
    "SchedulerAction",
    "ScheduleConfig",
    "ScheduleControlRequest",
    "ScheduledAnalysisRequest",
    "ScheduledAnalysisReport",
]
