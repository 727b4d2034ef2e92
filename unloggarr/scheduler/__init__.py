"""
Scheduled log analysis.

A cron-like timer (minute/hour fields only) that runs the full
fetch -> sample -> analyze -> notify pipeline.
"""

from unloggarr.scheduler.cron import CronPattern, parse_pattern, matches, next_run_time
from unloggarr.scheduler.schemas import ScheduleConfig, ScheduleStatus, ScheduledAnalysisReport
from unloggarr.scheduler.pipeline import run_analysis_cycle
from unloggarr.scheduler.service import SchedulerService

__all__ = [
    "CronPattern",
    "parse_pattern",
    "matches",
    "next_run_time",
    "ScheduleConfig",
    "ScheduleStatus",
    "ScheduledAnalysisReport",
    "run_analysis_cycle",
    "SchedulerService",
]
