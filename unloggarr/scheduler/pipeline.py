# FILE: unloggarr/scheduler/pipeline.py
"""
One scheduled analysis cycle:

1. Check the LLM credential (before any network call)
2. Fetch the log tail through the proxy
3. Parse and sample
4. Collect a concise summary from the LLM
5. Push the result to Gotify

Failures push a priority-10 alert (when notifications are on for the run)
and are re-raised for the caller to record.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from unloggarr.errors import EmptyBatchError
from unloggarr.llm.prompts import build_scheduled_prompt
from unloggarr.llm.relay import collect_analysis
from unloggarr.llm.streaming import require_credentials
from unloggarr.llm.usage import TokenUsage
from unloggarr.logs.parser import parse_log_lines
from unloggarr.logs.sampler import sample_logs
from unloggarr.mcpo.client import ProxyClient
from unloggarr.notifications.gotify import (
    PRIORITY_CRITICAL,
    PRIORITY_ELEVATED,
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    send_notification,
)
from unloggarr.scheduler.schemas import ScheduledAnalysisReport
from unloggarr.settings import get_schedule_log_file, get_schedule_tail_lines

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str, int], Awaitable[bool]]

# More warnings than this raise the notification priority
WARN_ALERT_THRESHOLD = 5


def notification_priority(error_count: int, warn_count: int) -> int:
    if error_count > 0:
        return PRIORITY_HIGH
    if warn_count > WARN_ALERT_THRESHOLD:
        return PRIORITY_ELEVATED
    return PRIORITY_NORMAL


def notification_title(error_count: int, warn_count: int) -> str:
    if error_count > 0:
        return f"🚨 Unraid Alert: {error_count} Errors Found"
    if warn_count > WARN_ALERT_THRESHOLD:
        return f"⚠️ Unraid Warning: {warn_count} Warnings"
    return "✅ Unraid Status: System Normal"


def notification_message(report: ScheduledAnalysisReport) -> str:
    tokens = ""
    if report.token_usage is not None:
        tokens = f" • {report.token_usage.total_tokens} tokens"
    return (
        "📊 **Log Analysis Summary**\n"
        f"**File:** {report.log_file}\n"
        f"**Logs Analyzed:** {report.logs_analyzed}\n"
        f"**Issues:** {report.error_count} errors, {report.warn_count} warnings\n"
        "\n"
        f"{report.summary}\n"
        "\n"
        "---\n"
        f"*Automated analysis • {report.timestamp.strftime('%Y-%m-%d %H:%M:%S')}*{tokens}"
    )


async def run_analysis_cycle(
    proxy: ProxyClient,
    log_file: Optional[str] = None,
    tail_lines: Optional[int] = None,
    notify: bool = True,
    notifier: Notifier = send_notification,
) -> ScheduledAnalysisReport:
    """
    Run fetch -> sample -> analyze -> notify once.

    Raises:
        EmptyBatchError: the proxy returned no lines
        MissingCredentialError, ProxyError, CompletionError: propagated after
            the failure alert
    """
    log_file = log_file or get_schedule_log_file()
    tail_lines = tail_lines or get_schedule_tail_lines()

    logger.info(f"[pipeline] Starting analysis cycle for {log_file} ({tail_lines} lines)")

    try:
        require_credentials()

        lines = await proxy.fetch_log_lines(log_file, tail_lines)
        if not lines:
            raise EmptyBatchError("No logs found for analysis")

        records = parse_log_lines(lines)
        batch = sample_logs(records)
        now = datetime.now(timezone.utc)

        result = await collect_analysis(build_scheduled_prompt(batch, log_file, now))

        counts = batch.severity_counts
        report = ScheduledAnalysisReport(
            log_file=log_file,
            logs_analyzed=batch.total_count,
            error_count=counts["ERROR"],
            warn_count=counts["WARN"],
            summary=result.summary_text,
            token_usage=result.usage or TokenUsage(),
            timestamp=now,
        )

    except EmptyBatchError as e:
        logger.error(f"[pipeline] {e}")
        if notify:
            await notifier("⚠️ unloggarr Alert", f"Scheduled analysis failed: {e}", PRIORITY_HIGH)
        raise
    except Exception as e:
        logger.exception("[pipeline] Analysis cycle failed")
        if notify:
            await notifier("🔥 unloggarr Error", f"Scheduled analysis failed: {e}", PRIORITY_CRITICAL)
        raise

    if notify:
        await notifier(
            notification_title(report.error_count, report.warn_count),
            notification_message(report),
            notification_priority(report.error_count, report.warn_count),
        )

    logger.info(
        f"[pipeline] Complete: analyzed={report.logs_analyzed}, "
        f"errors={report.error_count}, warnings={report.warn_count}"
    )
    return report


__all__ = [
    "WARN_ALERT_THRESHOLD",
    "notification_priority",
    "notification_title",
    "notification_message",
    "run_analysis_cycle",
]
