# FILE: unloggarr/llm/prompts.py
"""Prompt builders for interactive and scheduled log analysis."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

from unloggarr.logs.sampler import STRATEGY_COMPLETE
from unloggarr.logs.schemas import LogRecord, SampledBatch


def format_record(record: LogRecord) -> str:
    return f"[{record.timestamp.isoformat()}] {record.severity.value}: {record.message}"


def format_log_text(batch: SampledBatch) -> str:
    return "\n".join(format_record(r) for r in batch.records)


def _strategy_label(batch: SampledBatch) -> str:
    if batch.strategy == STRATEGY_COMPLETE:
        return "Complete analysis of all logs"
    return "Intelligent sampling prioritizing errors and warnings"


def build_analysis_prompt(batch: SampledBatch, log_file: str, selected_level: str) -> str:
    return f"""You are an expert system administrator analyzing Unraid server logs.

**CONTEXT:**
- Log file: {log_file}
- Filter level: {selected_level}
- Total logs in dataset: {batch.total_count}
- Logs being analyzed: {batch.sampled_count}
- Log level breakdown: {json.dumps(batch.severity_counts)}
- Sampling strategy: {_strategy_label(batch)}

**LOG DATA:**
{format_log_text(batch)}

**ANALYSIS REQUIREMENTS:**
Please provide a comprehensive analysis including:

1. **🏥 SYSTEM HEALTH OVERVIEW**
   - Overall system status assessment
   - Critical issues requiring immediate attention

2. **🚨 ERROR ANALYSIS**
   - Key errors and their potential causes
   - Severity assessment of each error type

3. **⚠️ WARNING PATTERNS**
   - Recurring warnings and their implications
   - Trends that might indicate future problems

4. **💡 RECOMMENDATIONS**
   - Specific actionable steps to resolve issues
   - Preventive measures for better system stability

5. **📊 INSIGHTS**
   - Notable patterns or anomalies
   - Performance or security observations

Format your response in clear markdown with emojis for better readability. Be specific about Unraid-related issues and provide practical solutions."""


def build_scheduled_prompt(batch: SampledBatch, log_file: str, now: Optional[datetime] = None) -> str:
    """Concise variant used for push notifications."""
    now = now or datetime.now(timezone.utc)
    return f"""You are an expert system administrator analyzing Unraid server logs for an automated monitoring system.

**CONTEXT:**
- Log file: {log_file}
- Total logs analyzed: {batch.total_count}
- Log level breakdown: {json.dumps(batch.severity_counts)}
- Analysis time: {now.isoformat()}

**LOG DATA:**
{format_log_text(batch)}

**REQUIREMENTS:**
Provide a CONCISE summary suitable for push notifications. Focus on:

1. **System Health Status**: One-line overall assessment
2. **Critical Issues**: List only urgent problems requiring immediate attention
3. **Key Warnings**: Important patterns or recurring issues
4. **Action Items**: Specific next steps if any issues found

Keep the summary under 500 words and prioritize actionable information. Use clear, non-technical language when possible."""


__all__ = [
    "format_record",
    "format_log_text",
    "build_analysis_prompt",
    "build_scheduled_prompt",
]
