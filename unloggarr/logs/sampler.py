# FILE: unloggarr/logs/sampler.py
"""
Priority sampling of log batches before analysis.

Small batches go through whole. Large batches are bucketed by severity and
each bucket contributes up to its quota, errors first, so that a flood of
INFO/DEBUG lines can never crowd out errors and warnings. Deterministic and
order-preserving within each bucket.
"""

from __future__ import annotations

import logging
from typing import Sequence

from unloggarr.logs.schemas import SEVERITY_ORDER, LogRecord, SampledBatch, Severity

logger = logging.getLogger(__name__)

SAMPLE_CAP = 1000

BUCKET_QUOTAS = {
    Severity.ERROR: 200,
    Severity.WARN: 200,
    Severity.INFO: 300,
    Severity.DEBUG: 300,
}

STRATEGY_COMPLETE = "complete"
STRATEGY_PRIORITY = "priority"


def count_by_severity(records: Sequence[LogRecord]) -> dict[str, int]:
    counts = {s.value: 0 for s in SEVERITY_ORDER}
    for r in records:
        counts[r.severity.value] += 1
    counts["total"] = len(records)
    return counts


def sample_logs(records: Sequence[LogRecord], cap: int = SAMPLE_CAP) -> SampledBatch:
    counts = count_by_severity(records)

    if len(records) <= cap:
        return SampledBatch(
            records=tuple(records),
            total_count=len(records),
            severity_counts=counts,
            strategy=STRATEGY_COMPLETE,
        )

    buckets: dict[Severity, list[LogRecord]] = {s: [] for s in SEVERITY_ORDER}
    for r in records:
        buckets[r.severity].append(r)

    selected: list[LogRecord] = []
    for severity in SEVERITY_ORDER:
        selected.extend(buckets[severity][:BUCKET_QUOTAS[severity]])

    selected = selected[:cap]
    logger.debug(f"[sampler] Sampled {len(selected)} of {len(records)} records")

    return SampledBatch(
        records=tuple(selected),
        total_count=len(records),
        severity_counts=counts,
        strategy=STRATEGY_PRIORITY,
    )


__all__ = [
    "SAMPLE_CAP",
    "BUCKET_QUOTAS",
    "STRATEGY_COMPLETE",
    "STRATEGY_PRIORITY",
    "count_by_severity",
    "sample_logs",
]
