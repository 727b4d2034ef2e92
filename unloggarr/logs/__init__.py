"""
Log retrieval, parsing and sampling.

Raw lines come from the MCPO proxy, are parsed into immutable LogRecords,
and are sampled by severity before analysis.
"""

from unloggarr.logs.schemas import (
    Severity,
    SEVERITY_ORDER,
    LEVEL_ALL,
    LogRecord,
    SampledBatch,
)
from unloggarr.logs.parser import (
    classify_severity,
    parse_timestamp,
    parse_log_line,
    parse_log_lines,
    filter_logs,
)
from unloggarr.logs.sampler import SAMPLE_CAP, count_by_severity, sample_logs

__all__ = [
    "Severity",
    "SEVERITY_ORDER",
    "LEVEL_ALL",
    "LogRecord",
    "SampledBatch",
    "classify_severity",
    "parse_timestamp",
    "parse_log_line",
    "parse_log_lines",
    "filter_logs",
    "SAMPLE_CAP",
    "count_by_severity",
    "sample_logs",
]
