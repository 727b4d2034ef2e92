# FILE: unloggarr/logs/router.py
"""
Log retrieval endpoints.

- POST /api/logs            - fetch, parse and filter one log file
- POST /api/available-logs  - curated list of readable log files

When the proxy cannot be reached, /api/logs answers with the built-in sample
records and `using_sample_data=true` instead of failing.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from unloggarr.deps import get_proxy_client
from unloggarr.errors import ProxyError
from unloggarr.logs.parser import filter_logs, parse_log_lines
from unloggarr.logs.sampler import count_by_severity
from unloggarr.logs.samples import AVAILABLE_LOG_FILES, SAMPLE_LOGS
from unloggarr.logs.schemas import (
    AvailableLogsResponse,
    LogFetchRequest,
    LogFetchResponse,
    LogRecord,
)
from unloggarr.mcpo.client import ProxyClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["logs"])


def _records_payload(records: list[LogRecord]) -> list[dict]:
    return [r.model_dump(mode="json", by_alias=True) for r in records]


@router.post("/logs", response_model=LogFetchResponse)
async def fetch_logs(
    req: LogFetchRequest,
    proxy: ProxyClient = Depends(get_proxy_client),
):
    try:
        lines = await proxy.fetch_log_lines(req.log_file_path, req.tail_lines)
    except ProxyError as e:
        logger.warning(f"[logs] Proxy fetch failed, serving sample data: {e}")
        records = filter_logs(SAMPLE_LOGS, req.search, req.level)
        return LogFetchResponse(
            success=False,
            records=_records_payload(records),
            stats=count_by_severity(SAMPLE_LOGS),
            total_lines=len(SAMPLE_LOGS),
            using_sample_data=True,
            error=str(e),
        )

    parsed = parse_log_lines(lines)
    records = filter_logs(parsed, req.search, req.level)
    logger.info(f"[logs] Parsed {len(parsed)} lines, {len(records)} after filtering")

    return LogFetchResponse(
        success=True,
        logs=lines,
        records=_records_payload(records),
        stats=count_by_severity(parsed),
        total_lines=len(lines),
    )


@router.post("/available-logs", response_model=AvailableLogsResponse)
async def available_logs():
    return AvailableLogsResponse(success=True, available_logs=list(AVAILABLE_LOG_FILES))


__all__ = ["router"]
