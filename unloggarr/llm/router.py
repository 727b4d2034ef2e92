# FILE: unloggarr/llm/router.py
"""
Analysis endpoints.

- POST /api/analyze-logs         - text/plain stream ending in the usage sentinel
- POST /api/analyze-logs/events  - SSE stream: token events then one `done`
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from unloggarr.errors import EmptyBatchError, MissingCredentialError
from unloggarr.llm.relay import prepare_analysis, relay_analysis_events, relay_analysis_text
from unloggarr.logs.schemas import LEVEL_ALL, LogRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


class AnalyzeLogsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logs: list[LogRecord] = Field(default_factory=list)
    log_file: str = Field(default="", alias="logFile")
    selected_level: str = Field(default=LEVEL_ALL, alias="selectedLevel")


def _prepare(req: AnalyzeLogsRequest) -> str:
    try:
        _, prompt = prepare_analysis(req.logs, req.log_file, req.selected_level)
    except EmptyBatchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MissingCredentialError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return prompt


@router.post("/analyze-logs")
async def analyze_logs(req: AnalyzeLogsRequest):
    prompt = _prepare(req)
    return StreamingResponse(
        relay_analysis_text(prompt),
        media_type="text/plain; charset=utf-8",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/analyze-logs/events")
async def analyze_logs_events(req: AnalyzeLogsRequest):
    prompt = _prepare(req)
    return StreamingResponse(
        relay_analysis_events(prompt),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


__all__ = ["router", "AnalyzeLogsRequest"]
