# FILE: unloggarr/scheduler/router.py
"""
Scheduler endpoints.

- GET  /api/schedule             - current schedule plus environment flags
- POST /api/schedule             - start | stop | trigger | status
- POST /api/scheduled-analysis   - run one analysis cycle now
- GET  /api/scheduled-analysis   - same, with defaults
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from unloggarr.deps import get_proxy_client, get_scheduler
from unloggarr.errors import EmptyBatchError
from unloggarr.mcpo.client import ProxyClient
from unloggarr.scheduler.pipeline import run_analysis_cycle
from unloggarr.scheduler.schemas import (
    ScheduleConfig,
    ScheduleControlRequest,
    ScheduledAnalysisRequest,
    SchedulerAction,
)
from unloggarr.scheduler.service import SchedulerService
from unloggarr.settings import get_api_key, get_env_schedule, get_provider, is_gotify_configured

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scheduler"])

_VALID_ACTIONS = ", ".join(a.value for a in SchedulerAction)


def _snapshot(config: ScheduleConfig) -> dict[str, Any]:
    data = config.model_dump(mode="json", by_alias=True)
    data["cronExpression"] = config.pattern
    data["isRunning"] = config.enabled
    data["schedule"] = config.pattern
    data["lastRun"] = data["lastRunAt"]
    data["nextRun"] = data["nextRunAt"]
    return data


def _environment() -> dict[str, Any]:
    return {
        "schedule": get_env_schedule(),
        "gotifyConfigured": is_gotify_configured(),
        "llmConfigured": bool(get_api_key(get_provider())),
        "anthropicConfigured": bool(get_api_key("anthropic")),
        "provider": get_provider(),
    }


@router.get("/schedule")
async def get_schedule(scheduler: SchedulerService = Depends(get_scheduler)):
    schedule = _snapshot(scheduler.status())
    schedule["environment"] = _environment()
    return {"success": True, "schedule": schedule}


@router.post("/schedule")
async def control_schedule(
    req: ScheduleControlRequest,
    scheduler: SchedulerService = Depends(get_scheduler),
):
    try:
        action = SchedulerAction(req.action)
    except ValueError:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": f"Invalid action. Use: {_VALID_ACTIONS}"},
        )

    try:
        if action == SchedulerAction.START:
            config = await scheduler.start(req.schedule)
        elif action == SchedulerAction.STOP:
            config = await scheduler.stop()
        elif action == SchedulerAction.TRIGGER:
            config = await scheduler.trigger()
        else:
            config = scheduler.status()
    except ValueError as e:
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})
    except Exception:
        logger.exception("[scheduler] Error in schedule control")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Schedule operation failed"},
        )

    return {
        "success": True,
        "schedule": _snapshot(config),
        "message": f"Scheduler {action.value} completed",
    }


async def _run_scheduled_analysis(req: ScheduledAnalysisRequest, proxy: ProxyClient):
    try:
        report = await run_analysis_cycle(
            proxy,
            log_file=req.log_file,
            tail_lines=req.tail_lines,
            notify=req.send_notification,
        )
    except EmptyBatchError as e:
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})
    except Exception:
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Scheduled analysis failed"},
        )

    return {"success": True, "analysis": report.model_dump(mode="json", by_alias=True)}


@router.post("/scheduled-analysis")
async def scheduled_analysis(
    req: Optional[ScheduledAnalysisRequest] = Body(default=None),
    proxy: ProxyClient = Depends(get_proxy_client),
):
    return await _run_scheduled_analysis(req or ScheduledAnalysisRequest(), proxy)


@router.get("/scheduled-analysis")
async def scheduled_analysis_get(proxy: ProxyClient = Depends(get_proxy_client)):
    return await _run_scheduled_analysis(ScheduledAnalysisRequest(), proxy)


__all__ = ["router"]
