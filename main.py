# FILE: main.py
"""
unloggarr Backend - FastAPI Application
Version: 1.0.0

Features:
- Log retrieval from the home server through the MCPO proxy
- Severity parsing, filtering and priority sampling
- Streaming LLM health summaries (Anthropic or OpenAI)
- Cron-like scheduled analysis with Gotify push notifications
- Server notification relay and health probe
"""
import os
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load .env FIRST before any other imports that might need env vars
load_dotenv()

from unloggarr import __version__
from unloggarr.health import router as health_router
from unloggarr.llm.router import router as analysis_router
from unloggarr.logs.router import router as logs_router
from unloggarr.mcpo.client import ProxyClient
from unloggarr.notifications.router import router as notifications_router
from unloggarr.scheduler.router import router as scheduler_router
from unloggarr.scheduler.service import SchedulerService
from unloggarr.settings import (
    get_api_key,
    get_cors_origins,
    get_env_schedule,
    get_mcpo_base_url,
    get_provider,
    is_gotify_configured,
)

logging.basicConfig(
    level=os.getenv("UNLOGGARR_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="unloggarr",
        version=__version__,
        description="Home server log dashboard with AI-powered health summaries",
    )

    # ====== CORS ======

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ====== SERVICES ======

    proxy = ProxyClient()
    app.state.proxy_client = proxy
    app.state.scheduler = SchedulerService(proxy=proxy)

    # ====== STARTUP ======

    @app.on_event("startup")
    async def on_startup():
        print("[startup] Checking environment variables...")
        print(f"[startup] MCPO_BASE_URL: {get_mcpo_base_url()}")

        provider = get_provider()
        if get_api_key(provider):
            print(f"[startup] LLM provider {provider}: [OK] API key set")
        else:
            print(f"[startup] LLM provider {provider}: [X] API key NOT SET - analysis will fail")

        if is_gotify_configured():
            print("[startup] Gotify: [OK] configured")
        else:
            print("[startup] Gotify: [X] NOT CONFIGURED - notifications will be skipped")

        schedule = get_env_schedule()
        if schedule:
            print(f"[startup] Auto-starting scheduler: {schedule}")
            try:
                await app.state.scheduler.start(schedule)
            except ValueError as e:
                print(f"[startup] WARNING: scheduler not started: {e}")
        else:
            print("[startup] Scheduler: [X] DISABLED")
            print("[startup]   Set UNLOGGARR_SCHEDULE to auto-start")

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.scheduler.stop()

    # ====== ROUTERS ======

    app.include_router(health_router)
    app.include_router(logs_router)
    app.include_router(analysis_router)
    app.include_router(scheduler_router)
    app.include_router(notifications_router)

    return app


app = create_app()
