# FILE: unloggarr/deps.py
"""FastAPI dependencies for the service objects owned by the application."""

from fastapi import Request

from unloggarr.mcpo.client import ProxyClient
from unloggarr.scheduler.service import SchedulerService


def get_proxy_client(request: Request) -> ProxyClient:
    client = getattr(request.app.state, "proxy_client", None)
    if client is None:
        client = ProxyClient()
        request.app.state.proxy_client = client
    return client


def get_scheduler(request: Request) -> SchedulerService:
    """The scheduler is created in main.create_app; never built lazily."""
    return request.app.state.scheduler
