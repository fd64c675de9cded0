"""Common health, info and metrics endpoints.

- GET /api/health/ping: liveness, always "pong"
- GET /api/health/info: package and runtime information
- GET /api/metrics/application: uptime and runtime
- GET /api/metrics/process: thread and CPU figures
"""

from __future__ import annotations

import os
import platform
import sys
import threading
import time

from fastapi import APIRouter

from api_commons.config.settings import CommonsSettings
from api_commons.metadata.info import build_info_from, read_metadata
from api_commons.models.responses import ApiResponse


def format_uptime(uptime_ms: int) -> str:
    seconds = uptime_ms // 1000
    days, seconds = divmod(seconds, 24 * 3600)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)
    return f"{days} days, {hours} hours, {minutes} minutes, {seconds} seconds"


def _runtime_info() -> dict:
    return {
        "pythonVersion": platform.python_version(),
        "implementation": platform.python_implementation(),
        "availableProcessors": os.cpu_count(),
    }


def create_health_router(
    settings: CommonsSettings,
    *,
    started_at: float | None = None,
) -> APIRouter:
    """Factory that creates the common router.

    *started_at* is a ``time.monotonic()`` reading used for uptime; it
    defaults to the moment the router is created.
    """
    start = started_at if started_at is not None else time.monotonic()
    health_router = APIRouter(tags=["health"])

    @health_router.get("/api/health/ping")
    async def ping() -> dict:
        return ApiResponse.ok("pong", "Service is up and running").model_dump()

    @health_router.get("/api/health/info")
    async def info() -> dict:
        package = read_metadata()
        data = {
            "build": build_info_from(settings.service_name, package),
            "runtime": _runtime_info(),
        }
        if "error" in package:
            data["build"]["error"] = package["error"]
        return ApiResponse.ok(data, "Application info").model_dump()

    @health_router.get("/api/metrics/application")
    async def application_metrics() -> dict:
        uptime_ms = int((time.monotonic() - start) * 1000)
        data = {
            "uptime": uptime_ms,
            "uptimeFormatted": format_uptime(uptime_ms),
            "runtime": {**_runtime_info(), "executable": sys.executable},
        }
        return ApiResponse.ok(data, "Application metrics").model_dump()

    @health_router.get("/api/metrics/process")
    async def process_metrics() -> dict:
        times = os.times()
        load = os.getloadavg() if hasattr(os, "getloadavg") else None
        data = {
            "threads": {
                "threadCount": threading.active_count(),
                "daemonThreadCount": sum(1 for t in threading.enumerate() if t.daemon),
            },
            "cpu": {
                "userSeconds": times.user,
                "systemSeconds": times.system,
                "availableProcessors": os.cpu_count(),
                "systemLoadAverage": load[0] if load else None,
            },
        }
        return ApiResponse.ok(data, "Process metrics").model_dump()

    return health_router
