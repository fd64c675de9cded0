"""Request-handling pipeline: logging and performance stages.

Each stage is a Starlette middleware wrapping the next one. ``build_pipeline``
installs the stages enabled in ``CommonsSettings`` at application startup,
outermost first: request_id -> logging -> performance.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from api_commons.config.settings import CommonsSettings
from api_commons.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)
perf_logger = logging.getLogger("api_commons.performance")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs request entry and exit at DEBUG, failures at ERROR.

    Exceptions are logged and re-raised so the central handler still
    produces the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        method = request.method
        path = request.url.path
        logger.debug(
            "Entering: %s %s",
            method,
            path,
            extra={"method": method, "path": path},
        )
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Exception in %s %s with cause: %s",
                method,
                path,
                exc,
                extra={"method": method, "path": path},
            )
            raise
        logger.debug(
            "Exiting: %s %s with status %d",
            method,
            path,
            response.status_code,
            extra={"method": method, "path": path, "status_code": response.status_code},
        )
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Measures wall time per request and flags calls above a threshold."""

    def __init__(self, app, threshold_ms: int = 500) -> None:  # noqa: ANN001
        super().__init__(app)
        self.threshold_ms = threshold_ms
        perf_logger.info(
            "Performance monitoring initialized with threshold: %d ms", threshold_ms
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        try:
            return await call_next(request)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log_duration(
                f"{request.method} {request.url.path}", elapsed_ms, self.threshold_ms
            )


def log_duration(label: str, elapsed_ms: float, threshold_ms: int) -> None:
    """WARNING above *threshold_ms*, DEBUG otherwise."""
    extra = {"duration_ms": round(elapsed_ms, 3), "threshold_ms": threshold_ms}
    if elapsed_ms > threshold_ms:
        perf_logger.warning(
            "Slow execution detected: %s executed in %d ms (threshold: %d ms)",
            label,
            elapsed_ms,
            threshold_ms,
            extra=extra,
        )
    elif perf_logger.isEnabledFor(logging.DEBUG):
        perf_logger.debug("%s executed in %d ms", label, elapsed_ms, extra=extra)


def build_pipeline(app: FastAPI, settings: CommonsSettings) -> list[str]:
    """Install the enabled pipeline stages on *app*.

    Returns the installed stage names, outermost first.
    """
    stages: list[str] = ["request_id"]
    if settings.logging_aspect_enabled:
        stages.append("logging")
    if settings.performance_aspect_enabled:
        stages.append("performance")

    # Starlette applies middleware in reverse order of add_middleware calls
    for stage in reversed(stages):
        if stage == "performance":
            app.add_middleware(
                PerformanceMiddleware, threshold_ms=settings.performance_threshold_ms
            )
        elif stage == "logging":
            app.add_middleware(RequestLoggingMiddleware)
        else:
            app.add_middleware(RequestIdMiddleware)

    logger.info("Request pipeline assembled: %s", " -> ".join(stages))
    return stages
