"""Call logging and timing decorators for service and repository functions.

These are the function-level counterparts of the request pipeline stages.
Both decorators accept sync and async callables and log through the logger
of the module that defines the wrapped function.
"""

from __future__ import annotations

import functools
import inspect
import logging
import time
from typing import Any, Callable, TypeVar

from api_commons.middleware.pipeline import log_duration

F = TypeVar("F", bound=Callable[..., Any])

MAX_PAYLOAD_LENGTH = 10_000
_TRUNCATED_SUFFIX = "... (truncated)"


def truncate_payload(text: str | None) -> str:
    """Cap a logged payload at ``MAX_PAYLOAD_LENGTH`` characters."""
    if text is None:
        return "null"
    if len(text) <= MAX_PAYLOAD_LENGTH:
        return text
    return text[:MAX_PAYLOAD_LENGTH] + _TRUNCATED_SUFFIX


def _describe_args(args: tuple, kwargs: dict) -> str:
    parts = [repr(a) for a in args]
    parts.extend(f"{k}={v!r}" for k, v in kwargs.items())
    return truncate_payload("[" + ", ".join(parts) + "]")


def log_calls(func: F) -> F:
    """Log entry/exit at DEBUG and exceptions at ERROR; exceptions re-raise."""
    logger = logging.getLogger(func.__module__)
    name = func.__qualname__

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Entering: %s() with arguments: %s", name, _describe_args(args, kwargs))
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                logger.error("Exception in %s() with cause: %s", name, exc)
                raise
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Exiting: %s() with result: %s", name, truncate_payload(repr(result)))
            return result

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Entering: %s() with arguments: %s", name, _describe_args(args, kwargs))
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            logger.error("Exception in %s() with cause: %s", name, exc)
            raise
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Exiting: %s() with result: %s", name, truncate_payload(repr(result)))
        return result

    return wrapper  # type: ignore[return-value]


def measure_performance(threshold_ms: int = 500) -> Callable[[F], F]:
    """Time each call; calls slower than *threshold_ms* are logged at WARNING."""

    def decorator(func: F) -> F:
        label = f"{func.__qualname__}()"

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    log_duration(label, (time.perf_counter() - start) * 1000, threshold_ms)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                log_duration(label, (time.perf_counter() - start) * 1000, threshold_ms)

        return wrapper  # type: ignore[return-value]

    return decorator
