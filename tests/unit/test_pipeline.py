"""Unit tests for the request pipeline stages and the call decorators."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from api_commons.config.settings import CommonsSettings
from api_commons.logging_config import JsonFormatter, request_id_var
from api_commons.main import create_app
from api_commons.middleware.decorators import (
    MAX_PAYLOAD_LENGTH,
    log_calls,
    measure_performance,
    truncate_payload,
)
from api_commons.middleware.error_handler import ResourceNotFoundException, register_error_handlers
from api_commons.middleware.pipeline import build_pipeline

PERF_LOGGER = "api_commons.performance"
PIPELINE_LOGGER = "api_commons.middleware.pipeline"
ERROR_HANDLER_LOGGER = "api_commons.middleware.error_handler"


def _make_app(settings: CommonsSettings) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)
    app.state.pipeline = build_pipeline(app, settings)

    @app.get("/ping")
    async def ping(request: Request):
        return {"request_id": request.state.request_id, "context_id": request_id_var.get()}

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(0.05)
        return {"ok": True}

    @app.get("/missing")
    async def missing():
        raise ResourceNotFoundException("nothing here")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


# ---------------------------------------------------------------------------
# Pipeline assembly
# ---------------------------------------------------------------------------


class TestBuildPipeline:
    def test_all_stages_enabled_by_default(self):
        app = _make_app(CommonsSettings())
        assert app.state.pipeline == ["request_id", "logging", "performance"]

    def test_disabled_stages_are_skipped(self):
        settings = CommonsSettings(logging_aspect_enabled=False, performance_aspect_enabled=False)
        assert _make_app(settings).state.pipeline == ["request_id"]

    def test_only_performance(self):
        settings = CommonsSettings(logging_aspect_enabled=False)
        assert _make_app(settings).state.pipeline == ["request_id", "performance"]


# ---------------------------------------------------------------------------
# Request ID stage
# ---------------------------------------------------------------------------


class TestRequestId:
    def test_generates_uuid4(self):
        client = TestClient(_make_app(CommonsSettings()))
        resp = client.get("/ping")
        rid = resp.headers["X-Request-ID"]
        assert str(uuid.UUID(rid, version=4)) == rid
        assert resp.json() == {"request_id": rid, "context_id": rid}

    def test_propagates_incoming_id(self):
        client = TestClient(_make_app(CommonsSettings()))
        resp = client.get("/ping", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"
        assert resp.json()["request_id"] == "abc-123"

    def test_context_is_reset_after_request(self):
        client = TestClient(_make_app(CommonsSettings()))
        client.get("/ping")
        assert request_id_var.get() is None


# ---------------------------------------------------------------------------
# Logging and performance stages
# ---------------------------------------------------------------------------


class TestLoggingStage:
    def test_entry_and_exit_logged_at_debug(self, caplog):
        client = TestClient(_make_app(CommonsSettings()))
        with caplog.at_level(logging.DEBUG, logger=PIPELINE_LOGGER):
            client.get("/ping")
        messages = [r.getMessage() for r in caplog.records if r.name == PIPELINE_LOGGER]
        assert "Entering: GET /ping" in messages
        assert "Exiting: GET /ping with status 200" in messages

    def test_handled_api_exception_passes_through(self):
        client = TestClient(_make_app(CommonsSettings()))
        resp = client.get("/missing")
        assert resp.status_code == 404
        assert resp.json()["message"] == "nothing here"

    def test_unhandled_exception_logged_and_mapped(self, caplog):
        client = TestClient(_make_app(CommonsSettings()), raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR, logger=PIPELINE_LOGGER):
            resp = client.get("/boom")
        assert resp.status_code == 500
        assert resp.json()["message"] == "internal error"
        assert any(
            r.name == PIPELINE_LOGGER and "Exception in GET /boom with cause: kaboom" in r.getMessage()
            for r in caplog.records
        )

    def test_unhandled_exception_keeps_request_id(self, caplog, settings):
        app = create_app(settings)

        @app.get("/explode")
        async def explode():
            raise RuntimeError("kaboom")

        client = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR, logger=ERROR_HANDLER_LOGGER):
            resp = client.get("/explode", headers={"X-Request-ID": "rid-1"})

        assert resp.status_code == 500
        assert resp.headers["X-Request-ID"] == "rid-1"
        records = [r for r in caplog.records if r.name == ERROR_HANDLER_LOGGER]
        assert len(records) == 1
        entry = json.loads(JsonFormatter().format(records[0]))
        assert entry["request_id"] == "rid-1"
        assert entry["error_code"] == "INTERNAL_ERROR"


class TestPerformanceStage:
    def test_slow_request_warns(self, caplog):
        client = TestClient(_make_app(CommonsSettings(performance_threshold_ms=1)))
        with caplog.at_level(logging.WARNING, logger=PERF_LOGGER):
            client.get("/slow")
        warnings = [r for r in caplog.records if r.name == PERF_LOGGER and r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Slow execution detected: GET /slow" in warnings[0].getMessage()
        assert warnings[0].threshold_ms == 1
        assert warnings[0].duration_ms >= 1

    def test_fast_request_logs_debug_only(self, caplog):
        client = TestClient(_make_app(CommonsSettings(performance_threshold_ms=60_000)))
        with caplog.at_level(logging.DEBUG, logger=PERF_LOGGER):
            client.get("/ping")
        timing = [r for r in caplog.records if r.name == PERF_LOGGER and "executed in" in r.getMessage()]
        assert [r.levelno for r in timing] == [logging.DEBUG]


# ---------------------------------------------------------------------------
# Decorators
# ---------------------------------------------------------------------------


@log_calls
def add(a, b):
    return a + b


@log_calls
def explode():
    raise ValueError("bad input")


@log_calls
async def async_double(x):
    return x * 2


@measure_performance(threshold_ms=1)
def sleepy():
    time.sleep(0.02)
    return "done"


@measure_performance(threshold_ms=1)
async def async_sleepy():
    await asyncio.sleep(0.02)
    return "done"


class TestLogCalls:
    def test_logs_entry_and_exit(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert add(2, b=3) == 5
        messages = [r.getMessage() for r in caplog.records if r.name == __name__]
        assert "Entering: add() with arguments: [2, b=3]" in messages
        assert "Exiting: add() with result: 5" in messages

    def test_exception_logged_and_reraised(self, caplog):
        with caplog.at_level(logging.ERROR, logger=__name__):
            with pytest.raises(ValueError, match="bad input"):
                explode()
        assert any("Exception in explode() with cause: bad input" in r.getMessage() for r in caplog.records)

    def test_async_function(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=__name__):
            assert asyncio.run(async_double(21)) == 42
        assert any("Exiting: async_double() with result: 42" in r.getMessage() for r in caplog.records)

    def test_preserves_metadata(self):
        assert add.__name__ == "add"
        assert asyncio.iscoroutinefunction(async_double)

    def test_truncate_payload(self):
        assert truncate_payload(None) == "null"
        assert truncate_payload("short") == "short"
        long = "x" * (MAX_PAYLOAD_LENGTH + 5)
        assert truncate_payload(long) == "x" * MAX_PAYLOAD_LENGTH + "... (truncated)"


class TestMeasurePerformance:
    def test_slow_sync_call_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger=PERF_LOGGER):
            assert sleepy() == "done"
        assert any("Slow execution detected: sleepy()" in r.getMessage() for r in caplog.records)

    def test_slow_async_call_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger=PERF_LOGGER):
            assert asyncio.run(async_sleepy()) == "done"
        assert any("Slow execution detected: async_sleepy()" in r.getMessage() for r in caplog.records)
