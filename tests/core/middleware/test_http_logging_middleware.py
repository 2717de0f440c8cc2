"""Unit tests for the HTTP logging middleware.

Structured fields are asserted on the LogRecord (via `caplog`), not on message strings.
"""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.core.middleware.http_logging import HttpLoggingMiddleware

_HTTP_LOGGER = "storefront.http"


def _make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(HttpLoggingMiddleware)

    @app.post("/chat")
    async def chat(payload: dict) -> dict[str, object]:
        return {"success": True, "response": "ok", "error": None}

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    return app


def _records_at(caplog: pytest.LogCaptureFixture, level: int) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == _HTTP_LOGGER and r.levelno == level]


def test_request_logs_metadata_only(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=_HTTP_LOGGER)

    with TestClient(_make_app()) as client:
        res = client.post("/chat?email=jane@example.com", json={"message": "my address is ..."})

    assert res.status_code == 200
    request_id = res.headers["x-request-id"]
    assert request_id

    (record,) = _records_at(caplog, logging.INFO)
    assert record.__dict__["request_id"] == request_id
    assert record.__dict__["http_method"] == "POST"
    assert record.__dict__["request_path"] == "/chat"
    assert record.__dict__["status_code"] == 200
    assert record.__dict__["duration_ms"] >= 0
    logged = " ".join([record.getMessage(), *map(str, record.__dict__.values())])
    assert "my address" not in logged
    assert "jane@example.com" not in logged


@pytest.mark.parametrize(
    ("header", "propagated"),
    [("req_abc-123", True), ("bad id with spaces", False), ("-leading-dash", False)],
)
def test_request_id_propagation(
    caplog: pytest.LogCaptureFixture, header: str, propagated: bool
) -> None:
    caplog.set_level(logging.INFO, logger=_HTTP_LOGGER)

    with TestClient(_make_app()) as client:
        res = client.post("/chat", json={}, headers={"X-Request-ID": header})

    assert (res.headers["x-request-id"] == header) is propagated
    (record,) = _records_at(caplog, logging.INFO)
    assert record.__dict__["request_id"] == res.headers["x-request-id"]


def test_unmatched_route_is_not_logged_verbatim(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=_HTTP_LOGGER)

    with TestClient(_make_app()) as client:
        res = client.get("/orders/42-secret")

    assert res.status_code == 404
    (record,) = _records_at(caplog, logging.INFO)
    assert record.__dict__["request_path"] == "unmatched"


def test_unhandled_exception_logs_error_with_stack_trace(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger=_HTTP_LOGGER)

    with TestClient(_make_app(), raise_server_exceptions=False) as client:
        res = client.get("/boom", headers={"X-Request-ID": "req_err_001"})

    assert res.status_code == 500

    (record,) = _records_at(caplog, logging.ERROR)
    assert record.__dict__["request_id"] == "req_err_001"
    assert record.__dict__["request_path"] == "/boom"
    assert record.__dict__["status_code"] == 500
    assert record.exc_info
