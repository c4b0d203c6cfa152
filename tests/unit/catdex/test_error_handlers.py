"""Unit tests for the JSON error handlers."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded

from catdex.exceptions import CatdexException, PoolExhaustedException, RecordQueryException
from catdex.middleware.error_handlers import register_error_handlers


@pytest.fixture
def client():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/exhausted")
    def exhausted():
        raise PoolExhaustedException(details={"pool_size": 5})

    @app.get("/query")
    def query():
        raise RecordQueryException("no such table: cats")

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret connection string")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


class TestRegistration:
    """Tests for register_error_handlers."""

    def test_handlers_registered(self):
        app = FastAPI()
        register_error_handlers(app)

        assert CatdexException in app.exception_handlers
        assert RateLimitExceeded in app.exception_handlers
        assert Exception in app.exception_handlers


class TestCatdexExceptionHandler:
    """Tests for record store failures."""

    def test_unavailable_is_503_and_logged_as_warning(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="catdex.middleware.error_handlers"):
            response = client.get("/exhausted")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "POOL_EXHAUSTED"
        record = next(r for r in caplog.records if r.event_type == "request_failed")
        assert record.levelno == logging.WARNING
        assert record.path == "/exhausted"

    def test_query_failure_is_500_and_logged_as_error(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="catdex.middleware.error_handlers"):
            response = client.get("/query")

        assert response.status_code == 500
        body = response.json()["error"]
        assert body["code"] == "RECORD_QUERY_ERROR"
        assert "no such table" in body["message"]
        record = next(r for r in caplog.records if r.event_type == "request_failed")
        assert record.levelno == logging.ERROR


class TestGeneralExceptionHandler:
    """Tests for unexpected errors."""

    def test_internal_details_hidden(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error", "details": {}}
        }
        assert "secret" not in response.text
