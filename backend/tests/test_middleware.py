"""
Tests for middleware components.

This module tests:
- RequestIDMiddleware (correlation ID tracking)
- LoggingMiddleware (request/response logging)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import logging
import uuid

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from ordermanagement.core.logging_config import request_id_var
from ordermanagement.middleware.logging import LoggingMiddleware
from ordermanagement.middleware.request_id import RequestIDMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def test_endpoint(request: Request):
        return {"request_id": request.state.request_id, "context": request_id_var.get()}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("exploded")

    return app


class TestRequestIDMiddleware:
    """Tests for request ID correlation middleware."""

    def test_request_id_generated_when_missing(self):
        """
        Test that request ID is generated when not provided.

        Arrange: App with RequestIDMiddleware
        Act: Request without X-Request-ID header
        Assert: Response carries a UUID that matches request.state and the log context
        """
        # Arrange
        client = TestClient(build_app())

        # Act
        response = client.get("/test")

        # Assert
        request_id = response.headers["X-Request-ID"]
        uuid.UUID(request_id)
        assert response.json() == {"request_id": request_id, "context": request_id}

    def test_request_id_preserved_from_header(self):
        client = TestClient(build_app())

        response = client.get("/test", headers={"X-Request-ID": "client-id-123"})

        assert response.headers["X-Request-ID"] == "client-id-123"
        assert response.json()["request_id"] == "client-id-123"


class TestLoggingMiddleware:

    def test_logs_start_and_completion(self, caplog):
        client = TestClient(build_app())

        with caplog.at_level(logging.INFO, logger="ordermanagement.middleware.logging"):
            client.get("/test", headers={"X-Request-ID": "log-me"})

        messages = [r.getMessage() for r in caplog.records]
        assert "Request started" in messages
        completed = next(r for r in caplog.records if r.getMessage() == "Request completed")
        assert completed.status_code == 200
        assert completed.path == "/test"
        assert completed.request_id == "log-me"
        assert completed.latency_ms >= 0

    def test_logs_and_reraises_exceptions(self, caplog):
        client = TestClient(build_app(), raise_server_exceptions=False)

        with caplog.at_level(logging.ERROR, logger="ordermanagement.middleware.logging"):
            response = client.get("/boom")

        assert response.status_code == 500
        failed = next(r for r in caplog.records if r.getMessage().startswith("Request failed"))
        assert failed.exception_type == "RuntimeError"
