"""Unit tests for error-to-status mapping and the request/auth middleware."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.auth_middleware import AuthMiddleware
from src.api.auth_utils import COOKIE_NAME, create_session_cookie
from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware, status_for
from src.utils.errors import (
    ConfigurationError,
    DocumentStoreError,
    IngestionError,
    InvalidInputError,
    OCRExtractionError,
    SearchError,
)


class TestStatusFor:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (InvalidInputError("Missing URL or title"), 400),
            (DocumentStoreError("not found", status_code=404), 404),
            (DocumentStoreError("conflict", status_code=409), 409),
            (DocumentStoreError("upstream down", status_code=503), 500),
            (DocumentStoreError("refused"), 500),
            (ConfigurationError(), 500),
            (IngestionError(), 500),
            (OCRExtractionError(state="timed_out"), 500),
            (SearchError(), 500),
        ],
    )
    def test_mapping(self, exc, expected) -> None:
        assert status_for(exc) == expected


def _app(secret: str = "") -> FastAPI:
    app = FastAPI()

    @app.get("/api/things")
    async def things() -> dict:
        return {"ok": True}

    @app.get("/api/health")
    async def health() -> dict:
        return {"status": "healthy"}

    @app.get("/api/broken")
    async def broken() -> dict:
        raise InvalidInputError("Query is required")

    @app.get("/public")
    async def public() -> dict:
        return {"ok": True}

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(AuthMiddleware, secret=secret, max_age_seconds=3600)
    app.add_middleware(RequestLoggingMiddleware)
    return app


class TestErrorHandlingMiddleware:
    def test_application_error_becomes_json(self) -> None:
        response = TestClient(_app()).get("/api/broken")
        assert response.status_code == 400
        assert response.json() == {"error": "InvalidInputError", "detail": "Query is required"}


class TestRequestLoggingMiddleware:
    def test_request_id_echoed(self) -> None:
        response = TestClient(_app()).get("/api/things", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self) -> None:
        response = TestClient(_app()).get("/api/things")
        assert len(response.headers["X-Request-ID"]) == 12


class TestAuthMiddleware:
    def test_gate_off_without_secret(self) -> None:
        assert TestClient(_app()).get("/api/things").status_code == 200

    def test_missing_cookie_rejected(self) -> None:
        response = TestClient(_app("s3cret")).get("/api/things")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_valid_cookie_accepted(self) -> None:
        cookie = create_session_cookie("s3cret")
        response = TestClient(_app("s3cret")).get(
            "/api/things", headers={"Cookie": f"{COOKIE_NAME}={cookie}"}
        )
        assert response.status_code == 200

    def test_exempt_and_non_api_paths(self) -> None:
        client = TestClient(_app("s3cret"))
        assert client.get("/api/health").status_code == 200
        assert client.get("/public").status_code == 200
