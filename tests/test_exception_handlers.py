"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.errors import (
    AppError,
    ConflictAppError,
    NotFoundAppError,
    RateLimitAppError,
    StoreAppError,
    ValidationAppError,
)
from app.core.exception_handlers import setup_exception_handlers, status_code_for


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def handler_client(app_with_handlers: FastAPI) -> TestClient:
    """Create test client with handlers enabled."""
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    @pytest.mark.parametrize(
        ("error_type", "expected_status"),
        [
            (ValidationAppError, 400),
            (NotFoundAppError, 404),
            (ConflictAppError, 409),
            (RateLimitAppError, 429),
            (StoreAppError, 500),
        ],
    )
    def test_status_mapping(
        self,
        handler_client: TestClient,
        app_with_handlers: FastAPI,
        error_type: type[AppError],
        expected_status: int,
    ):
        @app_with_handlers.get("/test-error")
        async def test_endpoint():
            raise error_type(code="test_code", message="Test message")

        response = handler_client.get("/test-error")

        assert response.status_code == expected_status
        data = response.json()
        assert data["error"]["code"] == "test_code"
        assert data["error"]["message"] == "Test message"
        assert "request_id" in data["error"]

    def test_conflict_includes_details(self, handler_client: TestClient, app_with_handlers: FastAPI):
        """Verify client-facing errors include details when provided."""
        @app_with_handlers.get("/test-conflict")
        async def test_endpoint():
            raise ConflictAppError(
                code="favorite_already_exists",
                message="This name variant is already in user favorites",
                details={"localization_id": 1, "variant_id": 2},
            )

        response = handler_client.get("/test-conflict")

        assert response.status_code == 409
        assert response.json()["error"]["details"] == {"localization_id": 1, "variant_id": 2}

    def test_store_error_hides_details(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-store")
        async def test_endpoint():
            raise StoreAppError(
                code="store_error",
                message="The data store failed to complete the operation",
                details={"operation": "favorite.add"},
            )

        response = handler_client.get("/test-store")

        assert response.status_code == 500
        assert "details" not in response.json()["error"]

    def test_rate_limit_error_sends_headers(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-rate-limit")
        async def test_endpoint():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Rate limit exceeded. Try again later.",
                details={"limit": 100, "retry_after": 60},
                headers={"Retry-After": "60", "X-RateLimit-Remaining": "0"},
            )

        response = handler_client.get("/test-rate-limit")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert response.json()["error"]["details"] == {"limit": 100, "retry_after": 60}

    def test_unmapped_app_error_is_400(self):
        assert status_code_for(AppError(code="x", message="y")) == 400


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_general_exception_handler_logic(self):
        """Verify general_exception_handler returns correct structure."""
        from app.core.exception_handlers import general_exception_handler

        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = RuntimeError("Unexpected error: database connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        # Original error message should NOT be in response
        assert "database connection" not in data["error"]["message"]
        assert "request_id" in data["error"]

    def test_general_exception_handler_never_leaks_stack_trace(self):
        from app.core.exception_handlers import general_exception_handler

        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        response = asyncio.run(general_exception_handler(request, ValueError("boom")))

        response_text = bytes(response.body).decode()
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text


def test_setup_exception_handlers_registers_handlers(app_with_handlers: FastAPI):
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
