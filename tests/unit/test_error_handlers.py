"""Unit tests for FastAPI error handler registration."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi import HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel
from pydantic import Field
from sqlalchemy.exc import IntegrityError

from faultline.core.errors import register_error_handlers
from faultline.core.exceptions import AccessDeniedError
from faultline.core.exceptions import ForbiddenError
from faultline.core.exceptions import NotFoundError
from faultline.handling.translator import ErrorTranslator


class ItemCreate(BaseModel):
    name: str = Field(min_length=3)
    quantity: int


def _build_client(translator: ErrorTranslator, *, raise_server_exceptions: bool = False) -> TestClient:
    app = FastAPI()
    register_error_handlers(app, translator)

    @app.get("/query")
    def query(limit: int) -> dict[str, int]:
        return {"limit": limit}

    @app.post("/items")
    def create_item(payload: ItemCreate) -> dict[str, str]:
        return {"name": payload.name}

    @app.get("/api/x/{item_id}")
    def not_found(item_id: int) -> None:
        raise NotFoundError("Resource X not found")

    @app.get("/forbidden")
    def forbidden() -> None:
        raise ForbiddenError("Plan does not allow this")

    @app.get("/denied")
    def denied() -> None:
        raise AccessDeniedError("role ADMIN required")

    @app.get("/conflict")
    def conflict() -> None:
        raise IntegrityError("INSERT INTO users ...", {}, Exception("UNIQUE constraint failed: users.username"))

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("connection pool exhausted")

    @app.get("/session")
    def session() -> None:
        raise HTTPException(status_code=403, detail="Not authenticated")

    @app.get("/unavailable")
    def unavailable() -> None:
        raise HTTPException(status_code=503, detail="upstream down")

    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture
def client(translator: ErrorTranslator) -> TestClient:
    return _build_client(translator)


def test_domain_errors_use_single_error_shape(client: TestClient) -> None:
    response = client.get("/api/x/1")

    assert response.status_code == 404
    assert response.json() == {
        "timestamp": "2026-01-15T12:30:00Z",
        "status": 404,
        "exception": "not_found",
        "message": "Resource X not found",
        "path": "/api/x/1",
    }


def test_forbidden_errors_keep_status(client: TestClient) -> None:
    response = client.get("/forbidden")

    assert response.status_code == 403
    assert response.json()["exception"] == "forbidden"


def test_access_denied_is_localized_from_accept_language(client: TestClient) -> None:
    response = client.get("/denied", headers={"Accept-Language": "pt-BR,pt;q=0.9"})

    assert response.status_code == 401
    payload = response.json()
    assert payload["exception"] == "access_denied"
    assert payload["message"] == "Acesso negado"


def test_query_validation_errors_use_bind_kind(client: TestClient) -> None:
    response = client.get("/query")

    assert response.status_code == 400
    payload = response.json()
    assert payload["status"] == 400
    assert payload["exception"] == "bind_error"
    assert payload["errors"] == [
        {"defaultMessage": "Field required", "objectName": "query", "field": "limit", "reason": "missing"},
    ]
    assert "path" not in payload


def test_body_validation_errors_keep_field_order(client: TestClient) -> None:
    response = client.post("/items", json={"name": "ab", "quantity": "many"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["exception"] == "argument_not_valid"
    assert [(item["field"], item["reason"]) for item in payload["errors"]] == [
        ("name", "string_too_short"),
        ("quantity", "int_parsing"),
    ]
    assert all(item["defaultMessage"] for item in payload["errors"])


def test_malformed_json_body_is_invalid_format(client: TestClient) -> None:
    response = client.post("/items", content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["exception"] == "invalid_format"
    assert payload["message"] == "Invalid JSON format"
    assert payload["path"] == "/items"


def test_integrity_errors_are_translated(client: TestClient) -> None:
    response = client.get("/conflict")

    assert response.status_code == 400
    assert response.json()["exception"] == "username_already_exists"
    assert response.json()["message"] == "Username already exists"


def test_unhandled_errors_do_not_leak_details(client: TestClient) -> None:
    response = client.get("/boom")

    assert response.status_code == 500
    payload = response.json()
    assert payload["exception"] == "internal_error"
    assert payload["message"] == "Internal server error"
    assert "connection pool" not in response.text


def test_unhandled_errors_are_answered_without_reraising(
    translator: ErrorTranslator,
    caplog: pytest.LogCaptureFixture,
) -> None:
    strict_client = _build_client(translator, raise_server_exceptions=True)

    with caplog.at_level(logging.ERROR):
        response = strict_client.get("/boom")

    assert response.status_code == 500
    assert response.json()["exception"] == "internal_error"
    error_records = [record for record in caplog.records if record.levelno >= logging.ERROR]
    assert len(error_records) == 1
    assert error_records[0].exc_info is not None


def test_framework_forbidden_uses_access_denied_shape(client: TestClient) -> None:
    response = client.get("/session")

    assert response.status_code == 401
    assert response.json() == {
        "timestamp": "2026-01-15T12:30:00Z",
        "status": 401,
        "exception": "access_denied",
        "message": "Access denied",
        "path": "/session",
    }
    assert "Not authenticated" not in response.text


def test_wrong_method_uses_bad_request_shape(client: TestClient) -> None:
    response = client.post("/session")

    assert response.status_code == 400
    assert response.json() == {
        "timestamp": "2026-01-15T12:30:00Z",
        "status": 400,
        "exception": "bad_request",
        "message": "Bad request",
        "path": "/session",
    }
    assert "GET" in response.headers["allow"]


def test_unknown_routes_use_not_found_shape(client: TestClient) -> None:
    response = client.get("/no-such-route", headers={"Accept-Language": "es"})

    assert response.status_code == 404
    assert response.json() == {
        "timestamp": "2026-01-15T12:30:00Z",
        "status": 404,
        "exception": "not_found",
        "message": "Recurso no encontrado",
        "path": "/no-such-route",
    }


def test_framework_server_errors_are_generic(client: TestClient) -> None:
    response = client.get("/unavailable")

    assert response.status_code == 500
    assert response.json()["exception"] == "internal_error"
    assert "upstream down" not in response.text
