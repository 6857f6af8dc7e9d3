from __future__ import annotations

import logging

from fastapi.testclient import TestClient


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/v1/localizations/recent")

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID")
    assert resp.headers.get("X-Request-Duration-ms") is not None


def test_error_body_carries_request_id(client: TestClient):
    resp = client.post(
        "/v1/favorites",
        json={"user_id": "u1", "request_id": 404, "variant_id": 1},
        headers={"X-Request-ID": "trace-me"},
    )

    assert resp.status_code == 404
    assert resp.json()["error"]["request_id"] == "trace-me"
    assert resp.headers["X-Request-ID"] == "trace-me"


def test_logs_request_summary(client: TestClient, caplog):
    with caplog.at_level(logging.INFO, logger="app.core.middleware"):
        client.get("/health")

    (record,) = [r for r in caplog.records if r.getMessage() == "http.request"]
    assert record.route == "/health"
    assert record.status == 200
