"""Tests for health endpoints."""

import inspect
import logging

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from clinic_billing import __version__
from clinic_billing.api.app import create_app
from clinic_billing.config import Settings


class TestHealthEndpoints:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "clinic-billing",
            "version": __version__,
        }

    def test_liveness_check(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_readiness_check(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["bills"] == 0

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert "X-Process-Time" in response.headers


class TestAPIKey:
    def _client(self, tmp_path) -> TestClient:
        settings = Settings(audit_log_dir=tmp_path, api_key="s3cret", _env_file=None)
        return TestClient(create_app(settings=settings))

    def test_health_is_open(self, tmp_path):
        assert self._client(tmp_path).get("/health").status_code == 200

    def test_missing_key_rejected(self, tmp_path):
        response = self._client(tmp_path).get("/api/v1/patients")
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    def test_wrong_key_rejected(self, tmp_path):
        response = self._client(tmp_path).get(
            "/api/v1/patients", headers={"X-API-Key": "guess"}
        )
        assert response.status_code == 401

    def test_bearer_and_header_accepted(self, tmp_path):
        client = self._client(tmp_path)
        assert client.get(
            "/api/v1/patients", headers={"Authorization": "Bearer s3cret"}
        ).status_code == 200
        assert client.get("/api/v1/patients", headers={"X-API-Key": "s3cret"}).status_code == 200


class TestRequestHandling:
    def test_service_handlers_run_in_threadpool(self, client):
        api_routes = [
            r for r in client.app.routes
            if isinstance(r, APIRoute) and r.path.startswith("/api/v1")
        ]
        assert api_routes
        for route in api_routes:
            assert not inspect.iscoroutinefunction(route.endpoint), route.path

    def test_client_errors_logged_as_warning(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="clinic_billing.api.middleware"):
            client.get("/api/v1/bills/00000000-0000-0000-0000-000000000000")
            client.get("/health")

        records = [r for r in caplog.records if r.name == "clinic_billing.api.middleware"]
        assert any(r.levelno == logging.WARNING and "-> 404" in r.getMessage() for r in records)
        assert any(r.levelno == logging.INFO and "/health -> 200" in r.getMessage() for r in records)
