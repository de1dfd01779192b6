"""Fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from clinic_billing.api.app import create_app
from clinic_billing.config import Settings
from clinic_billing.core.services import build_services
from tests.conftest import TODAY


@pytest.fixture
def settings(tmp_path):
    return Settings(audit_log_dir=tmp_path / "logs", api_key="", _env_file=None)


@pytest.fixture
def client(settings):
    services = build_services(settings, clock=lambda: TODAY)
    return TestClient(create_app(settings=settings, services=services))


@pytest.fixture
def patient_payload():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "dob": "06/01/1985",
        "insurance": {"bin_no": "610014", "pcn_no": "MEDDPRIME", "member_id": "MBR-0042"},
    }


@pytest.fixture
def doctor_payload():
    return {
        "first_name": "Greg",
        "last_name": "House",
        "npi_no": "1234567890",
        "specialty": "CARDIO",
        "practice_start_date": "03/02/2000",
    }
