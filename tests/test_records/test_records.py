"""Tests for patient and doctor record services."""

import threading
import uuid
from datetime import date

import pytest

from clinic_billing.core.errors import ConflictError, ErrorCode, NotFoundError
from clinic_billing.models import InsuranceInfo, Specialty
from clinic_billing.records import patients as patients_module


class TestPatientService:
    def test_create_and_get(self, patient_service, sample_insurance):
        p = patient_service.create("Jane", "Doe", date(1990, 1, 15), sample_insurance)
        assert patient_service.get(p.id) == p
        assert p.full_name == "Jane Doe"
        assert patient_service.list() == [p]

    def test_get_missing(self, patient_service):
        with pytest.raises(NotFoundError) as exc_info:
            patient_service.get(uuid.uuid4())
        assert exc_info.value.code is ErrorCode.PATIENT_NOT_FOUND

    def test_update_replaces_all_fields(self, patient_service, sample_insurance):
        p = patient_service.create("Jane", "Doe", date(1990, 1, 15), sample_insurance)
        new_insurance = InsuranceInfo(bin_no="003858", pcn_no="A4", member_id="ZX-9")
        updated = patient_service.update(p.id, "Janet", "Roe", date(1991, 2, 16), new_insurance)

        assert updated.id == p.id
        assert updated.first_name == "Janet"
        assert updated.dob == date(1991, 2, 16)
        assert patient_service.get(p.id).insurance == new_insurance

    def test_update_missing(self, patient_service, sample_insurance):
        with pytest.raises(NotFoundError):
            patient_service.update(uuid.uuid4(), "A", "B", date(2000, 1, 1), sample_insurance)

    def test_delete(self, patient_service, sample_insurance):
        p = patient_service.create("Jane", "Doe", date(1990, 1, 15), sample_insurance)
        patient_service.delete(p.id)
        with pytest.raises(NotFoundError):
            patient_service.get(p.id)

    def test_delete_with_appointments(self, patient_service, patient, make_doctor, make_appointment):
        make_appointment(patient, make_doctor())
        with pytest.raises(ConflictError) as exc_info:
            patient_service.delete(patient.id)
        assert exc_info.value.code is ErrorCode.PATIENT_HAS_APPOINTMENTS

    def test_age_on(self, sample_insurance, patient_service):
        p = patient_service.create("Jane", "Doe", date(1990, 3, 3), sample_insurance)
        assert p.age_on(date(2026, 3, 2)) == 35
        assert p.age_on(date(2026, 3, 3)) == 36


class TestDoctorService:
    def test_create_and_get(self, doctor_service):
        d = doctor_service.create("Derek", "Shepherd", "1234567890", Specialty.ORTHO, date(2000, 5, 1))
        assert doctor_service.get(d.id) == d
        assert doctor_service.list() == [d]

    def test_duplicate_npi(self, doctor_service):
        doctor_service.create("Derek", "Shepherd", "1234567890", Specialty.ORTHO, date(2000, 5, 1))
        with pytest.raises(ConflictError) as exc_info:
            doctor_service.create("Mark", "Sloan", "1234567890", Specialty.CARDIO, date(1999, 1, 1))
        assert exc_info.value.code is ErrorCode.DUPLICATE_NPI
        assert len(doctor_service.list()) == 1

    def test_get_missing(self, doctor_service):
        with pytest.raises(NotFoundError) as exc_info:
            doctor_service.get(uuid.uuid4())
        assert exc_info.value.code is ErrorCode.DOCTOR_NOT_FOUND

    def test_delete_with_appointments(self, doctor_service, patient, make_doctor, make_appointment):
        doctor = make_doctor()
        make_appointment(patient, doctor)
        with pytest.raises(ConflictError) as exc_info:
            doctor_service.delete(doctor.id)
        assert exc_info.value.code is ErrorCode.DOCTOR_HAS_APPOINTMENTS

    def test_delete(self, doctor_service):
        d = doctor_service.create("Derek", "Shepherd", "1234567890", Specialty.ORTHO, date(2000, 5, 1))
        doctor_service.delete(d.id)
        with pytest.raises(NotFoundError):
            doctor_service.get(d.id)

    def test_experience_never_negative(self, doctor_service):
        d = doctor_service.create("New", "Hire", "555", Specialty.CARDIO, date(2030, 1, 1))
        assert d.experience_years_on(date(2026, 3, 2)) == 0


class TestConcurrentChanges:
    """Deletes never leave appointments pointing at missing records."""

    def _book_during(self, repo_method_owner, method_name, monkeypatch, book):
        """Run *book* on another thread while the wrapped method is executing."""
        outcome = {}

        def _book():
            try:
                book()
                outcome["code"] = None
            except NotFoundError as e:
                outcome["code"] = e.code

        booker = threading.Thread(target=_book)
        original = getattr(repo_method_owner, method_name)

        def _check_then_book(record_id):
            found = original(record_id)
            if booker.ident is None:
                booker.start()
                booker.join(timeout=0.2)
            return found

        monkeypatch.setattr(repo_method_owner, method_name, _check_then_book)
        return booker, outcome

    def test_doctor_delete_vs_booking(
        self, doctor_service, appointment_service, appointment_repo, patient, make_doctor, monkeypatch
    ):
        doctor = make_doctor()
        booker, outcome = self._book_during(
            appointment_repo,
            "exists_by_doctor",
            monkeypatch,
            lambda: appointment_service.create(patient.id, doctor.id, date(2026, 4, 1)),
        )

        doctor_service.delete(doctor.id)
        booker.join(timeout=5)

        assert outcome["code"] is ErrorCode.INVALID_DOCTOR
        assert appointment_repo.list_by_doctor(doctor.id) == []

    def test_patient_delete_vs_booking(
        self, patient_service, appointment_service, appointment_repo, patient, make_doctor, monkeypatch
    ):
        doctor = make_doctor()
        booker, outcome = self._book_during(
            appointment_repo,
            "exists_by_patient",
            monkeypatch,
            lambda: appointment_service.create(patient.id, doctor.id, date(2026, 4, 1)),
        )

        patient_service.delete(patient.id)
        booker.join(timeout=5)

        assert outcome["code"] is ErrorCode.INVALID_PATIENT
        assert appointment_repo.list_by_patient(patient.id) == []

    def test_update_does_not_resurrect_deleted_patient(
        self, patient_service, patient_repo, patient, sample_insurance, monkeypatch
    ):
        deleter = threading.Thread(target=patient_service.delete, args=(patient.id,))
        real_patient = patients_module.Patient

        def _build_while_deleting(**fields):
            deleter.start()
            deleter.join(timeout=0.2)
            return real_patient(**fields)

        monkeypatch.setattr(patients_module, "Patient", _build_while_deleting)

        updated = patient_service.update(
            patient.id, "Ada", "King", date(1985, 6, 1), sample_insurance
        )
        deleter.join(timeout=5)

        assert updated.last_name == "King"
        assert not deleter.is_alive()
        assert patient_repo.get_by_id(patient.id) is None
