"""Tests for the patient directory: dedup on admission and search."""
import pytest

from medcon.common.errors import AuthorizationError
from medcon.models.entities import PatientFields
from medcon.modules.patients import patients_service as service
from medcon.modules.visits.visits_service import admit_patient


class TestResolveOrCreate:
    def test_same_cedula_updates_profile(self, state, assistant):
        first = admit_patient(state, assistant, PatientFields(name="Ana Pérez", cedula="V123", phone="111"), "Control")
        second = admit_patient(state, assistant, PatientFields(name="Ana P. de Ruiz", cedula="V123", phone="222"), "Control")

        assert len(state.patient_db) == 1
        profile = state.patient_db[0]
        assert profile.id == first.patient_id == second.patient_id
        assert profile.phone == "222"
        assert profile.name == "Ana P. de Ruiz"

    def test_same_name_any_case_matches(self, state):
        created = service.resolve_or_create(state, PatientFields(name="Luis Mora"))
        matched = service.resolve_or_create(state, PatientFields(name="  luis MORA ", phone="333"))

        assert matched.id == created.id
        assert state.patient_db[0].phone == "333"

    def test_blank_cedulas_do_not_match(self, state):
        service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula=""))
        service.resolve_or_create(state, PatientFields(name="Carla Ruiz", cedula=""))

        assert len(state.patient_db) == 2

    def test_different_name_and_cedula_creates_new(self, state):
        service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula="V1"))
        service.resolve_or_create(state, PatientFields(name="Carla Ruiz", cedula="V2"))

        assert [p.cedula for p in state.patient_db] == ["V1", "V2"]

    def test_first_match_wins(self, state):
        first = service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula="V1"))
        service.resolve_or_create(state, PatientFields(name="Carla Ruiz", cedula="V2"))

        # matches the first profile by cedula and the second by name
        resolved = service.resolve_or_create(state, PatientFields(name="Carla Ruiz", cedula="V1"))

        assert resolved.id == first.id
        assert len(state.patient_db) == 2

    def test_fields_can_be_cleared_on_update(self, state):
        service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula="V1", email="l@x.com"))
        service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula="V1"))

        assert state.patient_db[0].email == ""

    def test_minor_keeps_representative(self, state):
        profile = service.resolve_or_create(
            state, PatientFields(name="Sofía Mora", is_minor=True, representative_name="Luis Mora")
        )
        assert profile.is_minor
        assert profile.representative_name == "Luis Mora"


class TestSearch:
    @pytest.fixture(autouse=True)
    def directory(self, state):
        service.resolve_or_create(state, PatientFields(name="Ana Pérez", cedula="V123"))
        service.resolve_or_create(state, PatientFields(name="Luis Mora", cedula="V456"))

    def test_search_by_name_fragment(self, state, assistant):
        assert [p.name for p in service.search_patients(state, assistant, "pér")] == ["Ana Pérez"]

    def test_search_by_cedula_fragment(self, state, assistant):
        assert [p.name for p in service.search_patients(state, assistant, "456")] == ["Luis Mora"]

    def test_blank_query_returns_nothing(self, state, assistant):
        assert service.search_patients(state, assistant, "  ") == []

    def test_doctor_cannot_search(self, state, doctor_identity):
        with pytest.raises(AuthorizationError):
            service.search_patients(state, doctor_identity, "Ana")
