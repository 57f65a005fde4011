"""Tests for the demo catalog seeder."""
from medcon.auth.auth_service import authenticate
from medcon.models.entities import PatientFields
from medcon.models.models import UserRole
from medcon.modules.visits.visits_service import admit_patient
from medcon.seed.seed_clinic import DEMO_PASSWORD, DOCTORS_DATA, PRODUCTS_DATA, seed_clinic


def test_seed_fills_catalog_and_saves(state, store):
    seed_clinic(state)

    assert len(state.doctors) == len(DOCTORS_DATA)
    assert len(state.products) == len(PRODUCTS_DATA)
    assert all(p.supplier_id in {s.id for s in state.suppliers} for p in state.products)
    assert len(store.load("mediflow_doctors")) == len(DOCTORS_DATA)


def test_seeded_doctors_can_log_in(state):
    seed_clinic(state)
    identity = authenticate(state, DOCTORS_DATA[0][4], DEMO_PASSWORD)

    assert identity.role == UserRole.DOCTOR
    assert identity.name == DOCTORS_DATA[0][0]


def test_clear_removes_existing_visits(state, store, assistant):
    admit_patient(state, assistant, PatientFields(name="Ana Pérez"), "Control")

    seed_clinic(state, clear=True)

    assert state.visits == []
    assert store.load("mediflow_patients") == []
