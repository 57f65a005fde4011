"""
Global test fixtures for pytest.

Provides reusable fixtures for service and API testing:
- Clinic state over an in-memory store with a controllable clock
- Identities by role (admin, assistant, doctor)
- Catalog instances (doctors, procedures, products)
- A FastAPI test client wired to the test state, plus bearer headers by role
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from medcon.auth.auth_service import create_access_token, identity_to_claims
from medcon.common.database.storage import InMemoryStore
from medcon.common.state import ClinicState, get_clinic_state
from medcon.main import app
from medcon.models.entities import (
    DoctorProfile, Identity, PatientFields, Procedure, Product, Supplier,
)
from medcon.models.models import UserRole


class FakeClock:
    """Deterministic clock; tests move it forward explicitly."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ============================================================================
# State
# ============================================================================

@pytest.fixture
def clock():
    # mid-morning local time keeps a day of visits on one local calendar date
    return FakeClock(datetime(2024, 5, 14, 10, 0).astimezone())


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def state(store, clock):
    """Empty clinic state with the default rooms."""
    return ClinicState(store, key_prefix="mediflow_", clock=clock)


# ============================================================================
# Identities
# ============================================================================

@pytest.fixture
def admin():
    return Identity(role=UserRole.ADMIN, name="Administrador")


@pytest.fixture
def assistant():
    return Identity(role=UserRole.ASSISTANT, name="Asistente")


@pytest.fixture
def doctor_identity(doctor):
    return Identity(role=UserRole.DOCTOR, id=doctor.id, name=doctor.name)


@pytest.fixture
def other_doctor_identity(other_doctor):
    return Identity(role=UserRole.DOCTOR, id=other_doctor.id, name=other_doctor.name)


# ============================================================================
# Catalog
# ============================================================================

@pytest.fixture
def doctor(state):
    """Doctor with 50% of consultations and 40% of procedures."""
    profile = DoctorProfile(
        id="doc-1",
        name="Dra. María González",
        specialty="Ginecología",
        consultation_share_percent=50,
        procedure_share_percent=40,
    )
    state.doctors.append(profile)
    return profile


@pytest.fixture
def other_doctor(state):
    profile = DoctorProfile(
        id="doc-2",
        name="Dr. José Rodríguez",
        specialty="Medicina Interna",
        consultation_share_percent=60,
        procedure_share_percent=50,
    )
    state.doctors.append(profile)
    return profile


@pytest.fixture
def ultrasound(state):
    procedure = Procedure(id="proc-eco", name="Ecografía", price=50.0)
    state.procedures.append(procedure)
    return procedure


@pytest.fixture
def supplier(state):
    entry = Supplier(id="sup-1", name="Droguería Central")
    state.suppliers.append(entry)
    return entry


@pytest.fixture
def gloves(state, supplier):
    product = Product(
        id="prod-gloves",
        name="Guantes",
        cost_price=6.0,
        sell_price=10.0,
        stock=10,
        min_stock=5,
        supplier_id=supplier.id,
    )
    state.products.append(product)
    return product


@pytest.fixture
def patient_fields():
    return PatientFields(name="Ana Pérez", cedula="V123", phone="0414-1111111")


# ============================================================================
# API
# ============================================================================

@pytest.fixture
def client(state):
    """Test client bound to the fixture state instead of the database-backed one."""
    app.dependency_overrides[get_clinic_state] = lambda: state
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(identity: Identity) -> dict:
    token = create_access_token(identity_to_claims(identity), expires_delta=timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def assistant_headers(assistant):
    return bearer(assistant)


@pytest.fixture
def doctor_headers(doctor_identity):
    return bearer(doctor_identity)
