"""
Tests for the role-based access policy.

Checks the capability table and the doctor ownership rules for
assignment, finalize and financial visibility.
"""
import pytest

from medcon.auth.policy import (
    ROLE_CAPABILITIES, Capability, authorize, can, financial_scope,
)
from medcon.common.errors import AuthorizationError, InvalidTransitionError
from medcon.models.entities import PatientFields, PaymentRecord
from medcon.models.models import PaymentMethod, UserRole, VisitStatus
from medcon.modules.visits import visits_service as visits


class TestCapabilityTable:
    def test_admin_has_everything(self, admin):
        assert all(can(admin, capability) for capability in Capability)

    def test_every_role_has_a_set(self):
        assert set(ROLE_CAPABILITIES) == set(UserRole)

    @pytest.mark.parametrize("capability", [
        Capability.VIEW_FINANCIALS,
        Capability.GENERATE_REPORT,
        Capability.BACKUP_RESTORE,
        Capability.EDIT_DOCTOR,
        Capability.MANAGE_INVENTORY,
    ])
    def test_assistant_cannot(self, assistant, capability):
        with pytest.raises(AuthorizationError):
            authorize(assistant, capability)

    @pytest.mark.parametrize("capability", [
        Capability.ADMIT_PATIENT,
        Capability.SEARCH_PATIENTS,
        Capability.CREATE_DOCTOR,
        Capability.MANAGE_PROCEDURES,
        Capability.GENERATE_REPORT,
        Capability.BACKUP_RESTORE,
        Capability.REGISTER_SALE,
    ])
    def test_doctor_cannot(self, doctor_identity, capability):
        assert not can(doctor_identity, capability)

    def test_doctor_can_view_financials(self, doctor_identity):
        authorize(doctor_identity, Capability.VIEW_FINANCIALS)


class TestDoctorOwnership:
    @pytest.fixture
    def waiting(self, state, assistant, patient_fields, doctor, other_doctor):
        return visits.admit_patient(state, assistant, patient_fields, "Control")

    def test_doctor_can_take_patient_for_self(self, state, waiting, doctor_identity, doctor):
        visit = visits.assign_to_consultation(state, doctor_identity, waiting.visit_id, doctor.id, "Consultorio 1")
        assert visit.assigned_doctor_id == doctor.id

    def test_doctor_cannot_assign_to_colleague(self, state, waiting, doctor_identity, other_doctor):
        with pytest.raises(AuthorizationError):
            visits.assign_to_consultation(state, doctor_identity, waiting.visit_id, other_doctor.id, "Consultorio 1")
        assert state.visits[0].status == VisitStatus.WAITING

    def test_assigned_doctor_can_finalize(self, state, assistant, waiting, doctor, doctor_identity):
        visits.assign_to_consultation(state, assistant, waiting.visit_id, doctor.id, "Consultorio 1")
        visit = visits.finalize_consultation(
            state, doctor_identity, waiting.visit_id, 100.0, [],
            [PaymentRecord(method=PaymentMethod.CASH_USD, amount=100)],
        )
        assert visit.status == VisitStatus.COMPLETED

    def test_other_doctor_cannot_finalize(self, state, assistant, waiting, doctor, other_doctor_identity):
        visits.assign_to_consultation(state, assistant, waiting.visit_id, doctor.id, "Consultorio 1")
        with pytest.raises(AuthorizationError):
            visits.finalize_consultation(state, other_doctor_identity, waiting.visit_id, 0.0, [], [])
        assert state.visits[0].status == VisitStatus.IN_CONSULTATION

    def test_other_doctor_cannot_touch_completed_visit(self, state, assistant, waiting, doctor, other_doctor_identity):
        visits.assign_to_consultation(state, assistant, waiting.visit_id, doctor.id, "Consultorio 1")
        visits.finalize_consultation(
            state, assistant, waiting.visit_id, 100.0, [],
            [PaymentRecord(method=PaymentMethod.CASH_USD, amount=100)],
        )
        with pytest.raises(AuthorizationError):
            visits.finalize_consultation(state, other_doctor_identity, waiting.visit_id, 0.0, [], [])
        assert state.visits[0].status == VisitStatus.COMPLETED

    def test_ownership_is_checked_before_status(self, state, waiting, other_doctor_identity):
        # a waiting visit has no assigned doctor, so a doctor is refused before the status guard
        with pytest.raises(AuthorizationError):
            visits.finalize_consultation(state, other_doctor_identity, waiting.visit_id, 0.0, [], [])

    def test_assistant_on_waiting_visit_gets_transition_error(self, state, assistant, waiting):
        with pytest.raises(InvalidTransitionError):
            visits.finalize_consultation(state, assistant, waiting.visit_id, 0.0, [], [])


class TestFinancialScope:
    def test_doctor_only_sees_own_visits(self, state, assistant, patient_fields, doctor, other_doctor, doctor_identity):
        mine = visits.admit_patient(state, assistant, patient_fields, "Control")
        theirs = visits.admit_patient(state, assistant, PatientFields(name="Luis Mora"), "Fiebre")
        visits.assign_to_consultation(state, assistant, mine.visit_id, doctor.id, "Consultorio 1")
        visits.assign_to_consultation(state, assistant, theirs.visit_id, other_doctor.id, "Consultorio 2")

        scoped = financial_scope(doctor_identity, state.visits)

        assert [v.visit_id for v in scoped] == [mine.visit_id]

    def test_admin_sees_all(self, state, admin, assistant, patient_fields):
        visits.admit_patient(state, assistant, patient_fields, "Control")
        assert len(financial_scope(admin, state.visits)) == 1

    def test_assistant_has_no_financial_view(self, state, assistant):
        with pytest.raises(AuthorizationError):
            financial_scope(assistant, state.visits)
