# medcon/modules/visits/visits_service.py
"""
Visit ledger: the WAITING -> IN_CONSULTATION -> COMPLETED state machine.

Every transition builds the new Visit value with all of its target-state
fields and swaps it into the ledger in one step, then saves the whole
ledger through the clinic state.
"""

import logging
import math
from datetime import date
from typing import Callable, Iterator, List, Optional, Sequence

from medcon.auth.policy import (
    Capability, authorize, authorize_assignment, authorize_finalize,
)
from medcon.common.errors import (
    InvalidTransitionError, ReferenceNotFoundError, UnderpaymentError, ValidationError,
)
from medcon.common.state import ClinicState
from medcon.common.utils.global_functions import format_amount, new_id
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import (
    DoctorProfile, Identity, PatientFields, PaymentRecord, Procedure, Visit,
)
from medcon.models.models import VisitStatus
from medcon.modules.billing.billing_service import (
    BillDraft, compute_bill, is_settled, reconcile_payments,
)
from medcon.modules.billing.schemas import DoctorShares
from medcon.modules.patients.patients_service import resolve_or_create

from .schemas import BillPreviewResponse

logger = logging.getLogger(__name__)


class VisitView:
    """Restartable filtered view over the ledger; each iteration re-reads it."""

    def __init__(self, state: ClinicState, predicate: Callable[[Visit], bool]):
        self._state = state
        self._predicate = predicate

    def __iter__(self) -> Iterator[Visit]:
        return (v for v in list(self._state.visits) if self._predicate(v))


def _require_status(visit: Visit, expected: VisitStatus) -> None:
    if visit.status != expected:
        raise InvalidTransitionError(
            f"Visit {visit.visit_id} is {visit.status.value}; expected {expected.value}."
        )


def _shares_for(doctor: Optional[DoctorProfile]) -> Optional[DoctorShares]:
    if doctor is None:
        return None
    return DoctorShares(
        consultation_share_percent=doctor.consultation_share_percent,
        procedure_share_percent=doctor.procedure_share_percent,
    )


def _resolve_procedures(state: ClinicState, procedure_ids: Sequence[str]) -> List[Procedure]:
    """Snapshot copies of the requested procedures, duplicates ignored."""
    selected: List[Procedure] = []
    seen = set()
    for procedure_id in procedure_ids:
        if procedure_id in seen:
            continue
        procedure = state.find_procedure(procedure_id)
        if procedure is None:
            raise ReferenceNotFoundError(f"{GlobalMessages.PROCEDURE_NOT_FOUND} ({procedure_id})")
        selected.append(procedure.model_copy(deep=True))
        seen.add(procedure_id)
    return selected


def get_visit(state: ClinicState, identity: Identity, visit_id: str) -> Visit:
    authorize(identity, Capability.VIEW_VISITS)
    visit = state.find_visit(visit_id)
    if visit is None:
        raise ReferenceNotFoundError(GlobalMessages.VISIT_NOT_FOUND)
    return visit


def list_by_status(state: ClinicState, identity: Identity, status: VisitStatus) -> VisitView:
    authorize(identity, Capability.VIEW_VISITS)
    return VisitView(state, lambda v: v.status == status)


def list_by_date(state: ClinicState, identity: Identity, day: date) -> VisitView:
    """Visits whose arrival falls on ``day`` in local time."""
    authorize(identity, Capability.VIEW_VISITS)
    return VisitView(state, lambda v: v.arrival_time.astimezone().date() == day)


def list_visits(state: ClinicState, identity: Identity) -> VisitView:
    authorize(identity, Capability.VIEW_VISITS)
    return VisitView(state, lambda v: True)


def admit_patient(state: ClinicState, identity: Identity, fields: PatientFields, reason: str) -> Visit:
    """Register a new WAITING visit, creating or updating the directory profile."""
    authorize(identity, Capability.ADMIT_PATIENT)
    if not fields.name.strip():
        raise ValidationError(GlobalMessages.NAME_REQUIRED)
    if not reason.strip():
        raise ValidationError(GlobalMessages.REASON_REQUIRED)

    fields = fields.model_copy(update={"name": fields.name.strip()})
    profile = resolve_or_create(state, fields)
    visit = Visit(
        **fields.model_dump(),
        visit_id=new_id(),
        patient_id=profile.id,
        reason=reason.strip(),
        status=VisitStatus.WAITING,
        arrival_time=state.clock(),
    )
    state.visits.append(visit)
    state.persist("patient_db", "visits")
    logger.info("Visit %s admitted for patient %s", visit.visit_id, profile.id)
    return visit


def assign_to_consultation(
    state: ClinicState,
    identity: Identity,
    visit_id: str,
    doctor_id: str,
    room: str,
) -> Visit:
    """Move a WAITING visit into consultation with a doctor and a room."""
    visit = get_visit(state, identity, visit_id)
    authorize_assignment(identity, doctor_id)
    _require_status(visit, VisitStatus.WAITING)

    if state.find_doctor(doctor_id) is None:
        raise ReferenceNotFoundError(GlobalMessages.DOCTOR_NOT_FOUND)
    if room not in state.rooms:
        raise ValidationError(GlobalMessages.UNKNOWN_ROOM)

    updated = visit.model_copy(update={
        "status": VisitStatus.IN_CONSULTATION,
        "assigned_doctor_id": doctor_id,
        "assigned_room": room,
        "start_consultation_time": state.clock(),
    })
    state.replace_visit(updated)
    state.persist("visits")
    logger.info("Visit %s assigned to doctor %s in %s", visit_id, doctor_id, room)
    return updated


def build_bill_draft(
    state: ClinicState,
    base_cost: float,
    procedure_ids: Sequence[str],
    payments: Sequence[PaymentRecord],
) -> BillDraft:
    if not 0 <= base_cost < math.inf:
        raise ValidationError("Base cost must be a finite, non-negative amount.")
    draft = BillDraft(base_cost=base_cost)
    for procedure in _resolve_procedures(state, procedure_ids):
        draft.toggle_procedure(procedure)
    for payment in payments:
        draft.add_payment(payment.method, payment.amount)
    return draft


def preview_bill(
    state: ClinicState,
    identity: Identity,
    visit_id: str,
    base_cost: float,
    procedure_ids: Sequence[str],
    payments: Sequence[PaymentRecord],
) -> BillPreviewResponse:
    """Compute what finalizing would produce, without changing the visit."""
    visit = get_visit(state, identity, visit_id)
    authorize_finalize(identity, visit)
    draft = build_bill_draft(state, base_cost, procedure_ids, payments)
    bill = draft.bill(_shares_for(state.find_doctor(visit.assigned_doctor_id)))
    summary = reconcile_payments(draft.payments, bill.total_cost)
    return BillPreviewResponse(
        bill=bill,
        payments=summary,
        settled=is_settled(summary),
        remaining_display=format_amount(summary.remaining_amount),
    )


def finalize_consultation(
    state: ClinicState,
    identity: Identity,
    visit_id: str,
    base_cost: float,
    procedure_ids: Sequence[str],
    payments: Sequence[PaymentRecord],
) -> Visit:
    """Close an IN_CONSULTATION visit with its bill; underpaid visits are rejected."""
    visit = get_visit(state, identity, visit_id)
    authorize_finalize(identity, visit)
    _require_status(visit, VisitStatus.IN_CONSULTATION)

    draft = build_bill_draft(state, base_cost, procedure_ids, payments)
    doctor = state.find_doctor(visit.assigned_doctor_id)
    if doctor is None:
        logger.warning("Visit %s has no resolvable doctor; clinic keeps the full total", visit_id)
    bill = compute_bill(draft.base_cost, draft.procedures, _shares_for(doctor))
    summary = reconcile_payments(draft.payments, bill.total_cost)
    if not is_settled(summary):
        raise UnderpaymentError(summary.remaining_amount)

    updated = visit.model_copy(update={
        "status": VisitStatus.COMPLETED,
        "end_consultation_time": state.clock(),
        "base_cost": bill.base_cost,
        "performed_procedures": draft.procedures,
        "total_cost": bill.total_cost,
        "payments": draft.payments,
        "doctor_earnings": bill.doctor_earnings,
        "clinic_earnings": bill.clinic_earnings,
    })
    state.replace_visit(updated)
    state.persist("visits")
    logger.info("Visit %s completed, total %s", visit_id, format_amount(bill.total_cost))
    return updated
