# medcon/modules/visits/visits_controller.py
"""Visits controller with API routes."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from medcon.auth.dependencies import get_current_identity
from medcon.common.state import ClinicState, get_clinic_state
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity, PatientFields, Visit
from medcon.models.models import VisitStatus

from . import visits_service as service
from .schemas import (
    AdmitPatientRequest, AssignConsultationRequest, BillPreviewResponse, BillRequest,
    VisitActionResponse, VisitListResponse,
)

router = APIRouter(prefix="/visits", tags=["Visits"])


@router.get("", response_model=VisitListResponse)
async def get_visits(
    status: Optional[VisitStatus] = Query(None, description="Filter by status: WAITING, IN_CONSULTATION, COMPLETED"),
    day: Optional[date] = Query(None, alias="date", description="Filter by local arrival date (YYYY-MM-DD)"),
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """List visits, optionally filtered by status and/or arrival date."""
    if status is not None:
        visits = list(service.list_by_status(state, current_identity, status))
    else:
        visits = list(service.list_visits(state, current_identity))

    if day is not None:
        same_day = {v.visit_id for v in service.list_by_date(state, current_identity, day)}
        visits = [v for v in visits if v.visit_id in same_day]
    return VisitListResponse(visits=visits, total=len(visits))


@router.get("/{visit_id}", response_model=Visit)
async def get_visit(
    visit_id: str,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Get a single visit by ID."""
    return service.get_visit(state, current_identity, visit_id)


@router.post("", response_model=VisitActionResponse, status_code=201)
async def admit_patient(
    request: AdmitPatientRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Register a patient arrival; the patient joins the waiting room."""
    fields = PatientFields(**request.model_dump(exclude={"reason"}))
    visit = service.admit_patient(state, current_identity, fields, request.reason)
    return VisitActionResponse(
        success=True,
        message=GlobalMessages.VISIT_ADMITTED,
        visit=visit,
        warning=state.persistence_warning,
    )


@router.post("/{visit_id}/assign", response_model=VisitActionResponse)
async def assign_to_consultation(
    visit_id: str,
    request: AssignConsultationRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Send a waiting patient to a doctor and room."""
    visit = service.assign_to_consultation(
        state, current_identity, visit_id, request.doctor_id, request.room
    )
    return VisitActionResponse(
        success=True,
        message=GlobalMessages.VISIT_ASSIGNED,
        visit=visit,
        warning=state.persistence_warning,
    )


@router.post("/{visit_id}/bill/preview", response_model=BillPreviewResponse)
async def preview_bill(
    visit_id: str,
    request: BillRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Show totals, shares and remaining balance for a bill in progress."""
    return service.preview_bill(
        state, current_identity, visit_id,
        request.base_cost, request.procedure_ids, request.payments,
    )


@router.post("/{visit_id}/finalize", response_model=VisitActionResponse)
async def finalize_consultation(
    visit_id: str,
    request: BillRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Close the consultation; payments must cover the total."""
    visit = service.finalize_consultation(
        state, current_identity, visit_id,
        request.base_cost, request.procedure_ids, request.payments,
    )
    return VisitActionResponse(
        success=True,
        message=GlobalMessages.VISIT_FINALIZED,
        visit=visit,
        warning=state.persistence_warning,
    )
