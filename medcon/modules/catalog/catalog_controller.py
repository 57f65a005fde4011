# medcon/modules/catalog/catalog_controller.py
"""Catalog controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medcon.auth.dependencies import get_current_identity
from medcon.common.state import ClinicState, get_clinic_state
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity, Procedure

from . import catalog_service as service
from .schemas import (
    DoctorActionResponse, DoctorCreateRequest, DoctorResponse, DoctorUpdateRequest,
    ProcedureActionResponse, ProcedureCreateRequest, RoomListResponse,
)

router = APIRouter(prefix="/catalog", tags=["Catalog"])


# ============================================================================
# DOCTORS
# ============================================================================

@router.get("/doctors", response_model=List[DoctorResponse])
async def get_doctors(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """List the doctors and their revenue shares."""
    return [DoctorResponse.from_profile(d) for d in service.list_doctors(state, current_identity)]


@router.post("/doctors", response_model=DoctorActionResponse, status_code=201)
async def create_doctor(
    request: DoctorCreateRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Register a doctor, optionally with login credentials."""
    doctor = service.create_doctor(state, current_identity, request)
    return DoctorActionResponse(
        success=True,
        message=GlobalMessages.DOCTOR_SAVED,
        doctor=DoctorResponse.from_profile(doctor),
        warning=state.persistence_warning,
    )


@router.put("/doctors/{doctor_id}", response_model=DoctorActionResponse)
async def update_doctor(
    doctor_id: str,
    request: DoctorUpdateRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Edit a doctor's profile, shares or credentials."""
    doctor = service.update_doctor(state, current_identity, doctor_id, request)
    return DoctorActionResponse(
        success=True,
        message=GlobalMessages.DOCTOR_SAVED,
        doctor=DoctorResponse.from_profile(doctor),
        warning=state.persistence_warning,
    )


# ============================================================================
# PROCEDURES
# ============================================================================

@router.get("/procedures", response_model=List[Procedure])
async def get_procedures(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """List the procedure price list."""
    return service.list_procedures(state, current_identity)


@router.post("/procedures", response_model=ProcedureActionResponse, status_code=201)
async def create_procedure(
    request: ProcedureCreateRequest,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Add a priced procedure."""
    procedure = service.create_procedure(state, current_identity, request)
    return ProcedureActionResponse(
        success=True,
        message=GlobalMessages.PROCEDURE_SAVED,
        procedure=procedure,
        warning=state.persistence_warning,
    )


@router.delete("/procedures/{procedure_id}", response_model=ProcedureActionResponse)
async def delete_procedure(
    procedure_id: str,
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Remove a procedure from the price list."""
    procedure = service.delete_procedure(state, current_identity, procedure_id)
    return ProcedureActionResponse(
        success=True,
        message=GlobalMessages.PROCEDURE_DELETED,
        procedure=procedure,
        warning=state.persistence_warning,
    )


@router.get("/rooms", response_model=RoomListResponse)
async def get_rooms(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """List the clinic rooms a patient can be assigned to."""
    return RoomListResponse(rooms=service.list_rooms(state))
