# medcon/modules/patients/patients_controller.py
"""Patient directory controller."""

from fastapi import APIRouter, Depends, Query

from medcon.auth.dependencies import get_current_identity
from medcon.common.state import ClinicState, get_clinic_state
from medcon.models.entities import Identity

from . import patients_service as service
from .schemas import PatientSearchResponse

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("/search", response_model=PatientSearchResponse)
async def search_patients(
    q: str = Query("", description="Part of the name or cedula"),
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Find returning patients to prefill the admission form."""
    patients = service.search_patients(state, current_identity, q)
    return PatientSearchResponse(patients=patients, total=len(patients))
