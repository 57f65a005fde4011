# medcon/modules/backup/backup_controller.py
"""Backup controller with API endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from medcon.auth.dependencies import get_current_identity
from medcon.common.state import ClinicState, get_clinic_state
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity

from . import backup_service as service
from .schemas import RestorePreview, RestoreResponse


router = APIRouter(prefix="/backup", tags=["Backup"])


@router.get("")
async def export_backup(
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
) -> Dict[str, Any]:
    """Download the full clinic backup document."""
    return service.export_backup(state, current_identity)


@router.post("/preview", response_model=RestorePreview)
async def preview_restore(
    document: Any = Body(...),
    current_identity: Identity = Depends(get_current_identity)
):
    """Validate a backup document and show what it would restore."""
    return service.preview_restore(current_identity, document)


@router.post("/restore", response_model=RestoreResponse)
async def commit_restore(
    document: Any = Body(...),
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """Replace all clinic data with the backup document."""
    restored = service.commit_restore(state, current_identity, document)
    return RestoreResponse(
        success=True,
        message=GlobalMessages.RESTORE_COMPLETED,
        restored=restored,
        warning=state.persistence_warning,
    )
