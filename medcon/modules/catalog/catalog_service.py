# medcon/modules/catalog/catalog_service.py
"""Service layer for the doctor and procedure catalog."""

import logging
from typing import List, Optional

from medcon.auth.auth_service import hash_password
from medcon.auth.policy import Capability, authorize
from medcon.common.config import settings
from medcon.common.errors import ReferenceNotFoundError, ValidationError
from medcon.common.state import ClinicState
from medcon.common.utils.global_functions import new_id
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import DoctorProfile, Identity, Procedure

from .schemas import DoctorCreateRequest, DoctorUpdateRequest, ProcedureCreateRequest

logger = logging.getLogger(__name__)


def _validate_share(value: float) -> None:
    if not 0 <= value <= 100:
        raise ValidationError(GlobalMessages.SHARE_OUT_OF_RANGE)


def _validate_username(state: ClinicState, username: Optional[str], doctor_id: Optional[str] = None) -> None:
    if not username:
        return
    reserved = {settings.ADMIN_USERNAME, settings.ASSISTANT_USERNAME}
    taken = any(d.username == username and d.id != doctor_id for d in state.doctors)
    if username in reserved or taken:
        raise ValidationError(GlobalMessages.USERNAME_TAKEN)


def _validate_room(state: ClinicState, room: Optional[str]) -> None:
    if room and room not in state.rooms:
        raise ValidationError(GlobalMessages.UNKNOWN_ROOM)


# ============================================================================
# DOCTORS
# ============================================================================

def list_doctors(state: ClinicState, identity: Identity) -> List[DoctorProfile]:
    authorize(identity, Capability.VIEW_DOCTORS)
    return list(state.doctors)


def create_doctor(state: ClinicState, identity: Identity, request: DoctorCreateRequest) -> DoctorProfile:
    authorize(identity, Capability.CREATE_DOCTOR)
    if not request.name.strip() or not request.specialty.strip():
        raise ValidationError("Doctor name and specialty are required.")
    _validate_share(request.consultation_share_percent)
    _validate_share(request.procedure_share_percent)
    _validate_username(state, request.username)
    _validate_room(state, request.default_room)
    if request.username and not request.password:
        raise ValidationError("A password is required when a username is set.")

    doctor = DoctorProfile(
        id=new_id(),
        name=request.name.strip(),
        specialty=request.specialty.strip(),
        phone=request.phone,
        email=request.email,
        consultation_share_percent=request.consultation_share_percent,
        procedure_share_percent=request.procedure_share_percent,
        username=request.username or None,
        password_hash=hash_password(request.password) if request.username else None,
        default_room=request.default_room or None,
    )
    state.doctors.append(doctor)
    state.persist("doctors")
    logger.info("Doctor %s added to catalog", doctor.id)
    return doctor


def update_doctor(
    state: ClinicState,
    identity: Identity,
    doctor_id: str,
    request: DoctorUpdateRequest,
) -> DoctorProfile:
    authorize(identity, Capability.EDIT_DOCTOR)
    doctor = state.find_doctor(doctor_id)
    if doctor is None:
        raise ReferenceNotFoundError(GlobalMessages.DOCTOR_NOT_FOUND)

    # username and default_room may be cleared with an explicit null; other fields may not
    changes = {
        key: value
        for key, value in request.model_dump(exclude_unset=True, exclude={"password"}).items()
        if value is not None or key in ("username", "default_room")
    }
    for field in ("consultation_share_percent", "procedure_share_percent"):
        if field in changes:
            _validate_share(changes[field])
    for field in ("name", "specialty"):
        if field in changes and not changes[field].strip():
            raise ValidationError("Doctor name and specialty are required.")
    if "username" in changes:
        _validate_username(state, changes["username"], doctor_id)
        if not changes["username"]:
            changes["username"] = None
            changes["password_hash"] = None
    if "default_room" in changes:
        _validate_room(state, changes["default_room"])
    if request.password:
        changes["password_hash"] = hash_password(request.password)

    updated = doctor.model_copy(update=changes)
    if updated.username and not updated.password_hash:
        raise ValidationError("A password is required when a username is set.")
    state.doctors[state.doctors.index(doctor)] = updated
    state.persist("doctors")
    logger.info("Doctor %s updated", doctor_id)
    return updated


# ============================================================================
# PROCEDURES
# ============================================================================

def list_procedures(state: ClinicState, identity: Identity) -> List[Procedure]:
    authorize(identity, Capability.VIEW_PROCEDURES)
    return list(state.procedures)


def create_procedure(state: ClinicState, identity: Identity, request: ProcedureCreateRequest) -> Procedure:
    authorize(identity, Capability.MANAGE_PROCEDURES)
    if not request.name.strip():
        raise ValidationError("Procedure name is required.")
    if request.price < 0:
        raise ValidationError("Procedure price cannot be negative.")

    procedure = Procedure(id=new_id(), name=request.name.strip(), price=request.price)
    state.procedures.append(procedure)
    state.persist("procedures")
    logger.info("Procedure %s added to catalog", procedure.id)
    return procedure


def delete_procedure(state: ClinicState, identity: Identity, procedure_id: str) -> Procedure:
    """Remove a procedure from the price list; completed visits keep their snapshot."""
    authorize(identity, Capability.MANAGE_PROCEDURES)
    procedure = state.find_procedure(procedure_id)
    if procedure is None:
        raise ReferenceNotFoundError(GlobalMessages.PROCEDURE_NOT_FOUND)
    state.procedures = [p for p in state.procedures if p.id != procedure_id]
    state.persist("procedures")
    logger.info("Procedure %s removed from catalog", procedure_id)
    return procedure


def list_rooms(state: ClinicState) -> List[str]:
    return list(state.rooms)
