# medcon/auth/policy.py
"""Role-based access policy for the front desk, billing and inventory."""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List

from medcon.common.errors import AuthorizationError
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity, Visit
from medcon.models.models import UserRole


class Capability(str, Enum):
    ADMIT_PATIENT = "admit_patient"
    ASSIGN_CONSULTATION = "assign_consultation"
    FINALIZE_CONSULTATION = "finalize_consultation"
    VIEW_VISITS = "view_visits"
    SEARCH_PATIENTS = "search_patients"
    VIEW_DOCTORS = "view_doctors"
    CREATE_DOCTOR = "create_doctor"
    EDIT_DOCTOR = "edit_doctor"
    VIEW_PROCEDURES = "view_procedures"
    MANAGE_PROCEDURES = "manage_procedures"
    VIEW_FINANCIALS = "view_financials"
    GENERATE_REPORT = "generate_report"
    BACKUP_RESTORE = "backup_restore"
    VIEW_INVENTORY = "view_inventory"
    MANAGE_INVENTORY = "manage_inventory"
    REGISTER_SALE = "register_sale"


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.ASSISTANT: frozenset({
        Capability.ADMIT_PATIENT,
        Capability.ASSIGN_CONSULTATION,
        Capability.FINALIZE_CONSULTATION,
        Capability.VIEW_VISITS,
        Capability.SEARCH_PATIENTS,
        Capability.VIEW_DOCTORS,
        Capability.CREATE_DOCTOR,
        Capability.VIEW_PROCEDURES,
        Capability.MANAGE_PROCEDURES,
        Capability.VIEW_INVENTORY,
        Capability.REGISTER_SALE,
    }),
    UserRole.DOCTOR: frozenset({
        Capability.ASSIGN_CONSULTATION,
        Capability.FINALIZE_CONSULTATION,
        Capability.VIEW_VISITS,
        Capability.VIEW_DOCTORS,
        Capability.VIEW_PROCEDURES,
        Capability.VIEW_FINANCIALS,
    }),
}


def can(identity: Identity, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES[identity.role]


def authorize(identity: Identity, capability: Capability) -> None:
    """Raise AuthorizationError unless the identity's role grants the capability."""
    if not can(identity, capability):
        raise AuthorizationError(GlobalMessages.NOT_AUTHORIZED)


def authorize_assignment(identity: Identity, doctor_id: str) -> None:
    """Doctors may only put a waiting patient into their own consultation."""
    authorize(identity, Capability.ASSIGN_CONSULTATION)
    if identity.role == UserRole.DOCTOR and identity.id != doctor_id:
        raise AuthorizationError(GlobalMessages.DOCTOR_SELF_ASSIGN_ONLY)


def authorize_finalize(identity: Identity, visit: Visit) -> None:
    """Doctors may only close visits assigned to them, whatever the visit status."""
    authorize(identity, Capability.FINALIZE_CONSULTATION)
    if identity.role == UserRole.DOCTOR and visit.assigned_doctor_id != identity.id:
        raise AuthorizationError(GlobalMessages.DOCTOR_NOT_ASSIGNED)


def financial_scope(identity: Identity, visits: Iterable[Visit]) -> List[Visit]:
    """Visits whose money the identity may see: all for admin, own for doctors."""
    authorize(identity, Capability.VIEW_FINANCIALS)
    if identity.role == UserRole.DOCTOR:
        return [v for v in visits if v.assigned_doctor_id == identity.id]
    return list(visits)
