# medcon/modules/patients/patients_service.py
"""Patient directory: deduplicated roster of patient profiles."""

import logging
from typing import List, Optional

from medcon.auth.policy import Capability, authorize
from medcon.common.state import ClinicState
from medcon.common.utils.global_functions import new_id
from medcon.models.entities import Identity, PatientFields, PatientProfile

logger = logging.getLogger(__name__)


def _matches(profile: PatientProfile, fields: PatientFields) -> bool:
    cedula = fields.cedula.strip()
    if cedula and profile.cedula.strip() == cedula:
        return True
    return profile.name.strip().lower() == fields.name.strip().lower()


def find_match(state: ClinicState, fields: PatientFields) -> Optional[PatientProfile]:
    """First profile, in insertion order, matching by national ID or by name."""
    return next((p for p in state.patient_db if _matches(p, fields)), None)


def resolve_or_create(state: ClinicState, fields: PatientFields) -> PatientProfile:
    """
    Return the directory profile for these fields.

    A matching profile is overwritten in place with every incoming field
    except its id. Otherwise a new profile is appended. The caller persists.
    """
    existing = find_match(state, fields)
    if existing is not None:
        merged = PatientProfile(id=existing.id, **fields.model_dump())
        index = state.patient_db.index(existing)
        state.patient_db[index] = merged
        logger.info("Patient profile %s updated from new admission", merged.id)
        return merged

    profile = PatientProfile(id=new_id(), **fields.model_dump())
    state.patient_db.append(profile)
    logger.info("Patient profile %s created", profile.id)
    return profile


def search_patients(state: ClinicState, identity: Identity, query: str) -> List[PatientProfile]:
    """Profiles whose name contains the query (any case) or whose cedula contains it."""
    authorize(identity, Capability.SEARCH_PATIENTS)
    query = query.strip()
    if not query:
        return []
    lowered = query.lower()
    return [p for p in state.patient_db if lowered in p.name.lower() or query in p.cedula]
