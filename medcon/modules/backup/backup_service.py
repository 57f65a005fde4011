# medcon/modules/backup/backup_service.py
"""
Backup export and two-phase restore.

A backup is one JSON object holding every collection under the field names
the front desk has always exported. Restores are validated in full before
anything in the live state is replaced.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from medcon.auth.policy import Capability, authorize
from medcon.common.errors import RestoreFormatError
from medcon.common.state import COLLECTIONS, ClinicState
from medcon.common.utils.global_messages import GlobalMessages
from medcon.models.entities import Identity

from .schemas import RestorePreview

logger = logging.getLogger(__name__)


# backup document field -> state collection
BACKUP_FIELDS: Dict[str, str] = {
    "patients": "visits",
    "doctors": "doctors",
    "procedures": "procedures",
    "patientDatabase": "patient_db",
    "products": "products",
    "suppliers": "suppliers",
    "sales": "sales",
}


def export_backup(state: ClinicState, identity: Identity) -> Dict[str, Any]:
    """Serialize every collection, preserving list order."""
    authorize(identity, Capability.BACKUP_RESTORE)
    document: Dict[str, Any] = {"date": state.clock().isoformat()}
    for field, name in BACKUP_FIELDS.items():
        document[field] = [item.model_dump(mode="json") for item in getattr(state, name)]
    return document


def _parse_document(document: Any) -> Dict[str, List]:
    """Validate the whole document and return parsed collections keyed by state name."""
    if not isinstance(document, dict):
        raise RestoreFormatError(GlobalMessages.RESTORE_NOT_AN_OBJECT)

    parsed: Dict[str, List] = {}
    for field, name in BACKUP_FIELDS.items():
        raw = document.get(field)
        if raw is None:
            parsed[name] = []
            continue
        if not isinstance(raw, list):
            raise RestoreFormatError(GlobalMessages.RESTORE_NOT_A_LIST.format(field=field))
        model = COLLECTIONS[name][1]
        try:
            parsed[name] = [model.model_validate(entry) for entry in raw]
        except PydanticValidationError:
            raise RestoreFormatError(GlobalMessages.RESTORE_INVALID_ENTRY.format(field=field))
    return parsed


def _counts(document: Dict[str, Any], parsed: Dict[str, List]) -> RestorePreview:
    date = document.get("date")
    return RestorePreview(
        date=date if isinstance(date, str) else None,
        patients=len(parsed["visits"]),
        doctors=len(parsed["doctors"]),
        procedures=len(parsed["procedures"]),
        patient_database=len(parsed["patient_db"]),
        products=len(parsed["products"]),
        suppliers=len(parsed["suppliers"]),
        sales=len(parsed["sales"]),
    )


def preview_restore(identity: Identity, document: Any) -> RestorePreview:
    """Validate a backup and report what it contains; the live state is untouched."""
    authorize(identity, Capability.BACKUP_RESTORE)
    parsed = _parse_document(document)
    return _counts(document, parsed)


def commit_restore(state: ClinicState, identity: Identity, document: Any) -> RestorePreview:
    """Replace every collection with the backup's contents and save all keys."""
    authorize(identity, Capability.BACKUP_RESTORE)
    parsed = _parse_document(document)

    for name, items in parsed.items():
        setattr(state, name, items)
    state.persist()

    preview = _counts(document, parsed)
    logger.info(
        "Backup restored: %d visits, %d patients, %d doctors",
        preview.patients, preview.patient_database, preview.doctors,
    )
    return preview
