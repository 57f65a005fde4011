# medcon/common/state.py
"""
Explicit application state for one running clinic session.

``ClinicState`` owns every collection plus the storage collaborator. Services
mutate the lists and then call ``persist`` with the collections they touched;
nothing is saved implicitly.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Type

from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from medcon.common.config import settings
from medcon.common.database.storage import KeyValueStore
from medcon.common.errors import PersistenceError
from medcon.common.utils.global_functions import utc_now
from medcon.models.entities import (
    DoctorProfile, PatientProfile, Procedure, Product, Sale, Supplier, Visit,
)

logger = logging.getLogger(__name__)


# attribute name -> (storage key suffix, entity model)
COLLECTIONS: Dict[str, Tuple[str, Type[BaseModel]]] = {
    "doctors": ("doctors", DoctorProfile),
    "procedures": ("procedures", Procedure),
    "patient_db": ("patient_db", PatientProfile),
    "visits": ("patients", Visit),
    "products": ("products", Product),
    "suppliers": ("suppliers", Supplier),
    "sales": ("sales", Sale),
}


class ClinicState:
    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: Optional[str] = None,
        rooms: Optional[List[str]] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.key_prefix = settings.STORAGE_KEY_PREFIX if key_prefix is None else key_prefix
        self.rooms = list(rooms if rooms is not None else settings.CLINIC_ROOMS)
        self.clock = clock
        self.last_persistence_error: Optional[PersistenceError] = None

        self.doctors: List[DoctorProfile] = []
        self.procedures: List[Procedure] = []
        self.patient_db: List[PatientProfile] = []
        self.visits: List[Visit] = []
        self.products: List[Product] = []
        self.suppliers: List[Supplier] = []
        self.sales: List[Sale] = []

    def storage_key(self, name: str) -> str:
        return self.key_prefix + COLLECTIONS[name][0]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, store: KeyValueStore, **kwargs) -> "ClinicState":
        """Build a state from the store; malformed collections start empty."""
        state = cls(store, **kwargs)
        for name in COLLECTIONS:
            setattr(state, name, state._load_collection(name))
        return state

    def _load_collection(self, name: str) -> list:
        key = self.storage_key(name)
        model = COLLECTIONS[name][1]
        try:
            raw = self.store.load(key)
        except Exception as exc:
            logger.warning("Could not load %s from storage: %s", key, exc)
            self.last_persistence_error = PersistenceError(f"Could not load {key}.")
            return []

        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored %s is not a list; starting with an empty collection", key)
            return []
        try:
            return [model.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            logger.warning("Stored %s is malformed (%d errors); starting with an empty collection", key, exc.error_count())
            return []

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def persist(self, *names: str) -> bool:
        """
        Save the named collections (all of them when none are given).

        Storage failures are logged and kept in ``last_persistence_error``;
        in-memory state stays authoritative for the rest of the session.
        """
        self.last_persistence_error = None
        for name in names or tuple(COLLECTIONS):
            key = self.storage_key(name)
            payload = [item.model_dump(mode="json") for item in getattr(self, name)]
            try:
                self.store.save(key, payload)
            except Exception as exc:
                logger.warning("Could not save %s: %s", key, exc)
                self.last_persistence_error = PersistenceError(
                    f"Changes were applied but could not be saved ({key})."
                )
        return self.last_persistence_error is None

    @property
    def persistence_warning(self) -> Optional[str]:
        """Message for the last failed save, shown alongside a successful action."""
        return self.last_persistence_error.message if self.last_persistence_error else None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_doctor(self, doctor_id: Optional[str]) -> Optional[DoctorProfile]:
        return next((d for d in self.doctors if d.id == doctor_id), None)

    def find_procedure(self, procedure_id: str) -> Optional[Procedure]:
        return next((p for p in self.procedures if p.id == procedure_id), None)

    def find_visit(self, visit_id: str) -> Optional[Visit]:
        return next((v for v in self.visits if v.visit_id == visit_id), None)

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def find_supplier(self, supplier_id: str) -> Optional[Supplier]:
        return next((s for s in self.suppliers if s.id == supplier_id), None)

    def replace_visit(self, visit: Visit) -> None:
        """Swap the stored visit for its new value in a single step."""
        for index, existing in enumerate(self.visits):
            if existing.visit_id == visit.visit_id:
                self.visits[index] = visit
                return
        raise KeyError(visit.visit_id)


# Dependency for using the session's clinic state in routes
def get_clinic_state(request: Request) -> ClinicState:
    """Return the ClinicState created in the application lifespan."""
    return request.app.state.clinic
