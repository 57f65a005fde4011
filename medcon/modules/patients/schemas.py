# medcon/modules/patients/schemas.py
"""Patient directory schemas."""

from typing import List
from pydantic import BaseModel

from medcon.models.entities import PatientProfile


class PatientSearchResponse(BaseModel):
    patients: List[PatientProfile]
    total: int
