# medcon/modules/backup/schemas.py
"""Backup module schemas."""

from typing import Optional
from pydantic import BaseModel


class RestorePreview(BaseModel):
    """Collection counts of a backup document, shown before it is applied."""
    date: Optional[str] = None
    patients: int = 0
    doctors: int = 0
    procedures: int = 0
    patient_database: int = 0
    products: int = 0
    suppliers: int = 0
    sales: int = 0


class RestoreResponse(BaseModel):
    success: bool
    message: str
    restored: RestorePreview
    warning: Optional[str] = None
