# medcon/modules/visits/schemas.py
"""Visits module Pydantic schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from medcon.models.entities import PatientFields, PaymentRecord, Visit
from medcon.modules.billing.schemas import Bill, PaymentSummary


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class AdmitPatientRequest(PatientFields):
    """Front-desk admission form: profile fields plus the reason for the visit."""
    reason: str


class AssignConsultationRequest(BaseModel):
    doctor_id: str
    room: str


class BillRequest(BaseModel):
    """Bill inputs shared by preview and finalize."""
    base_cost: float = Field(default=0.0, allow_inf_nan=False)
    procedure_ids: List[str] = Field(default_factory=list)
    payments: List[PaymentRecord] = Field(default_factory=list)


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class VisitActionResponse(BaseModel):
    success: bool
    message: str
    visit: Optional[Visit] = None
    warning: Optional[str] = None


class VisitListResponse(BaseModel):
    visits: List[Visit]
    total: int


class BillPreviewResponse(BaseModel):
    bill: Bill
    payments: PaymentSummary
    settled: bool
    remaining_display: str
