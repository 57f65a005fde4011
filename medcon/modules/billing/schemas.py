# medcon/modules/billing/schemas.py
"""Billing value types."""

from pydantic import BaseModel, Field


class DoctorShares(BaseModel):
    consultation_share_percent: float = Field(ge=0, allow_inf_nan=False)
    procedure_share_percent: float = Field(ge=0, allow_inf_nan=False)


class Bill(BaseModel):
    base_cost: float
    procedures_cost: float
    total_cost: float
    doctor_earnings: float
    clinic_earnings: float


class PaymentSummary(BaseModel):
    paid_amount: float
    remaining_amount: float
