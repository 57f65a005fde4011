# medcon/models/entities.py
"""Domain entities held in the in-memory clinic state and persisted as JSON."""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from medcon.models.models import PaymentMethod, UserRole, VisitStatus


# ============================================================================
# CATALOG
# ============================================================================

class DoctorProfile(BaseModel):
    id: str
    name: str
    specialty: str
    phone: str = ""
    email: str = ""
    consultation_share_percent: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    procedure_share_percent: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    username: Optional[str] = None
    password_hash: Optional[str] = None
    default_room: Optional[str] = None


class Procedure(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)


# ============================================================================
# PATIENTS & VISITS
# ============================================================================

class PatientFields(BaseModel):
    """Profile fields captured at the front desk."""
    name: str
    cedula: str = ""
    is_minor: bool = False
    representative_name: Optional[str] = None
    birth_date: str = ""
    phone: str = ""
    email: str = ""


class PatientProfile(PatientFields):
    id: str


class PaymentRecord(BaseModel):
    method: PaymentMethod
    amount: float = Field(ge=0, allow_inf_nan=False)


class Visit(PatientFields):
    """One clinic encounter; carries a snapshot of the profile at admission."""
    visit_id: str
    patient_id: str
    reason: str
    status: VisitStatus = VisitStatus.WAITING
    arrival_time: datetime

    # Set on WAITING -> IN_CONSULTATION
    assigned_doctor_id: Optional[str] = None
    assigned_room: Optional[str] = None
    start_consultation_time: Optional[datetime] = None

    # Set on IN_CONSULTATION -> COMPLETED
    end_consultation_time: Optional[datetime] = None
    base_cost: Optional[float] = None
    performed_procedures: Optional[List[Procedure]] = None
    total_cost: Optional[float] = None
    payments: Optional[List[PaymentRecord]] = None
    doctor_earnings: Optional[float] = None
    clinic_earnings: Optional[float] = None


# ============================================================================
# INVENTORY
# ============================================================================

class Supplier(BaseModel):
    id: str
    name: str
    contact: str = ""
    phone: str = ""


class Product(BaseModel):
    id: str
    name: str
    cost_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    sell_price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=5, ge=0)
    supplier_id: Optional[str] = None


class SaleItem(BaseModel):
    product_id: str
    product_name: str
    quantity: int = Field(gt=0)
    price_at_sale: float = Field(ge=0, allow_inf_nan=False)


class Sale(BaseModel):
    id: str
    doctor_id: str
    date: datetime
    items: List[SaleItem]
    total: float


# ============================================================================
# IDENTITY
# ============================================================================

class Identity(BaseModel):
    """Role-tagged identity produced by authentication."""
    role: UserRole
    id: Optional[str] = None
    name: str
