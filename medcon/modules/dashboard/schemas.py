# medcon/modules/dashboard/schemas.py
"""Dashboard module schemas."""

from typing import List, Optional
from pydantic import BaseModel

from medcon.models.models import DashboardPeriod


class DashboardStats(BaseModel):
    total_patients: int = 0
    total_revenue: float = 0.0
    clinic_revenue: float = 0.0
    doctor_revenue: float = 0.0


class DoctorPerformance(BaseModel):
    doctor_id: Optional[str] = None
    doctor_name: str
    patients: int = 0
    revenue: float = 0.0
    earnings: float = 0.0


class DashboardResponse(BaseModel):
    period: DashboardPeriod
    stats: DashboardStats
    doctors: List[DoctorPerformance]


class ReportSummary(BaseModel):
    """Read-only view of one completed visit handed to the report generator."""
    name: str
    doctor_name: str
    wait_time_minutes: float
    consult_time_minutes: float
    total_cost: float
    doctor_share: float
    clinic_share: float
    payments: str


class ReportResponse(BaseModel):
    period: DashboardPeriod
    visits_analyzed: int
    report: str
