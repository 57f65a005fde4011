# medcon/modules/dashboard/dashboard_controller.py
"""Dashboard controller with API endpoints."""

from fastapi import APIRouter, Depends, Query

from medcon.auth.dependencies import get_current_identity
from medcon.common.llm import ReportService
from medcon.common.state import ClinicState, get_clinic_state
from medcon.models.entities import Identity
from medcon.models.models import DashboardPeriod

from . import dashboard_service as service
from .schemas import DashboardResponse, ReportResponse


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_report_service() -> ReportService:
    return ReportService()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    period: DashboardPeriod = Query(DashboardPeriod.TODAY, description="today, month or all"),
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity)
):
    """
    Get the financial dashboard:
    - Completed patients for the period
    - Total, clinic and doctor revenue
    - Per-doctor performance
    """
    return service.get_dashboard(state, current_identity, period)


@router.post("/report", response_model=ReportResponse)
async def generate_report(
    period: DashboardPeriod = Query(DashboardPeriod.TODAY, description="today, month or all"),
    state: ClinicState = Depends(get_clinic_state),
    current_identity: Identity = Depends(get_current_identity),
    report_service: ReportService = Depends(get_report_service),
):
    """Generate the AI executive report for the completed visits of the period."""
    return await service.generate_report(state, current_identity, period, report_service)
