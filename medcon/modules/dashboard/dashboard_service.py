# medcon/modules/dashboard/dashboard_service.py
"""Dashboard service: period-filtered financials and the LLM summary report."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from medcon.auth.policy import Capability, authorize, financial_scope
from medcon.common.llm import ReportService
from medcon.common.state import ClinicState
from medcon.common.utils.global_functions import format_amount
from medcon.models.entities import DoctorProfile, Identity, Visit
from medcon.models.models import DashboardPeriod, VisitStatus

from .schemas import (
    DashboardResponse, DashboardStats, DoctorPerformance, ReportResponse, ReportSummary,
)

UNKNOWN_DOCTOR = "Unknown"


def filter_completed(visits: Iterable[Visit], period: DashboardPeriod, now: datetime) -> List[Visit]:
    """Completed visits that arrived today, this month, or at any time (local calendar)."""
    today = now.astimezone().date()
    selected = []
    for visit in visits:
        if visit.status != VisitStatus.COMPLETED:
            continue
        arrived = visit.arrival_time.astimezone().date()
        if period == DashboardPeriod.TODAY and arrived != today:
            continue
        if period == DashboardPeriod.MONTH and (arrived.year, arrived.month) != (today.year, today.month):
            continue
        selected.append(visit)
    return selected


def dashboard_stats(visits: Sequence[Visit]) -> DashboardStats:
    return DashboardStats(
        total_patients=len(visits),
        total_revenue=sum(v.total_cost or 0 for v in visits),
        clinic_revenue=sum(v.clinic_earnings or 0 for v in visits),
        doctor_revenue=sum(v.doctor_earnings or 0 for v in visits),
    )


def doctor_performance(visits: Sequence[Visit], doctors: Sequence[DoctorProfile]) -> List[DoctorPerformance]:
    """Per-doctor patients, billed revenue and earnings, best earners first."""
    names = {d.id: d.name for d in doctors}
    rows: Dict[Optional[str], DoctorPerformance] = {}
    for visit in visits:
        doctor_id = visit.assigned_doctor_id
        row = rows.setdefault(doctor_id, DoctorPerformance(
            doctor_id=doctor_id,
            doctor_name=names.get(doctor_id, UNKNOWN_DOCTOR),
        ))
        row.patients += 1
        row.revenue += visit.total_cost or 0
        row.earnings += visit.doctor_earnings or 0
    return sorted(rows.values(), key=lambda r: r.earnings, reverse=True)


def _minutes_between(start: Optional[datetime], end: Optional[datetime]) -> float:
    if start is None or end is None:
        return 0.0
    return round((end - start).total_seconds() / 60, 1)


def build_report_summaries(visits: Iterable[Visit], doctors: Sequence[DoctorProfile]) -> List[ReportSummary]:
    names = {d.id: d.name for d in doctors}
    summaries = []
    for visit in visits:
        if visit.status != VisitStatus.COMPLETED:
            continue
        summaries.append(ReportSummary(
            name=visit.name,
            doctor_name=names.get(visit.assigned_doctor_id, UNKNOWN_DOCTOR),
            wait_time_minutes=_minutes_between(visit.arrival_time, visit.start_consultation_time),
            consult_time_minutes=_minutes_between(visit.start_consultation_time, visit.end_consultation_time),
            total_cost=visit.total_cost or 0,
            doctor_share=visit.doctor_earnings or 0,
            clinic_share=visit.clinic_earnings or 0,
            payments=", ".join(f"{p.method.value}: ${format_amount(p.amount)}" for p in visit.payments or []),
        ))
    return summaries


def get_dashboard(state: ClinicState, identity: Identity, period: DashboardPeriod) -> DashboardResponse:
    """Financial dashboard; doctors only see their own consultations."""
    visible = financial_scope(identity, state.visits)
    visits = filter_completed(visible, period, state.clock())
    return DashboardResponse(
        period=period,
        stats=dashboard_stats(visits),
        doctors=doctor_performance(visits, state.doctors),
    )


async def generate_report(
    state: ClinicState,
    identity: Identity,
    period: DashboardPeriod,
    report_service: ReportService,
) -> ReportResponse:
    authorize(identity, Capability.GENERATE_REPORT)
    visits = filter_completed(financial_scope(identity, state.visits), period, state.clock())
    summaries = build_report_summaries(visits, state.doctors)
    report = await report_service.generate_report([s.model_dump() for s in summaries])
    return ReportResponse(period=period, visits_analyzed=len(summaries), report=report)
