"""
Report routes
"""
from datetime import date, timedelta
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.schemas import BookingReport, DashboardStats
from frontdesk.services.report_service import ReportService, occupancy_csv
from frontdesk.security.auth import SessionContext, get_current_session

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    return ReportService(db).get_dashboard_stats()


@router.get("/bookings", response_model=BookingReport)
def get_booking_report(
    start_date: date = Query(default_factory=lambda: date.today() - timedelta(days=30)),
    end_date: date = Query(default_factory=date.today),
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    """Booking statistics, revenue by room type and daily occupancy"""
    return ReportService(db).get_booking_report(start_date, end_date)


@router.get("/occupancy.csv")
def export_occupancy(
    start_date: date = Query(default_factory=lambda: date.today() - timedelta(days=30)),
    end_date: date = Query(default_factory=date.today),
    db: Session = Depends(get_db),
    current: SessionContext = Depends(get_current_session)
):
    report = ReportService(db).get_booking_report(start_date, end_date)
    filename = f"occupancy-report-{report['start_date']}-to-{report['end_date']}.csv"
    return StreamingResponse(
        iter([occupancy_csv(report['occupancy'])]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
