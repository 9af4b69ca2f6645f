# building_access/routers/administration.py
"""Administration reports — daily (month-to-date), room usage, custom date range."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from building_access.database import get_db
from building_access.models.report_snapshot import ReportSnapshot
from building_access.schemas.report_snapshot import ReportSnapshotOut
from building_access.services.report_service import generate_access_report, build_room_usage_report
from building_access.utils.errors import ApiError, ServerError
from building_access.utils.periods import local_now, month_to_date, parse_period
from building_access.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/administration/daily-report", status_code=201, summary="Generate month-to-date report")
def generate_daily_report(db: Session = Depends(get_db)):
    """
    Aggregates every access from the first day of the month to the end of today
    (local time) and saves a report snapshot dated today.
    """
    try:
        now = local_now()
        report = generate_access_report(db, month_to_date(now), now.date())
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Daily report failed: {e}", exc_info=True)
        raise ServerError("Error generating daily report", error=str(e))
    return {"success": True, "message": "Daily report generated and saved successfully", "data": report}


@router.get("/administration/room-usage", summary="Room usage since the start of the month")
def get_room_usage_stats(db: Session = Depends(get_db)):
    """Per-room totals, completed/cancelled counts and hours used, month to date."""
    try:
        data = build_room_usage_report(db, month_to_date())
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"Room usage stats failed: {e}", exc_info=True)
        raise ServerError("Error retrieving room usage statistics", error=str(e))
    return {
        "success": True,
        "message": "Room usage statistics from the beginning of the month to today retrieved successfully",
        "data": data,
    }


@router.get("/administration/date-report", status_code=201, summary="Generate report for a date range")
def generate_date_report(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Same report as the daily one, for start_date..end_date (YYYY-MM-DD, inclusive)."""
    period = parse_period(start_date, end_date)
    try:
        report = generate_access_report(db, period, period.start.date())
    except ApiError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Custom report failed: {e}", exc_info=True)
        raise ServerError("Error generating custom report", error=str(e))
    return {"success": True, "message": "Custom report generated and saved successfully", "data": report}


@router.get("/administration/reports", response_model=list[ReportSnapshotOut], summary="List saved report snapshots")
def list_report_snapshots(limit: int = Query(50, ge=1, le=500), db: Session = Depends(get_db)):
    """Saved snapshots, newest first. Duplicates for the same period are all listed."""
    return (
        db.query(ReportSnapshot)
        .order_by(ReportSnapshot.report_date.desc(), ReportSnapshot.id.desc())
        .limit(limit)
        .all()
    )
