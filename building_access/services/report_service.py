# building_access/services/report_service.py
"""
Access reports: fetch the period's access events, aggregate them, persist a snapshot.

  - generate_access_report : totals + cohorts for a period, saves one ReportSnapshot
  - build_room_usage_report : per-room usage for a period (read-only)

Every generation call writes a new snapshot row — repeated calls for the same
period are kept as separate rows.
"""

import json
from datetime import date
from sqlalchemy.orm import Session, joinedload
from building_access.models.access import Access
from building_access.models.room import Room
from building_access.models.report_snapshot import ReportSnapshot
from building_access.services import aggregator
from building_access.utils.periods import ReportPeriod
from building_access.utils.logger import get_logger

logger = get_logger(__name__)


def fetch_accesses(db: Session, period: ReportPeriod, with_person: bool = True) -> list:
    """All access events whose entry falls in the period, oldest first."""
    relations = [joinedload(Access.room)]
    if with_person:
        relations.append(joinedload(Access.person))
    return (
        db.query(Access)
        .options(*relations)
        .filter(Access.entry_datetime.between(period.start, period.end))
        .order_by(Access.entry_datetime)
        .all()
    )


def build_access_report(events: list, period: ReportPeriod) -> dict:
    """Shape the report payload returned by the daily and custom-date endpoints."""
    events = aggregator.in_period(events, period)
    completed = [e for e in events if aggregator.is_completed(e)]
    absences = [e for e in events if aggregator.is_cancelled(e)]
    cohorts = aggregator.frequency_by_person(completed)

    return {
        "report_period": period.as_dict(),
        "total_accesses": len(completed),
        "total_absences": len(absences),
        "accesses": [
            {
                "person": e.person.full_name,
                "room": e.room.room_name,
                "entry_time": e.entry_datetime,
                "exit_time": e.exit_datetime,
            }
            for e in completed
        ],
        "absences": [
            {
                "person": e.person.full_name,
                "room": e.room.room_name,
                "scheduled_entry_time": e.entry_datetime,
            }
            for e in absences
        ],
        "frequent_users": [p.to_dict() for p in cohorts.frequent],
        "infrequent_users": [p.to_dict() for p in cohorts.infrequent],
    }


def save_snapshot(db: Session, report_date: date, report: dict) -> ReportSnapshot:
    """Persist the denormalized summary of a generated report. Always commits immediately."""
    snapshot = ReportSnapshot(
        report_date=report_date,
        total_accesses=report["total_accesses"],
        total_absences=report["total_absences"],
        frequent_persons=json.dumps(report["frequent_users"]),
        infrequent_persons=json.dumps(report["infrequent_users"]),
    )
    db.add(snapshot)
    db.commit()
    logger.info(
        f"[REPORT] Snapshot saved for {report_date} | accesses={snapshot.total_accesses} "
        f"absences={snapshot.total_absences}"
    )
    return snapshot


def generate_access_report(db: Session, period: ReportPeriod, report_date: date) -> dict:
    events = fetch_accesses(db, period)
    logger.info(f"[REPORT] {period.label()} | {len(events)} access events")
    report = build_access_report(events, period)
    save_snapshot(db, report_date, report)
    return report


def build_room_usage_report(db: Session, period: ReportPeriod) -> dict:
    events = fetch_accesses(db, period, with_person=False)
    rooms = db.query(Room).order_by(Room.id).all()

    stats = aggregator.room_usage(events, rooms, period)
    totals = aggregator.usage_totals(stats)
    logger.info(f"[USAGE] {period.label()} | {len(rooms)} rooms | {totals['total_accesses']} accesses")

    return {
        "period": period.label(),
        "days_in_period": period.days,
        **totals,
        "room_stats": [s.to_dict() for s in stats],
    }
