# building_access/services/history_service.py
"""Access history lookups (archived, finished accesses)."""

from sqlalchemy.orm import Session, joinedload
from building_access.models.access_history import AccessHistory
from building_access.models.room import Room
from building_access.utils.errors import NotFoundError
from building_access.utils.periods import ReportPeriod


def _format(history: AccessHistory) -> dict:
    return {
        "id": history.id,
        "person_name": history.person.full_name,
        "room_name": history.room.room_name,
        "entry_datetime": history.entry_datetime,
        "exit_datetime": history.exit_datetime,
    }


def _query_period(db: Session, period: ReportPeriod):
    return (
        db.query(AccessHistory)
        .options(joinedload(AccessHistory.person), joinedload(AccessHistory.room))
        .filter(AccessHistory.entry_datetime.between(period.start, period.end))
    )


def list_histories(db: Session, period: ReportPeriod) -> list[dict]:
    """All archived accesses in the period, newest first."""
    rows = _query_period(db, period).order_by(AccessHistory.entry_datetime.desc()).all()
    return [_format(h) for h in rows]


def room_histories(db: Session, room_id: int, period: ReportPeriod) -> dict:
    """Archived accesses for one room. Raises NotFoundError for an unknown room."""
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise NotFoundError("Room not found")

    rows = (
        _query_period(db, period)
        .filter(AccessHistory.room_id == room_id)
        .order_by(AccessHistory.entry_datetime.desc())
        .all()
    )
    return {
        "room_id": room_id,
        "room_name": room.room_name,
        "access_histories": [_format(h) for h in rows],
    }
