# building_access/routers/access_history.py
"""Access history endpoints — archived accesses by date range, globally or per room."""

import re
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from building_access.database import get_db
from building_access.services.history_service import list_histories, room_histories
from building_access.utils.errors import ApiError, ServerError, ValidationError
from building_access.utils.periods import parse_period
from building_access.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)

ROOM_ID_FORMAT = re.compile(r"[0-9]+")


@router.get("/access-history", summary="Access history for a date range")
def get_access_histories(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
):
    period = parse_period(start_date, end_date)
    try:
        data = list_histories(db, period)
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"Access history lookup failed: {e}", exc_info=True)
        raise ServerError("An error occurred while fetching access histories", error=str(e))
    return {"success": True, "message": "Access histories retrieved successfully", "data": data}


@router.get("/access-history/room/{room_id}", summary="Access history of one room")
def get_room_access_histories(
    room_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Returns 404 if the room does not exist."""
    if not ROOM_ID_FORMAT.fullmatch(room_id):
        raise ValidationError("Invalid room ID")
    room_pk = int(room_id)
    period = parse_period(start_date, end_date)

    try:
        data = room_histories(db, room_pk, period)
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"Room history lookup failed for room {room_id}: {e}", exc_info=True)
        raise ServerError("Error getting room access histories", error=str(e))
    return {"success": True, "message": "Room access histories retrieved successfully", "data": data}
