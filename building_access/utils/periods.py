# building_access/utils/periods.py
"""
Reporting periods.
A period covers whole days: start at 00:00:00, end extended to 23:59:59.999999.
All datetimes are naive local time (settings.TIMEZONE), matching the access store.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from building_access.config import settings
from building_access.utils.errors import ValidationError

DAY_FORMAT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class ReportPeriod:
    start: datetime
    end: datetime

    @classmethod
    def for_days(cls, first: date, last: date) -> "ReportPeriod":
        return cls(datetime.combine(first, time.min), datetime.combine(last, time.max))

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def days(self) -> int:
        return (self.end.date() - self.start.date()).days + 1

    def as_dict(self) -> dict:
        return {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()}

    def label(self) -> str:
        return f"{self.start.date().isoformat()} to {self.end.date().isoformat()}"


def _parse_day(value: str) -> date:
    # Only plain YYYY-MM-DD; no compact, week or ordinal forms
    if not DAY_FORMAT.fullmatch(value):
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_period(start_date: Optional[str], end_date: Optional[str]) -> ReportPeriod:
    """Build a period from YYYY-MM-DD query parameters. Raises ValidationError."""
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required")
    try:
        first = _parse_day(start_date)
        last = _parse_day(end_date)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")
    return ReportPeriod.for_days(first, last)


def local_now() -> datetime:
    """Current wall-clock time in the configured timezone, as a naive datetime."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def month_to_date(now: Optional[datetime] = None) -> ReportPeriod:
    """First day of the current month through the end of today."""
    now = now or local_now()
    today = now.date()
    return ReportPeriod.for_days(today.replace(day=1), today)
