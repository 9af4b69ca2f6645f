# building_access/models/access.py
"""
Access events table.
One row per booked/started access of a person to a room. Created on entry,
updated once on exit (exit_datetime + state=completed) or on cancellation.
Every report in report_service is computed from these rows.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from building_access.database import Base

STATE_ACTIVE = "active"
STATE_COMPLETED = "completed"
STATE_CANCELLED = "cancelled"


class Access(Base):
    __tablename__ = "access"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(Integer, ForeignKey("person.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("room.id"), nullable=False, index=True)
    entry_datetime = Column(DateTime, nullable=False, index=True)
    exit_datetime = Column(DateTime)              # set on exit, >= entry_datetime
    state = Column(String(20), nullable=False, default=STATE_ACTIVE)  # active | completed | cancelled

    person = relationship("Person")
    room = relationship("Room")

    def __repr__(self):
        return f"<Access {self.id} person={self.person_id} room={self.room_id} state={self.state}>"
