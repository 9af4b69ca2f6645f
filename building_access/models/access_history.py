# building_access/models/access_history.py
"""
Access history table — archive of finished accesses.
Read by the /access-history endpoints; never written by this service.
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from building_access.database import Base


class AccessHistory(Base):
    __tablename__ = "access_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    person_id = Column(Integer, ForeignKey("person.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("room.id"), nullable=False, index=True)
    entry_datetime = Column(DateTime, nullable=False, index=True)
    exit_datetime = Column(DateTime)

    person = relationship("Person")
    room = relationship("Room")

    def __repr__(self):
        return f"<AccessHistory {self.id} person={self.person_id} room={self.room_id}>"
