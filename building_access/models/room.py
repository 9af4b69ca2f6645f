# building_access/models/room.py
"""Rooms table — every room whose usage is reported."""

from sqlalchemy import Column, Integer, String
from building_access.database import Base


class Room(Base):
    __tablename__ = "room"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Room {self.id} {self.room_name}>"
