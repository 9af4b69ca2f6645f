# building_access/models/person.py
"""
Persons table — people who can be granted access to rooms.
Referenced (not owned) by access and access_history rows.
"""

from sqlalchemy import Column, Integer, String
from building_access.database import Base


class Person(Base):
    __tablename__ = "person"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    surnames = Column(String(200), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surnames}"

    def __repr__(self):
        return f"<Person {self.id} {self.full_name}>"
