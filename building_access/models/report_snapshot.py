# building_access/models/report_snapshot.py
"""
Report snapshots (administration table).
One denormalized row per report generation call: counts plus both
frequency cohorts serialized as JSON text. Rows are never updated.
"""

from sqlalchemy import Column, Integer, Date, Text
from building_access.database import Base


class ReportSnapshot(Base):
    __tablename__ = "administration"

    id = Column(Integer, primary_key=True, autoincrement=True)
    report_date = Column(Date, nullable=False, index=True)
    total_accesses = Column(Integer, nullable=False, default=0)
    total_absences = Column(Integer, nullable=False, default=0)
    frequent_persons = Column(Text)      # JSON list of {person_id, name, access_count}
    infrequent_persons = Column(Text)

    def __repr__(self):
        return f"<ReportSnapshot {self.id} date={self.report_date} accesses={self.total_accesses}>"
