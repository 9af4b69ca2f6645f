# building_access/schemas/report_snapshot.py
import json
from pydantic import BaseModel, field_validator
from datetime import date


class PersonFrequencyOut(BaseModel):
    person_id: int
    name: str
    access_count: int


class ReportSnapshotOut(BaseModel):
    id: int
    report_date: date
    total_accesses: int
    total_absences: int
    frequent_persons: list[PersonFrequencyOut]
    infrequent_persons: list[PersonFrequencyOut]

    @field_validator("frequent_persons", "infrequent_persons", mode="before")
    @classmethod
    def decode_cohort(cls, value):
        # Stored as JSON text in the administration table
        if isinstance(value, str):
            return json.loads(value)
        return value or []

    class Config:
        from_attributes = True
