# tests/conftest.py
"""Shared fixtures: in-memory SQLite session + TestClient wired to it."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from building_access.database import Base, get_db
from building_access.models import Person, Room, Access, AccessHistory
from building_access.main import app


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seeded(db):
    """
    Two rooms, two persons, October 2026:
      - Ana: 4 completed accesses in Lab (frequent)
      - Luis: 1 completed access in Library (1.5h) + 1 cancelled in Library
      - one access on 2026-11-02, outside every October period
      - history rows mirroring the completed accesses
    """
    ana = Person(name="Ana", surnames="García López")
    luis = Person(name="Luis", surnames="Pérez")
    lab = Room(room_name="Lab")
    library = Room(room_name="Library")
    db.add_all([ana, luis, lab, library])
    db.flush()

    for day in (1, 2, 3, 6):
        db.add(Access(person_id=ana.id, room_id=lab.id, state="completed",
                      entry_datetime=datetime(2026, 10, day, 9, 0),
                      exit_datetime=datetime(2026, 10, day, 11, 0)))
        db.add(AccessHistory(person_id=ana.id, room_id=lab.id,
                             entry_datetime=datetime(2026, 10, day, 9, 0),
                             exit_datetime=datetime(2026, 10, day, 11, 0)))
    db.add(Access(person_id=luis.id, room_id=library.id, state="completed",
                  entry_datetime=datetime(2026, 10, 5, 10, 0),
                  exit_datetime=datetime(2026, 10, 5, 11, 30)))
    db.add(AccessHistory(person_id=luis.id, room_id=library.id,
                         entry_datetime=datetime(2026, 10, 5, 10, 0),
                         exit_datetime=datetime(2026, 10, 5, 11, 30)))
    db.add(Access(person_id=luis.id, room_id=library.id, state="cancelled",
                  entry_datetime=datetime(2026, 10, 5, 9, 0)))
    db.add(Access(person_id=luis.id, room_id=lab.id, state="completed",
                  entry_datetime=datetime(2026, 11, 2, 9, 0),
                  exit_datetime=datetime(2026, 11, 2, 10, 0)))
    db.commit()
    return {"ana": ana, "luis": luis, "lab": lab, "library": library}
