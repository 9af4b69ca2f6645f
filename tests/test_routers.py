# tests/test_routers.py
"""API tests for the report and history endpoints (TestClient + in-memory SQLite)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from building_access.models.report_snapshot import ReportSnapshot
from building_access.config import settings
from building_access.database import get_db
from building_access.main import APIKeyMiddleware, api_error_handler
from building_access.routers import access_history, health
from building_access.utils.errors import ApiError
from building_access.utils.periods import ReportPeriod

OCTOBER_TO_DATE = ReportPeriod.for_days(date(2026, 10, 1), date(2026, 10, 19))


class TestDateReport:
    def test_report_generated_and_saved(self, client, db, seeded):
        resp = client.get("/api/v1/administration/date-report",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Custom report generated and saved successfully"

        data = body["data"]
        assert data["total_accesses"] == 5
        assert data["total_absences"] == 1
        assert data["frequent_users"] == [
            {"person_id": seeded["ana"].id, "name": "Ana García López", "access_count": 4}
        ]
        assert data["infrequent_users"] == [
            {"person_id": seeded["luis"].id, "name": "Luis Pérez", "access_count": 1}
        ]
        assert data["absences"][0]["room"] == "Library"

        snapshots = db.query(ReportSnapshot).all()
        assert len(snapshots) == 1
        assert snapshots[0].report_date == date(2026, 10, 1)
        assert snapshots[0].total_accesses == 5

    def test_repeated_generation_duplicates_snapshot(self, client, db, seeded):
        params = {"start_date": "2026-10-01", "end_date": "2026-10-31"}
        client.get("/api/v1/administration/date-report", params=params)
        client.get("/api/v1/administration/date-report", params=params)
        assert db.query(ReportSnapshot).count() == 2

    def test_missing_dates(self, client):
        resp = client.get("/api/v1/administration/date-report", params={"start_date": "2026-10-01"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Start date and end date are required"}

    def test_invalid_date(self, client, db):
        resp = client.get("/api/v1/administration/date-report",
                          params={"start_date": "not-a-date", "end_date": "2026-10-31"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid date format. Use YYYY-MM-DD"
        assert db.query(ReportSnapshot).count() == 0

    @pytest.mark.parametrize("start_date", ["20261001", "2026-W40-1", "2026-274", "2026-1-5"])
    def test_non_plain_dates_rejected(self, client, db, seeded, start_date):
        resp = client.get("/api/v1/administration/date-report",
                          params={"start_date": start_date, "end_date": "2026-10-31"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid date format. Use YYYY-MM-DD"
        assert db.query(ReportSnapshot).count() == 0

    def test_store_failure_returns_500(self, client):
        with patch("building_access.routers.administration.generate_access_report",
                   side_effect=RuntimeError("connection lost")):
            resp = client.get("/api/v1/administration/date-report",
                              params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "message": "Error generating custom report",
            "error": "connection lost",
        }


class TestDailyReport:
    def test_month_to_date_report(self, client, db, seeded):
        with patch("building_access.routers.administration.local_now",
                   return_value=datetime(2026, 10, 19, 12, 0)):
            resp = client.get("/api/v1/administration/daily-report")

        assert resp.status_code == 201, resp.text
        data = resp.json()["data"]
        assert data["report_period"] == {
            "start_date": "2026-10-01T00:00:00",
            "end_date": "2026-10-19T23:59:59.999999",
        }
        assert data["total_accesses"] == 5
        assert data["total_absences"] == 1

        snapshot = db.query(ReportSnapshot).one()
        assert snapshot.report_date == date(2026, 10, 19)

    def test_saved_snapshots_listed(self, client, seeded):
        with patch("building_access.routers.administration.local_now",
                   return_value=datetime(2026, 10, 19, 12, 0)):
            client.get("/api/v1/administration/daily-report")

        resp = client.get("/api/v1/administration/reports")
        assert resp.status_code == 200
        reports = resp.json()
        assert len(reports) == 1
        assert reports[0]["report_date"] == "2026-10-19"
        assert reports[0]["frequent_persons"][0]["access_count"] == 4


    @pytest.mark.parametrize("limit", [-1, 0, 501])
    def test_snapshot_listing_limit_bounds(self, client, limit):
        resp = client.get("/api/v1/administration/reports", params={"limit": limit})
        assert resp.status_code == 422


class TestRoomUsage:
    def test_room_stats(self, client, seeded):
        with patch("building_access.routers.administration.month_to_date", return_value=OCTOBER_TO_DATE):
            resp = client.get("/api/v1/administration/room-usage")

        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]
        assert data["period"] == "2026-10-01 to 2026-10-19"
        assert data["days_in_period"] == 19
        assert data["total_accesses"] == 5
        assert data["total_cancellations"] == 1
        assert data["total_hours_used"] == 9.5

        lab, library = data["room_stats"]
        assert lab["room_name"] == "Lab"
        assert lab["completed_accesses"] == 4
        assert lab["total_hours_used"] == 8.0
        assert lab["average_duration"] == 2.0
        assert library["total_accesses"] == 1
        assert library["cancelled_accesses"] == 1
        assert library["average_duration"] == 1.5


class TestAccessHistory:
    def test_histories_newest_first(self, client, seeded):
        resp = client.get("/api/v1/access-history",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 200
        rows = resp.json()["data"]
        assert len(rows) == 5
        assert rows[0]["entry_datetime"] == "2026-10-06T09:00:00"
        assert rows[0]["person_name"] == "Ana García López"

    def test_room_histories(self, client, seeded):
        room_id = seeded["library"].id
        resp = client.get(f"/api/v1/access-history/room/{room_id}",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["room_id"] == room_id
        assert data["room_name"] == "Library"
        assert [h["person_name"] for h in data["access_histories"]] == ["Luis Pérez"]

    def test_unknown_room(self, client, seeded):
        resp = client.get("/api/v1/access-history/room/999",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 404
        assert resp.json()["message"] == "Room not found"

    @pytest.mark.parametrize("room_id", ["1_0", "+5", "-1", "1.0"])
    def test_room_id_must_be_plain_integer(self, client, seeded, room_id):
        resp = client.get(f"/api/v1/access-history/room/{room_id}",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid room ID"

    def test_invalid_room_id(self, client):
        resp = client.get("/api/v1/access-history/room/abc",
                          params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid room ID"


def test_health(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"


class TestApiKey:
    @pytest.fixture
    def secured(self, db, seeded):
        app = FastAPI()
        app.add_middleware(APIKeyMiddleware)
        app.add_exception_handler(ApiError, api_error_handler)
        app.include_router(access_history.router, prefix="/api/v1")
        app.include_router(health.router, prefix="/api/v1")

        def _override_get_db():
            yield db

        app.dependency_overrides[get_db] = _override_get_db
        with patch.object(settings, "API_KEY", "s3cret"):
            yield TestClient(app)

    PARAMS = {"start_date": "2026-10-01", "end_date": "2026-10-31"}

    def test_missing_key_rejected(self, secured):
        resp = secured.get("/api/v1/access-history", params=self.PARAMS)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "Invalid or missing API key"}

    def test_wrong_key_rejected(self, secured):
        resp = secured.get("/api/v1/access-history", params=self.PARAMS,
                           headers={"X-API-Key": "nope"})
        assert resp.status_code == 401

    def test_header_key_accepted(self, secured):
        resp = secured.get("/api/v1/access-history", params=self.PARAMS,
                           headers={"X-API-Key": "s3cret"})
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 5

    def test_query_key_accepted(self, secured):
        resp = secured.get("/api/v1/access-history", params={**self.PARAMS, "api_key": "s3cret"})
        assert resp.status_code == 200

    def test_health_open_without_key(self, secured):
        resp = secured.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["database"] == "ok"
