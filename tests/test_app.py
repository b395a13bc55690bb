from __future__ import annotations

import pytest

from src.batch_attendance.batch_attendance.container import build_container
from src.batch_attendance.batch_attendance.main import create_app


class DownRepo:
    def find_by_dates(self, **kwargs):
        from src.batch_attendance.batch_attendance.core.exceptions import StoreUnavailable

        raise StoreUnavailable("Database unavailable")


@pytest.fixture
def client(monkeypatch, repo, directory):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(db_config={}, attendance_repo=repo, student_directory=directory)
    app = create_app(container=container)
    return app.test_client()


def _mark(client, session="FN", date="2025-01-01", data=None):
    return client.post(
        "/api/attendance/mark",
        json={
            "batchId": "CSE-2027",
            "session": session,
            "date": date,
            "markedBy": "admin",
            "attendanceData": data
            if data is not None
            else [
                {"studentId": "1", "regno": "reg001", "studentname": "Student REG001", "status": "Present"},
                {"studentId": "2", "regno": "REG002", "studentname": "Student REG002", "status": "On-Duty", "reason": "NSS"},
                {"studentId": "3", "regno": "REG003", "studentname": "Student REG003", "status": "Unknown"},
            ],
        },
    )


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_mark_then_summaries(client):
    res = _mark(client)
    assert res.status_code == 200
    body = res.get_json()
    assert body["created"] is True
    assert body["entryCount"] == 2
    assert body["rejected"][0]["regno"] == "REG003"

    day = client.get("/api/attendance/date/summary?date=2025-01-01&batchId=CSE-2027").get_json()
    assert day["FN"] == {"total": 2, "present": 1, "absent": 0, "onDuty": 1}
    assert day["AN"] == {"total": 0, "present": 0, "absent": 0, "onDuty": 0}

    rng = client.get("/api/attendance/range?startDate=2025-01-01&endDate=2025-01-01").get_json()
    assert [d["date"] for d in rng] == ["2025-01-01"]

    dates = client.get("/api/attendance/summary?dates=2025-01-02,2025-01-01").get_json()
    assert [d["date"] for d in dates] == ["2025-01-01", "2025-01-02"]

    record = client.get("/api/attendance/date/session?date=2025-01-01&session=FN&batchId=CSE-2027").get_json()
    assert [e["regno"] for e in record["entries"]] == ["REG001", "REG002"]


def test_remark_reports_update(client):
    _mark(client)
    body = _mark(client).get_json()
    assert body["created"] is False
    assert body["entryCount"] == 2


def test_invalid_session_is_400(client):
    res = _mark(client, session="XN")
    assert res.status_code == 400
    assert res.get_json()["error"] == "InvalidSession"


def test_invalid_payload_is_400(client):
    res = _mark(client, data={"regno": "A"})
    assert res.status_code == 400


def test_stats_and_export(client):
    _mark(client)

    stats = client.get("/api/attendance/stats?batchId=CSE-2027").get_json()
    assert [(s["regno"], s["attendancePercentage"]) for s in stats] == [("REG001", "100.00%"), ("REG002", "100.00%")]

    res = client.get("/api/attendance/export?batchId=CSE-2027")
    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    lines = res.data.decode("utf-8-sig").splitlines()
    assert lines[0].split(",")[6:8] == ["2025-01-01 FN", "2025-01-01 AN"]
    assert len(lines) == 1 + 3


def test_export_unknown_batch_is_404(client):
    assert client.get("/api/attendance/export?batchId=NOPE").status_code == 404


def test_store_failure_is_503(monkeypatch, directory):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(db_config={}, attendance_repo=DownRepo(), student_directory=directory)
    client = create_app(container=container).test_client()

    res = client.get("/api/attendance/date/summary?date=2025-01-01")
    assert res.status_code == 503
