from __future__ import annotations

import csv
import io
from datetime import datetime, timezone

import pytest

from src.batch_attendance.batch_attendance.attendance.model import AttendanceRecord, Entry
from src.batch_attendance.batch_attendance.common.datetime_utils import date_to_day_start
from src.batch_attendance.batch_attendance.core.constants import IDENTITY_COLUMNS, SUMMARY_COLUMNS
from src.batch_attendance.batch_attendance.core.enums import AttendanceStatus, Session
from src.batch_attendance.batch_attendance.core.exceptions import NotFound
from src.batch_attendance.batch_attendance.reports.export import project_batch
from src.batch_attendance.batch_attendance.reports.service import AttendanceReportService
from src.batch_attendance.batch_attendance.students.model import Batch, Student

NOW = datetime(2025, 1, 1, 6, 0, tzinfo=timezone.utc)
BATCH = Batch(batch_id="CSE-2027", batch_name="CSE Morning", batch_year=2027, dept_id="CSE")


def _record(date: str, session: Session, marks: dict[str, AttendanceStatus]) -> AttendanceRecord:
    return AttendanceRecord(
        batch_id="CSE-2027",
        calendar_date=date_to_day_start(date),
        session=session,
        marked_by="admin",
        marked_at=NOW,
        entries=tuple(Entry(regno=r, student_id=None, student_name=r, status=s) for r, s in marks.items()),
    )


def _students(*regnos: str) -> list[Student]:
    return [Student(student_id=r, regno=r, student_name=f"Student {r}", dept="CSE", batch_id="CSE-2027") for r in regnos]


def test_one_row_per_student_with_empty_cells():
    records = [
        _record("2025-01-02", Session.FN, {"REG1": AttendanceStatus.PRESENT}),
        _record("2025-01-01", Session.AN, {"REG2": AttendanceStatus.ON_DUTY, "REG1": AttendanceStatus.ABSENT}),
    ]

    report = project_batch(BATCH, _students("REG3", "REG1", "REG2"), records)

    assert report.dates == ["2025-01-01", "2025-01-02"]
    assert report.columns == [
        *IDENTITY_COLUMNS,
        "2025-01-01 FN",
        "2025-01-01 AN",
        "2025-01-02 FN",
        "2025-01-02 AN",
        *SUMMARY_COLUMNS,
    ]
    assert [r["regno"] for r in report.rows] == ["REG1", "REG2", "REG3"]

    reg1, reg2, reg3 = report.rows
    assert reg1["2025-01-01 FN"] == ""
    assert reg1["2025-01-01 AN"] == "Absent"
    assert reg1["2025-01-02 FN"] == "Present"
    assert reg1["attendancePercentage"] == "50.00%"
    assert reg2["2025-01-01 AN"] == "On-Duty"
    assert reg2["onDuty"] == 1
    assert all(reg3[c] == "" for c in report.columns if c.startswith("2025-"))
    assert reg3["totalClasses"] == 0
    assert reg3["attendancePercentage"] == "0.00%"


def test_row_width_is_identity_plus_date_pairs_plus_summary():
    records = [_record(f"2025-01-0{d}", Session.FN, {"REG1": AttendanceStatus.PRESENT}) for d in range(1, 4)]

    report = project_batch(BATCH, _students("REG1", "REG2"), records)

    assert len(report.rows) == 2
    for row in report.rows:
        assert len(row) == len(IDENTITY_COLUMNS) + 2 * 3 + len(SUMMARY_COLUMNS)


def test_no_records_gives_rows_without_date_columns():
    report = project_batch(BATCH, _students("REG2", "REG1"), [])

    assert report.columns == [*IDENTITY_COLUMNS, *SUMMARY_COLUMNS]
    assert [r["regno"] for r in report.rows] == ["REG1", "REG2"]


def test_duplicate_roster_regnos_collapse():
    report = project_batch(BATCH, _students("REG1", "reg1 "), [])

    assert len(report.rows) == 1


def test_csv_has_header_and_bom():
    report = project_batch(BATCH, _students("REG1"), [_record("2025-01-01", Session.FN, {"REG1": AttendanceStatus.LATE})])

    body = report.to_csv()

    assert body.startswith(b"\xef\xbb\xbf")
    rows = list(csv.reader(io.StringIO(body.decode("utf-8-sig"))))
    assert rows[0] == report.columns
    assert rows[1][rows[0].index("2025-01-01 FN")] == "Late"


def test_export_batch_uses_directory_and_range(repo, directory):
    repo.upsert(
        batch_id="CSE-2027",
        calendar_date=date_to_day_start("2025-01-01"),
        session=Session.FN,
        entries=[Entry(regno="REG001", student_id=None, student_name="x", status=AttendanceStatus.PRESENT)],
        marked_by="admin",
        marked_at=NOW,
    )
    svc = AttendanceReportService(repo, directory)

    in_range = svc.export_batch(batch_id="cse-2027", start="2025-01-01", end="2025-01-31")
    out_of_range = svc.export_batch(batch_id="CSE-2027", start="2025-02-01", end="2025-02-28")

    assert [r["regno"] for r in in_range.rows] == ["REG001", "REG002", "REG003"]
    assert in_range.dates == ["2025-01-01"]
    assert len(out_of_range.rows) == 3
    assert out_of_range.dates == []


def test_export_unknown_batch_is_not_found(repo, directory):
    with pytest.raises(NotFound):
        AttendanceReportService(repo, directory).export_batch(batch_id="NOPE")
