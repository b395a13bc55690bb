from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional, Sequence

import pandas as pd

from ..attendance.model import AttendanceRecord
from ..core.constants import IDENTITY_COLUMNS, SUMMARY_COLUMNS
from ..core.enums import Session
from ..students.model import Batch, Student
from .aggregation import stats_from_tally, tally_by_regno
from .calculator.base import AttendanceCalculator


@dataclass(frozen=True)
class TabularReport:
    """Flat export: identity columns, one FN/AN pair per date, summary columns."""

    columns: list[str]
    rows: list[dict]
    dates: list[str]

    def to_csv(self) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=self.columns)
        writer.writeheader()
        for row in self.rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    def to_xlsx(self) -> bytes:
        out = io.BytesIO()
        df = pd.DataFrame(self.rows, columns=self.columns)
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="BatchAttendance")
        return out.getvalue()


def date_column(civil_date: str, session: Session) -> str:
    return f"{civil_date} {session.value}"


def project_batch(
    batch: Batch,
    students: Sequence[Student],
    records: Sequence[AttendanceRecord],
    *,
    calculator: Optional[AttendanceCalculator] = None,
) -> TabularReport:
    dates = sorted({r.civil_date for r in records})

    # regno -> {(date, session): status}
    cells: dict[str, dict[tuple[str, Session], str]] = {}
    for r in records:
        for entry in r.entries:
            cells.setdefault(entry.regno, {})[(r.civil_date, r.session)] = entry.status.value
    tallies, _ = tally_by_regno(records)

    date_columns = [date_column(d, s) for d in dates for s in (Session.FN, Session.AN)]
    columns = [*IDENTITY_COLUMNS, *date_columns, *SUMMARY_COLUMNS]

    roster: dict[str, Student] = {}
    for s in students:
        roster.setdefault(s.regno.strip().upper(), s)

    rows: list[dict] = []
    for regno in sorted(roster):
        student = roster[regno]
        row: dict = {
            "deptId": batch.dept_id or "",
            "batchId": batch.batch_id,
            "batchName": batch.batch_name or "",
            "batchYear": batch.batch_year if batch.batch_year is not None else "",
            "regno": regno,
            "studentname": student.student_name,
        }
        marks = cells.get(regno, {})
        for d in dates:
            for s in (Session.FN, Session.AN):
                row[date_column(d, s)] = marks.get((d, s), "")

        stats = stats_from_tally(regno, tallies.get(regno), student_name=student.student_name, calculator=calculator)
        row.update(stats.summary_cells())
        rows.append(row)

    return TabularReport(columns=columns, rows=rows, dates=dates)
