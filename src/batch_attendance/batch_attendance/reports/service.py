from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import (
    date_to_day_start,
    day_start_to_civil_date,
    next_day_start,
    normalize_civil_date,
    today_civil_date,
)
from ..common.validators import normalize_batch_id
from ..core.exceptions import NotFound, ValidationError
from ..students.repository import StudentDirectory
from .aggregation import group_by_date, stats_from_tally, student_stats, summarize_records, tally_by_regno
from .calculator.base import AttendanceCalculator
from .calculator.standard_calculator import StandardAttendanceCalculator
from .export import TabularReport, project_batch
from .model import DaySummary, StudentStats

logger = logging.getLogger(__name__)


def _optional_batch(batch_id: Optional[str]) -> Optional[str]:
    return normalize_batch_id(batch_id) if batch_id else None


class AttendanceReportService:
    """Read-only aggregation over the record store.

    Missing records never raise: an empty day or session is all zeros.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: Optional[StudentDirectory] = None,
        *,
        calculator: Optional[AttendanceCalculator] = None,
    ):
        self._attendance = attendance
        self._directory = directory
        self._calculator = calculator or StandardAttendanceCalculator()

    def _range(self, start: str, end: str) -> tuple[datetime, datetime]:
        start_s, end_s = normalize_civil_date(start), normalize_civil_date(end)
        if start_s > end_s:
            raise ValidationError(f"startDate {start_s} is after endDate {end_s}")
        # End date is inclusive: stop at the start of the following day.
        return date_to_day_start(start_s), next_day_start(date_to_day_start(end_s))

    def summarize_day(
        self,
        *,
        batch_id: Optional[str] = None,
        date: Optional[str] = None,
        now: datetime | None = None,
    ) -> DaySummary:
        civil_date = normalize_civil_date(date) if date else today_civil_date(now)
        records = self._attendance.find_by_dates(batch_id=_optional_batch(batch_id), dates=[civil_date])
        return summarize_records(civil_date, records)

    def summarize_dates(self, *, batch_id: Optional[str] = None, dates: Iterable[str]) -> list[DaySummary]:
        wanted = sorted({normalize_civil_date(d) for d in dates})
        if not wanted:
            raise ValidationError("At least one date is required")

        grouped = group_by_date(self._attendance.find_by_dates(batch_id=_optional_batch(batch_id), dates=wanted))
        return [summarize_records(d, grouped.get(d, [])) for d in wanted]

    def summarize_range(self, *, batch_id: Optional[str] = None, start: str, end: str) -> list[DaySummary]:
        start_at, end_at = self._range(start, end)
        records = self._attendance.find_by_date_range(batch_id=_optional_batch(batch_id), start=start_at, end=end_at)
        grouped = group_by_date(records)

        # Every date in the range is reported, empty ones as zeros.
        out: list[DaySummary] = []
        day = start_at
        while day < end_at:
            civil_date = day_start_to_civil_date(day)
            out.append(summarize_records(civil_date, grouped.get(civil_date, [])))
            day = next_day_start(day)
        return out

    def student_stats(self, regno: str, records: Sequence[AttendanceRecord]) -> StudentStats:
        return student_stats(regno, records, calculator=self._calculator)

    def batch_student_stats(
        self,
        *,
        batch_id: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> list[StudentStats]:
        records = self._fetch(batch_id=_optional_batch(batch_id), start=start, end=end)
        tallies, names = tally_by_regno(records)
        return [
            stats_from_tally(regno, tallies[regno], student_name=names.get(regno, ""), calculator=self._calculator)
            for regno in sorted(tallies)
        ]

    def export_batch(
        self,
        *,
        batch_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> TabularReport:
        if self._directory is None:
            raise RuntimeError("Student directory is not configured")

        batch_id = normalize_batch_id(batch_id)
        batch = self._directory.get_batch(batch_id)
        if not batch:
            raise NotFound(f"Batch {batch_id} not found")

        students = self._directory.list_students(batch_id)
        records = self._fetch(batch_id=batch_id, start=start, end=end)
        report = project_batch(batch, students, records, calculator=self._calculator)
        logger.info(
            "export batch=%s range=%s..%s students=%d records=%d dates=%d",
            batch_id,
            start or "*",
            end or "*",
            len(report.rows),
            len(records),
            len(report.dates),
        )
        return report

    def _fetch(self, *, batch_id: Optional[str], start: Optional[str], end: Optional[str]) -> Sequence[AttendanceRecord]:
        if bool(start) != bool(end):
            raise ValidationError("startDate and endDate must be given together")
        if start and end:
            start_at, end_at = self._range(start, end)
            return self._attendance.find_by_date_range(batch_id=batch_id, start=start_at, end=end_at)
        if batch_id is None:
            raise ValidationError("batchId or a startDate/endDate range is required")
        return self._attendance.find_all_for_batch(batch_id)
