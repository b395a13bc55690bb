"""Pure rollups over already-fetched attendance records."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus, Session
from .calculator.base import AttendanceCalculator
from .calculator.standard_calculator import StandardAttendanceCalculator
from .model import DaySummary, SessionStats, StatusTally, StudentStats


def session_stats(records: Iterable[AttendanceRecord]) -> SessionStats:
    total = present = absent = on_duty = 0
    for record in records:
        for entry in record.entries:
            total += 1
            if entry.status == AttendanceStatus.PRESENT:
                present += 1
            elif entry.status == AttendanceStatus.ABSENT:
                absent += 1
            elif entry.status == AttendanceStatus.ON_DUTY:
                on_duty += 1
    return SessionStats(total=total, present=present, absent=absent, on_duty=on_duty)


def summarize_records(civil_date: str, records: Sequence[AttendanceRecord]) -> DaySummary:
    """Both sessions of one date; a session without records is all zeros."""
    return DaySummary(
        date=civil_date,
        fn=session_stats(r for r in records if r.session == Session.FN),
        an=session_stats(r for r in records if r.session == Session.AN),
    )


def group_by_date(records: Iterable[AttendanceRecord]) -> dict[str, list[AttendanceRecord]]:
    grouped: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        grouped.setdefault(r.civil_date, []).append(r)
    return grouped


def tally_by_regno(records: Iterable[AttendanceRecord]) -> tuple[dict[str, StatusTally], dict[str, str]]:
    """Per-regno counts plus the last seen display name for each regno."""
    tallies: dict[str, StatusTally] = {}
    names: dict[str, str] = {}
    for record in records:
        for entry in record.entries:
            tallies.setdefault(entry.regno, StatusTally()).add(entry.status)
            if entry.student_name:
                names[entry.regno] = entry.student_name
    return tallies, names


def stats_from_tally(
    regno: str,
    tally: Optional[StatusTally],
    *,
    student_name: str = "",
    calculator: Optional[AttendanceCalculator] = None,
) -> StudentStats:
    tally = tally or StatusTally()
    calculator = calculator or StandardAttendanceCalculator()
    return StudentStats(
        regno=regno,
        student_name=student_name,
        total_classes=tally.total_classes,
        present=tally.present,
        absent=tally.absent,
        on_duty=tally.on_duty,
        late=tally.late,
        sick_leave=tally.sick_leave,
        percentage=calculator.percentage(tally),
    )


def student_stats(
    regno: str,
    records: Iterable[AttendanceRecord],
    *,
    calculator: Optional[AttendanceCalculator] = None,
) -> StudentStats:
    """Stats for one regno; each FN/AN record it appears in is one class."""
    key = regno.strip().upper()
    tally = StatusTally()
    name = ""
    for record in records:
        for entry in record.entries:
            if entry.regno == key:
                tally.add(entry.status)
                name = entry.student_name or name
    return stats_from_tally(key, tally, student_name=name, calculator=calculator)
