from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import day_start_to_civil_date
from ..core.enums import AttendanceStatus, Session


@dataclass(frozen=True)
class Entry:
    """One student's outcome inside an attendance record."""

    regno: str
    student_id: Optional[str]
    student_name: str
    status: AttendanceStatus
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "regno": self.regno,
            "studentId": self.student_id,
            "studentname": self.student_name,
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class AttendanceRecord:
    """Aggregate unit of storage: one per (batch, calendar day, session)."""

    batch_id: str
    calendar_date: datetime
    session: Session
    marked_by: str
    marked_at: datetime
    entries: tuple[Entry, ...] = ()

    @property
    def civil_date(self) -> str:
        return day_start_to_civil_date(self.calendar_date)

    @property
    def key(self) -> tuple[str, datetime, Session]:
        return (self.batch_id, self.calendar_date, self.session)

    def to_dict(self) -> dict:
        return {
            "batchId": self.batch_id,
            "date": self.civil_date,
            "session": self.session.value,
            "markedBy": self.marked_by,
            "markedAt": self.marked_at.isoformat(),
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class UpsertOutcome:
    record: AttendanceRecord
    created: bool


@dataclass(frozen=True)
class Submission:
    """Raw per-student input to the marking service (not yet validated)."""

    regno: str
    status: str
    student_id: Optional[str] = None
    student_name: str = ""
    reason: Optional[str] = None


@dataclass(frozen=True)
class RejectedSubmission:
    regno: str
    error: str


@dataclass(frozen=True)
class MarkResult:
    created: bool
    entry_count: int
    accepted: int
    rejected: list[RejectedSubmission] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "created": self.created,
            "entryCount": self.entry_count,
            "accepted": self.accepted,
            "rejected": [{"regno": r.regno, "error": r.error} for r in self.rejected],
        }


_SESSION_ORDER = {Session.FN: 0, Session.AN: 1}


def record_sort_key(record: AttendanceRecord) -> tuple:
    """Chronological order: date ascending, FN before AN, then batch."""
    return (record.calendar_date, _SESSION_ORDER[record.session], record.batch_id)
