from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import date_to_day_start, normalize_civil_date, now_utc, today_civil_date
from ..common.validators import normalize_batch_id, parse_session, parse_status, require_non_empty
from ..core.enums import Session
from ..core.exceptions import ValidationError
from ..students.repository import StudentDirectory
from .model import AttendanceRecord, Entry, MarkResult, RejectedSubmission, Submission
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Sole writer of attendance records.

    Marking is an upsert by (batch, date, session); within a record each
    regno is replaced in place, so repeating a call changes nothing but
    ``marked_by``/``marked_at``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: StudentDirectory | None = None,
    ):
        self._attendance = attendance
        self._directory = directory

    def mark_attendance(
        self,
        *,
        batch_id: str,
        date: Optional[str],
        session: str,
        submissions: Sequence[Submission],
        marked_by: str,
        now: datetime | None = None,
    ) -> MarkResult:
        now = now or now_utc()

        # Everything here aborts the whole call before any write.
        session_enum = parse_session(session)
        civil_date = normalize_civil_date(date) if date else today_civil_date(now)
        calendar_date = date_to_day_start(civil_date)
        batch_id = normalize_batch_id(batch_id)
        marked_by = require_non_empty(marked_by, "markedBy")

        entries: list[Entry] = []
        rejected: list[RejectedSubmission] = []
        for sub in submissions:
            try:
                entries.append(self._to_entry(batch_id, sub))
            except ValidationError as e:
                rejected.append(RejectedSubmission(regno=str(sub.regno or "").strip().upper(), error=str(e)))

        for r in rejected:
            logger.warning("rejected submission batch=%s date=%s session=%s regno=%s: %s",
                           batch_id, civil_date, session_enum.value, r.regno, r.error)

        if not entries:
            existing = self._attendance.find_by_key(batch_id, calendar_date, session_enum)
            return MarkResult(
                created=False,
                entry_count=len(existing.entries) if existing else 0,
                accepted=0,
                rejected=rejected,
            )

        outcome = self._attendance.upsert(
            batch_id=batch_id,
            calendar_date=calendar_date,
            session=session_enum,
            entries=entries,
            marked_by=marked_by,
            marked_at=now,
        )
        logger.info(
            "attendance %s batch=%s date=%s session=%s by=%s accepted=%d rejected=%d entries=%d",
            "created" if outcome.created else "updated",
            batch_id,
            civil_date,
            session_enum.value,
            marked_by,
            len(entries),
            len(rejected),
            len(outcome.record.entries),
        )
        return MarkResult(
            created=outcome.created,
            entry_count=len(outcome.record.entries),
            accepted=len(entries),
            rejected=rejected,
        )

    def _to_entry(self, batch_id: str, sub: Submission) -> Entry:
        regno = require_non_empty(sub.regno, "regno").upper()
        status = parse_status(sub.status)
        if self._directory is not None and not self._directory.is_member(batch_id, regno):
            raise ValidationError(f"{regno} is not a member of batch {batch_id}")
        reason = (sub.reason or "").strip() or None
        return Entry(
            regno=regno,
            student_id=str(sub.student_id) if sub.student_id is not None else None,
            student_name=(sub.student_name or "").strip(),
            status=status,
            reason=reason,
        )

    def get_session_record(
        self,
        *,
        batch_id: str,
        date: Optional[str],
        session: str,
        now: datetime | None = None,
    ) -> Optional[AttendanceRecord]:
        civil_date = normalize_civil_date(date) if date else today_civil_date(now)
        return self._attendance.find_by_key(
            normalize_batch_id(batch_id), date_to_day_start(civil_date), parse_session(session)
        )

    def get_day_records(
        self,
        *,
        batch_id: Optional[str],
        date: Optional[str],
        now: datetime | None = None,
    ) -> dict[Session, list[AttendanceRecord]]:
        """Records of one civil date grouped by session (both keys always present)."""
        civil_date = normalize_civil_date(date) if date else today_civil_date(now)
        records = self._attendance.find_by_dates(
            batch_id=normalize_batch_id(batch_id) if batch_id else None,
            dates=[civil_date],
        )
        grouped: dict[Session, list[AttendanceRecord]] = {Session.FN: [], Session.AN: []}
        for r in records:
            grouped[r.session].append(r)
        return grouped
