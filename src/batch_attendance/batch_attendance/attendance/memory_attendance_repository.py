from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import as_utc, day_range
from ..core.enums import Session
from .merge import merge_entries
from .model import AttendanceRecord, Entry, UpsertOutcome, record_sort_key
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Process-local record store.

    One lock guards every read and write; records are immutable and replaced
    whole, so readers never see a half-merged entries tuple.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[tuple[str, datetime, Session], AttendanceRecord] = {}

    def upsert(
        self,
        *,
        batch_id: str,
        calendar_date: datetime,
        session: Session,
        entries: Sequence[Entry],
        marked_by: str,
        marked_at: datetime,
    ) -> UpsertOutcome:
        key = (batch_id, as_utc(calendar_date), session)
        with self._lock:
            existing = self._records.get(key)
            if existing is None:
                record = AttendanceRecord(
                    batch_id=batch_id,
                    calendar_date=key[1],
                    session=session,
                    marked_by=marked_by,
                    marked_at=marked_at,
                    entries=merge_entries((), entries),
                )
                created = True
            else:
                record = replace(
                    existing,
                    marked_by=marked_by,
                    marked_at=marked_at,
                    entries=merge_entries(existing.entries, entries),
                )
                created = False
            self._records[key] = record
        return UpsertOutcome(record=record, created=created)

    def find_by_key(self, batch_id: str, calendar_date: datetime, session: Session) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._records.get((batch_id, as_utc(calendar_date), session))

    def find_by_date_range(
        self,
        *,
        batch_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[AttendanceRecord]:
        start, end = as_utc(start), as_utc(end)
        with self._lock:
            items = [
                r
                for r in self._records.values()
                if start <= r.calendar_date < end and (batch_id is None or r.batch_id == batch_id)
            ]
        items.sort(key=record_sort_key)
        return items

    def find_by_dates(self, *, batch_id: Optional[str], dates: Iterable[str]) -> Sequence[AttendanceRecord]:
        found: dict[tuple, AttendanceRecord] = {}
        for civil_date in dates:
            start, end = day_range(civil_date)
            for r in self.find_by_date_range(batch_id=batch_id, start=start, end=end):
                found[r.key] = r
        return sorted(found.values(), key=record_sort_key)

    def find_all_for_batch(self, batch_id: str) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.batch_id == batch_id]
        items.sort(key=record_sort_key)
        return items
