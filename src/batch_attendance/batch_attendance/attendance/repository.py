from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Session
from .model import AttendanceRecord, Entry, UpsertOutcome


class AttendanceRepository(Protocol):
    """Record store keyed by (batch_id, calendar_date, session).

    Implementations must merge entries by regno on upsert and expose a
    reader either the pre-merge or the fully merged record.
    """

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
        raise NotImplementedError

    def find_by_key(self, batch_id: str, calendar_date: datetime, session: Session) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_by_date_range(
        self,
        *,
        batch_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[AttendanceRecord]:
        """Records with ``start <= calendar_date < end``."""

        raise NotImplementedError

    def find_by_dates(self, *, batch_id: Optional[str], dates: Iterable[str]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_all_for_batch(self, batch_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
