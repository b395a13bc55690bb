from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import day_range
from ..core.enums import AttendanceStatus, Session
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_instant, to_db_instant
from .merge import merge_entries
from .model import AttendanceRecord, Entry, UpsertOutcome
from .repository import AttendanceRepository

_RECORD_COLUMNS = "record_id, batch_id, calendar_date, session, marked_by, marked_at"


def _entry_from_row(r: dict) -> Entry:
    return Entry(
        regno=r["regno"],
        student_id=r.get("student_id"),
        student_name=r.get("student_name") or "",
        status=AttendanceStatus(r["status"]),
        reason=r.get("reason"),
    )


def _record_from_row(r: dict, entries: Sequence[Entry]) -> AttendanceRecord:
    return AttendanceRecord(
        batch_id=r["batch_id"],
        calendar_date=from_db_instant(r["calendar_date"]),
        session=Session(r["session"]),
        marked_by=r["marked_by"],
        marked_at=from_db_instant(r["marked_at"]),
        entries=tuple(entries),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            # Takes the row lock on the unique key; concurrent marks on the
            # same key queue here until this transaction commits.
            cur.execute(
                """
                INSERT INTO attendance_records(batch_id, calendar_date, session, marked_by, marked_at)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE marked_by=VALUES(marked_by), marked_at=VALUES(marked_at)
                """,
                (batch_id, to_db_instant(calendar_date), session.value, marked_by, to_db_instant(marked_at)),
            )
            created = cur.rowcount == 1

            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE batch_id=%s AND calendar_date=%s AND session=%s
                FOR UPDATE
                """,
                (batch_id, to_db_instant(calendar_date), session.value),
            )
            row = fetchone(cur)
            record_id = int(row["record_id"])

            cur.execute(
                """
                SELECT regno, student_id, student_name, status, reason
                FROM attendance_entries
                WHERE record_id=%s
                ORDER BY position ASC
                FOR UPDATE
                """,
                (record_id,),
            )
            existing = [_entry_from_row(r) for r in fetchall(cur)]
            merged = merge_entries(existing, entries)

            touched = {e.regno for e in entries}
            for position, entry in enumerate(merged):
                if entry.regno not in touched:
                    continue
                cur.execute(
                    """
                    INSERT INTO attendance_entries(record_id, regno, student_id, student_name, status, reason, position)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        student_id=VALUES(student_id),
                        student_name=VALUES(student_name),
                        status=VALUES(status),
                        reason=VALUES(reason)
                    """,
                    (
                        record_id,
                        entry.regno,
                        entry.student_id,
                        entry.student_name,
                        entry.status.value,
                        entry.reason,
                        position,
                    ),
                )

            return UpsertOutcome(record=_record_from_row(row, merged), created=created)

    def find_by_key(self, batch_id: str, calendar_date: datetime, session: Session) -> Optional[AttendanceRecord]:
        records = self._select(
            "batch_id=%s AND calendar_date=%s AND session=%s",
            [batch_id, to_db_instant(calendar_date), session.value],
        )
        return records[0] if records else None

    def find_by_date_range(
        self,
        *,
        batch_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["calendar_date >= %s AND calendar_date < %s"]
        params: list[object] = [to_db_instant(start), to_db_instant(end)]
        if batch_id is not None:
            clauses.append("batch_id=%s")
            params.append(batch_id)
        return self._select(" AND ".join(clauses), params)

    def find_by_dates(self, *, batch_id: Optional[str], dates: Iterable[str]) -> Sequence[AttendanceRecord]:
        ranges: list[str] = []
        params: list[object] = []
        for civil_date in sorted(set(dates)):
            start, end = day_range(civil_date)
            ranges.append("(calendar_date >= %s AND calendar_date < %s)")
            params.extend([to_db_instant(start), to_db_instant(end)])
        if not ranges:
            return []

        where = "(" + " OR ".join(ranges) + ")"
        if batch_id is not None:
            where += " AND batch_id=%s"
            params.append(batch_id)
        return self._select(where, params)

    def find_all_for_batch(self, batch_id: str) -> Sequence[AttendanceRecord]:
        return self._select("batch_id=%s", [batch_id])

    def _select(self, where: str, params: list[object]) -> list[AttendanceRecord]:
        # Both SELECTs run in one transaction, so they share a snapshot.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY calendar_date ASC, FIELD(session, 'FN', 'AN'), batch_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["record_id"]) for r in rows]
            placeholders = ",".join(["%s"] * len(ids))
            cur.execute(
                f"""
                SELECT record_id, regno, student_id, student_name, status, reason
                FROM attendance_entries
                WHERE record_id IN ({placeholders})
                ORDER BY record_id ASC, position ASC
                """,
                tuple(ids),
            )
            entries_by_record: dict[int, list[Entry]] = {}
            for r in fetchall(cur):
                entries_by_record.setdefault(int(r["record_id"]), []).append(_entry_from_row(r))

            return [_record_from_row(r, entries_by_record.get(int(r["record_id"]), [])) for r in rows]
