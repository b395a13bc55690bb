from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Batch, Student
from .repository import StudentDirectory


class MySQLStudentDirectory(StudentDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT batch_id, batch_name, batch_year, dept_id FROM batches WHERE batch_id=%s",
                (batch_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Batch(
                batch_id=r["batch_id"],
                batch_name=r["batch_name"],
                batch_year=int(r["batch_year"]) if r.get("batch_year") is not None else None,
                dept_id=r["dept_id"],
            )

    def list_students(self, batch_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, regno, studentname, dept, batch_id
                FROM students
                WHERE batch_id=%s
                ORDER BY regno ASC
                """,
                (batch_id,),
            )
            return [
                Student(
                    student_id=str(r["student_id"]),
                    regno=r["regno"],
                    student_name=r["studentname"],
                    dept=r["dept"],
                    batch_id=r.get("batch_id"),
                )
                for r in fetchall(cur)
            ]

    def is_member(self, batch_id: str, regno: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM students WHERE batch_id=%s AND regno=%s",
                (batch_id, regno),
            )
            return fetchone(cur) is not None
