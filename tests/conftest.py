from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.batch_attendance.batch_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.batch_attendance.batch_attendance.students.model import Batch, Student


@dataclass
class InMemoryDirectory:
    batches: dict[str, Batch] = field(default_factory=dict)
    students: list[Student] = field(default_factory=list)

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        return self.batches.get(batch_id)

    def list_students(self, batch_id: str):
        return [s for s in self.students if s.batch_id == batch_id]

    def is_member(self, batch_id: str, regno: str) -> bool:
        return any(s.batch_id == batch_id and s.regno == regno for s in self.students)


def _students(batch_id: str, regnos: list[str]) -> list[Student]:
    return [
        Student(student_id=f"id-{r}", regno=r, student_name=f"Student {r}", dept="CSE", batch_id=batch_id)
        for r in regnos
    ]


@pytest.fixture
def fixed_now() -> datetime:
    # 2025-11-20 10:00 IST
    return datetime(2025, 11, 20, 4, 30, tzinfo=timezone.utc)


@pytest.fixture
def repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def directory() -> InMemoryDirectory:
    batch = Batch(batch_id="CSE-2027", batch_name="CSE Morning", batch_year=2027, dept_id="CSE")
    return InMemoryDirectory(
        batches={batch.batch_id: batch},
        students=_students("CSE-2027", ["REG003", "REG001", "REG002"]),
    )
