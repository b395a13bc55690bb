from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Batch:
    """Directory view of a batch (owned by the batch management service)."""

    batch_id: str
    batch_name: str
    batch_year: Optional[int]
    dept_id: str


@dataclass(frozen=True)
class Student:
    student_id: str
    regno: str
    student_name: str
    dept: str
    batch_id: Optional[str]

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "regno": self.regno,
            "studentname": self.student_name,
            "dept": self.dept,
            "batchId": self.batch_id,
        }
