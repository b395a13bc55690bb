from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import AttendanceStatus


@dataclass
class StatusTally:
    """Running per-student counts; every entry counts once toward total."""

    total_classes: int = 0
    present: int = 0
    absent: int = 0
    on_duty: int = 0
    late: int = 0
    sick_leave: int = 0

    def add(self, status: AttendanceStatus) -> None:
        self.total_classes += 1
        if status == AttendanceStatus.PRESENT:
            self.present += 1
        elif status == AttendanceStatus.ABSENT:
            self.absent += 1
        elif status == AttendanceStatus.ON_DUTY:
            self.on_duty += 1
        elif status == AttendanceStatus.LATE:
            self.late += 1
        elif status == AttendanceStatus.SICK_LEAVE:
            self.sick_leave += 1


@dataclass(frozen=True)
class StudentStats:
    regno: str
    student_name: str
    total_classes: int
    present: int
    absent: int
    on_duty: int
    late: int
    sick_leave: int
    percentage: Decimal

    @property
    def percentage_label(self) -> str:
        return f"{self.percentage:.2f}%"

    def summary_cells(self) -> dict:
        """Trailing export columns, in export order."""
        return {
            "totalClasses": self.total_classes,
            "present": self.present,
            "absent": self.absent,
            "onDuty": self.on_duty,
            "late": self.late,
            "sickLeave": self.sick_leave,
            "attendancePercentage": self.percentage_label,
        }

    def to_dict(self) -> dict:
        return {"regno": self.regno, "studentname": self.student_name, **self.summary_cells()}


@dataclass(frozen=True)
class SessionStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    on_duty: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "present": self.present, "absent": self.absent, "onDuty": self.on_duty}


@dataclass(frozen=True)
class DaySummary:
    date: str
    fn: SessionStats
    an: SessionStats

    def to_dict(self) -> dict:
        return {"date": self.date, "FN": self.fn.to_dict(), "AN": self.an.to_dict()}
