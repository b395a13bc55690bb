from __future__ import annotations

from enum import Enum


class Session(str, Enum):
    """The two fixed daily attendance windows."""

    FN = "FN"
    AN = "AN"


class AttendanceStatus(str, Enum):
    """Per-student outcome stored on an entry (wire values kept verbatim)."""

    PRESENT = "Present"
    ABSENT = "Absent"
    ON_DUTY = "On-Duty"
    LATE = "Late"
    SICK_LEAVE = "Sick-Leave"
