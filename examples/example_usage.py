"""Example: drive the service layer directly (no Flask, in-memory store).

Controllers stay thin; marking and reporting live in the services.
"""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.batch_attendance.batch_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from src.batch_attendance.batch_attendance.attendance.model import Submission
from src.batch_attendance.batch_attendance.attendance.service import AttendanceService
from src.batch_attendance.batch_attendance.reports.service import AttendanceReportService


def main():
    repo = InMemoryAttendanceRepository()
    marking = AttendanceService(repo)
    reports = AttendanceReportService(repo)

    result = marking.mark_attendance(
        batch_id="CSE-2027",
        date="2025-11-20",
        session="FN",
        submissions=[
            Submission(regno="reg001", status="Present", student_name="Asha"),
            Submission(regno="reg002", status="On-Duty", student_name="Ravi", reason="Symposium"),
            Submission(regno="reg003", status="Holiday", student_name="Meena"),
        ],
        marked_by="admin",
    )
    print(result.to_dict())
    print(reports.summarize_day(batch_id="CSE-2027", date="2025-11-20").to_dict())
    print([s.to_dict() for s in reports.batch_student_stats(batch_id="CSE-2027")])


if __name__ == "__main__":
    main()
