"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import timedelta

# India Standard Time, no daylight saving.
IST_OFFSET = timedelta(hours=5, minutes=30)
ONE_DAY = timedelta(hours=24)

CIVIL_DATE_FORMAT = "%Y-%m-%d"

SUMMARY_COLUMNS = (
    "totalClasses",
    "present",
    "absent",
    "onDuty",
    "late",
    "sickLeave",
    "attendancePercentage",
)

IDENTITY_COLUMNS = ("deptId", "batchId", "batchName", "batchYear", "regno", "studentname")
