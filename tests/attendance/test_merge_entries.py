from src.batch_attendance.batch_attendance.attendance.merge import merge_entries
from src.batch_attendance.batch_attendance.attendance.model import Entry
from src.batch_attendance.batch_attendance.core.enums import AttendanceStatus


def _e(regno: str, status: AttendanceStatus = AttendanceStatus.PRESENT) -> Entry:
    return Entry(regno=regno, student_id=None, student_name=regno, status=status)


def test_existing_regno_is_replaced_in_place():
    merged = merge_entries([_e("A"), _e("B"), _e("C")], [_e("B", AttendanceStatus.ABSENT)])

    assert [e.regno for e in merged] == ["A", "B", "C"]
    assert merged[1].status == AttendanceStatus.ABSENT


def test_new_regnos_are_appended_in_submission_order():
    merged = merge_entries([_e("B")], [_e("D"), _e("A")])

    assert [e.regno for e in merged] == ["B", "D", "A"]


def test_duplicate_incoming_regno_keeps_last():
    merged = merge_entries([], [_e("A"), _e("A", AttendanceStatus.LATE)])

    assert len(merged) == 1
    assert merged[0].status == AttendanceStatus.LATE
