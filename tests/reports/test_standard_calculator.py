from decimal import Decimal

from src.batch_attendance.batch_attendance.reports.calculator.standard_calculator import StandardAttendanceCalculator
from src.batch_attendance.batch_attendance.reports.model import StatusTally


def test_sick_leave_leaves_denominator_and_late_on_duty_earn_credit():
    tally = StatusTally(total_classes=10, present=6, absent=0, on_duty=1, late=1, sick_leave=2)

    assert StandardAttendanceCalculator().percentage(tally) == Decimal("100.00")


def test_all_absent_is_zero():
    tally = StatusTally(total_classes=10, absent=10)

    assert StandardAttendanceCalculator().percentage(tally) == Decimal("0.00")


def test_no_classes_is_zero_without_division():
    assert StandardAttendanceCalculator().percentage(StatusTally()) == Decimal("0.00")


def test_only_sick_leave_is_zero():
    assert StandardAttendanceCalculator().percentage(StatusTally(total_classes=3, sick_leave=3)) == Decimal("0.00")


def test_rounds_half_up_to_two_places():
    # 2 / 3 = 66.666...
    assert StandardAttendanceCalculator().percentage(StatusTally(total_classes=3, present=2, absent=1)) == Decimal("66.67")
    # 1 / 8 = 12.5
    assert StandardAttendanceCalculator().percentage(StatusTally(total_classes=8, present=1, absent=7)) == Decimal("12.50")
