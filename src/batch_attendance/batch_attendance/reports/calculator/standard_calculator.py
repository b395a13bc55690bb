from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..model import StatusTally
from .base import AttendanceCalculator

_CENTS = Decimal("0.01")


class StandardAttendanceCalculator(AttendanceCalculator):
    """Standard rule: (present + on-duty + late) / (total - sick leave).

    Sick leave drops out of both sides; late and on-duty earn full credit
    but stay in the denominator. 0.00 when nothing is countable.
    """

    def percentage(self, tally: StatusTally) -> Decimal:
        attended = tally.present + tally.on_duty + tally.late
        countable = tally.total_classes - tally.sick_leave
        if countable <= 0:
            return Decimal("0.00")
        return (Decimal(attended) * 100 / Decimal(countable)).quantize(_CENTS, rounding=ROUND_HALF_UP)
