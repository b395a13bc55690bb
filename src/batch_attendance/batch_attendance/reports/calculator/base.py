from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import StatusTally


class AttendanceCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance percentage)."""

    @abstractmethod
    def percentage(self, tally: StatusTally) -> Decimal:
        raise NotImplementedError
