from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Batch, Student


class StudentDirectory(Protocol):
    """Read-only lookups into the batch/student directory.

    Membership is decided here; the attendance core never re-derives it.
    """

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        raise NotImplementedError

    def list_students(self, batch_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def is_member(self, batch_id: str, regno: str) -> bool:
        raise NotImplementedError
