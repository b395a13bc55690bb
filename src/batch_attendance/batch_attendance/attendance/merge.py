from __future__ import annotations

from typing import Iterable

from .model import Entry


def merge_entries(existing: Iterable[Entry], incoming: Iterable[Entry]) -> tuple[Entry, ...]:
    """Overlay ``incoming`` on ``existing`` keyed by registration number.

    Existing regnos keep their position and take the incoming entry; new
    regnos are appended in submission order. A regno repeated inside
    ``incoming`` resolves to its last occurrence.
    """

    by_regno: dict[str, Entry] = {}
    for entry in existing:
        by_regno[entry.regno] = entry
    for entry in incoming:
        by_regno[entry.regno] = entry
    # dict keeps first-insertion order, so replaced keys stay in place.
    return tuple(by_regno.values())
