"""Result accumulation for DazzleDU.

The traverser appends every qualifying DirectoryRecord to a collector
that is passed explicitly into each recursive call. Records are never
mutated or removed once added.
"""

from typing import Iterator, List, Tuple

from .record import DirectoryRecord


class RecordCollector:
    """Append-only collection of DirectoryRecords.

    Owned by the top-level scan call while traversing, then handed to the
    report assembler.
    """

    def __init__(self):
        self._records: List[DirectoryRecord] = []

    def add(self, record: DirectoryRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> Tuple[DirectoryRecord, ...]:
        """Records in the order they were added (post-order)."""
        return tuple(self._records)

    def __iter__(self) -> Iterator[DirectoryRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordCollector(records={len(self._records)})"
