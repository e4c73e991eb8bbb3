from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_first(self, predicate: Callable[[AttendanceRecord], bool]) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def add(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def add_many(self, records: Iterable[AttendanceRecord]) -> int:
        """Append records whose id is not already present.

        Returns the number of records appended.
        """

        raise NotImplementedError

    def replace(self, record_id: str, record: AttendanceRecord) -> bool:
        """Swap the record stored under `record_id` for `record`, keeping its position."""

        raise NotImplementedError

    def remove_where(self, predicate: Callable[[AttendanceRecord], bool]) -> int:
        raise NotImplementedError
