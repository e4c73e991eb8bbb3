from __future__ import annotations

import threading
from typing import Callable, Iterable, Optional, Sequence

from .model import AttendanceRecord


class InMemoryAttendanceRepository:
    """Ordered in-memory record collection (last write wins).

    Each call is atomic on its own; callers get no atomicity across calls.
    """

    def __init__(self, records: Optional[Iterable[AttendanceRecord]] = None):
        self._records: list[AttendanceRecord] = list(records or [])
        self._lock = threading.Lock()

    def list_all(self) -> Sequence[AttendanceRecord]:
        with self._lock:
            return tuple(self._records)

    def find_first(self, predicate: Callable[[AttendanceRecord], bool]) -> Optional[AttendanceRecord]:
        with self._lock:
            for r in self._records:
                if predicate(r):
                    return r
        return None

    def add(self, record: AttendanceRecord) -> None:
        with self._lock:
            self._records.append(record)

    def add_many(self, records: Iterable[AttendanceRecord]) -> int:
        with self._lock:
            existing_ids = {r.id for r in self._records}
            fresh = [r for r in records if r.id not in existing_ids]
            self._records.extend(fresh)
            return len(fresh)

    def replace(self, record_id: str, record: AttendanceRecord) -> bool:
        with self._lock:
            for i, r in enumerate(self._records):
                if r.id == record_id:
                    self._records[i] = record
                    return True
        return False

    def remove_where(self, predicate: Callable[[AttendanceRecord], bool]) -> int:
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if not predicate(r)]
            return before - len(self._records)
