from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import WorshipLog


class WorshipLogRepository(Protocol):
    def get_by_id(self, log_id: int) -> Optional[WorshipLog]:
        raise NotImplementedError

    def get_by_date(self, log_date: date) -> Optional[WorshipLog]:
        raise NotImplementedError

    def upsert_for_date(self, log_date: date, *, fields: Mapping[str, Any]) -> int:
        """Create the log for ``log_date`` or update the given columns.

        Returns log_id.
        """

        raise NotImplementedError

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None, newest_first: bool = True) -> Sequence[WorshipLog]:
        raise NotImplementedError

    def delete(self, log_id: int) -> bool:
        raise NotImplementedError
