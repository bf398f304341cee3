from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Offering


class OfferingRepository(Protocol):
    def list_for_log(self, log_id: int) -> Sequence[Offering]:
        raise NotImplementedError

    def upsert(self, *, log_id: int, offering_type: str, amount: int, memo: Optional[str]) -> None:
        """One row per (log, type)."""

        raise NotImplementedError
