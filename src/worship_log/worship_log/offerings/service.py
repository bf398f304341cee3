from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_negative, require_positive_id
from ..core.constants import OFFERING_TYPES
from ..core.exceptions import ValidationError
from .model import Offering
from .repository import OfferingRepository


class OfferingService:
    """Use case: offering amounts per type for a worship log."""

    def __init__(self, offerings: OfferingRepository):
        self._offerings = offerings

    def list_for_log(self, log_id: int) -> list[Offering]:
        """Every known type in display order; missing types read as zero."""
        log_id = require_positive_id(log_id, "Worship log")
        stored = {o.offering_type: o for o in self._offerings.list_for_log(log_id)}
        rows = [stored.get(t) or Offering(log_id=log_id, offering_type=t) for t in OFFERING_TYPES]
        rows.extend(o for t, o in stored.items() if t not in OFFERING_TYPES)
        return rows

    def total(self, log_id: int) -> int:
        return sum(o.amount for o in self.list_for_log(log_id))

    def update(self, log_id: Optional[int], offering_type: str, *, amount=None, memo: Optional[str] = None) -> Offering:
        """Change amount and/or memo; the untouched field keeps its stored value."""
        if not log_id:
            raise ValidationError("Save the worship info for this date first")
        if offering_type not in OFFERING_TYPES:
            raise ValidationError(f"Unknown offering type: {offering_type!r}")

        current = next(o for o in self.list_for_log(log_id) if o.offering_type == offering_type)
        new_amount = current.amount if amount is None else require_non_negative(amount, "Amount")
        new_memo = current.memo if memo is None else (memo.strip() or None)

        self._offerings.upsert(log_id=int(log_id), offering_type=offering_type, amount=new_amount, memo=new_memo)
        return Offering(log_id=int(log_id), offering_type=offering_type, amount=new_amount, memo=new_memo)
