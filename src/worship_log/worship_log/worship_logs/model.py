from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import COUPON_UNIT_WON


@dataclass(frozen=True)
class WorshipLog:
    """One service day. Its ``log_date`` anchors roster visibility."""

    log_id: int
    log_date: date
    prayer: Optional[str] = None
    prayer_role: Optional[str] = None
    sermon_title: Optional[str] = None
    sermon_text: Optional[str] = None
    preacher: Optional[str] = None
    coupon_recipient_count: int = 0
    coupons_per_person: int = 0
    online_attendance_count: int = 0
    online_attendance_names: Optional[str] = None

    @property
    def coupon_total_won(self) -> int:
        return int(self.coupon_recipient_count or 0) * int(self.coupons_per_person or 0) * COUPON_UNIT_WON
