from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import DateLike, as_date
from ..common.validators import require_non_negative, require_positive_id
from ..core.exceptions import ValidationError
from .model import WorshipLog
from .repository import WorshipLogRepository

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class WorshipLogService:
    """Use case: keep one worship log per service date.

    Each form on the main screen saves its own slice of the log; whichever
    saves first creates the row for that date.
    """

    def __init__(self, logs: WorshipLogRepository):
        self._logs = logs

    def get_by_date(self, log_date: DateLike) -> Optional[WorshipLog]:
        return self._logs.get_by_date(as_date(log_date))

    def get(self, log_id: int) -> WorshipLog:
        log = self._logs.get_by_id(require_positive_id(log_id, "Worship log"))
        if not log:
            raise ValidationError("Worship log does not exist")
        return log

    def save_info(
        self,
        log_date: DateLike,
        *,
        prayer: Optional[str] = None,
        prayer_role: Optional[str] = None,
        sermon_title: Optional[str] = None,
        sermon_text: Optional[str] = None,
        preacher: Optional[str] = None,
    ) -> int:
        fields = {
            "prayer": _clean(prayer),
            "prayer_role": _clean(prayer_role),
            "sermon_title": _clean(sermon_title),
            "sermon_text": _clean(sermon_text),
            "preacher": _clean(preacher),
        }
        return self._save(log_date, fields)

    def save_coupons(self, log_date: DateLike, *, recipient_count, per_person) -> int:
        fields = {
            "coupon_recipient_count": require_non_negative(recipient_count, "Coupon recipients"),
            "coupons_per_person": require_non_negative(per_person, "Coupons per person"),
        }
        return self._save(log_date, fields)

    def save_online_attendance(self, log_date: DateLike, *, count, names: Optional[str] = None) -> int:
        fields = {
            "online_attendance_count": require_non_negative(count, "Online attendance"),
            "online_attendance_names": _clean(names),
        }
        return self._save(log_date, fields)

    def list_history(self) -> Sequence[WorshipLog]:
        return self._logs.list_range(newest_first=True)

    def delete_log(self, log_id: int) -> None:
        log = self.get(log_id)
        if not self._logs.delete(log.log_id):
            raise ValidationError("Deleting the worship log failed")
        logger.warning("worship log %s (%s) deleted", log.log_id, log.log_date)

    def _save(self, log_date: DateLike, fields: dict[str, Any]) -> int:
        day = as_date(log_date)
        log_id = self._logs.upsert_for_date(day, fields=fields)
        logger.info("worship log %s saved for %s (%s)", log_id, day, ", ".join(sorted(fields)))
        return log_id
