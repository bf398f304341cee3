from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Offering:
    log_id: int
    offering_type: str
    amount: int = 0
    memo: Optional[str] = None
