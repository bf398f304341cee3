"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SUFFIX_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
COUPON_UNIT_WON = 1000
OFFERING_TYPES = ("주일헌금", "십일조", "감사헌금", "기타")
UNASSIGNED_LABEL = "미배정"
DEFAULT_HISTORY_LIMIT = 200
