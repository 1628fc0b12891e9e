"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SpecialDayKind is closed: exactly birthday, anniversary, other
    - MonthKey is "01".."12"; DayKey is zero-padded "MM-DD"
    - All valid states encoded as Enums — no raw string matching in core logic
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SpecialDayId = NewType("SpecialDayId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

MonthKey = NewType("MonthKey", str)     # "01".."12"
DayKey = NewType("DayKey", str)         # "MM-DD"
DateKey = NewType("DateKey", str)       # "YYYY-MM-DD"


# ─── Enums ───────────────────────────────────────────────────────

class SpecialDayKind(str, Enum):
    """Recurrence class of a special day — maps to DB `kind` column."""
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    OTHER = "other"

    @property
    def recurs_yearly(self) -> bool:
        return self in (SpecialDayKind.BIRTHDAY, SpecialDayKind.ANNIVERSARY)

    @classmethod
    def coerce(cls, value: "str | SpecialDayKind | None") -> "SpecialDayKind":
        """Map a stored value to a kind. Missing or unknown values become OTHER."""
        if isinstance(value, SpecialDayKind):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class CellBadge(str, Enum):
    """Which badge a calendar cell shows — exact wins over yearly."""
    EXACT = "exact"
    YEARLY = "yearly"
    NONE = "none"


class SortField(str, Enum):
    """List view sort keys."""
    DATE = "date"
    TITLE = "title"
    AUTHOR = "author"
    KIND = "kind"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Page sizes offered by the list view
PAGE_SIZES: tuple[int, ...] = (6, 12, 24, 48)
