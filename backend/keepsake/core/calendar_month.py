"""Calendar Month — per-cell grid merging exact and yearly special days.

Invariants:
    - One cell per day of the month, preceded by `leading_blanks` empty slots
      (Sunday-first weeks)
    - An exact event on the cell date takes precedence over yearly badges
    - Recurring keys with no matching day ("02-29" in a non-leap year) get no cell

Design Decisions:
    - Receives the recurring map instead of computing it, so callers can feed
      exact events and the wide recurrence fetch from separate queries
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from keepsake.core.domain_types import CellBadge, DateKey, DayKey
from keepsake.core.recurrence import (
    SpecialDayEvent, day_key, events_by_date, month_bounds,
)


@dataclass(frozen=True)
class CalendarCell:
    date_key: DateKey
    day: int
    exact: list[SpecialDayEvent] = field(default_factory=list)
    yearly: list[SpecialDayEvent] = field(default_factory=list)
    badge: CellBadge = CellBadge.NONE
    is_today: bool = False

    @property
    def primary(self) -> SpecialDayEvent | None:
        """The event the cell displays, following badge precedence."""
        if self.exact:
            return self.exact[0]
        if self.yearly:
            return self.yearly[0]
        return None


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    cells: list[CalendarCell]


def build_calendar_month(
    year: int,
    month: int,
    events: Iterable[SpecialDayEvent],
    recurring: Mapping[DayKey, list[SpecialDayEvent]],
    today: date | None = None,
) -> CalendarMonth:
    """Build the month grid. Pure, no IO. Raises ValueError for an invalid month."""
    first, last = month_bounds(year, month)
    exact_lookup = events_by_date(events)

    cells = []
    for day in range(1, last.day + 1):
        current = date(year, month, day)
        key = DateKey(current.isoformat())
        exact = list(exact_lookup.get(key, []))
        yearly = list(recurring.get(day_key(month, day), []))
        cells.append(CalendarCell(
            date_key=key,
            day=day,
            exact=exact,
            yearly=yearly,
            badge=_badge_for(exact, yearly),
            is_today=current == today,
        ))

    # date.weekday(): Monday=0; shift so Sunday=0
    leading_blanks = (first.weekday() + 1) % 7
    return CalendarMonth(
        year=year, month=month, leading_blanks=leading_blanks, cells=cells,
    )


def _badge_for(
    exact: list[SpecialDayEvent], yearly: list[SpecialDayEvent],
) -> CellBadge:
    if exact:
        return CellBadge.EXACT
    if yearly:
        return CellBadge.YEARLY
    return CellBadge.NONE
