"""Recurrence Matcher — yearly special days grouped by MM-DD for a target month.

Invariants:
    - Only birthday/anniversary events recur; "other" only matches its literal date
    - Dates are wall-clock strings split on "-": only month and day are parsed,
      the year part is ignored, no timezone shift
    - Malformed dates are skipped (debug log), never raised
    - Day plausibility is not validated ("02-29" surfaces for any year)
    - Grouping preserves insertion order; no sort guarantee

Design Decisions:
    - SpecialDayEvent is a frozen dataclass: the core reads events, never mutates them
    - Exact-date lookup (events_by_date) is a separate function so the calendar can
      apply exact-over-yearly precedence itself
    - recurrence_window is parameterized: the 20-back/1-forward default is a fetch
      heuristic, not an invariant
"""

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from keepsake.core.domain_types import DateKey, DayKey, MonthKey, SpecialDayKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecialDayEvent:
    """A special day as read from the store."""
    id: str
    date: str
    title: str | None = None
    note: str | None = None
    kind: SpecialDayKind = SpecialDayKind.OTHER
    user_id: str | None = None
    user_name: str | None = None
    created_at: datetime | None = None


def month_key(month: int | str) -> MonthKey:
    """Normalize 3, "3" or "03" to "03". Raises ValueError outside 1..12."""
    value = int(month)
    if not 1 <= value <= 12:
        raise ValueError(f"month out of range: {month!r}")
    return MonthKey(f"{value:02d}")


def day_key(month: int, day: int) -> DayKey:
    return DayKey(f"{month:02d}-{day:02d}")


def split_date_key(value: str | None) -> tuple[int, int, int] | None:
    """Split "YYYY-MM-DD" into ints. None when not exactly three integer parts."""
    parts = (value or "").split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError:
        return None
    return year, month, day


def split_month_day(value: str | None) -> tuple[int, int] | None:
    """Month and day of a "YYYY-MM-DD" string; the year part is never read."""
    parts = (value or "").split("-")
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def recurring_events_for_month(
    events: Iterable[SpecialDayEvent], target_month: int | str,
) -> dict[DayKey, list[SpecialDayEvent]]:
    """Yearly events whose month/day falls in target_month, keyed by "MM-DD"."""
    wanted = int(month_key(target_month))
    matches: dict[DayKey, list[SpecialDayEvent]] = {}
    for event in events:
        if not SpecialDayKind.coerce(event.kind).recurs_yearly:
            continue
        parts = split_month_day(event.date)
        if parts is None:
            logger.debug("Skipping special day with malformed date: %r", event.date)
            continue
        month, day = parts
        if month != wanted:
            continue
        matches.setdefault(day_key(month, day), []).append(event)
    return matches


def events_by_date(
    events: Iterable[SpecialDayEvent],
) -> dict[DateKey, list[SpecialDayEvent]]:
    """Exact-date lookup: literal date string -> events, insertion order."""
    by_date: dict[DateKey, list[SpecialDayEvent]] = {}
    for event in events:
        by_date.setdefault(DateKey(event.date), []).append(event)
    return by_date


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def recurrence_window(
    year: int,
    month: int,
    years_back: int | None = 20,
    years_forward: int = 1,
) -> tuple[date | None, date]:
    """Fetch window wide enough to catch yearly events for a displayed month.

    Runs from the 1st of `month` in `year - years_back` to the last day of
    `month` in `year + years_forward`. years_back=None leaves the lower edge open.
    """
    start = None
    if years_back is not None:
        start = date(max(1, year - years_back), month, 1)
    _, end = month_bounds(min(9999, year + years_forward), month)
    return start, end
