"""Special Day Service — fetch through the repository, compute in core.

Invariants:
    - Calendar view issues two fetches: the displayed month (exact cells) and the
      recurrence window (yearly badges); they are never merged before matching
    - save_for_date edits the first event on a date, else creates one
    - Never commits on its own; the repository owns write transactions

Design Decisions:
    - Plain async functions; the repository is passed per call
    - The clock is injected (today/now) so the service stays deterministic in tests
"""

import logging
from datetime import date

from keepsake.core.authors import unique_authors
from keepsake.core.calendar_month import CalendarMonth, build_calendar_month
from keepsake.core.domain_types import DayKey, SpecialDayId
from keepsake.core.errors import InvalidCalendarMonthError
from keepsake.core.recurrence import (
    SpecialDayEvent, month_bounds, recurrence_window, recurring_events_for_month,
)
from keepsake.core.repository_protocols import SpecialDayRepository
from keepsake.core.special_day_listing import (
    ListingPage, ListingQuery, list_special_days,
)

logger = logging.getLogger(__name__)


async def load_calendar_month(
    repo: SpecialDayRepository,
    year: int,
    month: int,
    today: date | None = None,
    years_back: int | None = 20,
    years_forward: int = 1,
) -> tuple[CalendarMonth, dict[DayKey, list[SpecialDayEvent]]]:
    """Month grid plus the recurring map it was built from."""
    if not (1 <= month <= 12 and 1 <= year <= 9999):
        raise InvalidCalendarMonthError(year, month)

    first, last = month_bounds(year, month)
    month_events = await repo.list_between(first, last)

    window_start, window_end = recurrence_window(
        year, month, years_back, years_forward,
    )
    wide = await repo.list_between(window_start, window_end)
    recurring = recurring_events_for_month(wide, month)

    logger.info(
        f"Calendar loaded: {len(month_events)} exact, "
        f"{sum(len(v) for v in recurring.values())} recurring",
        extra={"year": year, "month": month},
    )
    view = build_calendar_month(year, month, month_events, recurring, today)
    return view, recurring


async def list_page(
    repo: SpecialDayRepository, query: ListingQuery,
) -> tuple[ListingPage, list[tuple[str, str | None]]]:
    """Filtered, sorted page plus every author seen in the collection."""
    events = await repo.list_between(None, None)
    return list_special_days(events, query), unique_authors(events)


async def save_for_date(
    repo: SpecialDayRepository, day: date, data: dict,
) -> tuple[SpecialDayEvent, bool]:
    """Update the first event on `day` or create one. Returns (event, created)."""
    existing = await repo.first_on_date(day)
    payload = {**data, "date": day}
    if existing:
        # Authorship stays with the original creator
        payload.pop("user_id", None)
        updated = await repo.update(SpecialDayId(existing.id), payload)
        if updated is not None:
            return updated, False
    return await repo.create(payload), True


async def remove_for_date(repo: SpecialDayRepository, day: date) -> SpecialDayEvent | None:
    """Delete the first event on `day`. Returns the removed event, or None."""
    existing = await repo.first_on_date(day)
    if existing is None:
        return None
    await repo.delete(SpecialDayId(existing.id))
    return existing
