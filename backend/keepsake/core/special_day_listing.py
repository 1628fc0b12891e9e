"""Special Day Listing — filter, sort and paginate a fetched collection.

Invariants:
    - Search is a case-insensitive substring match over title, note and author name
    - Date bounds are inclusive; events with unparseable dates drop out when a bound is set
    - total_pages >= 1 and the returned page is clamped to [1, total_pages]
    - Inputs are never mutated; every call returns new lists

Design Decisions:
    - Works on the materialized collection rather than pushing filters to SQL:
      the list view and the calendar share one fetch
    - Sorting is stable; descending order reverses the comparison, not the input
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from keepsake.core.domain_types import SortField, SortOrder, SpecialDayKind
from keepsake.core.recurrence import SpecialDayEvent, split_date_key


@dataclass(frozen=True)
class ListingQuery:
    search: str | None = None
    kind: SpecialDayKind | None = None
    author_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    sort_by: SortField = SortField.DATE
    order: SortOrder = SortOrder.ASC
    page: int = 1
    page_size: int = 12

    @property
    def is_filtered(self) -> bool:
        return bool(
            (self.search and self.search.strip()) or self.kind or self.author_id
            or self.start_date or self.end_date
        )


@dataclass(frozen=True)
class ListingPage:
    items: list[SpecialDayEvent]
    total: int
    page: int
    page_size: int
    total_pages: int

    @property
    def first_index(self) -> int:
        """1-based index of the first item shown (0 when empty)."""
        return (self.page - 1) * self.page_size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        return min(self.page * self.page_size, self.total)


def filter_special_days(
    events: Iterable[SpecialDayEvent], query: ListingQuery,
) -> list[SpecialDayEvent]:
    """Apply search/kind/author/date filters, then sort."""
    filtered = list(events)

    needle = (query.search or "").strip().lower()
    if needle:
        filtered = [e for e in filtered if _matches_search(e, needle)]

    if query.author_id:
        filtered = [e for e in filtered if e.user_id == query.author_id]

    if query.kind:
        filtered = [
            e for e in filtered if SpecialDayKind.coerce(e.kind) == query.kind
        ]

    if query.start_date or query.end_date:
        filtered = [
            e for e in filtered
            if _within(_parse_date(e.date), query.start_date, query.end_date)
        ]

    return sorted(
        filtered,
        key=lambda e: _sort_key(e, query.sort_by),
        reverse=query.order == SortOrder.DESC,
    )


def paginate(
    items: Sequence[SpecialDayEvent], page: int, page_size: int,
) -> ListingPage:
    if page_size < 1:
        raise ValueError(f"page_size must be positive: {page_size}")
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    current = min(max(page, 1), total_pages)
    start = (current - 1) * page_size
    return ListingPage(
        items=list(items[start:start + page_size]),
        total=total,
        page=current,
        page_size=page_size,
        total_pages=total_pages,
    )


def list_special_days(
    events: Iterable[SpecialDayEvent], query: ListingQuery,
) -> ListingPage:
    """Filter, sort and paginate in one call."""
    return paginate(
        filter_special_days(events, query), query.page, query.page_size,
    )


def _matches_search(event: SpecialDayEvent, needle: str) -> bool:
    return any(
        needle in value.lower()
        for value in (event.title, event.note, event.user_name)
        if value
    )


def _parse_date(value: str) -> date | None:
    parts = split_date_key(value)
    if parts is None:
        return None
    try:
        return date(*parts)
    except ValueError:
        return None


def _within(value: date | None, start: date | None, end: date | None) -> bool:
    if value is None:
        return False
    if start and value < start:
        return False
    if end and value > end:
        return False
    return True


def _sort_key(event: SpecialDayEvent, sort_by: SortField):
    if sort_by == SortField.TITLE:
        return (event.title or "").lower()
    if sort_by == SortField.AUTHOR:
        return (event.user_name or "").lower()
    if sort_by == SortField.KIND:
        return SpecialDayKind.coerce(event.kind).value
    # Unparseable dates sort first, as the epoch would
    parsed = _parse_date(event.date)
    return (parsed is not None, parsed or date.min)
