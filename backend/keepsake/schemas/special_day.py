"""Special Day Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - title/note are stripped; blank values become None
    - kind is one of birthday | anniversary | other (defaults to other)
    - page_size is one of PAGE_SIZES
    - Calendar months are 1..12

Design Decisions:
    - Response models built from core dataclasses via from_event/from_cell, so
      routes never touch ORM rows
"""

import datetime as dt
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from keepsake.core.calendar_month import CalendarCell, CalendarMonth
from keepsake.core.domain_types import (
    PAGE_SIZES, CellBadge, SortField, SortOrder, SpecialDayKind,
)
from keepsake.core.recurrence import SpecialDayEvent
from keepsake.core.special_day_listing import ListingPage


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


class SpecialDayWrite(BaseModel):
    """Body for save-for-date: everything but the date."""
    title: str | None = Field(None, max_length=200)
    note: str | None = Field(None, max_length=5000)
    kind: SpecialDayKind = SpecialDayKind.OTHER
    user_id: UUID | None = None

    @field_validator("title", "note")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class SpecialDayCreate(SpecialDayWrite):
    date: dt.date


class SpecialDayUpdate(BaseModel):
    """Partial update — only fields that are set are written."""
    date: dt.date | None = None
    title: str | None = Field(None, max_length=200)
    note: str | None = Field(None, max_length=5000)
    kind: SpecialDayKind | None = None

    @field_validator("date", "kind", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    @field_validator("title", "note")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class SpecialDayResponse(BaseModel):
    id: str
    date: str
    title: str | None = None
    note: str | None = None
    kind: SpecialDayKind
    user_id: str | None = None
    user_name: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_event(cls, event: SpecialDayEvent) -> "SpecialDayResponse":
        return cls(
            id=event.id,
            date=event.date,
            title=event.title,
            note=event.note,
            kind=SpecialDayKind.coerce(event.kind),
            user_id=event.user_id,
            user_name=event.user_name,
            created_at=event.created_at,
        )


class ListingParams(BaseModel):
    """List view query — mirrors core ListingQuery."""
    search: str | None = Field(None, max_length=200)
    kind: SpecialDayKind | None = None
    author_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    sort_by: SortField = SortField.DATE
    order: SortOrder = SortOrder.ASC
    page: int = Field(1, ge=1)
    page_size: int = 12

    @field_validator("page_size")
    @classmethod
    def check_page_size(cls, v: int) -> int:
        if v not in PAGE_SIZES:
            raise ValueError(f"page_size must be one of {list(PAGE_SIZES)}")
        return v


class AuthorResponse(BaseModel):
    id: str
    name: str | None = None


class ListingResponse(BaseModel):
    items: list[SpecialDayResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    first_index: int
    last_index: int
    filtered: bool
    authors: list[AuthorResponse]

    @classmethod
    def from_page(
        cls,
        page: ListingPage,
        authors: list[tuple[str, str | None]],
        filtered: bool = False,
    ) -> "ListingResponse":
        return cls(
            items=[SpecialDayResponse.from_event(e) for e in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
            first_index=page.first_index,
            last_index=page.last_index,
            filtered=filtered,
            authors=[AuthorResponse(id=i, name=n) for i, n in authors],
        )


class CalendarCellResponse(BaseModel):
    date: str
    day: int
    badge: CellBadge
    is_today: bool
    primary: SpecialDayResponse | None = None
    exact: list[SpecialDayResponse]
    yearly: list[SpecialDayResponse]

    @classmethod
    def from_cell(cls, cell: CalendarCell) -> "CalendarCellResponse":
        return cls(
            date=cell.date_key,
            day=cell.day,
            badge=cell.badge,
            is_today=cell.is_today,
            primary=SpecialDayResponse.from_event(cell.primary) if cell.primary else None,
            exact=[SpecialDayResponse.from_event(e) for e in cell.exact],
            yearly=[SpecialDayResponse.from_event(e) for e in cell.yearly],
        )


class CalendarMonthResponse(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    leading_blanks: int
    cells: list[CalendarCellResponse]
    recurring: dict[str, list[SpecialDayResponse]]

    @classmethod
    def from_month(
        cls,
        view: CalendarMonth,
        recurring: dict[str, list[SpecialDayEvent]],
    ) -> "CalendarMonthResponse":
        return cls(
            year=view.year,
            month=view.month,
            leading_blanks=view.leading_blanks,
            cells=[CalendarCellResponse.from_cell(c) for c in view.cells],
            recurring={
                key: [SpecialDayResponse.from_event(e) for e in events]
                for key, events in recurring.items()
            },
        )
