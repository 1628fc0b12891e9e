"""Special Day schemas — request validation and response construction.

Invariants:
    - title/note are stripped; blank strings become None
    - kind defaults to other and rejects unknown values
    - page_size is one of the offered page sizes
    - Elapsed fields are bounded
"""

from datetime import date

import pytest
from pydantic import ValidationError

from keepsake.core.calendar_month import build_calendar_month
from keepsake.core.domain_types import CellBadge, SpecialDayKind
from keepsake.core.elapsed import ElapsedBreakdown
from keepsake.core.recurrence import SpecialDayEvent, recurring_events_for_month
from keepsake.core.special_day_listing import paginate
from keepsake.schemas.special_day import (
    CalendarMonthResponse, ListingParams, ListingResponse, SpecialDayCreate,
    SpecialDayResponse, SpecialDayUpdate, SpecialDayWrite,
)
from keepsake.schemas.together import ElapsedResponse


# --- Write bodies -------------------------------------------------------------

def test_write_strips_text_and_blanks_become_none():
    body = SpecialDayWrite(title="  Anniversary  ", note="   ")
    assert body.title == "Anniversary"
    assert body.note is None
    assert body.kind == SpecialDayKind.OTHER


def test_write_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        SpecialDayWrite(title="x", kind="holiday")


def test_write_rejects_overlong_title():
    with pytest.raises(ValidationError):
        SpecialDayWrite(title="x" * 201)


def test_create_requires_a_real_date():
    assert SpecialDayCreate(date="2024-02-29").date == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        SpecialDayCreate(date="2025-02-29")


def test_update_tracks_only_set_fields():
    body = SpecialDayUpdate(note="")
    assert body.model_dump(exclude_unset=True) == {"note": None}


# --- Listing params -----------------------------------------------------------

@pytest.mark.parametrize("size", [6, 12, 24, 48])
def test_listing_params_accepts_offered_page_sizes(size):
    assert ListingParams(page_size=size).page_size == size


def test_listing_params_rejects_other_page_sizes():
    with pytest.raises(ValidationError):
        ListingParams(page_size=7)


def test_listing_params_rejects_page_zero():
    with pytest.raises(ValidationError):
        ListingParams(page=0)


# --- Responses ----------------------------------------------------------------

def test_response_from_event_coerces_kind():
    event = SpecialDayEvent(id="1", date="2025-09-03", kind=None)
    assert SpecialDayResponse.from_event(event).kind == SpecialDayKind.OTHER


def test_calendar_month_response_carries_cells_and_recurring_map():
    birthday = SpecialDayEvent(
        id="b", date="1995-03-15", title="Mai", kind=SpecialDayKind.BIRTHDAY,
    )
    recurring = recurring_events_for_month([birthday], 3)
    view = build_calendar_month(2026, 3, [], recurring)

    body = CalendarMonthResponse.from_month(view, recurring).model_dump(mode="json")

    assert body["leading_blanks"] == 0
    assert len(body["cells"]) == 31
    assert body["cells"][14]["badge"] == CellBadge.YEARLY.value
    assert body["cells"][14]["yearly"][0]["title"] == "Mai"
    assert list(body["recurring"]) == ["03-15"]


def test_elapsed_response_rejects_out_of_range_fields():
    with pytest.raises(ValidationError):
        ElapsedResponse.from_breakdown(ElapsedBreakdown(months=12))
    assert ElapsedResponse.from_breakdown(ElapsedBreakdown(years=3)).years == 3


@pytest.mark.parametrize("field", ["kind", "date"])
def test_update_rejects_explicit_null(field):
    with pytest.raises(ValidationError):
        SpecialDayUpdate(**{field: None})


def test_listing_response_carries_summary():
    events = [SpecialDayEvent(id=str(i), date="2025-01-01") for i in range(7)]
    body = ListingResponse.from_page(paginate(events, 2, 6), [], filtered=True)
    assert (body.first_index, body.last_index, body.filtered) == (7, 7, True)
