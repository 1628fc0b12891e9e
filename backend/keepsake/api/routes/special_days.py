"""Special Days — CRUD, save-for-date editor, list view and calendar month view.

Invariants:
    - Request bodies are validated by Pydantic before reaching the handler
    - Missing resources raise ResourceNotFoundError (mapped to 404 by the global handler)
    - Static paths (/calendar, /by-date) are registered before /{special_day_id}

Design Decisions:
    - "today" for the calendar is read in settings.app_timezone, not server local time
    - by-date routes mirror the calendar editor: one editable event per clicked cell
"""

import logging
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from keepsake.config import get_settings
from keepsake.core.domain_types import SortField, SortOrder, SpecialDayId, SpecialDayKind
from keepsake.core.errors import ErrorContext, ResourceNotFoundError
from keepsake.core.special_day_listing import ListingQuery
from keepsake.infrastructure.database import get_db
from keepsake.infrastructure.special_day_repository import SqlSpecialDayRepository
from keepsake.schemas.special_day import (
    CalendarMonthResponse, ListingParams, ListingResponse, SpecialDayCreate,
    SpecialDayResponse, SpecialDayUpdate, SpecialDayWrite,
)
from keepsake.services import special_days as service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/special-days", tags=["special-days"])


def get_repository(db: AsyncSession = Depends(get_db)) -> SqlSpecialDayRepository:
    return SqlSpecialDayRepository(db)


def _today() -> date:
    return datetime.now(ZoneInfo(get_settings().app_timezone)).date()


def _not_found(special_day_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "SpecialDay", special_day_id,
        ErrorContext(special_day_id=special_day_id),
    )


# ─── Views ──────────────────────────────────────────────────────

@router.get("", response_model=ListingResponse)
async def list_special_days(
    search: str | None = Query(None, max_length=200),
    kind: SpecialDayKind | None = Query(None),
    author_id: str | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    sort_by: SortField = Query(SortField.DATE),
    order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None),
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """List view: search, filter, sort, paginate."""
    try:
        params = ListingParams(
            search=search, kind=kind, author_id=author_id,
            start_date=start_date, end_date=end_date,
            sort_by=sort_by, order=order, page=page,
            page_size=(
                page_size if page_size is not None
                else get_settings().default_page_size
            ),
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    query = ListingQuery(**params.model_dump())
    listing, authors = await service.list_page(repo, query)
    return ListingResponse.from_page(listing, authors, filtered=query.is_filtered)


@router.get("/calendar/{year}/{month}", response_model=CalendarMonthResponse)
async def get_calendar_month(
    year: int,
    month: int,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """Calendar month: exact events per cell plus yearly birthdays/anniversaries."""
    settings = get_settings()
    view, recurring = await service.load_calendar_month(
        repo, year, month,
        today=_today(),
        years_back=settings.recurrence_years_back,
        years_forward=settings.recurrence_years_forward,
    )
    return CalendarMonthResponse.from_month(view, recurring)


# ─── Save-for-date editor ──────────────────────────────────────

@router.put("/by-date/{day}", response_model=SpecialDayResponse)
async def save_special_day_for_date(
    day: date,
    body: SpecialDayWrite,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """Edit the first special day on `day`, or create one."""
    event, created = await service.save_for_date(repo, day, body.model_dump())
    logger.info(
        f"Special day {'created' if created else 'updated'} for {day.isoformat()}",
        extra={"special_day_id": event.id},
    )
    return SpecialDayResponse.from_event(event)


@router.delete("/by-date/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_special_day_for_date(
    day: date, repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """Remove the first special day on `day`."""
    removed = await service.remove_for_date(repo, day)
    if removed is None:
        raise _not_found(day.isoformat())


# ─── CRUD ───────────────────────────────────────────────────────

@router.post(
    "", response_model=SpecialDayResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_special_day(
    body: SpecialDayCreate,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """Create a special day."""
    event = await repo.create(body.model_dump())
    return SpecialDayResponse.from_event(event)


@router.get("/{special_day_id}", response_model=SpecialDayResponse)
async def get_special_day(
    special_day_id: UUID,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    event = await repo.get(SpecialDayId(special_day_id))
    if event is None:
        raise _not_found(str(special_day_id))
    return SpecialDayResponse.from_event(event)


@router.patch("/{special_day_id}", response_model=SpecialDayResponse)
async def update_special_day(
    special_day_id: UUID,
    body: SpecialDayUpdate,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    """Partial update — only fields present in the body are written."""
    event = await repo.update(
        SpecialDayId(special_day_id), body.model_dump(exclude_unset=True),
    )
    if event is None:
        raise _not_found(str(special_day_id))
    return SpecialDayResponse.from_event(event)


@router.delete("/{special_day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_special_day(
    special_day_id: UUID,
    repo: SqlSpecialDayRepository = Depends(get_repository),
):
    if not await repo.delete(SpecialDayId(special_day_id)):
        raise _not_found(str(special_day_id))
