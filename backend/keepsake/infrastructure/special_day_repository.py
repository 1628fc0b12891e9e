"""Special Day Repository — SQLAlchemy implementation of SpecialDayRepository.

Invariants:
    - Returns SpecialDayEvent values, never ORM rows (core stays ORM-free)
    - Author names resolved from profiles in one extra query per fetch
    - Never commits partially: each write commits once, after the mutation

Design Decisions:
    - Shares the request AsyncSession injected by get_db
    - list_between orders by date ascending, like the calendar expects
"""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from keepsake.core.authors import resolve_author_name
from keepsake.core.domain_types import SpecialDayId, SpecialDayKind
from keepsake.core.recurrence import SpecialDayEvent
from keepsake.models.profile import Profile
from keepsake.models.special_day import SpecialDay

logger = logging.getLogger(__name__)

_WRITABLE_FIELDS = ("date", "title", "note", "kind", "user_id")


class SqlSpecialDayRepository:
    """Special-day persistence over an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_between(
        self, start: date | None, end: date | None,
    ) -> list[SpecialDayEvent]:
        query = select(SpecialDay).order_by(
            SpecialDay.date.asc(), SpecialDay.created_at.asc(),
        )
        if start is not None:
            query = query.where(SpecialDay.date >= start)
        if end is not None:
            query = query.where(SpecialDay.date <= end)
        result = await self._db.execute(query)
        return await self._to_events(list(result.scalars().all()))

    async def get(self, special_day_id: SpecialDayId) -> SpecialDayEvent | None:
        row = await self._get_row(special_day_id)
        if row is None:
            return None
        return (await self._to_events([row]))[0]

    async def first_on_date(self, day: date) -> SpecialDayEvent | None:
        result = await self._db.execute(
            select(SpecialDay)
            .where(SpecialDay.date == day)
            .order_by(SpecialDay.created_at.asc())
            .limit(1),
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return (await self._to_events([row]))[0]

    async def create(self, data: dict) -> SpecialDayEvent:
        row = SpecialDay(**_writable(data))
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)
        logger.info("Special day created", extra={"special_day_id": str(row.id)})
        return (await self._to_events([row]))[0]

    async def update(
        self, special_day_id: SpecialDayId, data: dict,
    ) -> SpecialDayEvent | None:
        row = await self._get_row(special_day_id)
        if row is None:
            return None
        for key, value in _writable(data).items():
            setattr(row, key, value)
        await self._db.commit()
        await self._db.refresh(row)
        logger.info("Special day updated", extra={"special_day_id": str(row.id)})
        return (await self._to_events([row]))[0]

    async def delete(self, special_day_id: SpecialDayId) -> bool:
        row = await self._get_row(special_day_id)
        if row is None:
            return False
        await self._db.delete(row)
        await self._db.commit()
        logger.info("Special day deleted", extra={"special_day_id": str(special_day_id)})
        return True

    async def _get_row(self, special_day_id: SpecialDayId) -> SpecialDay | None:
        # Core passes ids around as strings
        key = uuid.UUID(str(special_day_id))
        result = await self._db.execute(
            select(SpecialDay).where(SpecialDay.id == key),
        )
        return result.scalar_one_or_none()

    async def _to_events(self, rows: list[SpecialDay]) -> list[SpecialDayEvent]:
        profiles = await self._profiles_for({r.user_id for r in rows if r.user_id})
        return [_to_event(row, profiles.get(row.user_id)) for row in rows]

    async def _profiles_for(self, user_ids: set[uuid.UUID]) -> dict[uuid.UUID, Profile]:
        if not user_ids:
            return {}
        result = await self._db.execute(
            select(Profile).where(Profile.id.in_(list(user_ids))),
        )
        return {p.id: p for p in result.scalars().all()}


def _writable(data: dict) -> dict:
    values = {k: v for k, v in data.items() if k in _WRITABLE_FIELDS}
    if "kind" in values:
        values["kind"] = SpecialDayKind.coerce(values["kind"]).value
    return values


def _to_event(row: SpecialDay, profile: Profile | None) -> SpecialDayEvent:
    user_id = str(row.user_id) if row.user_id else None
    return SpecialDayEvent(
        id=str(row.id),
        date=row.date.isoformat(),
        title=row.title,
        note=row.note,
        kind=SpecialDayKind.coerce(row.kind),
        user_id=user_id,
        user_name=resolve_author_name(
            profile.name_fields() if profile else None, user_id,
        ),
        created_at=row.created_at,
    )
