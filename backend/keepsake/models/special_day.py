"""SpecialDay ORM — persists a dated event on the shared calendar.

Invariants:
    - id is UUID primary key
    - date is a calendar date (no time, no timezone)
    - kind is one of birthday | anniversary | other (SpecialDayKind)
    - user_id is optional; author names are resolved through profiles

Design Decisions:
    - Date column rather than timestamp: special days are wall-clock dates
    - No FK to profiles: the identity provider owns users, profiles may lag behind
"""

import datetime as dt
import uuid

from sqlalchemy import CheckConstraint, Date, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from keepsake.core.domain_types import SpecialDayKind
from keepsake.db.base import Base


class SpecialDay(Base):
    """A birthday, anniversary or one-off special day."""
    __tablename__ = "special_days"
    __table_args__ = (
        CheckConstraint(
            "kind IN ('birthday', 'anniversary', 'other')",
            name="ck_special_days_kind",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    kind: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SpecialDayKind.OTHER.value,
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
    )
