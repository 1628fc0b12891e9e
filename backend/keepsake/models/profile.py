"""Profile ORM — author display names for special days.

Invariants:
    - id matches the identity provider's user id
    - Every name column is optional; resolution order lives in core/authors.py
"""

import uuid

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from keepsake.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def name_fields(self) -> dict[str, str | None]:
        return {
            "display_name": self.display_name,
            "name": self.name,
            "username": self.username,
            "full_name": self.full_name,
        }
