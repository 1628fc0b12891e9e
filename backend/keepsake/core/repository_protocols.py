"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
"""

from datetime import date
from typing import Protocol

from keepsake.core.domain_types import SpecialDayId
from keepsake.core.recurrence import SpecialDayEvent


class SpecialDayRepository(Protocol):
    """Contract for special-day persistence — implemented by shell."""
    async def list_between(
        self, start: date | None, end: date | None,
    ) -> list[SpecialDayEvent]: ...
    async def get(self, special_day_id: SpecialDayId) -> SpecialDayEvent | None: ...
    async def first_on_date(self, day: date) -> SpecialDayEvent | None: ...
    async def create(self, data: dict) -> SpecialDayEvent: ...
    async def update(
        self, special_day_id: SpecialDayId, data: dict,
    ) -> SpecialDayEvent | None: ...
    async def delete(self, special_day_id: SpecialDayId) -> bool: ...
