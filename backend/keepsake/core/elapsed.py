"""Elapsed Duration — calendar-aware breakdown of time since a fixed anchor.

Invariants:
    - Pure function of two instants: no clock reads, no state between calls
    - Reconstruction is exact: start + years + months (calendar) + weeks/days/
      hours/minutes/seconds (fixed units) == now, truncated to whole seconds
    - months in [0, 11], days < 7, hours < 24, minutes < 60, seconds < 60
    - now <= start yields the all-zero breakdown (never raises)

Design Decisions:
    - Two phases: whole calendar months since start (split into years/months),
      then a divmod chain over the millisecond remainder
    - Calendar fields are read in the anchor's timezone; ordering and remainders
      are computed on UTC-normalized values so DST zones subtract correctly
    - Day-of-month clamps to the target month's last day (Jan 31 + 1 month = Feb 28/29)
"""

import calendar
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone

_SECOND_MS = 1000
_MINUTE_MS = 60 * _SECOND_MS
_HOUR_MS = 60 * _MINUTE_MS
_DAY_MS = 24 * _HOUR_MS
_WEEK_MS = 7 * _DAY_MS


@dataclass(frozen=True)
class ElapsedBreakdown:
    """Seven-field elapsed time. weeks/days come from the post-month remainder."""
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def zero(cls) -> "ElapsedBreakdown":
        return cls()

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    def remainder(self) -> timedelta:
        """The fixed-unit part (everything below months)."""
        return timedelta(
            weeks=self.weeks, days=self.days, hours=self.hours,
            minutes=self.minutes, seconds=self.seconds,
        )


def compute_elapsed(start: datetime, now: datetime) -> ElapsedBreakdown:
    """Break down the time from start to now. Pure, no IO."""
    start = _as_aware(start)
    now = _as_aware(now).astimezone(start.tzinfo)
    now_utc = _utc(now)
    if now_utc <= _utc(start):
        return ElapsedBreakdown.zero()

    # Whole calendar months since start; years are every twelfth month-versary
    total_months = (now.year - start.year) * 12 + now.month - start.month
    anchor = add_months(start, total_months)
    if _utc(anchor) > now_utc:
        total_months -= 1
        anchor = add_months(start, total_months)
    years, months = divmod(total_months, 12)

    remaining_ms = (now_utc - _utc(anchor)) // timedelta(milliseconds=1)
    weeks, remaining_ms = divmod(remaining_ms, _WEEK_MS)
    days, remaining_ms = divmod(remaining_ms, _DAY_MS)
    hours, remaining_ms = divmod(remaining_ms, _HOUR_MS)
    minutes, remaining_ms = divmod(remaining_ms, _MINUTE_MS)
    seconds = remaining_ms // _SECOND_MS

    return ElapsedBreakdown(
        years=years, months=months, weeks=weeks, days=days,
        hours=hours, minutes=minutes, seconds=seconds,
    )


def reconstruct_instant(start: datetime, elapsed: ElapsedBreakdown) -> datetime:
    """Walk start forward by a breakdown. Inverse of compute_elapsed (UTC result)."""
    start = _as_aware(start)
    anchor = add_months(start, elapsed.years * 12 + elapsed.months)
    return _utc(anchor) + elapsed.remainder()


def add_months(moment: datetime, months: int) -> datetime:
    """Same day/time `months` later, day clamped to the target month's length.

    A year is twelve months, so Feb 29 + 12 months is Feb 28 in a common year.
    """
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _as_aware(moment: datetime) -> datetime:
    # Naive datetimes are UTC
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _utc(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc)
