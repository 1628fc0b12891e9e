"""Author Names — display-name resolution for special-day authors.

Invariants:
    - No user id -> no name (None)
    - Fallback chain: display_name, name, username, full_name, "User <id[:8]>"
"""

from collections.abc import Iterable, Mapping

from keepsake.core.recurrence import SpecialDayEvent

_NAME_FIELDS = ("display_name", "name", "username", "full_name")


def resolve_author_name(
    profile: Mapping[str, str | None] | None, user_id: str | None,
) -> str | None:
    if not user_id:
        return None
    for field_name in _NAME_FIELDS:
        value = (profile or {}).get(field_name)
        if value:
            return value
    return f"User {user_id[:8]}"


def unique_authors(events: Iterable[SpecialDayEvent]) -> list[tuple[str, str | None]]:
    """First-seen (user_id, user_name) pairs, skipping events without an author."""
    seen: dict[str, str | None] = {}
    for event in events:
        if event.user_id and event.user_id not in seen:
            seen[event.user_id] = event.user_name
    return list(seen.items())
