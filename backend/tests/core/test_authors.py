"""Author Names — fallback chain and first-seen author list."""

from keepsake.core.authors import resolve_author_name, unique_authors
from keepsake.core.recurrence import SpecialDayEvent

USER_ID = "3f2c9a10-7b1e-4d2a-9c3e-0a1b2c3d4e5f"


def test_no_user_id_means_no_name():
    assert resolve_author_name({"display_name": "An"}, None) is None


def test_display_name_wins():
    profile = {"display_name": "An", "name": "Nguyen An", "username": "an"}
    assert resolve_author_name(profile, USER_ID) == "An"


def test_falls_through_empty_fields_in_order():
    assert resolve_author_name({"display_name": "", "username": "an"}, USER_ID) == "an"
    assert resolve_author_name({"full_name": "Nguyen Van An"}, USER_ID) == "Nguyen Van An"


def test_missing_profile_uses_short_id():
    assert resolve_author_name(None, USER_ID) == "User 3f2c9a10"


def test_unique_authors_keeps_first_seen_order():
    events = [
        SpecialDayEvent(id="1", date="2025-01-01", user_id="b", user_name="Binh"),
        SpecialDayEvent(id="2", date="2025-01-02"),
        SpecialDayEvent(id="3", date="2025-01-03", user_id="a", user_name="An"),
        SpecialDayEvent(id="4", date="2025-01-04", user_id="b", user_name="Binh"),
    ]
    assert unique_authors(events) == [("b", "Binh"), ("a", "An")]
