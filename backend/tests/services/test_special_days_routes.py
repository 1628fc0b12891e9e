"""Special Days routes — CRUD, save-for-date editor, list view, calendar month.

Invariants:
    - Missing resources return the structured 404 envelope
    - Validation failures return 400 with field details
    - Calendar cells prefer exact events; yearly badges come from birthdays/anniversaries
    - "other" events never appear outside their own date
"""

import uuid

import pytest

from keepsake.models.profile import Profile

BASE = "/api/v1/special-days"


async def _create(client, **body) -> dict:
    res = await client.post(BASE, json=body)
    assert res.status_code == 201, res.text
    return res.json()


# --- CRUD ---------------------------------------------------------------------

async def test_create_and_get_special_day(client):
    created = await _create(
        client, date="2025-09-03", title="  First date ", kind="anniversary",
    )
    assert created["title"] == "First date"
    assert created["kind"] == "anniversary"
    assert created["date"] == "2025-09-03"

    res = await client.get(f"{BASE}/{created['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]


async def test_kind_defaults_to_other(client):
    created = await _create(client, date="2026-01-01", title="Trip")
    assert created["kind"] == "other"


async def test_create_rejects_unknown_kind(client):
    res = await client.post(BASE, json={"date": "2026-01-01", "kind": "holiday"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_updates_only_given_fields(client):
    created = await _create(client, date="2026-01-01", title="Trip", note="Da Lat")
    res = await client.patch(f"{BASE}/{created['id']}", json={"title": "Da Lat trip"})
    assert res.status_code == 200
    body = res.json()
    assert body["title"] == "Da Lat trip"
    assert body["note"] == "Da Lat"
    assert body["date"] == "2026-01-01"


async def test_patch_can_clear_note(client):
    created = await _create(client, date="2026-01-01", title="Trip", note="Da Lat")
    res = await client.patch(f"{BASE}/{created['id']}", json={"note": "  "})
    assert res.json()["note"] is None


async def test_delete_then_get_returns_404_envelope(client):
    created = await _create(client, date="2026-01-01", title="Trip")
    res = await client.delete(f"{BASE}/{created['id']}")
    assert res.status_code == 204

    res = await client.get(f"{BASE}/{created['id']}")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["special_day_id"] == created["id"]


async def test_unknown_id_returns_404(client):
    res = await client.patch(f"{BASE}/{uuid.uuid4()}", json={"title": "x"})
    assert res.status_code == 404


async def test_malformed_id_is_a_validation_error(client):
    res = await client.get(f"{BASE}/not-a-uuid")
    assert res.status_code == 400


# --- Save-for-date editor -----------------------------------------------------

async def test_put_by_date_creates_then_updates_same_event(client):
    first = await client.put(f"{BASE}/by-date/2026-03-15", json={"title": "Dinner"})
    assert first.status_code == 200
    second = await client.put(
        f"{BASE}/by-date/2026-03-15", json={"title": "Dinner at home", "kind": "other"},
    )
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["title"] == "Dinner at home"

    listing = await client.get(BASE)
    assert listing.json()["total"] == 1


async def test_delete_by_date(client):
    await client.put(f"{BASE}/by-date/2026-03-15", json={"title": "Dinner"})
    res = await client.delete(f"{BASE}/by-date/2026-03-15")
    assert res.status_code == 204

    res = await client.delete(f"{BASE}/by-date/2026-03-15")
    assert res.status_code == 404


# --- List view ----------------------------------------------------------------

async def test_list_searches_and_paginates(client):
    await _create(client, date="2025-09-03", title="First date", kind="anniversary")
    await _create(client, date="2010-03-15", title="Mai's birthday", kind="birthday")
    await _create(client, date="2026-01-01", title="Trip", note="Birthday cake")

    res = await client.get(BASE, params={"search": "birthday"})
    body = res.json()
    assert body["total"] == 2
    assert [i["date"] for i in body["items"]] == ["2010-03-15", "2026-01-01"]

    res = await client.get(BASE, params={"page_size": 6, "order": "desc"})
    assert [i["date"] for i in res.json()["items"]] == [
        "2026-01-01", "2025-09-03", "2010-03-15",
    ]


async def test_list_filters_by_kind_and_date_range(client):
    await _create(client, date="2025-09-03", title="First date", kind="anniversary")
    await _create(client, date="2010-03-15", title="Mai", kind="birthday")

    res = await client.get(BASE, params={"kind": "birthday"})
    assert [i["title"] for i in res.json()["items"]] == ["Mai"]

    res = await client.get(BASE, params={"start_date": "2025-01-01"})
    assert [i["title"] for i in res.json()["items"]] == ["First date"]


async def test_list_rejects_unsupported_page_size(client):
    res = await client.get(BASE, params={"page_size": 7})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "page_size"


async def test_list_reports_authors_with_profile_names(client, test_db):
    profile = Profile(id=uuid.uuid4(), display_name="An")
    test_db.add(profile)
    await test_db.commit()

    await _create(client, date="2025-09-03", title="First date", user_id=str(profile.id))
    anonymous = await _create(client, date="2025-09-04", title="Nobody's")
    assert anonymous["user_name"] is None

    body = (await client.get(BASE)).json()
    assert body["authors"] == [{"id": str(profile.id), "name": "An"}]
    assert body["items"][0]["user_name"] == "An"

    res = await client.get(BASE, params={"author_id": str(profile.id)})
    assert res.json()["total"] == 1


async def test_author_without_profile_gets_short_id_name(client):
    user_id = uuid.uuid4()
    created = await _create(client, date="2025-09-03", user_id=str(user_id))
    assert created["user_name"] == f"User {str(user_id)[:8]}"


# --- Calendar month -----------------------------------------------------------

async def test_calendar_shows_yearly_birthday_in_window(client):
    await _create(client, date="2010-03-15", title="Mai", kind="birthday")
    await _create(client, date="2024-03-20", title="Trip", kind="other")

    res = await client.get(f"{BASE}/calendar/2026/3")
    assert res.status_code == 200
    body = res.json()

    assert (body["year"], body["month"], len(body["cells"])) == (2026, 3, 31)
    assert body["cells"][14]["badge"] == "yearly"
    assert body["cells"][14]["yearly"][0]["title"] == "Mai"
    assert body["cells"][19]["badge"] == "none"
    assert list(body["recurring"]) == ["03-15"]


async def test_calendar_exact_event_wins_over_yearly(client):
    await _create(client, date="2010-03-15", title="Mai", kind="birthday")
    await _create(client, date="2026-03-15", title="Dinner")

    body = (await client.get(f"{BASE}/calendar/2026/3")).json()
    cell = body["cells"][14]
    assert cell["badge"] == "exact"
    assert cell["exact"][0]["title"] == "Dinner"
    assert cell["yearly"][0]["title"] == "Mai"


async def test_calendar_default_window_skips_old_birthdays(client):
    await _create(client, date="1995-03-15", title="Mai", kind="birthday")
    body = (await client.get(f"{BASE}/calendar/2026/3")).json()
    assert body["recurring"] == {}


async def test_calendar_unbounded_window_finds_old_birthdays(
    client, unbounded_recurrence,
):
    await _create(client, date="1995-03-15", title="Mai", kind="birthday")
    body = (await client.get(f"{BASE}/calendar/2026/3")).json()
    assert list(body["recurring"]) == ["03-15"]


async def test_calendar_skips_feb_29_in_common_year(client):
    await _create(client, date="2024-02-29", title="Leap", kind="anniversary")
    body = (await client.get(f"{BASE}/calendar/2026/2")).json()
    assert len(body["cells"]) == 28
    assert all(c["badge"] == "none" for c in body["cells"])
    assert list(body["recurring"]) == ["02-29"]


@pytest.mark.parametrize("month", [0, 13])
async def test_calendar_rejects_invalid_month(client, month):
    res = await client.get(f"{BASE}/calendar/2026/{month}")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CALENDAR_MONTH"


# --- Response summaries and strict inputs -------------------------------------

async def test_list_reports_range_shown_and_filter_state(client):
    for day in ("2026-01-01", "2026-01-02", "2026-01-03"):
        await _create(client, date=day, title="Trip")

    body = (await client.get(BASE, params={"page_size": 6})).json()
    assert (body["first_index"], body["last_index"], body["filtered"]) == (1, 3, False)

    body = (await client.get(BASE, params={"search": "nothing"})).json()
    assert (body["total"], body["first_index"], body["last_index"]) == (0, 0, 0)
    assert body["filtered"] is True


async def test_calendar_cell_carries_primary_event(client):
    await _create(client, date="2010-03-15", title="Mai", kind="birthday")
    await _create(client, date="2026-03-15", title="Dinner")

    cells = (await client.get(f"{BASE}/calendar/2026/3")).json()["cells"]
    assert cells[14]["primary"]["title"] == "Dinner"
    assert cells[13]["primary"] is None


async def test_list_rejects_zero_page_size(client):
    res = await client.get(BASE, params={"page_size": 0})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "page_size"


@pytest.mark.parametrize("field", ["kind", "date"])
async def test_patch_rejects_null_for_required_fields(client, field):
    created = await _create(client, date="2026-01-01", title="Trip", kind="birthday")
    res = await client.patch(f"{BASE}/{created['id']}", json={field: None})
    assert res.status_code == 400

    unchanged = (await client.get(f"{BASE}/{created['id']}")).json()
    assert (unchanged["kind"], unchanged["date"]) == ("birthday", "2026-01-01")
