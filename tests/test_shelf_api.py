"""Tests for the profile, bookshelf and reading-session endpoints."""

import pytest

from shelfsync.id import make_id

USER_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"
OTHER_USER = "16fd2706-8baf-433b-82eb-8c7fada847da"


# --- helpers ---

async def _add_book(client, book_id="zyTCAlFPjgYC", title="The Hobbit", **extra):
    body = {"book_id": book_id, "title": title, "authors": ["J.R.R. Tolkien"], **extra}
    resp = await client.post(f"/api/users/{USER_ID}/books", json=body)
    assert resp.status_code == 201
    return resp.json()


# --- profiles ---

async def test_get_profile_missing(client):
    resp = await client.get(f"/api/users/{USER_ID}/profile")
    assert resp.status_code == 404


async def test_create_profile(client):
    resp = await client.put(
        f"/api/users/{USER_ID}/profile",
        json={"username": "bilbo", "favorite_genres": ["fantasy", "poetry"]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == make_id(USER_ID)
    assert data["user_id"] == USER_ID
    assert data["favorite_genres"] == ["fantasy", "poetry"]
    assert data["reading_goal"] == 12


async def test_update_profile_keeps_unsent_fields(client):
    await client.put(f"/api/users/{USER_ID}/profile", json={"username": "bilbo", "reading_goal": 20})
    resp = await client.put(f"/api/users/{USER_ID}/profile", json={"preferred_reading_time": "evening"})
    data = resp.json()
    assert data["username"] == "bilbo"
    assert data["reading_goal"] == 20
    assert data["preferred_reading_time"] == "evening"


async def test_profile_goal_validation(client):
    resp = await client.put(f"/api/users/{USER_ID}/profile", json={"reading_goal": 0})
    assert resp.status_code == 422


@pytest.mark.parametrize("path", ["profile", "books", "sessions"])
async def test_user_id_must_be_uuid(client, path):
    resp = await client.get(f"/api/users/not-a-uuid/{path}")
    assert resp.status_code == 422


async def test_user_id_is_normalised(client):
    await client.put(f"/api/users/{USER_ID.upper()}/profile", json={"username": "bilbo"})
    resp = await client.get(f"/api/users/{USER_ID}/profile")
    assert resp.status_code == 200
    assert resp.json()["user_id"] == USER_ID
    assert resp.json()["id"] == make_id(USER_ID)


# --- bookshelf ---

async def test_add_book_defaults(client):
    book = await _add_book(client, page_count=310)
    assert book["id"] == make_id(USER_ID, "zyTCAlFPjgYC")
    assert book["reading_status"] == "not-read"
    assert book["personal_rating"] == 0
    assert book["reading_progress"] == 0
    assert book["time_spent_reading"] == 0
    assert book["tags"] == []
    assert book["date_added"] is not None


async def test_add_book_duplicate(client):
    await _add_book(client)
    resp = await client.post(
        f"/api/users/{USER_ID}/books",
        json={"book_id": "zyTCAlFPjgYC", "title": "The Hobbit"},
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "This book is already in your library"


async def test_same_book_for_two_users(client):
    await _add_book(client)
    resp = await client.post(
        f"/api/users/{OTHER_USER}/books",
        json={"book_id": "zyTCAlFPjgYC", "title": "The Hobbit"},
    )
    assert resp.status_code == 201
    assert resp.json()["id"] != make_id(USER_ID, "zyTCAlFPjgYC")


async def test_list_books_by_status(client):
    await _add_book(client, book_id="a", title="A")
    await _add_book(client, book_id="b", title="B")
    await client.put(f"/api/users/{USER_ID}/books/b", json={"reading_status": "reading"})

    resp = await client.get(f"/api/users/{USER_ID}/books")
    assert len(resp.json()) == 2

    resp = await client.get(f"/api/users/{USER_ID}/books", params={"status": "reading"})
    books = resp.json()
    assert [b["book_id"] for b in books] == ["b"]


async def test_start_reading_sets_date_started(client):
    await _add_book(client)
    resp = await client.put(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC", json={"reading_status": "reading"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["date_started"] is not None
    assert data["date_finished"] is None


async def test_finish_sets_dates_and_progress(client):
    await _add_book(client)
    resp = await client.put(
        f"/api/users/{USER_ID}/books/zyTCAlFPjgYC",
        json={"reading_status": "finished", "personal_rating": 5, "my_thoughts": "Lovely"},
    )
    data = resp.json()
    assert data["date_started"] is not None
    assert data["date_finished"] is not None
    assert data["reading_progress"] == 100
    assert data["personal_rating"] == 5
    assert data["my_thoughts"] == "Lovely"


async def test_rating_out_of_range(client):
    await _add_book(client)
    resp = await client.put(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC", json={"personal_rating": 6})
    assert resp.status_code == 422


async def test_update_missing_book(client):
    resp = await client.put(f"/api/users/{USER_ID}/books/nope", json={"notes": "x"})
    assert resp.status_code == 404


async def test_remove_book(client):
    await _add_book(client)
    resp = await client.delete(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC")
    assert resp.status_code == 204

    resp = await client.get(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC")
    assert resp.status_code == 404


# --- reading sessions ---

async def test_log_session_updates_entry(client):
    await _add_book(client, page_count=200)
    resp = await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "zyTCAlFPjgYC", "duration_minutes": 45, "pages_read": 50, "notes": "Riddles"},
    )
    assert resp.status_code == 201
    assert resp.json()["duration_minutes"] == 45

    book = (await client.get(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC")).json()
    assert book["time_spent_reading"] == 45
    assert book["current_page"] == 50
    assert book["reading_progress"] == 25


async def test_session_progress_capped(client):
    await _add_book(client, page_count=100)
    await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "zyTCAlFPjgYC", "duration_minutes": 300, "pages_read": 150},
    )
    book = (await client.get(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC")).json()
    assert book["reading_progress"] == 100


async def test_session_without_page_count(client):
    await _add_book(client)
    await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "zyTCAlFPjgYC", "duration_minutes": 20, "pages_read": 10},
    )
    book = (await client.get(f"/api/users/{USER_ID}/books/zyTCAlFPjgYC")).json()
    assert book["reading_progress"] == 0
    assert book["current_page"] == 10


async def test_session_for_unshelved_book(client):
    resp = await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "missing", "duration_minutes": 20},
    )
    assert resp.status_code == 404


async def test_session_duration_validation(client):
    await _add_book(client)
    resp = await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "zyTCAlFPjgYC", "duration_minutes": 0},
    )
    assert resp.status_code == 422


async def test_list_sessions_newest_first(client):
    await _add_book(client, book_id="a", title="A")
    await _add_book(client, book_id="b", title="B")
    await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "a", "duration_minutes": 10, "session_date": "2026-01-01T08:00:00Z"},
    )
    await client.post(
        f"/api/users/{USER_ID}/sessions",
        json={"book_id": "b", "duration_minutes": 20, "session_date": "2026-01-02T08:00:00Z"},
    )

    sessions = (await client.get(f"/api/users/{USER_ID}/sessions")).json()
    assert [s["duration_minutes"] for s in sessions] == [20, 10]

    sessions = (await client.get(f"/api/users/{USER_ID}/sessions", params={"book_id": "a"})).json()
    assert len(sessions) == 1
