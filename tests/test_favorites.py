# tests/test_favorites.py

from datetime import timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.core.result import FailureKind
from app.core.utils import dates
from app.modules.favorites import services

def days_from_today(days):
    return dates.start_of_day(dates.today()) + timedelta(days=days, hours=12)

def test_missing_settings_row_means_no_favorites(gateway):
    result = services.list_favorites(gateway, "42")
    assert result.ok
    assert result.value == set()

def test_toggle_adds_then_removes(gateway):
    added = services.toggle_favorite(gateway, "42", "t1")
    assert added.ok
    assert added.value == {"t1"}
    assert services.list_favorites(gateway, "42").value == {"t1"}

    removed = services.toggle_favorite(gateway, "42", "t1")
    assert removed.ok
    assert removed.value == set()
    assert services.list_favorites(gateway, "42").value == set()

def test_toggle_keeps_other_favorites_and_settings(gateway):
    gateway.upsert_user_settings("42", favorites=["t1"], followed_entities=["500000000"])
    services.toggle_favorite(gateway, "42", "t2")

    row = gateway.get_user_settings("42")
    assert row.favorites == ["t1", "t2"]
    assert row.followed_entities == ["500000000"]

def test_favorites_are_per_user(gateway):
    services.toggle_favorite(gateway, "1", "t1")
    assert services.list_favorites(gateway, "2").value == set()

def test_database_error_is_a_failure():
    gateway = MagicMock()
    gateway.get_user_settings.side_effect = OperationalError("SELECT", {}, Exception("down"))

    result = services.toggle_favorite(gateway, "42", "t1")
    assert not result.ok
    assert result.kind == FailureKind.FAILURE
    gateway.upsert_user_settings.assert_not_called()

def test_active_favorites_count(gateway, add_tenders):
    add_tenders(
        {"id": "open", "proposal_deadline": days_from_today(3)},
        {"id": "today", "proposal_deadline": days_from_today(0)},
        {"id": "closed", "proposal_deadline": days_from_today(-3)},
        {"id": "not-favorite", "proposal_deadline": days_from_today(3)},
    )
    for tender_id in ("open", "today", "closed"):
        services.toggle_favorite(gateway, "42", tender_id)

    assert services.active_favorites_count(gateway, "42").value == 2

def test_favorite_routes(client, add_tenders, make_user):
    _, headers = make_user()
    add_tenders(
        {"id": "t1", "proposal_deadline": days_from_today(3), "publish_date": days_from_today(-5)},
        {"id": "t2", "proposal_deadline": days_from_today(-1), "publish_date": days_from_today(-2)},
    )

    response = client.post("/api/favorites/t1/toggle", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"tender_id": "t1", "is_favorite": True, "favorites": ["t1"]}
    client.post("/api/favorites/t2/toggle", headers=headers)

    assert client.get("/api/favorites/", headers=headers).json() == {"favorites": ["t1", "t2"]}

    data = client.get("/api/favorites/tenders", headers=headers).json()
    # Newest publication first
    assert [item["id"] for item in data["items"]] == ["t2", "t1"]
    assert all(item["is_favorite"] for item in data["items"])
    assert data["active_count"] == 1

    assert client.get("/api/favorites/active-count", headers=headers).json() == {"active_count": 1}

    response = client.post("/api/favorites/t1/toggle", headers=headers)
    assert response.json()["is_favorite"] is False

def test_favorites_require_authentication(client):
    assert client.get("/api/favorites/").status_code == 401
    assert client.post("/api/favorites/t1/toggle").status_code == 401
