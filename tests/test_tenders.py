# tests/test_tenders.py

from datetime import timedelta

from app.core.utils import dates
from app.modules.filters.models import CustomFilter
from app.modules.tenders import services
from app.modules.tenders.models import Entity
from app.modules.tenders.schemas import SortDirection, SortField, TenderStatus

def days_from_today(days, hour=12):
    return dates.start_of_day(dates.today()) + timedelta(days=days, hours=hour)

def ids(items):
    return [item["id"] for item in items]

def test_anonymous_listing_returns_active_tenders_by_deadline(client, add_tenders):
    add_tenders(
        {"id": "late", "proposal_deadline": days_from_today(20), "publish_date": days_from_today(-3)},
        {"id": "soon", "proposal_deadline": days_from_today(2), "publish_date": days_from_today(-1)},
        {"id": "gone", "proposal_deadline": days_from_today(-2), "publish_date": days_from_today(-9)},
        {"id": "undated", "publish_date": days_from_today(-1)},
    )

    response = client.get("/api/tenders/")
    assert response.status_code == 200
    data = response.json()
    assert ids(data["items"]) == ["soon", "late"]
    assert data["total"] == 2
    assert data["status"] == "active"
    assert data["items"][0]["is_favorite"] is False
    assert data["items"][0]["time_remaining"]["days"] == 2

def test_expired_listing_sorted_descending(client, add_tenders):
    add_tenders(
        {"id": "older", "proposal_deadline": days_from_today(-10)},
        {"id": "recent", "proposal_deadline": days_from_today(-1)},
        {"id": "open", "proposal_deadline": days_from_today(3)},
    )

    response = client.get("/api/tenders/", params={"status": "expired", "sort_direction": "desc"})
    assert response.status_code == 200
    assert ids(response.json()["items"]) == ["recent", "older"]

def test_search_narrows_before_filters(client, add_tenders, make_user, db_session):
    user_id, headers = make_user()
    db_session.add(CustomFilter(id="f1", user_id=user_id, name="Lisboa", district="Lisboa"))
    db_session.commit()
    add_tenders(
        {"id": "match", "title": "Reparação de escola", "district": "Lisboa", "proposal_deadline": days_from_today(5)},
        {"id": "other-district", "title": "Escola nova", "district": "Porto", "proposal_deadline": days_from_today(5)},
        {"id": "other-title", "title": "Estradas", "district": "Lisboa", "proposal_deadline": days_from_today(5)},
    )

    response = client.get("/api/tenders/", params={"match": "ESCOLA", "filter_ids": ["f1"]}, headers=headers)
    assert response.status_code == 200
    assert ids(response.json()["items"]) == ["match"]

def test_search_matches_entity_name(client, add_tenders):
    add_tenders(
        {"id": "a", "entity": "Câmara Municipal de Sintra", "proposal_deadline": days_from_today(5)},
        {"id": "b", "entity": "Município de Faro", "proposal_deadline": days_from_today(5)},
    )
    response = client.get("/api/tenders/", params={"match": "sintra"})
    assert ids(response.json()["items"]) == ["a"]

def test_filters_of_another_user_are_ignored(client, add_tenders, make_user, db_session):
    _, headers = make_user("me@example.com")
    other_id, _ = make_user("other@example.com")
    db_session.add(CustomFilter(id="foreign", user_id=other_id, name="Porto", district="Porto"))
    db_session.commit()
    add_tenders(
        {"id": "lisboa", "district": "Lisboa", "proposal_deadline": days_from_today(5)},
        {"id": "porto", "district": "Porto", "proposal_deadline": days_from_today(6)},
    )

    response = client.get("/api/tenders/", params={"filter_ids": ["foreign"]}, headers=headers)
    assert ids(response.json()["items"]) == ["lisboa", "porto"]

def test_listing_marks_favorites(client, add_tenders, make_user):
    _, headers = make_user()
    add_tenders(
        {"id": "t1", "proposal_deadline": days_from_today(5)},
        {"id": "t2", "proposal_deadline": days_from_today(6)},
    )
    client.post("/api/favorites/t2/toggle", headers=headers)

    items = client.get("/api/tenders/", headers=headers).json()["items"]
    assert {item["id"]: item["is_favorite"] for item in items} == {"t1": False, "t2": True}

def test_invalid_sort_field(client):
    response = client.get("/api/tenders/", params={"sort_field": "price"})
    assert response.status_code == 422

def test_get_tender(client, add_tenders):
    add_tenders({
        "id": "t1",
        "proposal_deadline": days_from_today(1),
        "multi_factor_criterion": "Preço 70%|Qualidade 30%",
    })
    response = client.get("/api/tenders/t1")
    assert response.status_code == 200
    data = response.json()
    assert data["award_criteria"] == ["Preço 70%", "Qualidade 30%"]
    assert data["time_remaining"]["text"] == "Expira amanhã"

def test_get_missing_tender(client):
    response = client.get("/api/tenders/missing")
    assert response.status_code == 404

def test_entity_tenders(client, add_tenders, db_session):
    db_session.add(Entity(tax_id="500000000", name="Município de Braga"))
    db_session.commit()
    add_tenders(
        {"id": "open", "tax_id": "500000000", "proposal_deadline": days_from_today(4)},
        {"id": "closed", "tax_id": "500000000", "proposal_deadline": days_from_today(-4)},
        {"id": "foreign", "tax_id": "600000000", "proposal_deadline": days_from_today(4)},
    )

    data = client.get("/api/tenders/entity/500000000").json()
    assert data["name"] == "Município de Braga"
    assert ids(data["items"]) == ["open"]

    data = client.get("/api/tenders/entity/500000000", params={"status": "expired"}).json()
    assert ids(data["items"]) == ["closed"]

def test_unknown_entity_tenders(client):
    response = client.get("/api/tenders/entity/999999999")
    assert response.status_code == 404

def test_list_tenders_service_uses_reference_time(gateway, add_tenders):
    now = dates.start_of_day(dates.today()) + timedelta(hours=9)
    add_tenders(
        {"id": "a", "procedure_number": "12/2024", "proposal_deadline": now + timedelta(days=3)},
        {"id": "b", "procedure_number": "3/2024", "proposal_deadline": now + timedelta(days=5)},
    )

    result = services.list_tenders(
        gateway,
        status=TenderStatus.ACTIVE,
        sort_field=SortField.PROCEDURE_NUMBER,
        sort_direction=SortDirection.ASC,
        now=now,
    )
    assert result.ok
    assert [card.id for card in result.value.items] == ["b", "a"]
    assert result.value.sort_field == SortField.PROCEDURE_NUMBER

def test_custom_filters_require_authentication(client, add_tenders):
    add_tenders({"id": "t1", "proposal_deadline": days_from_today(5)})

    response = client.get("/api/tenders/", params={"filter_ids": ["f1"]})
    assert response.status_code == 401

    response = client.get("/api/tenders/", params={"filter_ids": ["f1"]},
                          headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
