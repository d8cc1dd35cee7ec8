"""
Therapist roster tests - relational store CRUD and error reporting
"""
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from physioflow.database.relational import TherapistRow


def _create(client, **fields):
    response = client.post("/api/v1/therapists", json=fields)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_therapist(client):
    therapist = _create(client, firstname="Mia", lastname="Ross", email="mia@clinic.com", clinic="North")
    assert therapist["id"]
    assert therapist["email"] == "mia@clinic.com"
    assert therapist["permission"] == "therapist"
    assert therapist["createdat"]


def test_list_is_newest_first(client):
    first = _create(client, email="first@clinic.com")
    second = _create(client, email="second@clinic.com")
    third = _create(client, email="third@clinic.com")

    response = client.get("/api/v1/therapists")
    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [third["id"], second["id"], first["id"]]


def test_create_requires_email(client):
    response = client.post("/api/v1/therapists", json={"firstname": "NoEmail"})
    assert response.status_code == 422
    assert "email" in response.json()["error"]


def test_create_rejects_unknown_permission(client):
    response = client.post("/api/v1/therapists", json={"email": "x@clinic.com", "permission": "owner"})
    assert response.status_code == 422


def test_update_therapist(client):
    therapist = _create(client, email="mia@clinic.com", clinic="North")

    response = client.patch("/api/v1/therapists", json={"id": therapist["id"], "permission": "admin"})

    assert response.status_code == 200
    data = response.json()
    assert data["permission"] == "admin"
    assert data["clinic"] == "North"
    assert data["email"] == "mia@clinic.com"


def test_update_requires_id(client):
    response = client.patch("/api/v1/therapists", json={"clinic": "South"})
    assert response.status_code == 400
    assert response.json() == {"error": "ID required"}


def test_update_unknown_therapist_is_not_found(client):
    response = client.patch("/api/v1/therapists", json={"id": "missing", "clinic": "South"})
    assert response.status_code == 404
    assert response.json() == {"error": "Therapist not found"}


def test_delete_therapist(client):
    therapist = _create(client, email="gone@clinic.com")

    response = client.delete("/api/v1/therapists", params={"id": therapist["id"]})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/api/v1/therapists").json() == []


def test_delete_requires_id(client):
    response = client.delete("/api/v1/therapists")
    assert response.status_code == 400
    assert response.json() == {"error": "ID required"}


def test_list_order_is_stable_for_equal_timestamps(app):
    stamp = datetime(2024, 1, 2, tzinfo=timezone.utc)
    with Session(app.state.engine) as session, session.begin():
        session.add_all([
            TherapistRow(id=therapist_id, email=f"{therapist_id}@clinic.com", createdat=stamp)
            for therapist_id in ("b", "c", "a")
        ])

    assert [t.id for t in app.state.therapists.list()] == ["c", "b", "a"]
