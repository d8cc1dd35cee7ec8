"""
Admin gate tests - the predicate and its optional server-side enforcement
"""
import pytest
from fastapi.testclient import TestClient

from physioflow.database.schemas import Therapist
from physioflow.main import create_app
from physioflow.services.admin_gate import has_admin, is_admin

ROSTER = [
    {"email": "a@x.com", "permission": "admin"},
    {"email": "b@x.com", "permission": "therapist"},
]


def test_is_admin_predicate():
    assert is_admin(ROSTER, "a@x.com") is True
    assert is_admin(ROSTER, "b@x.com") is False
    assert is_admin(ROSTER, "c@x.com") is False


def test_is_admin_is_case_sensitive():
    assert is_admin(ROSTER, "A@x.com") is False


def test_is_admin_without_identity():
    assert is_admin(ROSTER, None) is False
    assert is_admin(ROSTER, "") is False
    assert is_admin([], "a@x.com") is False


def test_is_admin_accepts_models():
    roster = [Therapist(id="1", email="a@x.com", permission="admin")]
    assert is_admin(roster, "a@x.com") is True
    assert has_admin(roster) is True
    assert has_admin(ROSTER[1:]) is False


@pytest.fixture
def gated_client(tmp_path):
    app = create_app(
        data_file=str(tmp_path / "data.json"),
        database_url=f"sqlite:///{tmp_path / 'physioflow.db'}",
        enforce_admin_gate=True,
    )
    return TestClient(app)


def _token(client, email):
    response = client.post("/api/v1/auth/signup", json={"email": email, "password": "secret123"})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


def test_enforced_gate_requires_sign_in(gated_client):
    response = gated_client.post("/api/v1/therapists", json={"email": "a@x.com"})
    assert response.status_code == 401
    assert "error" in response.json()


def test_enforced_gate_allows_admins_only(gated_client):
    admin = _token(gated_client, "a@x.com")
    staff = _token(gated_client, "b@x.com")

    # Empty roster: the first admin can be created by any signed-in user
    response = gated_client.post("/api/v1/therapists", json={"email": "a@x.com", "permission": "admin"}, headers=admin)
    assert response.status_code == 200

    response = gated_client.post("/api/v1/therapists", json={"email": "b@x.com"}, headers=staff)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin permission required"}

    response = gated_client.post("/api/v1/therapists", json={"email": "b@x.com"}, headers=admin)
    assert response.status_code == 200

    # Reads stay open
    assert gated_client.get("/api/v1/therapists").status_code == 200
