"""
Auth tests - sign up, sign in, current user, sign out
"""


def _headers(token):
    return {"Authorization": f"Bearer {token}"}


def test_signup_returns_token(client):
    response = client.post("/api/v1/auth/signup", json={"email": "mia@clinic.com", "password": "secret123"})
    assert response.status_code == 200
    data = response.json()
    assert data["accessToken"]
    assert data["tokenType"] == "bearer"
    assert data["email"] == "mia@clinic.com"


def test_duplicate_signup_conflicts(client):
    credentials = {"email": "mia@clinic.com", "password": "secret123"}
    assert client.post("/api/v1/auth/signup", json=credentials).status_code == 200

    response = client.post("/api/v1/auth/signup", json=credentials)
    assert response.status_code == 409
    assert response.json() == {"error": "Account already exists"}


def test_login(client):
    client.post("/api/v1/auth/signup", json={"email": "mia@clinic.com", "password": "secret123"})

    response = client.post("/api/v1/auth/login", json={"email": "mia@clinic.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["accessToken"]

    response = client.post("/api/v1/auth/login", json={"email": "mia@clinic.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_me_requires_token(client):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401

    response = client.get("/api/v1/auth/me", headers=_headers("garbage"))
    assert response.status_code == 401


def test_me_reports_admin_from_roster(client):
    token = client.post("/api/v1/auth/signup", json={"email": "mia@clinic.com", "password": "secret123"}).json()["accessToken"]

    response = client.get("/api/v1/auth/me", headers=_headers(token))
    assert response.status_code == 200
    assert response.json() == {"email": "mia@clinic.com", "isAdmin": False}

    client.post("/api/v1/therapists", json={"email": "mia@clinic.com", "permission": "admin"})

    response = client.get("/api/v1/auth/me", headers=_headers(token))
    assert response.json() == {"email": "mia@clinic.com", "isAdmin": True}


def test_logout_revokes_token(client):
    token = client.post("/api/v1/auth/signup", json={"email": "mia@clinic.com", "password": "secret123"}).json()["accessToken"]

    response = client.post("/api/v1/auth/logout", headers=_headers(token))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert client.get("/api/v1/auth/me", headers=_headers(token)).status_code == 401
    assert client.post("/api/v1/auth/logout", headers=_headers(token)).status_code == 401


def test_logout_decodes_token_once(app, client, monkeypatch):
    from physioflow.services import auth as auth_module

    token = client.post("/api/v1/auth/signup", json={"email": "mia@clinic.com", "password": "secret123"}).json()["accessToken"]
    calls = []
    original_decode = auth_module.jwt.decode

    def counting_decode(*args, **kwargs):
        calls.append(1)
        return original_decode(*args, **kwargs)

    monkeypatch.setattr(auth_module.jwt, "decode", counting_decode)
    app.state.auth.sign_out(token)

    assert len(calls) == 1
