from fastapi.testclient import TestClient
from notes_api.main import app
import uuid

client = TestClient(app)


def auth_body(**overrides):
    body = {
        "email": f"acc_{uuid.uuid4().hex[:10]}@example.com",
        "name": "Ada Lovelace",
        "provider": "google",
        "providerAccountId": uuid.uuid4().hex,
    }
    body.update(overrides)
    return body


def test_create_or_get_account_creates_on_first_login():
    body = auth_body()
    r = client.post("/api/accounts/auth", json=body)
    assert r.status_code == 200, r.text
    a = r.json()
    assert a["id"]
    assert a["email"] == body["email"]
    assert a["firstName"] == "Ada"
    assert a["lastName"] == "Lovelace"
    assert a["fullName"] == "Ada Lovelace"
    assert a["isActive"] is True
    assert a["thumbnail"] is None
    assert a["lastLoginAt"] is not None


def test_same_identity_returns_same_account_with_fresh_details():
    body = auth_body()
    first = client.post("/api/accounts/auth", json=body).json()

    body["name"] = "Augusta King"
    body["thumbnail"] = "https://example.com/avatar.jpg"
    r = client.post("/api/accounts/auth", json=body)
    assert r.status_code == 200, r.text
    second = r.json()
    assert second["id"] == first["id"]
    assert second["firstName"] == "Augusta"
    assert second["lastName"] == "King"
    assert second["thumbnail"] == "https://example.com/avatar.jpg"


def test_single_word_name_has_empty_last_name():
    r = client.post("/api/accounts/auth", json=auth_body(name="Plato"))
    assert r.status_code == 200
    assert r.json()["firstName"] == "Plato"
    assert r.json()["lastName"] == ""
    assert r.json()["fullName"] == "Plato"


def test_email_taken_by_other_identity_is_rejected():
    body = auth_body()
    assert client.post("/api/accounts/auth", json=body).status_code == 200

    other = auth_body(email=body["email"], provider="github")
    r = client.post("/api/accounts/auth", json=other)
    assert r.status_code == 400
    assert r.json()["kind"] == "ConstraintViolation"


def test_get_account_by_id_and_email():
    created = client.post("/api/accounts/auth", json=auth_body()).json()

    r1 = client.get(f"/api/accounts/{created['id']}")
    assert r1.status_code == 200
    assert r1.json()["email"] == created["email"]

    r2 = client.get("/api/accounts/by-email", params={"email": created["email"]})
    assert r2.status_code == 200
    assert r2.json()["id"] == created["id"]


def test_get_account_errors():
    r = client.get(f"/api/accounts/{uuid.uuid4()}")
    assert r.status_code == 404

    r = client.get("/api/accounts/by-email", params={"email": "nobody-here@example.com"})
    assert r.status_code == 404

    r = client.get("/api/accounts/not-a-uuid")
    assert r.status_code == 400


def test_invalid_auth_body_is_bad_request():
    r = client.post("/api/accounts/auth", json={"email": "not-an-email", "name": "X", "provider": "google", "providerAccountId": "1"})
    assert r.status_code == 400
    r = client.post("/api/accounts/auth", content=b"invalid-json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
