from fastapi.testclient import TestClient
from notes_api.main import app
import uuid

client = TestClient(app)


def make_account(first="Note", last="Owner"):
    body = {
        "email": f"note_{uuid.uuid4().hex[:10]}@example.com",
        "name": f"{first} {last}",
        "provider": "google",
        "providerAccountId": uuid.uuid4().hex,
    }
    r = client.post("/api/accounts/auth", json=body)
    assert r.status_code == 200, r.text
    return r.json()["id"]


def make_template(owner_id, name="Solution Template"):
    fields = [
        {"label": "Background", "order": 1, "isRequired": True},
        {"label": "Solution", "order": 2, "isRequired": True},
        {"label": "Notes", "order": 3, "isRequired": False},
    ]
    r = client.post("/api/templates", json={"name": name, "ownerId": owner_id, "fields": fields})
    assert r.status_code == 200, r.text
    return r.json()


def make_note(owner_id, template, title="Test Note", sections=None, status=None):
    if sections is None:
        sections = [
            {"fieldId": template["fields"][0]["id"], "content": "Background content"},
            {"fieldId": template["fields"][1]["id"], "content": "Solution content"},
        ]
    body = {"title": title, "templateId": template["id"], "ownerId": owner_id, "sections": sections}
    if status is not None:
        body["status"] = status
    r = client.post("/api/notes", json=body)
    assert r.status_code == 200, r.text
    return r.json()


def test_note_crud():
    owner = make_account()
    tpl = make_template(owner)

    # Create
    note = make_note(owner, tpl, title="E2E Test Note")
    nid = note["id"]
    assert note["status"] == "Draft"
    assert note["title"] == "E2E Test Note"
    assert note["templateId"] == tpl["id"]

    # Get
    r = client.get(f"/api/notes/{nid}")
    assert r.status_code == 200
    got = r.json()
    assert got["templateName"] == "Solution Template"
    assert got["owner"]["firstName"] == "Note"
    assert got["owner"]["lastName"] == "Owner"
    assert [s["fieldLabel"] for s in got["sections"]] == ["Background", "Solution"]
    assert [s["content"] for s in got["sections"]] == ["Background content", "Solution content"]
    assert got["sections"][0]["isRequired"] is True

    # List
    r = client.get("/api/notes")
    assert r.status_code == 200
    assert nid in [n["id"] for n in r.json()]

    # Update title and section content
    body = {
        "title": "Updated E2E Note",
        "sections": [
            {"id": got["sections"][0]["id"], "content": "Updated background"},
            {"id": got["sections"][1]["id"], "content": "Updated solution"},
        ],
    }
    r = client.put(f"/api/notes/{nid}", params={"ownerId": owner}, json=body)
    assert r.status_code == 200, r.text
    upd = r.json()
    assert upd["title"] == "Updated E2E Note"
    assert [s["content"] for s in upd["sections"]] == ["Updated background", "Updated solution"]
    # bindings are untouched
    assert [s["fieldId"] for s in upd["sections"]] == [s["fieldId"] for s in got["sections"]]

    # Delete
    r = client.delete(f"/api/notes/{nid}", params={"ownerId": owner})
    assert r.status_code == 200
    assert r.json()["deleted"] == nid
    assert client.get(f"/api/notes/{nid}").status_code == 404


def test_publish_and_unpublish():
    owner = make_account()
    tpl = make_template(owner)
    note = make_note(owner, tpl)

    r = client.post(f"/api/notes/{note['id']}/publish", params={"ownerId": owner})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "Publish"
    assert client.get(f"/api/notes/{note['id']}").json()["status"] == "Publish"

    # publishing twice is fine
    r = client.post(f"/api/notes/{note['id']}/publish", params={"ownerId": owner})
    assert r.status_code == 200
    assert r.json()["status"] == "Publish"

    r = client.post(f"/api/notes/{note['id']}/unpublish", params={"ownerId": owner})
    assert r.status_code == 200
    assert r.json()["status"] == "Draft"


def test_create_with_explicit_status():
    owner = make_account()
    tpl = make_template(owner)
    note = make_note(owner, tpl, status="Publish")
    assert note["status"] == "Publish"

    r = client.post("/api/notes", json={
        "title": "Bad status",
        "templateId": tpl["id"],
        "ownerId": owner,
        "status": "InvalidStatus",
    })
    assert r.status_code == 400
    assert r.json()["kind"] == "ConstraintViolation"


def test_unknown_section_id_rolls_back_title():
    owner = make_account()
    tpl = make_template(owner)
    note = make_note(owner, tpl, title="Original")

    body = {"title": "Should not stick", "sections": [{"id": str(uuid.uuid4()), "content": "nope"}]}
    r = client.put(f"/api/notes/{note['id']}", params={"ownerId": owner}, json=body)
    assert r.status_code == 400
    assert r.json()["kind"] == "ConstraintViolation"
    assert client.get(f"/api/notes/{note['id']}").json()["title"] == "Original"


def test_section_on_foreign_field_is_rejected():
    owner = make_account()
    tpl = make_template(owner)
    other = make_template(owner, name="Other Template")
    title = f"Foreign-{uuid.uuid4().hex[:8]}"

    r = client.post("/api/notes", json={
        "title": title,
        "templateId": tpl["id"],
        "ownerId": owner,
        "sections": [{"fieldId": other["fields"][0]["id"], "content": "x"}],
    })
    assert r.status_code == 400
    assert r.json()["kind"] == "ConstraintViolation"
    assert client.get("/api/notes", params={"q": title}).json() == []


def test_create_with_unknown_template_is_rejected():
    owner = make_account()
    r = client.post("/api/notes", json={"title": "Orphan", "templateId": str(uuid.uuid4()), "ownerId": owner})
    assert r.status_code == 400
    assert r.json()["kind"] == "ConstraintViolation"


def test_note_errors():
    owner = make_account()
    tpl = make_template(owner)
    note = make_note(owner, tpl)

    r = client.get(f"/api/notes/{uuid.uuid4()}")
    assert r.status_code == 404

    r = client.get("/api/notes/not-a-uuid")
    assert r.status_code == 400

    r = client.post("/api/notes", content=b"invalid-json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

    # Missing ownerId
    r = client.put(f"/api/notes/{note['id']}", json={"title": "Test"})
    assert r.status_code == 400
    assert r.json()["kind"] == "InvalidInput"
    r = client.post(f"/api/notes/{note['id']}/publish")
    assert r.status_code == 400

    # Malformed ownerId
    r = client.delete(f"/api/notes/{note['id']}", params={"ownerId": "nope"})
    assert r.status_code == 400

    # Wrong owner
    other = make_account(first="Someone", last="Else")
    for call in (
        lambda: client.put(f"/api/notes/{note['id']}", params={"ownerId": other}, json={"title": "Hijack"}),
        lambda: client.post(f"/api/notes/{note['id']}/publish", params={"ownerId": other}),
        lambda: client.post(f"/api/notes/{note['id']}/unpublish", params={"ownerId": other}),
        lambda: client.delete(f"/api/notes/{note['id']}", params={"ownerId": other}),
    ):
        r = call()
        assert r.status_code == 403
        assert r.json()["kind"] == "Forbidden"
    unchanged = client.get(f"/api/notes/{note['id']}").json()
    assert unchanged["title"] == note["title"]
    assert unchanged["status"] == "Draft"

    r = client.put(f"/api/notes/{uuid.uuid4()}", params={"ownerId": owner}, json={"title": "Ghost"})
    assert r.status_code == 404


def test_note_filters():
    account1 = make_account(first="Filter", last="One")
    account2 = make_account(first="Filter", last="Two")
    tpl1 = make_template(account1, name="Template One")
    tpl2 = make_template(account2, name="Template Two")
    tag = uuid.uuid4().hex[:6]

    n1 = make_note(account1, tpl1, title=f"Design Document {tag}")
    n2 = make_note(account1, tpl1, title=f"Meeting Notes {tag}", status="Publish")
    n3 = make_note(account2, tpl2, title=f"Project Plan {tag}")

    r = client.get("/api/notes", params={"ownerId": account1})
    assert r.status_code == 200
    assert [n["id"] for n in r.json()] == [n2["id"], n1["id"]]

    r = client.get("/api/notes", params={"templateId": tpl2["id"]})
    assert [n["id"] for n in r.json()] == [n3["id"]]

    r = client.get("/api/notes", params={"ownerId": account1, "status": "Draft"})
    assert [n["id"] for n in r.json()] == [n1["id"]]

    r = client.get("/api/notes", params={"ownerId": account1, "status": "Publish"})
    assert [n["id"] for n in r.json()] == [n2["id"]]

    r = client.get("/api/notes", params={"q": f"MEETING NOTES {tag}"})
    assert [n["id"] for n in r.json()] == [n2["id"]]

    # list items carry sections like the single view
    assert len(r.json()[0]["sections"]) == 2

    r = client.get("/api/notes", params={"status": "Archived"})
    assert r.status_code == 400
    assert r.json()["kind"] == "InvalidInput"


def test_sections_follow_field_order_with_missing_fields():
    owner = make_account()
    tpl = make_template(owner)
    background, solution, notes = tpl["fields"]
    # given out of order and without the optional middle field
    note = make_note(owner, tpl, sections=[
        {"fieldId": notes["id"], "content": "third"},
        {"fieldId": background["id"], "content": "first"},
    ])
    assert [s["fieldLabel"] for s in note["sections"]] == ["Background", "Notes"]
    assert [s["fieldOrder"] for s in note["sections"]] == [1, 3]
    assert solution["id"] not in [s["fieldId"] for s in note["sections"]]


def test_title_length_limit():
    owner = make_account()
    tpl = make_template(owner)
    note = make_note(owner, tpl, title="a" * 100, sections=[])
    assert len(note["title"]) == 100

    r = client.post("/api/notes", json={"title": "a" * 101, "templateId": tpl["id"], "ownerId": owner})
    assert r.status_code == 400

    r = client.put(f"/api/notes/{note['id']}", params={"ownerId": owner}, json={"title": "b" * 101})
    assert r.status_code == 400
    assert client.get(f"/api/notes/{note['id']}").json()["title"] == "a" * 100
