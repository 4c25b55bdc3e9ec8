"""
tests/test_admin_content_api.py
"""
from __future__ import annotations

import json
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from folio.extensions import db
from folio.models import AuditLog, Section

URL = "/api/v1/admin/content/interesanti"


# ───────────────────────── helpers ────────────────────────────────────
def _put(client, headers, items, url=URL):
    return client.put(url, json={"content": items}, headers=headers)


def _text(html, order_index, id=None):
    item = {"content_type": "text", "content": html, "order_index": order_index}
    if id is not None:
        item["id"] = id
    return item


# ───────────────────────── auth ───────────────────────────────────────
def test_requires_token(client):
    rv = client.get(URL)
    assert rv.status_code == 401
    assert rv.get_json()["error"] == "AuthenticationRequired"


def test_expired_token_is_reported_as_session_expiry(client, token_factory):
    token = token_factory(expires_delta=timedelta(seconds=-5))
    rv = client.get(URL, headers={"Authorization": f"Bearer {token}"})

    assert rv.status_code == 401
    assert rv.get_json()["error"] == "SessionExpired"


def test_garbage_token_is_unauthorized(client):
    rv = client.get(URL, headers={"Authorization": "Bearer not-a-jwt"})
    assert rv.status_code == 401


def test_non_admin_role_is_forbidden(client, token_factory):
    token = token_factory(role="viewer")
    rv = client.get(URL, headers={"Authorization": f"Bearer {token}"})
    assert rv.status_code == 403


def test_token_of_deleted_user_is_rejected(client, token_factory):
    token = token_factory(user_id=4242)
    rv = client.get(URL, headers={"Authorization": f"Bearer {token}"})
    assert rv.status_code == 401


# ───────────────────────── replace-all ────────────────────────────────
def test_put_returns_canonical_list(client, auth_headers):
    rv = _put(client, auth_headers, [_text("<p>A</p>", 0), _text("<p></p>", 1), _text("<p>B</p>", 2)])

    assert rv.status_code == 200
    body = rv.get_json()
    assert body["section"] == "interesanti"
    assert [i["content"] for i in body["content"]] == ["<p>A</p>", "<p>B</p>"]
    assert [i["order_index"] for i in body["content"]] == [0, 1]
    assert all(i["id"] for i in body["content"])
    assert body["changes"]["skipped_empty"] == [1]

    fetched = client.get(URL, headers=auth_headers).get_json()
    assert fetched["content"] == body["content"]


def test_resending_canonical_list_changes_nothing(client, auth_headers):
    first = _put(client, auth_headers, [_text("<p>A</p>", 0), _text("<p>B</p>", 1)]).get_json()
    wire = [
        {k: i[k] for k in ("id", "content_type", "content", "order_index")}
        for i in first["content"]
    ]

    second = _put(client, auth_headers, wire).get_json()

    assert [i["id"] for i in second["content"]] == [i["id"] for i in first["content"]]
    assert second["changes"] == {"created": [], "updated": [], "deleted": [], "skipped_empty": []}


def test_unknown_section(client, auth_headers):
    rv = _put(client, auth_headers, [], url="/api/v1/admin/content/blog")
    assert rv.status_code == 400
    assert rv.get_json()["error"] == "ValidationError"


def test_unprovisioned_section(app, client, auth_headers):
    with app.app_context():
        db.session.delete(Section.query.filter_by(key="fragmenti").one())
        db.session.commit()

    rv = _put(client, auth_headers, [_text("<p>A</p>", 0)], url="/api/v1/admin/content/fragmenti")

    assert rv.status_code == 404
    assert rv.get_json()["error"] == "SectionNotFound"


def test_validation_error_applies_nothing(client, auth_headers):
    _put(client, auth_headers, [_text("<p>A</p>", 0)])

    rv = _put(client, auth_headers, [_text("<p>B</p>", 0), {"content_type": "video", "content": "x", "order_index": 1}])

    assert rv.status_code == 400
    body = rv.get_json()
    assert body["details"][0]["field"] == "content[1].content_type"
    contents = [i["content"] for i in client.get(URL, headers=auth_headers).get_json()["content"]]
    assert contents == ["<p>A</p>"]


def test_body_must_carry_content_array(client, auth_headers):
    assert client.put(URL, json={"items": []}, headers=auth_headers).status_code == 400
    assert client.put(URL, data="nope", headers=auth_headers).status_code == 400
    assert _put(client, auth_headers, {"content_type": "text"}).status_code == 400


def test_too_long_content_is_rejected(client, auth_headers):
    rv = _put(client, auth_headers, [_text("x" * 10001, 0)])
    assert rv.status_code == 400


def test_storage_failure_rolls_back(app, client, auth_headers, monkeypatch):
    _put(client, auth_headers, [_text("<p>A</p>", 0)])

    def _boom(**kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr("folio.application.content.reconcile_section.log_action", _boom)

    rv = _put(client, auth_headers, [_text("<p>B</p>", 0), _text("<p>C</p>", 1)])

    assert rv.status_code == 500
    assert rv.get_json()["error"] == "StorageError"

    monkeypatch.undo()
    contents = [i["content"] for i in client.get(URL, headers=auth_headers).get_json()["content"]]
    assert contents == ["<p>A</p>"]


def test_image_items_round_trip_as_json(client, auth_headers):
    image = {"content_type": "image", "content": json.dumps({"src": "/uploads/a.jpg", "alt": "Cover"}), "order_index": 0}
    body = _put(client, auth_headers, [image]).get_json()

    assert json.loads(body["content"][0]["content"]) == {"src": "/uploads/a.jpg", "alt": "Cover"}


def test_put_is_audited(app, client, auth_headers, admin_id):
    _put(client, auth_headers, [_text("<p>A</p>", 0)])

    with app.app_context():
        entry = AuditLog.query.filter_by(action="content.reconcile").one()
        assert entry.actor_id == str(admin_id)


# ───────────────────────── single delete ──────────────────────────────
def test_delete_item_compacts_order(client, auth_headers):
    body = _put(client, auth_headers, [_text("<p>A</p>", 0), _text("<p>B</p>", 1), _text("<p>C</p>", 2)]).get_json()
    b_id = body["content"][1]["id"]

    rv = client.delete(f"/api/v1/admin/content/items/{b_id}", headers=auth_headers)

    assert rv.status_code == 200
    assert rv.get_json()["section"] == "interesanti"
    remaining = client.get(URL, headers=auth_headers).get_json()["content"]
    assert [(i["content"], i["order_index"]) for i in remaining] == [("<p>A</p>", 0), ("<p>C</p>", 1)]


def test_delete_missing_item(client, auth_headers):
    rv = client.delete("/api/v1/admin/content/items/777", headers=auth_headers)
    assert rv.status_code == 404


# ───────────────────────── sections ───────────────────────────────────
def test_sections_overview(client, auth_headers):
    _put(client, auth_headers, [_text("<p>A</p>", 0)])

    rv = client.get("/api/v1/admin/sections", headers=auth_headers)

    assert rv.status_code == 200
    sections = {s["key"]: s for s in rv.get_json()["sections"]}
    assert set(sections) == {"interesanti", "gramatas", "fragmenti"}
    assert sections["interesanti"]["count"] == 1
    assert sections["gramatas"]["title"] == "Grāmatas"
    assert all(s["provisioned"] for s in sections.values())
