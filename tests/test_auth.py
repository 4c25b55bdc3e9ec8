"""
tests/test_auth.py
"""
from __future__ import annotations

from flask_jwt_extended import decode_token

from folio.extensions import db
from folio.models import AdminUser

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME

LOGIN = "/api/v1/auth/login"


def test_successful_login(app, client):
    rv = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert rv.status_code == 200
    body = rv.get_json()
    assert body["user"]["username"] == ADMIN_USERNAME
    with app.app_context():
        claims = decode_token(body["access_token"])
        assert claims["role"] == "admin"
        assert AdminUser.query.filter_by(username=ADMIN_USERNAME).one().last_login_at is not None


def test_wrong_password(client):
    rv = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": "nope"})
    assert rv.status_code == 401


def test_unknown_user(client):
    rv = client.post(LOGIN, json={"username": "ghost", "password": ADMIN_PASSWORD})
    assert rv.status_code == 401


def test_missing_fields(client):
    assert client.post(LOGIN, json={"username": ADMIN_USERNAME}).status_code == 400
    assert client.post(LOGIN, data="not json").status_code == 400


def test_disabled_account(app, client):
    with app.app_context():
        user = AdminUser.query.filter_by(username=ADMIN_USERNAME).one()
        user.is_active = False
        db.session.commit()

    rv = client.post(LOGIN, json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert rv.status_code == 403
