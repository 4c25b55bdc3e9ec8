"""
tests/conftest.py
"""
from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest
from flask import Flask
from flask.testing import FlaskClient
from flask_jwt_extended import create_access_token

from folio import create_app
from folio.application.content.sections import sync_sections
from folio.extensions import db
from folio.models import AdminUser

ADMIN_USERNAME = "autore"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(tmp_path: Path) -> Generator[Flask, None, None]:
    """A fresh app per test: its own SQLite file and upload folder."""
    app = create_app(
        "testing",
        {
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'folio.sqlite3'}",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        },
    )

    with app.app_context():
        db.create_all()
        sync_sections()

        admin = AdminUser()
        admin.username = ADMIN_USERNAME
        admin.email = "autore@example.com"
        admin.role = "admin"
        admin.set_password(ADMIN_PASSWORD)
        db.session.add(admin)
        db.session.commit()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def admin_id(app: Flask) -> int:
    with app.app_context():
        return AdminUser.query.filter_by(username=ADMIN_USERNAME).one().id


@pytest.fixture
def token_factory(app: Flask, admin_id: int) -> Callable[..., str]:
    """Mint tokens directly, e.g. already-expired ones or a non-admin role."""

    def _make(role: str = "admin", expires_delta: timedelta | None = None, user_id: int | None = None) -> str:
        with app.app_context():
            return create_access_token(
                identity=str(user_id if user_id is not None else admin_id),
                additional_claims={"role": role, "username": ADMIN_USERNAME},
                expires_delta=expires_delta if expires_delta is not None else timedelta(minutes=5),
            )

    return _make


@pytest.fixture
def auth_headers(client: FlaskClient) -> dict[str, str]:
    rv = client.post("/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert rv.status_code == 200
    return {"Authorization": f"Bearer {rv.get_json()['access_token']}"}


@pytest.fixture
def app_ctx(app: Flask) -> Generator[None, None, None]:
    """For calling application services directly."""
    with app.app_context():
        yield


@pytest.fixture
def wsgi_http(app: Flask) -> Generator[httpx.Client, None, None]:
    """An httpx client whose requests are served in-process by the app."""
    with httpx.Client(transport=httpx.WSGITransport(app=app), base_url="http://testserver") as http:
        yield http
