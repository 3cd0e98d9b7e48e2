"""Pytest configuration and fixtures"""

import pytest

from clubsite import create_app
from clubsite.models import db, User
from clubsite.auth import hash_password
from clubsite.seed import seed_admin


@pytest.fixture
def app(tmp_path):
    """App bound to a fresh in-memory database and a temporary upload folder"""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "LOG_LEVEL": "WARNING",
    })
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    return seed_admin("admin@example.com", "secret")


@pytest.fixture
def member_user(app):
    u = User(email="member@example.com", password_hash=hash_password("secret"), is_admin=False)
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def admin_client(client, admin_user):
    resp = client.post("/login", data={"email": "admin@example.com", "password": "secret"})
    assert resp.status_code == 302
    return client
