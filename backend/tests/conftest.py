# backend/tests/conftest.py
from __future__ import annotations

import pytest

from docfolio import create_app
from docfolio.content_store import ContentStore
from docfolio.extensions import db
from docfolio.models import User

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config.update(UPLOAD_FOLDER=str(tmp_path / "uploads"))

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return ContentStore()


@pytest.fixture
def admin_user(app):
    user = User(email=ADMIN_EMAIL, role="admin")
    user.set_password(ADMIN_PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    token = response.get_json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_page(store):
    """Insert a page row directly through the content store."""
    def _make(slug, **values):
        values.setdefault("title", slug.replace("-", " ").title())
        values.setdefault("order", 0)
        values.setdefault("only_for_admin", False)
        return store.insert("pages", {"slug": slug, **values})
    return _make


@pytest.fixture
def make_section(store):
    def _make(page, slug, **values):
        values.setdefault("title", slug.replace("-", " ").title())
        values.setdefault("order", 0)
        values.setdefault("show_in_main_page", False)
        return store.insert("sections", {"page_id": page.id, "slug": slug, **values})
    return _make
