"""
Shared fixtures: a fresh in-memory database per test, seeded with the
default admin/user accounts and catalog.
"""
import pytest
from flask import g

from storefront.app import create_app
from storefront.config import TestConfig
from storefront.extensions import db
from storefront.seed import seed
from storefront.services.order_service import OrderService


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    # requests reuse the fixture's app context, so flask-login's cached
    # user in `g` would otherwise leak from one request into the next
    @app.teardown_request
    def _forget_user(exc):
        g.pop("_login_user", None)

    return app.test_client()


@pytest.fixture
def seeded(app):
    return seed()


@pytest.fixture
def products(seeded):
    return seeded["products"]


@pytest.fixture
def user_id(seeded):
    return seeded["user"].id


@pytest.fixture
def admin_id(seeded):
    return seeded["admin"].id


@pytest.fixture
def service(app):
    return OrderService(db.session)


def _login(client, email, password):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return res.get_json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(client, seeded):
    return bearer(_login(client, "user@example.com", "user123"))


@pytest.fixture
def admin_headers(client, seeded):
    return bearer(_login(client, "admin@example.com", "admin123"))
