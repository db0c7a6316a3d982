"""
Shared fixtures.

The environment is set before any ``entrega_*`` import so the engine binds to
an in-memory SQLite database and the hashing/encryption keys are available.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-9f8e7d6c5b4a"
os.environ["PASSWORD_HASH_SALT"] = "test-password-salt-1a2b3c4d"
os.environ["TESTING"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

from decimal import Decimal

import pytest

from entrega_shared.constants import AdminRole, PaymentMethod, RestaurantStatus
from entrega_shared.db import get_session, init_engine
from entrega_shared.models import Admin, Base, Product, Restaurant, User


@pytest.fixture(autouse=True)
def database():
    engine = init_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield engine


@pytest.fixture
def make_user():
    def _make(email="ana@example.com", name="Ana", password="senha1234"):
        with get_session() as session:
            user = User(name=name, email=email)
            user.set_password(password)
            session.add(user)
            session.flush()
            return user.id

    return _make


@pytest.fixture
def user_id(make_user):
    return make_user()


@pytest.fixture
def other_user_id(make_user):
    return make_user(email="bruno@example.com", name="Bruno")


@pytest.fixture
def make_restaurant():
    def _make(
        name="Pizza Hut",
        delivery_fee="5.99",
        status=RestaurantStatus.APPROVED.value,
        payment_methods=None,
        **fields,
    ):
        with get_session() as session:
            restaurant = Restaurant(
                name=name,
                category=fields.pop("category", "Pizza"),
                delivery_time=fields.pop("delivery_time", "25-40 min"),
                delivery_fee=Decimal(delivery_fee),
                status=status,
                payment_methods=payment_methods or [method.value for method in PaymentMethod],
                **fields,
            )
            session.add(restaurant)
            session.flush()
            return restaurant.id

    return _make


@pytest.fixture
def make_product():
    def _make(restaurant_id, name="Pizza Margherita", price="10.00"):
        with get_session() as session:
            product = Product(
                restaurant_id=restaurant_id,
                name=name,
                price=Decimal(price),
                category="Pizzas",
            )
            session.add(product)
            session.flush()
            return product.id

    return _make


@pytest.fixture
def make_admin():
    def _make(username="admin", password="admin1234", role=AdminRole.SUPER_ADMIN.value, **fields):
        with get_session() as session:
            admin = Admin(
                username=username,
                name=fields.pop("name", username.title()),
                role=role,
                is_active=fields.pop("is_active", True),
            )
            admin.set_password(password)
            session.add(admin)
            session.flush()
            return admin.id

    return _make


@pytest.fixture
def client_app():
    from entrega_clients.app import create_app

    return create_app({"TESTING": True})


@pytest.fixture
def client(client_app):
    return client_app.test_client()


@pytest.fixture
def admin_app():
    from entrega_admin.app import create_app

    return create_app({"TESTING": True})


@pytest.fixture
def admin_client(admin_app):
    return admin_app.test_client()


@pytest.fixture
def signup(client_app):
    """
    Sign a customer up through the API and return auth headers. A separate
    test client is used so the login cookie does not leak into ``client``.
    """

    def _signup(email="ana@example.com", name="Ana", password="senha1234"):
        response = client_app.test_client().post(
            "/api/auth/signup", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.get_json()
        token = response.get_json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _signup


@pytest.fixture
def admin_login(admin_client, make_admin):
    """Create an admin and return auth headers for it."""

    def _login(username="admin", password="admin1234", role=AdminRole.SUPER_ADMIN.value):
        make_admin(username=username, password=password, role=role)
        response = admin_client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.get_json()
        token = response.get_json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login
