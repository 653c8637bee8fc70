"""
Pytest fixtures and configuration for Bicycle Store backend tests

This file provides shared fixtures that can be used across all test modules.
Tests run against an in-memory SQLite database.
"""
import os

# Must be set before bicycle_store.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_SECRET"] = "test-secret-do-not-use-in-production"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from bicycle_store import models
from bicycle_store.core.auth import create_access_token, hash_password
from bicycle_store.core.database import Base, SessionLocal, engine
from bicycle_store.main import app


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session on a freshly created schema

    Scope: function (tables dropped after each test)
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fresh_session(db_session):
    """
    Factory for new sessions, to read back what requests committed
    without going through db_session's identity map
    """
    sessions = []

    def _make():
        session = SessionLocal()
        sessions.append(session)
        return session

    yield _make
    for session in sessions:
        session.close()


@pytest.fixture
def client(db_session):
    """TestClient on the real app, backed by the test database"""
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """
    Builds Authorization headers for a given email

    Usage:
        client.get(url, headers=auth_headers("ola@bikeshop.no"))
    """
    def _headers(email: str, user_id: int = 1) -> dict:
        token = create_access_token(user_id=user_id, email=email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def sample_customer_data():
    """
    Registration payload as sent by the web client
    """
    return {
        "firstName": "Ola",
        "lastName": "Nordmann",
        "email": "ola@bikeshop.no",
        "password": "Sykkel123",
        "address": {
            "country": "Norway",
            "streetAddress": "Storgata 1",
            "postalCode": "6002",
            "city": "Aalesund"
        }
    }


@pytest.fixture
def stored_customer(db_session):
    """
    Customer row with password "old1" and an empty cart
    """
    row = models.Customer(
        first_name="Kari",
        last_name="Nordmann",
        email="a@b.com",
        password_hash=hash_password("old1"),
        address_country="Norway",
        address_street="Kongens gate 10",
        address_postal_code="7011",
        address_city="Trondheim",
    )
    db_session.add(row)
    db_session.commit()
    db_session.refresh(row)
    return row


@pytest.fixture
def stored_product(db_session):
    """
    Active catalog product
    """
    row = models.Product(
        name="Trek Marlin 5",
        description="Hardtail mountain bike",
        category="BIKES",
        price=Decimal("7999.00"),
        stock=4,
        is_active=True,
    )
    db_session.add(row)
    db_session.commit()
    db_session.refresh(row)
    return row


@pytest.fixture
def stored_cart_item(db_session, stored_customer, stored_product):
    """
    One line in stored_customer's cart
    """
    row = models.CartItem(
        customer_id=stored_customer.id,
        product_id=stored_product.id,
        quantity=1,
        unit_price=Decimal("7999.00"),
    )
    db_session.add(row)
    db_session.commit()
    db_session.refresh(row)
    return row
