import os

os.environ["DATABASE_URL"] = "sqlite://"
for key in ("ADMIN_API_KEY", "AUTH0_DOMAIN", "SENDGRID_API_KEY", "RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET",
            "RAZORPAY_TEST_KEY_ID", "RAZORPAY_TEST_KEY_SECRET"):
    os.environ.pop(key, None)

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest import mock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import Settings, get_settings
from storefront.dependencies import email_rate_limiter
from storefront.main import app
from storefront.models import Category, Product, Subcategory
from storefront.services import EmailService
from storefront.utils.database import Base, get_db

RAZORPAY_SECRET = "rzp_test_secret"


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        session_secret="test-secret",
        admin_api_key=None,
        auth0_domain=None,
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=RAZORPAY_SECRET,
        sendgrid_api_key=None,
        admin_email="owner@indosaga.in",
    )


@pytest.fixture
def client(session_factory, settings):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    email_rate_limiter._events.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sent_emails():
    """Every message handed to the mail provider, in order"""
    sent = []

    def record(service, message):
        sent.append(message)
        return True

    with mock.patch.object(EmailService, "send", autospec=True, side_effect=record):
        yield sent


@pytest.fixture
def catalog(db):
    """A small catalog: two categories, one subcategory, five products"""
    tables = Category(name="Dining Tables", description="Teak dining tables")
    chairs = Category(name="Chairs", description="Teak chairs")
    db.add_all([tables, chairs])
    db.flush()
    six_seater = Subcategory(name="6-Seater Tables", category_id=tables.id)
    db.add(six_seater)
    db.flush()

    now = datetime.now(timezone.utc)
    products = {
        "table": Product(name="Classic Teak Dining Table", price=Decimal("55000"), category_id=tables.id,
                         subcategory_id=six_seater.id, featured=True, stock=6),
        "chairs": Product(name="Premium Teak Chair Set", price=Decimal("48000"), category_id=chairs.id,
                          featured=True, stock=8),
        "deal": Product(name="Modern Teak Chairs - Flash Deal", price=Decimal("25000"), category_id=chairs.id,
                        is_deal=True, deal_price=Decimal("1"), deal_expiry=now + timedelta(days=1), stock=15),
        "expired": Product(name="Garden Teak Jhula", price=Decimal("42000"), category_id=chairs.id,
                           is_deal=True, deal_price=Decimal("1"), deal_expiry=now - timedelta(days=1), stock=8),
        "sold_out": Product(name="Sacred Temple Unit", price=Decimal("48000"), in_stock=False, stock=0),
    }
    db.add_all(products.values())
    db.commit()
    return {
        "tables": tables.id,
        "chairs": chairs.id,
        "six_seater": six_seater.id,
        **{key: product.id for key, product in products.items()},
    }


def sign_in(client, email="asha@indosaga.in", name="Asha Rao", local_cart_items=None):
    response = client.post("/api/auth/sync", json={
        "user": {"sub": f"auth0|{email}", "email": email, "name": name},
        "localCartItems": local_cart_items or [],
    })
    assert response.status_code == 200, response.text
    return response.json()


def checkout_body(**overrides):
    body = {
        "customerName": "Asha Rao",
        "customerPhone": "9876543210",
        "customerEmail": "asha@indosaga.in",
        "shippingAddress": "12 MG Road, Pune",
        "pincode": "411001",
        "paymentMethod": "cod",
        "orderItems": [],
    }
    body.update(overrides)
    return body
