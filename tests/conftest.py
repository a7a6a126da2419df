# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - One in-memory SQLite database, shared through a static pool
# - Tables are created before and dropped after every test
# - `db` is a plain session, `client` a TestClient bound to the app
# ---------------------------------------------------------------------

import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from tilebook import models
from tilebook.database import Base, SessionLocal, engine
from tilebook.main import app


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def tile(db):
    """A product to sell."""
    product = models.Product(name="Kajaria Ivory", material="Tiles", size="2x2", unit="box")
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def sale_payload():
    """Builder for a minimal sale body; keyword overrides replace fields."""
    def build(**overrides):
        payload = {
            "bill_no": "101",
            "bill_date": "2026-10-10",
            "customer_name": "Ravi Traders",
            "executives": ["Suresh"],
            "rows": [],
            "customer_payment": {"advance": 0, "paid_now": 0, "method": "Cash"},
            "payouts": [],
        }
        payload.update(overrides)
        return payload
    return build
