"""Shared fixtures: in-memory database, seeded catalog and a fresh cart store."""
import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient

from pharmanature.main import app
from pharmanature.data.database.connection import Base, engine, SessionLocal
from pharmanature.data.seed import seed_database
from pharmanature.utils.cart import CartManager


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()


@pytest.fixture
def client(db):
    app.state.cart_manager = CartManager()
    with TestClient(app) as test_client:
        yield test_client
