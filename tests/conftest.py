import os
from decimal import Decimal

# must be set before config.settings is created
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine, get_db
from main import app
from models import Customer, InventoryItem


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def customer(db):
    row = Customer(name="Amina Yusuf", slug="amina-yusuf", phone="0712345678")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def item(db):
    row = InventoryItem(name="Rice 5kg", price=Decimal("10.00"), cost=Decimal("7.50"), quantity=8)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row
