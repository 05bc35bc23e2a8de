import os
import tempfile

# Environment must be set before any app module is imported:
# database.py and config.py read it at import time.
_TMP_DIR = tempfile.mkdtemp(prefix="cotaimport-tests-")
os.environ["SECRET_KEY"] = "test-secret-key-1234567890"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test_cotaimport.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import Base, get_db, engine as app_engine
from main import app

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=app_engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh tables for every test."""
    original_overrides = dict(app.dependency_overrides)
    Base.metadata.drop_all(bind=app_engine)
    Base.metadata.create_all(bind=app_engine)

    yield

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
    Base.metadata.drop_all(bind=app_engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def signup(client):
    """Register an account and return auth headers plus the created profile."""

    def _signup(email, role="importer", name=None, password="secret123"):
        r = client.post(
            "/register",
            json={"email": email, "password": password, "name": name or email.split("@")[0], "role": role},
        )
        assert r.status_code == 200, r.text
        profile = r.json()

        r = client.post("/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        token = r.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}, profile

    return _signup


@pytest.fixture
def importer(signup):
    return signup("importer@example.com", role="importer", name="Importadora Sul")


@pytest.fixture
def exporter(signup):
    return signup("exporter@example.com", role="exporter", name="Shenzhen Trading")


@pytest.fixture
def make_product(client):
    def _make(headers, **overrides):
        payload = {"name": "Fone Bluetooth", "category": "Eletrônicos"}
        payload.update(overrides)
        r = client.post("/importer/products", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_request(client):
    def _make(headers, product_id, **overrides):
        payload = {"product_id": product_id}
        payload.update(overrides)
        r = client.post("/importer/quote-requests", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_quote(client):
    def _make(headers, request_id, **overrides):
        payload = {"factory_name": "Shenzhen Audio Factory", "price_per_unit_usd": 2.50, "moq": 1000}
        payload.update(overrides)
        r = client.post(f"/exporter/quote-requests/{request_id}/quotes", json=payload, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
