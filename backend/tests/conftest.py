import os
import tempfile

# Point the app at throwaway locations before anything from geezshoe is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="geezshoe-storage-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import geezshoe.models  # noqa: F401
from geezshoe.database import Base, get_db
from geezshoe.main import app
from geezshoe.models.product import Product
from geezshoe.seed import ensure_main_admin
from geezshoe.utils.storage import ObjectStorage, get_storage

MAIN_EMAIL = "main@geezshoe.com"
MAIN_PASSWORD = "main-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path):
    return ObjectStorage(str(tmp_path / "storage"), "http://testserver")


@pytest.fixture
def client(db, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def main_admin(db):
    return ensure_main_admin(db, "Main Admin", MAIN_EMAIL, MAIN_PASSWORD)


@pytest.fixture
def admin_headers(client, main_admin):
    resp = client.post("/auth/login", json={"email": MAIN_EMAIL, "password": MAIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def make_product(db):
    def _make(name="Runner", item_number=5, real_price=100.0, **extra):
        product = Product(
            name=name,
            description=extra.pop("description", "Leather runner"),
            item_number=item_number,
            real_price=real_price,
            image_urls=extra.pop("image_urls", []),
            sizes_available=extra.pop("sizes_available", [40, 41, 42]),
            is_active=item_number > 0,
            **extra,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make
