"""Pytest configuration for tests."""

import os
import tempfile

# Settings are read at import time, point them at throwaway locations first
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="mugshop-uploads-"))
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STORAGE_BACKEND", "local")

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mugshop.core import Base, get_db
from mugshop.integrations import BaseStorageClient, get_storage_client
from mugshop.models import AppUser, Product
from mugshop.services import InventoryService
from mugshop.api.auth import get_current_active_user, get_password_hash


class FakeStorageClient(BaseStorageClient):
    """Keeps uploaded objects in memory"""
    BACKEND_NAME = "fake"

    def __init__(self):
        self.objects = {}

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> str:
        key = self.normalize_key(key)
        self.objects[key] = (data, content_type)
        return f"https://cdn.test/{key}"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Force anyio to use only asyncio backend (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
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
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    user = AppUser(username="counter", full_name="Shop Counter", hashed_password=get_password_hash("secret"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def make_product(db):
    """Factory for products, optionally with stock"""
    counter = {"n": 0}

    def _make(base_price: int = 1500, stock: Optional[int] = None, minimum_level: int = 10, **kwargs) -> Product:
        counter["n"] += 1
        product = Product(
            sku=kwargs.pop("sku", f"MUG-{counter['n']:03d}"),
            name=kwargs.pop("name", f"Test Mug {counter['n']}"),
            base_price=base_price,
            **kwargs
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        if stock is not None:
            InventoryService.initialize(db, product.id, stock, minimum_level=minimum_level)
        return product

    return _make


@pytest.fixture
def storage():
    return FakeStorageClient()


@pytest.fixture
def app(session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(app):
    """Client without an authenticated user"""
    return TestClient(app)


@pytest.fixture
def client(app, user, storage):
    """Client acting as the `user` fixture, with in-memory storage"""
    app.dependency_overrides[get_current_active_user] = lambda: user
    app.dependency_overrides[get_storage_client] = lambda: storage
    return TestClient(app)
