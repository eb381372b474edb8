"""Shared fixtures: per-test SQLite catalog, temp blob store, ASGI client."""

from __future__ import annotations

import os
import tempfile

# Point module-level settings at throwaway locations before earlbox is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("FILE_STORAGE_PATH", tempfile.mkdtemp(prefix="earlbox-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from earlbox.database import get_db
from earlbox.main import app
from earlbox.models import Base
from earlbox.services.blob_store import BlobStore, get_blob_store


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(tmp_path):
    return BlobStore(tmp_path / "uploads")


@pytest.fixture
async def client(session_factory, store):
    """Async test client with the catalog and blob store swapped for temp ones."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
