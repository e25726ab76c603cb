"""Pytest configuration and fixtures for banner server tests."""

import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="banner-server-tests-")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE__URL", f"sqlite+aiosqlite:///{_TEST_ROOT}/banners.db")
os.environ.setdefault("UPLOADS__BUFFER_DIR", f"{_TEST_ROOT}/uploads")
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from banner_server.db import models  # noqa: F401
from banner_server.infrastructure.database.base import Base

from fakes import FakeStagingClient, InMemoryBannerRepository


@pytest.fixture
def staging_client() -> FakeStagingClient:
    return FakeStagingClient()


@pytest.fixture
def memory_repository() -> InMemoryBannerRepository:
    return InMemoryBannerRepository()


@pytest.fixture
def buffer_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest_asyncio.fixture
async def db_session():
    """A session bound to a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()
