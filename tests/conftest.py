"""Shared fixtures"""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# must be set before app.core.config is imported
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_study_admin.db")
os.environ.setdefault("DB_MANAGE", "create_all")
os.environ.setdefault("AUDIT_SINK_PROVIDER", "noop")
os.environ.setdefault("PUSH_PROVIDER", "noop")

from app.core.base import Base  # noqa: E402
from app.core.db import SessionLocal, engine  # noqa: E402
from app.platform.provider_registry import ProviderRegistry  # noqa: E402
import app.models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def reset_providers():
    ProviderRegistry.reset()
    yield
    ProviderRegistry.reset()


@pytest.fixture
async def db():
    """Fresh schema per test"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(db):
    async with SessionLocal() as s:
        yield s


@pytest.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
