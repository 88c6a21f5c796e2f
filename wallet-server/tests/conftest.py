"""Shared fixtures: in-memory database, challenge store and HTTP client.

Every test gets a fresh in-memory SQLite database. The app's session and
challenge-store dependencies are overridden so no test touches a file on disk
or the process-wide store.
"""

import os

os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.pop("WEBAUTHN__RP_ID", None)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fingerprint_wallet.db import models  # noqa: F401
from fingerprint_wallet.infrastructure.database.base import Base
from fingerprint_wallet.infrastructure.database.repositories import SqlWalletRepository
from fingerprint_wallet.interfaces.http.deps import get_challenge_store, get_db_session
from fingerprint_wallet.main import app
from fingerprint_wallet.modules.ceremony.challenges import ChallengeStore


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def challenge_store():
    return ChallengeStore()


def override_dependencies(factory, store):
    async def _get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _get_db_session
    app.dependency_overrides[get_challenge_store] = lambda: store


@pytest.fixture
async def client(session_factory, challenge_store):
    override_dependencies(session_factory, challenge_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def seed_wallets(session_factory):
    """alice holds 10000, bob holds 0."""
    async with session_factory() as session:
        repo = SqlWalletRepository(session)
        await repo.create_wallet(username="alice", balance=10_000, address="0xALICE", transactions=[])
        await repo.create_wallet(username="bob", balance=0, address="0xBOB", transactions=[])
        await session.commit()


async def _register(client: AsyncClient, username: str, credential_id: str | None = None) -> dict:
    """Run both registration requests and return the completion body."""
    start = await client.post("/api/register/start", json={"username": username})
    assert start.status_code == 200, start.text
    complete = await client.post(
        "/api/register/complete",
        json={
            "username": username,
            "credential": {
                "id": credential_id or f"cred-{username}",
                "type": "public-key",
                "response": {"publicKey": f"pk-{username}", "clientDataJSON": "e30"},
            },
        },
    )
    assert complete.status_code == 200, complete.text
    return complete.json()


@pytest.fixture
def register_user(client):
    async def _run(username: str, credential_id: str | None = None) -> dict:
        return await _register(client, username, credential_id)

    return _run
