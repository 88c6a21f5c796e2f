"""Two transfers racing for the same balance against a file-backed database.

In-memory SQLite with a static pool shares a single connection, so this test
uses its own engine with one connection per session.
"""

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fingerprint_wallet.db.models import Transaction
from fingerprint_wallet.infrastructure.database.base import Base
from fingerprint_wallet.infrastructure.database.repositories import SqlWalletRepository
from fingerprint_wallet.modules.ledger import InsufficientBalanceError, LedgerService


@pytest.fixture
async def file_factory(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'race.db'}",
        connect_args={"timeout": 10},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        repo = SqlWalletRepository(session)
        await repo.create_wallet(username="alice", balance=10_000, address="0xALICE", transactions=[])
        await repo.create_wallet(username="bob", balance=0, address="0xBOB", transactions=[])
        await repo.create_wallet(username="carol", balance=0, address="0xCAROL", transactions=[])
        await session.commit()
    yield factory
    await engine.dispose()


async def _send(factory, receiver: str, amount: int):
    async with factory() as session:
        return await LedgerService.with_session(session).transfer("alice", receiver, amount)


async def test_double_spend_is_prevented(file_factory):
    results = await asyncio.gather(
        _send(file_factory, "bob", 6000),
        _send(file_factory, "carol", 6000),
        return_exceptions=True,
    )

    succeeded = [r for r in results if not isinstance(r, Exception)]
    failed = [r for r in results if isinstance(r, Exception)]
    assert len(succeeded) == 1
    assert len(failed) == 1
    assert isinstance(failed[0], InsufficientBalanceError)

    async with file_factory() as session:
        repo = SqlWalletRepository(session)
        assert (await repo.get_wallet("alice")).balance == 4000
        credited = (await repo.get_wallet("bob")).balance + (await repo.get_wallet("carol")).balance
        assert credited == 6000
        assert await session.scalar(select(func.count()).select_from(Transaction)) == 1
