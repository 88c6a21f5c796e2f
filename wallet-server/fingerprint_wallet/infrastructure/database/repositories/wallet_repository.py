"""SQLAlchemy implementation for wallet domain"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import desc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.db.models import MAX_BALANCE, Transaction, Wallet, utcnow


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, username: str) -> Wallet | None:
        stmt = (
            select(Wallet)
            .where(Wallet.username == username)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_wallets(self) -> list[Wallet]:
        stmt = select(Wallet).order_by(desc(Wallet.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create_wallet(
        self,
        *,
        username: str,
        balance: int,
        address: str,
        transactions: list[Any],
    ) -> Wallet:
        wallet = Wallet(
            username=username,
            balance=balance,
            address=address,
            transactions=json.dumps(transactions),
        )
        self.session.add(wallet)
        await self.session.flush()
        await self.session.refresh(wallet)
        return wallet

    async def update_wallet(
        self,
        username: str,
        *,
        balance: int | None = None,
        address: str | None = None,
        transactions: list[Any] | None = None,
    ) -> Wallet | None:
        wallet = await self.get_wallet(username)
        if wallet is None:
            return None
        if balance is not None:
            wallet.balance = balance
        if address is not None:
            wallet.address = address
        if transactions is not None:
            wallet.transactions = json.dumps(transactions)
        wallet.updated_at = utcnow()
        await self.session.flush()
        await self.session.refresh(wallet)
        return wallet

    async def debit(self, username: str, amount: int) -> int | None:
        # single conditional statement, the balance check and write cannot interleave
        stmt = (
            update(Wallet)
            .where(Wallet.username == username, Wallet.balance >= amount)
            .values(balance=Wallet.balance - amount, updated_at=utcnow())
            .returning(Wallet.balance)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def credit(self, username: str, amount: int) -> int | None:
        stmt = (
            update(Wallet)
            .where(Wallet.username == username, Wallet.balance <= MAX_BALANCE - amount)
            .values(balance=Wallet.balance + amount, updated_at=utcnow())
            .returning(Wallet.balance)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_transaction(self, *, sender: str, receiver: str, amount: int) -> Transaction:
        tx = Transaction(sender=sender, receiver=receiver, amount=amount)
        self.session.add(tx)
        await self.session.flush()
        return tx

    async def list_transactions(self, username: str, limit: int) -> list[Transaction]:
        stmt = (
            select(Transaction)
            .where(or_(Transaction.sender == username, Transaction.receiver == username))
            .order_by(desc(Transaction.created_at))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
