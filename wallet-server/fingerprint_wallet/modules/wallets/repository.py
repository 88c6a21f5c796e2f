"""Repository protocol for wallet and transaction persistence."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from fingerprint_wallet.db.models import Transaction as TransactionModel, Wallet as WalletModel


class WalletRepository(Protocol):
    async def get_wallet(self, username: str) -> WalletModel | None:
        ...

    async def list_wallets(self) -> Sequence[WalletModel]:
        ...

    async def create_wallet(
        self,
        *,
        username: str,
        balance: int,
        address: str,
        transactions: list[Any],
    ) -> WalletModel:
        ...

    async def update_wallet(
        self,
        username: str,
        *,
        balance: int | None = None,
        address: str | None = None,
        transactions: list[Any] | None = None,
    ) -> WalletModel | None:
        ...

    async def debit(self, username: str, amount: int) -> int | None:
        """Subtract ``amount`` only if the balance covers it; new balance or None."""
        ...

    async def credit(self, username: str, amount: int) -> int | None:
        """Add ``amount``; new balance or None when the wallet does not exist."""
        ...

    async def add_transaction(self, *, sender: str, receiver: str, amount: int) -> TransactionModel:
        ...

    async def list_transactions(self, username: str, limit: int) -> Sequence[TransactionModel]:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
