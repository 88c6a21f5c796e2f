"""Wallet domain service"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.db.models import Wallet as WalletModel
from fingerprint_wallet.infrastructure.database.repositories.wallet_repository import SqlWalletRepository

from .exceptions import WalletAlreadyExistsError, WalletNotFoundError
from .models import UNSET, WalletCreateInput, WalletSnapshot, WalletUpdateInput
from .repository import WalletRepository


def generate_wallet_address(username: str) -> str:
    """Pseudo address: ``0x`` plus 40 upper-case hex chars of sha256(username + epoch millis)."""
    seed = f"{username}{int(time.time() * 1000)}"
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
    return f"0x{digest[:40].upper()}"


@dataclass(slots=True)
class WalletService:
    repository: WalletRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WalletService":
        return cls(SqlWalletRepository(session))

    async def get_wallet(self, username: str) -> WalletSnapshot | None:
        wallet = await self.repository.get_wallet(username)
        return self.to_snapshot(wallet) if wallet else None

    async def list_wallets(self) -> list[WalletSnapshot]:
        rows: Sequence[WalletModel] = await self.repository.list_wallets()
        return [self.to_snapshot(row) for row in rows]

    async def create_wallet(self, payload: WalletCreateInput) -> WalletSnapshot:
        existing = await self.repository.get_wallet(payload.username)
        if existing is not None:
            raise WalletAlreadyExistsError(payload.username)

        wallet = await self.repository.create_wallet(
            username=payload.username,
            balance=payload.balance or 0,
            address=payload.address or generate_wallet_address(payload.username),
            transactions=payload.transactions or [],
        )
        await self.repository.commit()
        return self.to_snapshot(wallet)

    async def update_wallet(self, username: str, payload: WalletUpdateInput) -> WalletSnapshot:
        # null and empty values leave the field as it is
        balance = payload.balance if payload.balance is not UNSET else None
        address = payload.address if payload.address is not UNSET and payload.address else None
        transactions = payload.transactions if payload.transactions is not UNSET else None

        wallet = await self.repository.update_wallet(
            username,
            balance=balance,
            address=address,
            transactions=transactions,
        )
        if wallet is None:
            raise WalletNotFoundError(username)
        await self.repository.commit()
        return self.to_snapshot(wallet)

    @staticmethod
    def to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            username=model.username,
            balance=model.balance,
            address=model.address,
            transactions=json.loads(model.transactions or "[]"),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
