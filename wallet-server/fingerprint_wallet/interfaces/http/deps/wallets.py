"""Wallet and ledger dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.core.config import Settings, get_settings
from fingerprint_wallet.modules.ledger import LedgerService
from fingerprint_wallet.modules.wallets import WalletService

from .database import get_db_session


def get_wallet_service(db: AsyncSession = Depends(get_db_session)) -> WalletService:
    return WalletService.with_session(db)


def get_ledger_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> LedgerService:
    return LedgerService.with_session(db, settings.wallet.history_limit)


__all__ = [
    "get_wallet_service",
    "get_ledger_service",
]
