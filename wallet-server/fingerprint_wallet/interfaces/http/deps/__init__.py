"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .ceremony import get_ceremony_service, get_challenge_store, get_rp_id
from .wallets import get_ledger_service, get_wallet_service

__all__ = [
    "get_db_session",
    "get_ceremony_service",
    "get_challenge_store",
    "get_rp_id",
    "get_ledger_service",
    "get_wallet_service",
]
