"""SQLAlchemy-backed repository implementations."""

from .user_repository import SqlCredentialRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlCredentialRepository",
    "SqlWalletRepository",
]
