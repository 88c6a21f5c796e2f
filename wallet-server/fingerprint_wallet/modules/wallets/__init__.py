"""Wallet domain exports"""

from .exceptions import WalletAlreadyExistsError, WalletError, WalletNotFoundError
from .models import UNSET, WalletCreateInput, WalletSnapshot, WalletUpdateInput
from .service import WalletService, generate_wallet_address

__all__ = [
    "UNSET",
    "WalletCreateInput",
    "WalletSnapshot",
    "WalletUpdateInput",
    "WalletService",
    "WalletError",
    "WalletAlreadyExistsError",
    "WalletNotFoundError",
    "generate_wallet_address",
]
