"""Ledger domain specific exceptions."""

from fingerprint_wallet.modules.wallets.exceptions import WalletNotFoundError


class LedgerError(Exception):
    """Base class for transfer errors."""


class TransferValidationError(LedgerError):
    """Raised when a transfer request is missing fields or has a bad amount."""


class InsufficientBalanceError(LedgerError):
    """Raised when the sender balance does not cover the amount."""

    def __init__(self, username: str, balance: int, amount: int) -> None:
        super().__init__(f"Insufficient balance: {username} has {balance}, needs {amount}")
        self.username = username
        self.balance = balance
        self.amount = amount


class SenderWalletNotFoundError(LedgerError, WalletNotFoundError):
    """Raised when the sender has no wallet."""


class BalanceLimitError(LedgerError):
    """Raised when a credit would push the receiver past the maximum balance."""


class ReceiverConflictError(LedgerError):
    """Raised when a concurrent transfer provisioned the same receiver wallet first."""


__all__ = [
    "LedgerError",
    "TransferValidationError",
    "InsufficientBalanceError",
    "SenderWalletNotFoundError",
    "BalanceLimitError",
    "ReceiverConflictError",
]
