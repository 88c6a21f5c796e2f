"""Wallet domain specific exceptions."""


class WalletError(Exception):
    """Base class for wallet domain errors."""


class WalletAlreadyExistsError(WalletError):
    """Raised when creating a wallet for a username that already has one."""


class WalletNotFoundError(WalletError):
    """Raised when the requested wallet cannot be found."""
