"""Transfer ledger exports"""

from .exceptions import (
    BalanceLimitError,
    InsufficientBalanceError,
    LedgerError,
    ReceiverConflictError,
    SenderWalletNotFoundError,
    TransferValidationError,
)
from .models import TransactionRecord, TransferReceipt, TransferResult
from .service import LedgerService, validate_transfer

__all__ = [
    "BalanceLimitError",
    "InsufficientBalanceError",
    "LedgerError",
    "LedgerService",
    "ReceiverConflictError",
    "SenderWalletNotFoundError",
    "TransactionRecord",
    "TransferReceipt",
    "TransferResult",
    "TransferValidationError",
    "validate_transfer",
]
