"""Domain models for transfers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class TransactionRecord:
    id: str
    sender: str
    receiver: str
    amount: int
    created_at: datetime


@dataclass(slots=True)
class TransferReceipt:
    sender: str
    receiver: str
    amount: int
    sender_balance: int
    # None when the audit row could not be written
    transaction_id: Optional[str] = None


@dataclass(slots=True)
class TransferResult:
    """Outcome of the procedure-style transfer."""

    success: bool
    message: str
    transaction_id: Optional[str] = None
