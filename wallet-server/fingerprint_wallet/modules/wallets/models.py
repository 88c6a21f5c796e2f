"""Domain models for wallet operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(slots=True)
class WalletSnapshot:
    username: str
    balance: int
    address: str
    transactions: list[Any] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class WalletCreateInput:
    username: str
    balance: Optional[int] = None
    address: Optional[str] = None
    transactions: Optional[list[Any]] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class WalletUpdateInput:
    balance: Optional[int] | object = UNSET
    address: Optional[str] | object = UNSET
    transactions: Optional[list[Any]] | object = UNSET
