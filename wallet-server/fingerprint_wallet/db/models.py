"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, String, Text
from sqlalchemy.sql import func

from fingerprint_wallet.infrastructure.database.base import Base

USERNAME_LENGTH = 64
CREDENTIAL_ID_LENGTH = 1024
ADDRESS_LENGTH = 64
# BigInteger range, the largest balance or amount the store accepts
MAX_BALANCE = 2**63 - 1


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered passkey credential. One per username."""

    __tablename__ = "users"

    username = Column(String(USERNAME_LENGTH), primary_key=True)
    credential_id = Column(String(CREDENTIAL_ID_LENGTH), nullable=False)
    public_key = Column(Text, nullable=False, default="stored")
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class Wallet(Base):
    __tablename__ = "wallets"

    username = Column(String(USERNAME_LENGTH), primary_key=True)
    balance = Column(BigInteger, nullable=False, default=0)
    address = Column(String(ADDRESS_LENGTH), nullable=False)
    # client-managed JSON list
    transactions = Column(Text, nullable=False, default="[]")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sender = Column(String(USERNAME_LENGTH), nullable=False, index=True)
    receiver = Column(String(USERNAME_LENGTH), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


__all__ = [
    "ADDRESS_LENGTH",
    "CREDENTIAL_ID_LENGTH",
    "MAX_BALANCE",
    "USERNAME_LENGTH",
    "Base",
    "User",
    "Wallet",
    "Transaction",
    "generate_uuid",
    "utcnow",
]
