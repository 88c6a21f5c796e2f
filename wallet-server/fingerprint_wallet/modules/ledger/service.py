"""Transfer ledger: moves balance between wallets and keeps the audit trail."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.db.models import MAX_BALANCE, Transaction as TransactionModel
from fingerprint_wallet.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from fingerprint_wallet.modules.wallets.repository import WalletRepository
from fingerprint_wallet.modules.wallets.service import generate_wallet_address

from .exceptions import (
    BalanceLimitError,
    InsufficientBalanceError,
    LedgerError,
    ReceiverConflictError,
    SenderWalletNotFoundError,
    TransferValidationError,
)
from .models import TransactionRecord, TransferReceipt, TransferResult

logger = logging.getLogger(__name__)


def validate_transfer(sender: Optional[str], receiver: Optional[str], amount: Optional[int]) -> None:
    if not sender or not receiver or amount is None:
        raise TransferValidationError("Missing required fields: sender, receiver, amount")
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TransferValidationError("Amount must be an integer")
    if amount <= 0:
        raise TransferValidationError("Amount must be positive")
    if amount > MAX_BALANCE:
        raise TransferValidationError("Amount exceeds the maximum balance")
    if sender == receiver:
        raise TransferValidationError("Sender and receiver must differ")


@dataclass(slots=True)
class LedgerService:
    repository: WalletRepository
    history_limit: int = 50

    @classmethod
    def with_session(cls, session: AsyncSession, history_limit: int = 50) -> "LedgerService":
        return cls(SqlWalletRepository(session), history_limit)

    async def transfer(self, sender: str, receiver: str, amount: int) -> TransferReceipt:
        """Debit ``sender`` and credit ``receiver`` in one store transaction.

        The debit is a conditional update, so a concurrent transfer from the
        same wallet cannot spend the same balance twice. A receiver without a
        wallet is treated as balance 0 and gets one provisioned; a credit that
        would overflow the receiver balance is refused. The audit row
        is written after the balances commit; failing to write it is logged
        and does not undo the transfer.
        """
        validate_transfer(sender, receiver, amount)
        logger.info("Transfer requested: %s -> %s, amount %s", sender, receiver, amount)

        try:
            sender_balance = await self.repository.debit(sender, amount)
            if sender_balance is None:
                wallet = await self.repository.get_wallet(sender)
                # rollback expires the instance, read the balance first
                balance = wallet.balance if wallet is not None else None
                await self.repository.rollback()
                if balance is None:
                    raise SenderWalletNotFoundError(f"Sender wallet not found: {sender}")
                raise InsufficientBalanceError(sender, balance, amount)

            if await self.repository.credit(receiver, amount) is None:
                if await self.repository.get_wallet(receiver) is not None:
                    await self.repository.rollback()
                    raise BalanceLimitError(f"Receiver balance would exceed the maximum: {receiver}")
                try:
                    await self.repository.create_wallet(
                        username=receiver,
                        balance=amount,
                        address=generate_wallet_address(receiver),
                        transactions=[],
                    )
                except IntegrityError as exc:
                    await self.repository.rollback()
                    logger.warning("Receiver wallet %s was provisioned concurrently", receiver)
                    raise ReceiverConflictError(
                        f"Receiver wallet was created by a concurrent transfer, retry: {receiver}"
                    ) from exc
            await self.repository.commit()
        except SQLAlchemyError:
            await self.repository.rollback()
            logger.exception("Transfer %s -> %s failed, balances unchanged", sender, receiver)
            raise

        transaction_id = await self._record(sender, receiver, amount)
        return TransferReceipt(
            sender=sender,
            receiver=receiver,
            amount=amount,
            sender_balance=sender_balance,
            transaction_id=transaction_id,
        )

    async def transfer_funds(self, sender: str, receiver: str, amount: int) -> TransferResult:
        """Procedure-style transfer returning a result instead of raising on business rules.

        Input validation errors still raise; store failures propagate.
        """
        validate_transfer(sender, receiver, amount)
        try:
            receipt = await self.transfer(sender, receiver, amount)
        except LedgerError as exc:
            logger.info("Transfer %s -> %s rejected: %s", sender, receiver, exc)
            return TransferResult(success=False, message=str(exc))
        return TransferResult(
            success=True,
            message=f"Transferred {amount} from {sender} to {receiver}",
            transaction_id=receipt.transaction_id,
        )

    async def list_transactions(self, username: str) -> list[TransactionRecord]:
        rows = await self.repository.list_transactions(username, self.history_limit)
        return [self._to_record(row) for row in rows]

    async def _record(self, sender: str, receiver: str, amount: int) -> Optional[str]:
        try:
            tx = await self.repository.add_transaction(sender=sender, receiver=receiver, amount=amount)
            await self.repository.commit()
        except SQLAlchemyError:
            await self.repository.rollback()
            logger.error(
                "Transfer %s -> %s (%s) committed but its audit record was not written",
                sender,
                receiver,
                amount,
                exc_info=True,
            )
            return None
        return tx.id

    @staticmethod
    def _to_record(model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            sender=model.sender,
            receiver=model.receiver,
            amount=model.amount,
            created_at=model.created_at,
        )
