"""Balance transfer and history endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status

from fingerprint_wallet.interfaces.http.deps import get_ledger_service
from fingerprint_wallet.modules.ledger import (
    BalanceLimitError,
    InsufficientBalanceError,
    LedgerService,
    ReceiverConflictError,
    SenderWalletNotFoundError,
    TransferValidationError,
)
from fingerprint_wallet.schemas import (
    SendResponse,
    TransactionListResponse,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
)

router = APIRouter()


@router.post("/wallet/send", response_model=SendResponse, summary="Send funds to another wallet")
async def send(
    payload: TransferRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> SendResponse:
    try:
        receipt = await ledger.transfer(payload.sender, payload.receiver, payload.amount)
    except TransferValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SenderWalletNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sender wallet not found") from exc
    except InsufficientBalanceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Insufficient balance") from exc
    except BalanceLimitError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Receiver balance limit exceeded") from exc
    except ReceiverConflictError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Transfer conflict, please retry") from exc

    return SendResponse(message=f"Sent {receipt.amount} to {receipt.receiver}")


@router.post("/transfer", response_model=TransferResponse, summary="Transfer funds, procedure style")
async def transfer(
    payload: TransferRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    try:
        result = await ledger.transfer_funds(payload.sender, payload.receiver, payload.amount)
    except TransferValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)
    return TransferResponse(message=result.message, transaction_id=result.transaction_id)


@router.get(
    "/transactions/{username}",
    response_model=TransactionListResponse,
    summary="Latest transfers sent or received",
)
async def list_transactions(
    username: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    records = await ledger.list_transactions(username)
    return TransactionListResponse(
        transactions=[
            TransactionResponse(
                id=record.id,
                sender=record.sender,
                receiver=record.receiver,
                amount=record.amount,
                created_at=record.created_at,
            )
            for record in records
        ]
    )
