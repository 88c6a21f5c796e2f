"""Wallet record endpoints. Unrestricted, as in the demo frontend."""
from fastapi import APIRouter, Depends, HTTPException, status

from fingerprint_wallet.interfaces.http.deps import get_wallet_service
from fingerprint_wallet.modules.wallets import (
    UNSET,
    WalletAlreadyExistsError,
    WalletCreateInput,
    WalletNotFoundError,
    WalletService,
    WalletSnapshot,
    WalletUpdateInput,
)
from fingerprint_wallet.schemas import (
    WalletCreateRequest,
    WalletListResponse,
    WalletMutationResponse,
    WalletResponse,
    WalletUpdateRequest,
)

router = APIRouter()


def _to_response(snapshot: WalletSnapshot) -> WalletResponse:
    return WalletResponse(
        username=snapshot.username,
        balance=snapshot.balance,
        address=snapshot.address,
        transactions=snapshot.transactions,
        created_at=snapshot.created_at,
        updated_at=snapshot.updated_at,
    )


@router.get("/wallet/{username}", response_model=WalletResponse, summary="Get a wallet")
async def get_wallet(
    username: str,
    service: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    wallet = await service.get_wallet(username)
    if wallet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not found")
    return _to_response(wallet)


@router.get("/wallets", response_model=WalletListResponse, summary="List all wallets")
async def list_wallets(service: WalletService = Depends(get_wallet_service)) -> WalletListResponse:
    wallets = await service.list_wallets()
    return WalletListResponse(wallets=[_to_response(wallet) for wallet in wallets])


@router.post("/wallet/create", response_model=WalletMutationResponse, summary="Create a wallet")
async def create_wallet(
    payload: WalletCreateRequest,
    service: WalletService = Depends(get_wallet_service),
) -> WalletMutationResponse:
    if not payload.username:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username is required")
    try:
        wallet = await service.create_wallet(
            WalletCreateInput(
                username=payload.username,
                balance=payload.balance,
                address=payload.address,
                transactions=payload.transactions,
            )
        )
    except WalletAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wallet already exists") from exc

    return WalletMutationResponse(message="Wallet created successfully", wallet=_to_response(wallet))


@router.put("/wallet/{username}", response_model=WalletMutationResponse, summary="Update a wallet")
async def update_wallet(
    username: str,
    payload: WalletUpdateRequest,
    service: WalletService = Depends(get_wallet_service),
) -> WalletMutationResponse:
    provided = payload.model_fields_set
    update = WalletUpdateInput(
        balance=payload.balance if "balance" in provided else UNSET,
        address=payload.address if "address" in provided else UNSET,
        transactions=payload.transactions if "transactions" in provided else UNSET,
    )
    try:
        wallet = await service.update_wallet(username, update)
    except WalletNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not found") from exc

    return WalletMutationResponse(message="Wallet updated successfully", wallet=_to_response(wallet))
