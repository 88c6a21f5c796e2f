"""Liveness endpoint."""
from fastapi import APIRouter

from fingerprint_wallet.core.config import get_settings
from fingerprint_wallet.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Service status and entry points")
async def health() -> HealthResponse:
    prefix = get_settings().api_prefix
    return HealthResponse(
        message="Fingerprint Wallet API is running",
        endpoints={
            "register": f"{prefix}/register/start",
            "login": f"{prefix}/login/start",
            "wallet": f"{prefix}/wallet/{{username}}",
            "transfer": f"{prefix}/transfer",
        },
    )
