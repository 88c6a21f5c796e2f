from fastapi import APIRouter

from fingerprint_wallet.interfaces.http.routers import auth, health, transfers, wallets


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(health.router, tags=["health"])
    router.include_router(auth.router, tags=["passkeys"])
    router.include_router(wallets.router, tags=["wallets"])
    router.include_router(transfers.router, tags=["transfers"])
    return router


__all__ = [
    "create_api_router",
]
