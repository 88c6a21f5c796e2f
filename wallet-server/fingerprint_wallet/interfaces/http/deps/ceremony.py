"""Ceremony related dependency providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.core.config import Settings, get_settings
from fingerprint_wallet.core.container import get_container
from fingerprint_wallet.core.relying_party import resolve_rp_id
from fingerprint_wallet.modules.ceremony.challenges import ChallengeStore
from fingerprint_wallet.modules.ceremony.service import CeremonyService

from .database import get_db_session


def get_challenge_store() -> ChallengeStore:
    return get_container().challenges


def get_ceremony_service(
    db: AsyncSession = Depends(get_db_session),
    challenges: ChallengeStore = Depends(get_challenge_store),
    settings: Settings = Depends(get_settings),
) -> CeremonyService:
    return CeremonyService.with_session(db, challenges, settings)


def get_rp_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    return resolve_rp_id(request.headers, settings.webauthn.rp_id)


__all__ = [
    "get_challenge_store",
    "get_ceremony_service",
    "get_rp_id",
]
