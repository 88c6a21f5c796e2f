"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from fingerprint_wallet.core.config import Settings, get_settings
from fingerprint_wallet.infrastructure.database.session import get_engine
from fingerprint_wallet.modules.ceremony.challenges import ChallengeStore


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    challenges: ChallengeStore

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()


def build_challenge_store(settings: Settings) -> ChallengeStore:
    return ChallengeStore(
        ttl_seconds=settings.webauthn.challenge_ttl_seconds,
        num_bytes=settings.webauthn.challenge_bytes,
    )


@lru_cache()
def get_container() -> ApplicationContainer:
    settings = get_settings()
    container = ApplicationContainer(settings=settings, challenges=build_challenge_store(settings))
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_challenge_store", "get_container"]
