"""Registration and login ceremonies for platform passkeys.

Each ceremony is two requests. ``begin_*`` issues a challenge and returns the
options the browser hands to ``navigator.credentials``; ``complete_*`` checks
the returned credential against the pending challenge and the stored record.

The authenticator's signature over the challenge is not verified: login is
accepted when the asserted credential id equals the registered one. That is a
known gap and unsafe outside a demo.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.core.config import Settings, get_settings
from fingerprint_wallet.infrastructure.database.repositories.user_repository import SqlCredentialRepository
from fingerprint_wallet.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from fingerprint_wallet.modules.wallets.repository import WalletRepository
from fingerprint_wallet.modules.wallets.service import generate_wallet_address

from .challenges import ChallengeStore
from .exceptions import (
    CredentialMismatchError,
    DuplicateUserError,
    NoPendingChallengeError,
    UserNotFoundError,
)
from .models import (
    AuthenticationOptions,
    Credential,
    CredentialAssertion,
    LoginResult,
    RegistrationOptions,
)
from .repository import CredentialRepository

logger = logging.getLogger(__name__)


def encode_user_handle(username: str) -> str:
    return base64.urlsafe_b64encode(username.encode("utf-8")).rstrip(b"=").decode("ascii")


@dataclass(slots=True)
class CeremonyService:
    credentials: CredentialRepository
    wallets: WalletRepository
    challenges: ChallengeStore
    rp_name: str = "Fingerprint Wallet"
    timeout_ms: int = 60_000
    starting_balance: int = 10_000

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        challenges: ChallengeStore,
        settings: Settings | None = None,
    ) -> "CeremonyService":
        settings = settings or get_settings()
        return cls(
            credentials=SqlCredentialRepository(session),
            wallets=SqlWalletRepository(session),
            challenges=challenges,
            rp_name=settings.webauthn.rp_name,
            timeout_ms=settings.webauthn.timeout_ms,
            starting_balance=settings.starting_balance,
        )

    async def get_user(self, username: str) -> Credential | None:
        return await self.credentials.get_by_username(username)

    async def begin_registration(self, username: str, rp_id: str) -> RegistrationOptions:
        if await self.credentials.get_by_username(username) is not None:
            raise DuplicateUserError(username)

        challenge = await self.challenges.issue(username)
        logger.info("Registration started for %s (rp_id=%s)", username, rp_id)
        return RegistrationOptions(
            challenge=challenge.value,
            rp_name=self.rp_name,
            rp_id=rp_id,
            user_id=encode_user_handle(username),
            username=username,
            timeout_ms=self.timeout_ms,
        )

    async def complete_registration(self, username: str, credential: CredentialAssertion) -> Credential:
        """Store the credential and a funded wallet for ``username``.

        The pending challenge is consumed before any write, so of two
        concurrent completions only one reaches the store. If the writes fail
        the challenge is put back and the ceremony can be retried.
        """
        pending = await self.challenges.get(username)
        if pending is None or not await self.challenges.consume(username, pending.value):
            raise NoPendingChallengeError(username)
        if await self.credentials.get_by_username(username) is not None:
            raise DuplicateUserError(username)

        # credential and wallet commit together or not at all
        try:
            stored = await self.credentials.create(
                username=username,
                credential_id=credential.id,
                public_key=credential.public_key or "stored",
                registered_at=datetime.now(timezone.utc),
            )
            await self.wallets.create_wallet(
                username=username,
                balance=self.starting_balance,
                address=generate_wallet_address(username),
                transactions=[],
            )
            await self.credentials.commit()
        except IntegrityError as exc:
            await self.credentials.rollback()
            logger.warning("Registration for %s lost to a concurrent one", username)
            raise DuplicateUserError(username) from exc
        except SQLAlchemyError:
            await self.credentials.rollback()
            await self.challenges.restore(pending)
            logger.exception("Registration for %s failed, nothing was stored", username)
            raise

        logger.info("Registered credential for %s", username)
        return stored

    async def begin_authentication(self, username: str, rp_id: str) -> AuthenticationOptions:
        stored = await self.credentials.get_by_username(username)
        if stored is None:
            raise UserNotFoundError(username)

        challenge = await self.challenges.issue(username)
        logger.info("Login started for %s (rp_id=%s)", username, rp_id)
        return AuthenticationOptions(
            challenge=challenge.value,
            rp_id=rp_id,
            credential_id=stored.credential_id,
            timeout_ms=self.timeout_ms,
        )

    async def complete_authentication(self, username: str, credential: CredentialAssertion) -> LoginResult:
        stored = await self.credentials.get_by_username(username)
        if stored is None:
            raise UserNotFoundError(username)

        pending = await self.challenges.get(username)
        if pending is None:
            raise NoPendingChallengeError(username)

        if credential.id != stored.credential_id:
            logger.warning("Credential mismatch on login for %s", username)
            raise CredentialMismatchError(username)

        if not await self.challenges.consume(username, pending.value):
            # another request redeemed or replaced the challenge first
            raise NoPendingChallengeError(username)

        logger.info("Login succeeded for %s", username)
        return LoginResult(username=username, login_time=datetime.now(timezone.utc))
