"""Passkey ceremony models, exceptions and the challenge store.

The service lives in :mod:`fingerprint_wallet.modules.ceremony.service`.
"""

from .challenges import ChallengeStore, generate_challenge
from .exceptions import (
    CeremonyError,
    CredentialMismatchError,
    DuplicateUserError,
    NoPendingChallengeError,
    UserNotFoundError,
)
from .models import (
    AuthenticationOptions,
    Challenge,
    Credential,
    CredentialAssertion,
    LoginResult,
    RegistrationOptions,
)

__all__ = [
    "AuthenticationOptions",
    "Challenge",
    "ChallengeStore",
    "Credential",
    "CredentialAssertion",
    "LoginResult",
    "RegistrationOptions",
    "generate_challenge",
    "CeremonyError",
    "CredentialMismatchError",
    "DuplicateUserError",
    "NoPendingChallengeError",
    "UserNotFoundError",
]
