"""Domain models for the passkey ceremonies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

ES256 = -7
RS256 = -257
SUPPORTED_ALGORITHMS = (ES256, RS256)


@dataclass(slots=True, frozen=True)
class Challenge:
    username: str
    value: str
    issued_at: datetime

    def is_expired(self, now: datetime, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            return False
        return now - self.issued_at >= timedelta(seconds=ttl_seconds)


@dataclass(slots=True)
class Credential:
    username: str
    credential_id: str
    public_key: str
    registered_at: datetime


@dataclass(slots=True)
class CredentialAssertion:
    """What the browser sends back after the authenticator prompt."""

    id: str
    public_key: Optional[str] = None


@dataclass(slots=True)
class RegistrationOptions:
    challenge: str
    rp_name: str
    rp_id: str
    user_id: str
    username: str
    timeout_ms: int
    algorithms: tuple[int, ...] = SUPPORTED_ALGORITHMS


@dataclass(slots=True)
class AuthenticationOptions:
    challenge: str
    rp_id: str
    credential_id: str
    timeout_ms: int


@dataclass(slots=True)
class LoginResult:
    username: str
    login_time: datetime
