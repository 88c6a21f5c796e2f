"""Repository protocol for stored passkey credentials."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import Credential


class CredentialRepository(Protocol):
    async def get_by_username(self, username: str) -> Credential | None:
        ...

    async def create(
        self,
        *,
        username: str,
        credential_id: str,
        public_key: str,
        registered_at: datetime,
    ) -> Credential:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
