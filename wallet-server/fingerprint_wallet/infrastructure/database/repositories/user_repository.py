"""SQLAlchemy implementation of the credential repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fingerprint_wallet.db.models import User as UserModel
from fingerprint_wallet.modules.ceremony.models import Credential
from fingerprint_wallet.modules.ceremony.repository import CredentialRepository


class SqlCredentialRepository(CredentialRepository):
    """Credential repository backed by the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_username(self, username: str) -> Credential | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def create(
        self,
        *,
        username: str,
        credential_id: str,
        public_key: str,
        registered_at: datetime,
    ) -> Credential:
        model = UserModel(
            username=username,
            credential_id=credential_id,
            public_key=public_key,
            registered_at=registered_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    @staticmethod
    def _to_domain(model: UserModel | None) -> Credential | None:
        if model is None:
            return None
        return Credential(
            username=model.username,
            credential_id=model.credential_id,
            public_key=model.public_key,
            registered_at=model.registered_at,
        )
