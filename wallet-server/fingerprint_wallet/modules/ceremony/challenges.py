"""In-process store for pending ceremony challenges.

One live challenge per username. Issuing a new challenge replaces the pending
one; completing a ceremony consumes it with compare-and-delete so a value can
only be redeemed once. Entries older than the TTL read as absent.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .models import Challenge

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_challenge(num_bytes: int = 32) -> str:
    """Random token encoded as URL-safe base64 without padding."""
    return secrets.token_urlsafe(num_bytes)


class ChallengeStore:
    def __init__(
        self,
        ttl_seconds: int = 300,
        num_bytes: int = 32,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.num_bytes = num_bytes
        self._clock = clock
        self._entries: Dict[str, Challenge] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def issue(self, username: str) -> Challenge:
        challenge = Challenge(
            username=username,
            value=generate_challenge(self.num_bytes),
            issued_at=self._clock(),
        )
        async with self._lock:
            replaced = self._entries.get(username)
            self._entries[username] = challenge
        if replaced is not None:
            logger.info("Replaced pending challenge for %s", username)
        return challenge

    async def get(self, username: str) -> Optional[Challenge]:
        async with self._lock:
            challenge = self._entries.get(username)
            if challenge is None:
                return None
            if challenge.is_expired(self._clock(), self.ttl_seconds):
                del self._entries[username]
                logger.info("Challenge for %s expired", username)
                return None
            return challenge

    async def consume(self, username: str, value: str) -> bool:
        """Delete the pending challenge only if it still holds ``value``."""
        async with self._lock:
            challenge = self._entries.get(username)
            if challenge is None or challenge.value != value:
                return False
            del self._entries[username]
            if challenge.is_expired(self._clock(), self.ttl_seconds):
                return False
            return True

    async def restore(self, challenge: Challenge) -> bool:
        """Put back a consumed challenge unless a newer one was issued meanwhile."""
        async with self._lock:
            if challenge.username in self._entries:
                return False
            self._entries[challenge.username] = challenge
            return True

    async def purge_expired(self) -> int:
        if self.ttl_seconds <= 0:
            return 0
        now = self._clock()
        async with self._lock:
            stale = [name for name, ch in self._entries.items() if ch.is_expired(now, self.ttl_seconds)]
            for name in stale:
                del self._entries[name]
        return len(stale)


__all__ = ["ChallengeStore", "generate_challenge"]
