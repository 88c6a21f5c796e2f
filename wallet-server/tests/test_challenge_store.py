from datetime import datetime, timedelta, timezone

from fingerprint_wallet.modules.ceremony.challenges import ChallengeStore, generate_challenge


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


def test_generated_challenges_are_urlsafe_and_unique():
    values = {generate_challenge(32) for _ in range(100)}
    assert len(values) == 100
    for value in values:
        # 32 bytes -> 43 base64url characters, no padding
        assert len(value) == 43
        assert "=" not in value and "+" not in value and "/" not in value


async def test_issue_replaces_pending_challenge():
    store = ChallengeStore()
    first = await store.issue("alice")
    second = await store.issue("alice")

    assert first.value != second.value
    assert len(store) == 1
    assert (await store.get("alice")).value == second.value


async def test_consume_is_single_use():
    store = ChallengeStore()
    challenge = await store.issue("alice")

    assert await store.consume("alice", challenge.value) is True
    assert await store.consume("alice", challenge.value) is False
    assert await store.get("alice") is None


async def test_consume_rejects_replaced_value():
    store = ChallengeStore()
    stale = await store.issue("alice")
    fresh = await store.issue("alice")

    assert await store.consume("alice", stale.value) is False
    assert (await store.get("alice")).value == fresh.value


async def test_expired_challenge_reads_as_absent():
    clock = FakeClock()
    store = ChallengeStore(ttl_seconds=60, clock=clock)
    await store.issue("alice")

    clock.advance(59)
    assert await store.get("alice") is not None
    clock.advance(1)
    assert await store.get("alice") is None
    assert len(store) == 0


async def test_expired_challenge_cannot_be_consumed():
    clock = FakeClock()
    store = ChallengeStore(ttl_seconds=60, clock=clock)
    challenge = await store.issue("alice")

    clock.advance(120)
    assert await store.consume("alice", challenge.value) is False


async def test_zero_ttl_never_expires():
    clock = FakeClock()
    store = ChallengeStore(ttl_seconds=0, clock=clock)
    await store.issue("alice")

    clock.advance(10 ** 6)
    assert await store.get("alice") is not None
    assert await store.purge_expired() == 0


async def test_purge_expired_drops_only_stale_entries():
    clock = FakeClock()
    store = ChallengeStore(ttl_seconds=60, clock=clock)
    await store.issue("alice")
    clock.advance(45)
    await store.issue("bob")
    clock.advance(30)

    assert await store.purge_expired() == 1
    assert await store.get("alice") is None
    assert await store.get("bob") is not None


async def test_restore_puts_back_consumed_challenge():
    store = ChallengeStore()
    challenge = await store.issue("alice")
    await store.consume("alice", challenge.value)

    assert await store.restore(challenge) is True
    assert (await store.get("alice")).value == challenge.value


async def test_restore_keeps_newer_challenge():
    store = ChallengeStore()
    old = await store.issue("alice")
    await store.consume("alice", old.value)
    newer = await store.issue("alice")

    assert await store.restore(old) is False
    assert (await store.get("alice")).value == newer.value


async def test_restored_challenge_keeps_its_issue_time():
    clock = FakeClock()
    store = ChallengeStore(ttl_seconds=60, clock=clock)
    challenge = await store.issue("alice")
    await store.consume("alice", challenge.value)

    clock.advance(61)
    await store.restore(challenge)
    assert await store.get("alice") is None
