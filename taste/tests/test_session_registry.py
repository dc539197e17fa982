"""Tests for the per-user session registry and the user-scoped day store."""

from datetime import timedelta

import pytest

from taste.features.badges.repository import InMemoryBadgeRepository
from taste.features.recommendations.client import RecommendationClient
from taste.features.recommendations.store import InMemoryKeyValueStore, ScopedKeyValueStore, user_scope
from taste.features.session.registry import SessionRegistry


def _registry(fetcher, store=None, repository=None, **kwargs):
    return SessionRegistry(
        repository=repository or InMemoryBadgeRepository(),
        store=store or InMemoryKeyValueStore(),
        client=RecommendationClient(base_url="http://recs.test", timeout=1.0),
        fetcher=fetcher,
        **kwargs,
    )


class _ClosingStore(InMemoryKeyValueStore):
    def __init__(self):
        super().__init__()
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_scoped_store_prefixes_keys_and_leaves_backend_open():
    backend = _ClosingStore()
    alice = user_scope(backend, "alice")
    bob = ScopedKeyValueStore(backend, "user:bob:")

    await alice.set("dailyMood", "happy")
    assert await alice.get("dailyMood") == "happy"
    assert await bob.get("dailyMood") is None
    assert backend.keys() == ["user:alice:dailyMood"]

    await alice.close()
    assert backend.closed is False


@pytest.mark.asyncio
async def test_day_cache_and_selection_are_per_user(fake_fetcher):
    store = InMemoryKeyValueStore()
    registry = _registry(fake_fetcher, store=store)

    alice = await registry.get("alice")
    alice.preferences = {"music": ["Jazz"]}
    await alice.select_mood("happy")

    bob = await registry.get("bob")
    assert bob.mood is None
    bob.preferences = {"books": ["History"]}
    await bob.select_mood("happy")

    assert fake_fetcher.calls == [("happy", {"music": ["Jazz"]}), ("happy", {"books": ["History"]})]
    assert bob.badges.get("explorer").unlocked is True

    carol = await registry.get("carol")
    assert carol.mood is None
    assert carol.recommendations == {}

    # A fresh registry over the same store restores each user's own selection
    reopened = _registry(fake_fetcher, store=store)
    assert (await reopened.get("alice")).mood == "happy"
    assert (await reopened.get("carol")).mood is None


@pytest.mark.asyncio
async def test_same_day_reuses_context(fake_fetcher, clock):
    registry = _registry(fake_fetcher, today=clock)
    first = await registry.get("u1")
    assert await registry.get("u1") is first
    assert registry.open_contexts == 1


@pytest.mark.asyncio
async def test_new_day_opens_fresh_context(fake_fetcher, clock):
    registry = _registry(fake_fetcher, today=clock)
    yesterday = await registry.get("u1")
    yesterday.preferences = {"music": ["Jazz"]}
    yesterday.choose_archetype("Alt Pulse")
    await yesterday.select_mood("Chill")
    assert yesterday.mood == "Chill"

    clock.day = clock.day + timedelta(days=1)
    today = await registry.get("u1")

    assert today is not yesterday
    assert today.mood is None
    assert today.recommendations == {}
    assert today.preferences == {"music": ["Jazz"]}
    assert today.archetype.name == "Alt Pulse"
    assert registry.open_contexts == 1

    await today.select_mood("Chill")
    assert len(fake_fetcher.calls) == 2


@pytest.mark.asyncio
async def test_least_recently_used_context_is_evicted(fake_fetcher):
    registry = _registry(fake_fetcher, max_contexts=2)
    a = await registry.get("a")
    b = await registry.get("b")
    assert await registry.get("a") is a
    await registry.get("c")

    assert registry.open_contexts == 2
    assert await registry.get("a") is a
    assert await registry.get("b") is not b


@pytest.mark.asyncio
async def test_close_releases_contexts_and_store(fake_fetcher):
    backend = _ClosingStore()
    registry = _registry(fake_fetcher, store=backend)
    await registry.get("u1")
    await registry.close()
    assert registry.open_contexts == 0
    assert backend.closed is True
