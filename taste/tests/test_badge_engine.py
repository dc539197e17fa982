"""Tests for the badge progression engine."""

import asyncio
from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from taste.core.errors import ValidationError
from taste.features.badges.registry import BADGE_IDS, BADGE_REGISTRY, BADGE_HUNTER
from taste.features.badges.repository import InMemoryBadgeRepository
from taste.features.badges.service import BadgeEngine, consecutive_days
from taste.features.session.identity import static_session


class _BrokenWrites(InMemoryBadgeRepository):
    async def merge_badge_state(self, user_id, partial):
        raise OSError("store offline")

    async def merge_activity(self, user_id, partial):
        raise OSError("store offline")


class _BrokenReads(InMemoryBadgeRepository):
    async def get_badge_state(self, user_id):
        raise OperationalError("SELECT", {}, Exception("db down"))


def _engine(repository=None, uid="user_1"):
    unlocked = []
    engine = BadgeEngine(
        repository or InMemoryBadgeRepository(),
        static_session(uid),
        on_badge_unlocked=lambda badge: unlocked.append(badge.id),
    )
    return engine, unlocked


def _by_id(engine):
    return {b.id: b for b in engine.badges}


def test_registry_shape():
    assert BADGE_IDS == (
        "explorer",
        "daily_listener",
        "cultural_critic",
        "social_butterfly",
        "curator",
        "streak_seeker",
        "badge_hunter",
    )
    kinds = {b.id: b.kind for b in BADGE_REGISTRY}
    assert kinds["curator"] == "progress"
    assert kinds["badge_hunter"] == "meta"
    assert all(not b.unlocked for b in BADGE_REGISTRY)


@pytest.mark.asyncio
async def test_unlock_callback_fires_once():
    engine, unlocked = _engine()

    await engine.update_progress("social_butterfly", 1, True)
    await engine.update_progress("social_butterfly", 1, True)

    assert unlocked == ["social_butterfly"]


@pytest.mark.asyncio
async def test_unlocked_is_terminal_and_progress_monotonic():
    engine, _ = _engine()

    await engine.update_progress("daily_listener", 1, True)
    badge = await engine.update_progress("daily_listener", 0, False)
    assert badge.unlocked is True

    await engine.trigger_curator(6)
    curator = await engine.trigger_curator(3)
    assert curator.progress == 6
    assert curator.unlocked is False


@pytest.mark.asyncio
async def test_curator_clamps_and_unlocks():
    engine, unlocked = _engine()
    curator = await engine.trigger_curator(12)
    assert curator.progress == 10
    assert curator.unlocked is True
    assert "curator" in unlocked


@pytest.mark.asyncio
async def test_concurrent_updates_fire_once():
    engine, unlocked = _engine()
    await asyncio.gather(*(engine.update_progress("explorer", 4, True) for _ in range(5)))
    assert unlocked.count("explorer") == 1


@pytest.mark.asyncio
async def test_badge_hunter_unlocks_at_five():
    engine, unlocked = _engine()

    await engine.trigger_explorer(["music", "movies", "books", "podcasts"])
    await engine.trigger_daily_listener()
    await engine.trigger_cultural_critic()
    await engine.trigger_social_butterfly()
    hunter = _by_id(engine)[BADGE_HUNTER]
    assert hunter.progress == 4
    assert hunter.unlocked is False

    await engine.trigger_curator(10)
    hunter = _by_id(engine)[BADGE_HUNTER]
    assert hunter.progress == 5
    assert hunter.unlocked is True
    assert unlocked[-2:] == ["curator", "badge_hunter"]
    assert engine.unlocked_count() == 5


@pytest.mark.asyncio
async def test_check_badge_hunter_uses_in_memory_count():
    engine, _ = _engine()
    for badge_id in ("explorer", "daily_listener", "cultural_critic"):
        await engine.update_progress(badge_id, 1, True)
    hunter = await engine.check_badge_hunter()
    assert hunter.progress == 3
    assert hunter.unlocked is False


@pytest.mark.asyncio
async def test_explorer_needs_all_four_categories():
    engine, unlocked = _engine()

    for category in ("music", "movies", "books"):
        await engine.track_category_view(category)
    assert _by_id(engine)["explorer"].unlocked is False
    assert unlocked == []

    await engine.track_category_view("podcasts")
    assert _by_id(engine)["explorer"].unlocked is True
    assert unlocked == ["explorer"]

    await engine.track_category_view("music")
    assert unlocked == ["explorer"]


@pytest.mark.asyncio
async def test_explorer_accumulates_across_sessions():
    repository = InMemoryBadgeRepository()
    first, _ = _engine(repository)
    await first.track_category_view("music")
    await first.track_category_view("movies")

    second, unlocked = _engine(repository)
    await second.load()
    await second.track_category_view("books")
    await second.track_category_view("podcasts")
    assert unlocked == ["explorer"]


@pytest.mark.asyncio
async def test_track_like_reaches_curator():
    engine, unlocked = _engine()
    for _ in range(9):
        await engine.track_like()
    assert _by_id(engine)["curator"].progress == 9
    await engine.track_like()
    assert _by_id(engine)["curator"].unlocked is True
    assert engine.activity.likes_count == 10
    assert "curator" in unlocked


@pytest.mark.asyncio
async def test_daily_login_streak():
    engine, unlocked = _engine()
    start = date(2026, 10, 17)

    await engine.track_daily_login(start)
    await engine.track_daily_login(start + timedelta(days=1))
    assert _by_id(engine)["streak_seeker"].progress == 2

    await engine.track_daily_login(start + timedelta(days=2))
    assert _by_id(engine)["streak_seeker"].unlocked is True
    assert "streak_seeker" in unlocked


@pytest.mark.asyncio
async def test_active_dates_keep_last_week():
    engine, _ = _engine()
    start = date(2026, 10, 1)
    for offset in range(10):
        await engine.track_daily_login(start + timedelta(days=offset))
    assert len(engine.activity.active_dates) == 7
    assert engine.activity.active_dates[-1] == "2026-10-10"


def test_consecutive_days():
    today = date(2026, 10, 19)
    assert consecutive_days([], today) == 0
    assert consecutive_days(["2026-10-17", "2026-10-18", "2026-10-19"], today) == 3
    assert consecutive_days(["2026-10-16", "2026-10-18", "2026-10-19"], today) == 2
    assert consecutive_days(["2026-10-18"], today) == 0


@pytest.mark.asyncio
async def test_missing_session_is_a_noop():
    repository = InMemoryBadgeRepository()
    engine, unlocked = _engine(repository, uid=None)

    badges = await engine.load()
    await engine.trigger_social_butterfly()
    await engine.track_like()

    assert [b.id for b in badges] == list(BADGE_IDS)
    assert all(not b.unlocked for b in engine.badges)
    assert unlocked == []
    assert await repository.get_badge_state("user_1") is None


@pytest.mark.asyncio
async def test_write_failure_keeps_optimistic_state(caplog):
    engine, unlocked = _engine(_BrokenWrites())

    badge = await engine.trigger_social_butterfly()

    assert badge.unlocked is True
    assert unlocked == ["social_butterfly"]
    assert any(r.getMessage() == "badges.write_failed" for r in caplog.records)


@pytest.mark.asyncio
async def test_read_failure_uses_defaults():
    engine, _ = _engine(_BrokenReads())
    badges = await engine.load()
    assert [b.id for b in badges] == list(BADGE_IDS)
    assert all(b.progress == 0 and not b.unlocked for b in badges)


@pytest.mark.asyncio
async def test_load_merges_stored_state():
    repository = InMemoryBadgeRepository()
    await repository.merge_badge_state("user_1", {"curator": {"progress": 4, "unlocked": False}})
    await repository.merge_badge_state("user_1", {"explorer": {"progress": 4, "unlocked": True}})

    engine, unlocked = _engine(repository)
    await engine.load()
    badges = _by_id(engine)

    assert badges["curator"].progress == 4
    assert badges["explorer"].unlocked is True
    assert badges["explorer"].name == "Explorer"

    await engine.trigger_explorer(["music", "movies", "books", "podcasts"])
    assert unlocked == []


@pytest.mark.asyncio
async def test_update_persists_single_badge():
    repository = InMemoryBadgeRepository()
    engine, _ = _engine(repository)

    await engine.trigger_cultural_critic()
    document = await repository.get_badge_state("user_1")

    assert document["cultural_critic"]["unlocked"] is True
    assert document["cultural_critic"]["last_updated"] is not None
    assert "curator" not in document


@pytest.mark.asyncio
async def test_unknown_badge_is_rejected():
    engine, _ = _engine()
    with pytest.raises(ValidationError):
        await engine.update_progress("nope", 1, True)


@pytest.mark.asyncio
async def test_async_unlock_callback_is_awaited():
    seen = []

    async def on_unlock(badge):
        seen.append(badge.id)

    engine = BadgeEngine(InMemoryBadgeRepository(), static_session("user_1"), on_badge_unlocked=on_unlock)
    await engine.trigger_daily_listener()
    assert seen == ["daily_listener"]
