"""
TasteContext: everything one user session needs, passed explicitly.

Holds the quiz preferences, the chosen archetype, the badge engine and the
daily recommendation cache. Mood selection, mirror building and activity
signals go through here so the cache and badges stay wired together.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from taste.core.errors import NotFoundError
from taste.core.logging import log_event
from taste.features.archetypes.engine import rank_archetypes, resolve
from taste.features.archetypes.registry import get_archetype
from taste.features.badges.repository import BadgeRepository
from taste.features.badges.service import BadgeEngine, UnlockCallback
from taste.features.mirror.engine import classify
from taste.features.recommendations.cache import DailyRecommendationCache, Fetcher
from taste.features.recommendations.store import STORE_ERRORS, KeyValueStore
from taste.features.session.identity import SessionProvider, session_uid, static_session
from taste.models.archetype import Archetype, ArchetypeMatch, MirrorReflection


class TasteContext:
    def __init__(
        self,
        *,
        preferences: Mapping[str, Sequence[str]],
        badges: BadgeEngine,
        cache: DailyRecommendationCache,
        archetype: Optional[Archetype] = None,
    ):
        self.preferences = {k: list(v) for k, v in preferences.items()}
        self.badges = badges
        self.cache = cache
        self.archetype = archetype
        self.mood: Optional[str] = None
        self.recommendations: Dict[str, Any] = {}

    @classmethod
    async def open(
        cls,
        *,
        repository: BadgeRepository,
        store: KeyValueStore,
        fetcher: Optional[Fetcher] = None,
        get_session: Optional[SessionProvider] = None,
        user_id: Optional[str] = None,
        preferences: Optional[Mapping[str, Sequence[str]]] = None,
        archetype: Optional[str] = None,
        on_badge_unlocked: Optional[UnlockCallback] = None,
        today: Callable[[], date] = date.today,
    ) -> "TasteContext":
        """Build a context, load the badge document and restore today's mood."""
        get_session = get_session or static_session(user_id)
        badges = BadgeEngine(repository, get_session, on_badge_unlocked=on_badge_unlocked)
        cache = DailyRecommendationCache(
            store,
            fetcher,
            on_category_viewed=badges.track_category_view,
            today=today,
            user_id=await session_uid(get_session),
        )
        context = cls(preferences=preferences or {}, badges=badges, cache=cache)
        if archetype:
            context.choose_archetype(archetype)
        await badges.load()
        context.mood, context.recommendations = await cache.restore_daily_selection()
        return context

    def choose_archetype(self, name: str) -> Archetype:
        archetype = get_archetype(name)
        if archetype is None:
            raise NotFoundError(f"Unknown archetype: {name}")
        self.archetype = archetype
        return archetype

    def rank(self) -> list[ArchetypeMatch]:
        return rank_archetypes(self.preferences)

    def mirror(self, seed: Optional[int] = None) -> MirrorReflection:
        """Mirror view of the current preferences against the chosen archetype."""
        if self.archetype is None:
            top = self.rank()
            if not top:
                raise NotFoundError("No archetype chosen")
            self.choose_archetype(top[0].archetype)
        return classify(resolve(self.preferences, self.archetype), self.archetype, seed=seed)

    async def select_mood(self, mood: str) -> Dict[str, Any]:
        """Vote a mood: counts as the Cultural Critic signal, then loads recommendations."""
        await self.badges.trigger_cultural_critic()
        recommendations = await self.cache.get_or_fetch(mood, self.preferences)
        if recommendations:
            self.mood = mood
            self.recommendations = recommendations
            try:
                await self.cache.remember_daily_selection(mood, recommendations)
            except STORE_ERRORS as exc:
                log_event("warning", "recommendations.remember_failed", request_id=None,
                          error_code="cache_unavailable", extra={"reason": str(exc)})
        return recommendations

    async def close(self) -> None:
        await self.cache.store.close()
