"""
Badge Progression Engine.

Per badge the state machine is Locked(progress) -> Unlocked, with Unlocked
terminal. Every mutation goes through update_progress, which merge-writes a
single badge into the user's document, updates the in-memory list, and
fires on_badge_unlocked only on the locked -> unlocked edge. Badge Hunter is
derived: after any unlock edge it is recomputed from the in-memory unlocked
count and persisted through the same path.

Activity counters (observed categories, likes, active dates) back the
track_* helpers so callers can report raw events instead of totals.

Without a session uid every write and trigger is a no-op and reads return
the registry defaults.
"""

from __future__ import annotations

import asyncio
import inspect
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Union

from taste.core.errors import ValidationError
from taste.core.logging import log_event
from taste.features.badges.registry import (
    ACTIVE_DATES_KEPT,
    BADGE_HUNTER,
    BADGE_REGISTRY,
    CULTURAL_CRITIC,
    CURATOR,
    CURATOR_LIKES,
    DAILY_LISTENER,
    EXPLORER,
    EXPLORER_CATEGORIES,
    HUNTER_TARGET,
    SOCIAL_BUTTERFLY,
    STREAK_DAYS,
    STREAK_SEEKER,
)
from taste.features.badges.repository import REPOSITORY_ERRORS, BadgeRepository
from taste.features.session.identity import SessionProvider, session_uid
from taste.models.badge import BadgeActivity, FlagBadge, MetaBadge, ProgressBadge

AnyBadge = Union[FlagBadge, ProgressBadge, MetaBadge]
UnlockCallback = Callable[[AnyBadge], Union[Awaitable[None], None]]


def registry_defaults() -> Dict[str, AnyBadge]:
    return {badge.id: badge for badge in BADGE_REGISTRY}


def consecutive_days(active_dates: Iterable[str], today: date) -> int:
    """Length of the run of consecutive active days ending today."""
    days = {date.fromisoformat(d) for d in active_dates}
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


class BadgeEngine:
    """
    Event-driven badge state for one user session.

    Args:
        repository: badge document store
        get_session: async session identity provider
        on_badge_unlocked: called once per badge, on its unlock edge
    """

    def __init__(
        self,
        repository: BadgeRepository,
        get_session: SessionProvider,
        on_badge_unlocked: Optional[UnlockCallback] = None,
    ):
        self.repository = repository
        self.get_session = get_session
        self.on_badge_unlocked = on_badge_unlocked
        self._badges: Dict[str, AnyBadge] = registry_defaults()
        self._activity = BadgeActivity()
        self._loaded_for: Optional[str] = None
        self._load_lock = asyncio.Lock()
        self._activity_lock = asyncio.Lock()
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def badges(self) -> List[AnyBadge]:
        return list(self._badges.values())

    @property
    def activity(self) -> BadgeActivity:
        return self._activity

    def get(self, badge_id: str) -> AnyBadge:
        if badge_id not in self._badges:
            raise ValidationError(f"Unknown badge: {badge_id}", code="unknown_badge")
        return self._badges[badge_id]

    def unlocked_count(self) -> int:
        """Unlocked badges other than Badge Hunter."""
        return sum(1 for b in self._badges.values() if b.unlocked and b.id != BADGE_HUNTER)

    # Loading ----------------------------------------------------------
    async def load(self) -> List[AnyBadge]:
        """Read the user's document and merge it over the registry defaults."""
        user_id = await session_uid(self.get_session)
        if user_id is None:
            self._badges = registry_defaults()
            self._activity = BadgeActivity()
            return self.badges
        async with self._load_lock:
            await self._read(user_id)
        return self.badges

    async def _ensure_loaded(self, user_id: str) -> None:
        if self._loaded_for == user_id:
            return
        async with self._load_lock:
            if self._loaded_for != user_id:
                await self._read(user_id)

    async def _read(self, user_id: str) -> None:
        badges = registry_defaults()
        activity = BadgeActivity()
        try:
            document = await self.repository.get_badge_state(user_id) or {}
            stored_activity = await self.repository.get_activity(user_id)
        except REPOSITORY_ERRORS as exc:
            log_event("warning", "badges.load_failed", request_id=None, user_id=user_id,
                      error_code="badge_store_unavailable", extra={"reason": str(exc)})
        else:
            for badge_id, badge in badges.items():
                state = document.get(badge_id) or {}
                badges[badge_id] = self._apply(
                    badge, int(state.get("progress") or 0), bool(state.get("unlocked")), monotonic=False
                )
            if stored_activity:
                activity = BadgeActivity.model_validate(stored_activity)
        self._badges = badges
        self._activity = activity
        self._loaded_for = user_id

    # Core transition ----------------------------------------------------
    @staticmethod
    def _apply(badge: AnyBadge, progress: int, unlocked: bool, *, monotonic: bool = True) -> AnyBadge:
        unlocked = badge.unlocked or unlocked
        progress = max(progress, 0)
        if monotonic:
            progress = max(progress, badge.progress)
        if isinstance(badge, ProgressBadge):
            progress = badge.max_progress if unlocked else min(progress, badge.max_progress)
        return badge.model_copy(update={"progress": progress, "unlocked": unlocked})

    async def update_progress(self, badge_id: str, progress: int, unlocked: bool = False) -> AnyBadge:
        """
        Persist one badge's progress and unlock flag.

        A later unlocked=False never re-locks, and progress never goes down.
        The unlock callback fires only when the previous in-memory state was
        locked. Write failures are logged; the in-memory update still applies.
        """
        current = self.get(badge_id)
        user_id = await session_uid(self.get_session)
        if user_id is None:
            return current

        async with self._locks[badge_id]:
            await self._ensure_loaded(user_id)
            previous = self._badges[badge_id]
            updated = self._apply(previous, progress, unlocked)
            try:
                await self.repository.merge_badge_state(
                    user_id,
                    {
                        badge_id: {
                            "progress": updated.progress,
                            "unlocked": updated.unlocked,
                            "last_updated": datetime.now(timezone.utc),
                        }
                    },
                )
            except REPOSITORY_ERRORS as exc:
                log_event("error", "badges.write_failed", request_id=None, user_id=user_id,
                          badge_id=badge_id, error_code="badge_store_unavailable",
                          extra={"reason": str(exc)})
            self._badges[badge_id] = updated
            unlocked_now = updated.unlocked and not previous.unlocked

        if unlocked_now:
            log_event("info", "badges.unlocked", request_id=None, user_id=user_id,
                      badge_id=badge_id, event_type="badge_unlocked")
            await self._notify(updated)
            if badge_id != BADGE_HUNTER:
                await self.check_badge_hunter()
        return updated

    async def _notify(self, badge: AnyBadge) -> None:
        if self.on_badge_unlocked is None:
            return
        result = self.on_badge_unlocked(badge)
        if inspect.isawaitable(result):
            await result

    async def check_badge_hunter(self) -> AnyBadge:
        count = self.unlocked_count()
        if count >= HUNTER_TARGET:
            return await self.update_progress(BADGE_HUNTER, HUNTER_TARGET, True)
        return await self.update_progress(BADGE_HUNTER, count, False)

    # Triggers -----------------------------------------------------------
    async def trigger_explorer(self, categories: Iterable[str]) -> AnyBadge:
        if EXPLORER_CATEGORIES.issubset(set(categories)):
            return await self.update_progress(EXPLORER, len(EXPLORER_CATEGORIES), True)
        return self.get(EXPLORER)

    async def trigger_daily_listener(self) -> AnyBadge:
        return await self.update_progress(DAILY_LISTENER, 1, True)

    async def trigger_cultural_critic(self) -> AnyBadge:
        return await self.update_progress(CULTURAL_CRITIC, 1, True)

    async def trigger_social_butterfly(self) -> AnyBadge:
        return await self.update_progress(SOCIAL_BUTTERFLY, 1, True)

    async def trigger_curator(self, likes_count: int) -> AnyBadge:
        return await self.update_progress(CURATOR, min(likes_count, CURATOR_LIKES), likes_count >= CURATOR_LIKES)

    async def trigger_streak_seeker(self, streak: int) -> AnyBadge:
        return await self.update_progress(STREAK_SEEKER, min(streak, STREAK_DAYS), streak >= STREAK_DAYS)

    # Activity tracking --------------------------------------------------
    async def track_category_view(self, category: str) -> AnyBadge:
        """Record a viewed category and re-evaluate Explorer over all of them."""
        activity = await self._record_activity(
            lambda a: {"observed_categories": list(dict.fromkeys([*a.observed_categories, category]))}
        )
        if activity is None:
            return self.get(EXPLORER)
        return await self.trigger_explorer(activity.observed_categories)

    async def track_like(self) -> AnyBadge:
        activity = await self._record_activity(lambda a: {"likes_count": a.likes_count + 1})
        if activity is None:
            return self.get(CURATOR)
        return await self.trigger_curator(activity.likes_count)

    async def track_daily_login(self, today: Optional[date] = None) -> AnyBadge:
        """Mark today active and feed the consecutive-day streak to Streak Seeker."""
        today = today or date.today()

        def mark_active(a: BadgeActivity) -> Dict[str, Any]:
            dates = sorted({*a.active_dates, today.isoformat()})
            return {"active_dates": dates[-ACTIVE_DATES_KEPT:]}

        activity = await self._record_activity(mark_active)
        if activity is None:
            return self.get(STREAK_SEEKER)
        return await self.trigger_streak_seeker(consecutive_days(activity.active_dates, today))

    async def _record_activity(
        self, change: Callable[[BadgeActivity], Dict[str, Any]]
    ) -> Optional[BadgeActivity]:
        user_id = await session_uid(self.get_session)
        if user_id is None:
            return None
        async with self._activity_lock:
            await self._ensure_loaded(user_id)
            partial = change(self._activity)
            self._activity = self._activity.model_copy(update=partial)
            try:
                await self.repository.merge_activity(user_id, partial)
            except REPOSITORY_ERRORS as exc:
                log_event("error", "badges.activity_write_failed", request_id=None, user_id=user_id,
                          error_code="badge_store_unavailable", extra={"reason": str(exc)})
            return self._activity
