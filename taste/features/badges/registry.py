"""Static badge registry (7 badges) and unlock thresholds."""

from typing import Union

from taste.models.badge import FlagBadge, MetaBadge, ProgressBadge

EXPLORER = "explorer"
DAILY_LISTENER = "daily_listener"
CULTURAL_CRITIC = "cultural_critic"
SOCIAL_BUTTERFLY = "social_butterfly"
CURATOR = "curator"
STREAK_SEEKER = "streak_seeker"
BADGE_HUNTER = "badge_hunter"

EXPLORER_CATEGORIES = frozenset({"music", "movies", "books", "podcasts"})
CURATOR_LIKES = 10
STREAK_DAYS = 3
HUNTER_TARGET = 5
ACTIVE_DATES_KEPT = 7

BADGE_REGISTRY: tuple[Union[FlagBadge, ProgressBadge, MetaBadge], ...] = (
    FlagBadge(
        id=EXPLORER,
        name="Explorer",
        emoji="🗺️",
        description="Viewed all 4 categories",
        trigger="View music, movies, books, and podcasts",
    ),
    FlagBadge(
        id=DAILY_LISTENER,
        name="Daily Listener",
        emoji="🎵",
        description="Played at least 1 media",
        trigger="Play any song or podcast",
    ),
    FlagBadge(
        id=CULTURAL_CRITIC,
        name="Cultural Critic",
        emoji="🎭",
        description="Voted in the mood poll",
        trigger="Select your daily mood",
    ),
    FlagBadge(
        id=SOCIAL_BUTTERFLY,
        name="Social Butterfly",
        emoji="🦋",
        description="Shared a recommendation",
        trigger="Share any recommendation",
    ),
    ProgressBadge(
        id=CURATOR,
        name="Curator",
        emoji="❤️",
        description="Liked 10+ recommendations",
        trigger="Like recommendations",
        max_progress=CURATOR_LIKES,
    ),
    ProgressBadge(
        id=STREAK_SEEKER,
        name="Streak Seeker",
        emoji="🔥",
        description="Active for 3 days in a row",
        trigger="Daily engagement streak",
        max_progress=STREAK_DAYS,
    ),
    MetaBadge(
        id=BADGE_HUNTER,
        name="Badge Hunter",
        emoji="🏆",
        description="Unlocked 5 total badges",
        trigger="Collect other badges",
        max_progress=HUNTER_TARGET,
    ),
)

BADGE_IDS: tuple[str, ...] = tuple(b.id for b in BADGE_REGISTRY)
