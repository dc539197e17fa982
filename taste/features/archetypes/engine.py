"""
Archetype Engine: Pure Deterministic Functions

All functions are pure: same inputs => same outputs.
No external API calls, no randomness.

Scoring Rules:
1. Affinity weights are integers 0..3; a raw score is weight / 3
2. Missing affinity entries count as 0
3. Category order is fixed (quiz order), selection order is preserved
"""

from typing import Iterable, Mapping, Optional, Sequence

from taste.features.archetypes.registry import ARCHETYPES, OPTION_AFFINITY, QUIZ_CATEGORY_IDS
from taste.models.archetype import Archetype, ArchetypeMatch, ScoredOption


MAX_AFFINITY = 3

Preferences = Mapping[str, Sequence[str]]
AffinityTable = Mapping[str, Mapping[str, int]]


def affinity_weight(option: str, archetype_name: str, affinity_table: AffinityTable = OPTION_AFFINITY) -> int:
    """Weight of an option for an archetype; 0 when either lookup misses."""
    weights = affinity_table.get(option) or {}
    weight = weights.get(archetype_name) or 0
    return max(0, min(MAX_AFFINITY, int(weight)))


def category_order(preferences: Preferences, categories: Optional[Iterable[str]] = None) -> list[str]:
    """
    Categories to walk, in order.

    With an explicit list, exactly that list. Otherwise the quiz order
    followed by any extra preference categories in insertion order.
    """
    if categories is not None:
        return list(categories)
    ordered = list(QUIZ_CATEGORY_IDS)
    ordered.extend(c for c in preferences.keys() if c not in QUIZ_CATEGORY_IDS)
    return ordered


def resolve(
    preferences: Preferences,
    archetype: Archetype,
    affinity_table: AffinityTable = OPTION_AFFINITY,
    categories: Optional[Iterable[str]] = None,
) -> list[ScoredOption]:
    """
    Score every selected option against one archetype.

    Algorithm:
    1. Walk categories in fixed order
    2. Walk the user's selections in the order they were made
    3. raw_score = affinity[option][archetype] / 3

    The same option selected under two categories yields two entries.

    Args:
        preferences: category id -> selected option labels
        archetype: archetype to score against
        affinity_table: option -> archetype name -> weight (0..3)
        categories: optional explicit category order

    Returns:
        list of ScoredOption, one per selection
    """
    scored: list[ScoredOption] = []
    for category in category_order(preferences, categories):
        for option in preferences.get(category) or ():
            weight = affinity_weight(option, archetype.name, affinity_table)
            scored.append(
                ScoredOption(category=category, option=option, raw_score=weight / MAX_AFFINITY)
            )
    return scored


def archetype_resonance(
    preferences: Preferences,
    archetype_name: str,
    affinity_table: AffinityTable = OPTION_AFFINITY,
) -> int:
    """
    Percent of the maximum affinity reached by the options that touch an archetype.

    Options with no weight for the archetype are left out of the
    denominator, so a user with a few strong matches still resonates.
    Returns 0 when nothing matches.
    """
    total = 0
    matched = 0
    for options in preferences.values():
        for option in options or ():
            weight = affinity_weight(option, archetype_name, affinity_table)
            if weight:
                total += weight
                matched += 1
    if not matched:
        return 0
    return round_half_up(total / (matched * MAX_AFFINITY) * 100)


def rank_archetypes(
    preferences: Preferences,
    archetypes: Sequence[Archetype] = ARCHETYPES,
    affinity_table: AffinityTable = OPTION_AFFINITY,
) -> list[ArchetypeMatch]:
    """
    Rank archetypes by summed affinity over every selected option.

    Ties keep registry order (sorted() is stable).
    """
    matches = []
    for archetype in archetypes:
        total = sum(
            affinity_weight(option, archetype.name, affinity_table)
            for options in preferences.values()
            for option in options or ()
        )
        matches.append(
            ArchetypeMatch(
                archetype=archetype.name,
                total=total,
                resonance=archetype_resonance(preferences, archetype.name, affinity_table),
            )
        )
    return sorted(matches, key=lambda m: m.total, reverse=True)


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
