"""
Mirror Engine: classify scored options into sparkle tiers.

Tier (sparkles) is the correctness-bearing part; the narrative text is
flavor picked by a pure function of (tier, seed).
"""

from typing import Optional, Sequence

from taste.features.archetypes.engine import round_half_up
from taste.models.archetype import Archetype, MirrorItem, MirrorReflection, ScoredOption


# Lower bounds are inclusive: (threshold, tier), checked top-down
TIER_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (0.75, 3),
    (0.5, 2),
    (0.3, 1),
)

REFLECTION_TEMPLATES: dict[int, str] = {
    3: "This perfectly mirrors your {archetype} soul - it's like looking into your cultural DNA!",
    2: "A beautiful reflection of your {archetype} nature, showing your authentic taste.",
    1: "This somewhat reflects your {archetype} spirit, adding an interesting dimension.",
    0: "This creates an intriguing contrast to your {archetype} essence.",
}

QUOTE_TEMPLATES: dict[int, tuple[str, ...]] = {
    3: ("This is pure you!", "Your essence shines here", "Perfect reflection!", "So authentically you"),
    2: ("Great taste showing", "Your vibe is strong", "Nice reflection", "I see your soul"),
    1: ("Interesting choice", "Expanding horizons", "Curious reflection", "New territory"),
    0: ("Plot twist moment", "Breaking the mirror", "Unexpected path", "Rebel choice"),
}


def tier(score: float) -> int:
    """Sparkle count for a normalized score: >=0.75 -> 3, >=0.5 -> 2, >=0.3 -> 1, else 0."""
    for threshold, sparkles in TIER_THRESHOLDS:
        if score >= threshold:
            return sparkles
    return 0


def clarity(scored_options: Sequence[ScoredOption]) -> int:
    """Mean raw score as a whole percent; 0 when nothing was selected."""
    if not scored_options:
        return 0
    mean = sum(s.raw_score for s in scored_options) / len(scored_options)
    return max(0, min(100, round_half_up(mean * 100)))


def pick_template(tier_value: int, seed: int) -> str:
    """Quote for a tier; the seed picks among the tier's templates."""
    templates = QUOTE_TEMPLATES[tier_value]
    return templates[seed % len(templates)]


def reflection_text(tier_value: int, archetype_name: str) -> str:
    return REFLECTION_TEMPLATES[tier_value].format(archetype=archetype_name)


def classify(
    scored_options: Sequence[ScoredOption],
    archetype: Archetype,
    seed: Optional[int] = None,
) -> MirrorReflection:
    """
    Build the mirror view for one archetype.

    Args:
        scored_options: resolver output, in resolver order
        archetype: archetype the options were scored against
        seed: quote selector; when omitted each item uses its own index

    Returns:
        MirrorReflection with items (tier > 0), mismatches (tier 0),
        the tier-sorted full list and the clarity percentage
    """
    built: list[MirrorItem] = []
    for index, scored in enumerate(scored_options):
        sparkles = tier(scored.raw_score)
        built.append(
            MirrorItem(
                id=f"{scored.category}-{scored.option}",
                category=scored.category,
                option=scored.option,
                raw_score=scored.raw_score,
                tier=sparkles,
                reflection=reflection_text(sparkles, archetype.name),
                quote=pick_template(sparkles, index if seed is None else seed + index),
            )
        )

    ordered = sorted(built, key=lambda item: item.tier, reverse=True)
    return MirrorReflection(
        archetype=archetype.name,
        items=[item for item in ordered if item.tier > 0],
        mismatches=[item for item in ordered if item.tier == 0],
        ordered=ordered,
        clarity=clarity(scored_options),
    )
