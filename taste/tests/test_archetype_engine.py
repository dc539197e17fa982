"""Tests for archetype resolution and ranking."""

from taste.features.archetypes import engine
from taste.features.archetypes.registry import (
    ARCHETYPES,
    ARCHETYPES_BY_NAME,
    OPTION_AFFINITY,
    QUIZ_CATEGORY_IDS,
    get_archetype,
)
from taste.models.archetype import Archetype


def _archetype(name: str) -> Archetype:
    return Archetype(name=name, color="#000000", gradient=("#000000", "#FFFFFF"), description=name)


def test_registry_is_consistent():
    assert len(ARCHETYPES) == 24
    assert len(ARCHETYPES_BY_NAME) == 24
    assert QUIZ_CATEGORY_IDS[0] == "music"
    assert get_archetype("Vintage Flâneur") is not None
    assert get_archetype("Nobody") is None
    for weights in OPTION_AFFINITY.values():
        assert set(weights) <= set(ARCHETYPES_BY_NAME)
        assert all(0 <= w <= 3 for w in weights.values())


def test_missing_affinity_counts_as_zero():
    assert engine.affinity_weight("Unknown Option", "Alt Pulse") == 0
    assert engine.affinity_weight("Indie Rock", "Zen Zest") == 0
    assert engine.affinity_weight("Indie Rock", "Alt Pulse") == 3


def test_affinity_is_clamped():
    table = {"x": {"A": 7, "B": -2}}
    assert engine.affinity_weight("x", "A", table) == 3
    assert engine.affinity_weight("x", "B", table) == 0


def test_resolve_walks_quiz_order_then_selection_order():
    prefs = {"movies": ["A24 Films"], "music": ["Indie Rock", "Jazz"]}
    scored = engine.resolve(prefs, get_archetype("Alt Pulse"))

    assert [(s.category, s.option) for s in scored] == [
        ("music", "Indie Rock"),
        ("music", "Jazz"),
        ("movies", "A24 Films"),
    ]
    assert scored[0].raw_score == 1.0
    assert abs(scored[1].raw_score - 1 / 3) < 1e-9


def test_resolve_keeps_duplicates_across_categories():
    prefs = {"music": ["Jazz"], "artist": ["Jazz"]}
    scored = engine.resolve(prefs, get_archetype("Wander Muse"))
    assert [s.category for s in scored] == ["music", "artist"]


def test_resolve_appends_extra_categories_after_quiz_order():
    prefs = {"genre": ["Jazz"], "music": ["Folk"]}
    order = engine.category_order(prefs)
    assert order[: len(QUIZ_CATEGORY_IDS)] == list(QUIZ_CATEGORY_IDS)
    assert order[-1] == "genre"

    scored = engine.resolve(prefs, get_archetype("Wander Muse"))
    assert [s.option for s in scored] == ["Folk", "Jazz"]


def test_resolve_with_explicit_categories_ignores_others():
    prefs = {"music": ["Jazz"], "books": ["Biographies"]}
    scored = engine.resolve(prefs, get_archetype("Vintage Flâneur"), categories=["books"])
    assert [s.option for s in scored] == ["Biographies"]


def test_resolve_empty_preferences():
    assert engine.resolve({}, get_archetype("Alt Pulse")) == []


def test_rank_archetypes_orders_by_total_then_registry():
    matches = engine.rank_archetypes({"music": ["Indie Rock"]})

    assert len(matches) == len(ARCHETYPES)
    assert [m.archetype for m in matches[:3]] == ["Alt Pulse", "Culture Hacker", "Hidden Flame"]
    assert [m.total for m in matches[:3]] == [3, 2, 1]
    zero = [m.archetype for m in matches if m.total == 0]
    registry_order = [a.name for a in ARCHETYPES if a.name in zero]
    assert zero == registry_order


def test_rank_with_custom_table():
    table = {"Jazz": {"Retro Reviver": 3}}
    archetypes = [_archetype("Other"), _archetype("Retro Reviver")]
    matches = engine.rank_archetypes({"genre": ["Jazz"]}, archetypes, table)
    assert matches[0].archetype == "Retro Reviver"
    assert matches[0].resonance == 100


def test_resonance_counts_only_matching_options():
    prefs = {"music": ["Indie Rock", "Jazz", "Lofi Beats"]}
    # Indie Rock 3 + Jazz 1 over 2 matched options -> 4/6
    assert engine.archetype_resonance(prefs, "Alt Pulse") == 67
    assert engine.archetype_resonance(prefs, "Earth Artisan") == 0


def test_round_half_up():
    assert engine.round_half_up(0.5) == 1
    assert engine.round_half_up(2.5) == 3
    assert engine.round_half_up(66.666) == 67
    assert engine.round_half_up(33.333) == 33
