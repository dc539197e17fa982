"""Tests for mirror tiers, clarity and classification."""

import pytest

from taste.features.archetypes.engine import resolve
from taste.features.archetypes.registry import get_archetype
from taste.features.mirror import engine as mirror
from taste.models.archetype import Archetype, ScoredOption


def _scored(*scores):
    return [ScoredOption(category="music", option=f"opt{i}", raw_score=s) for i, s in enumerate(scores)]


@pytest.mark.parametrize(
    "score,expected",
    [
        (1.0, 3),
        (0.75, 3),
        (0.7499, 2),
        (2 / 3, 2),
        (0.5, 2),
        (0.4999, 1),
        (1 / 3, 1),
        (0.3, 1),
        (0.2999, 0),
        (0.0, 0),
    ],
)
def test_tier_boundaries(score, expected):
    assert mirror.tier(score) == expected


def test_clarity_range():
    assert mirror.clarity([]) == 0
    assert mirror.clarity(_scored(1.0)) == 100
    assert mirror.clarity(_scored(0.0, 0.0)) == 0
    assert mirror.clarity(_scored(1.0, 0.0)) == 50
    assert mirror.clarity(_scored(1 / 3)) == 33
    assert mirror.clarity(_scored(2 / 3)) == 67


def test_pick_template_is_pure():
    assert mirror.pick_template(3, 0) == mirror.QUOTE_TEMPLATES[3][0]
    assert mirror.pick_template(3, 5) == mirror.QUOTE_TEMPLATES[3][1]
    assert mirror.pick_template(0, 7) == mirror.pick_template(0, 7)


def test_reflection_text_names_archetype():
    assert "Alt Pulse" in mirror.reflection_text(2, "Alt Pulse")


def test_classify_partitions_and_sorts_stably():
    archetype = get_archetype("Alt Pulse")
    scored = _scored(1 / 3, 0.0, 1.0, 1 / 3, 2 / 3)
    reflection = mirror.classify(scored, archetype)

    assert [i.tier for i in reflection.ordered] == [3, 2, 1, 1, 0]
    # equal tiers keep resolver order
    assert [i.option for i in reflection.ordered if i.tier == 1] == ["opt0", "opt3"]
    assert [i.option for i in reflection.items] == ["opt2", "opt4", "opt0", "opt3"]
    assert [i.option for i in reflection.mismatches] == ["opt1"]
    assert len(reflection.items) + len(reflection.mismatches) == len(scored)
    assert reflection.clarity == 47


def test_classify_seed_selects_quotes():
    archetype = get_archetype("Alt Pulse")
    reflection = mirror.classify(_scored(1.0, 1.0), archetype, seed=2)
    assert [i.quote for i in reflection.ordered] == [
        mirror.QUOTE_TEMPLATES[3][2],
        mirror.QUOTE_TEMPLATES[3][3],
    ]


def test_classify_empty():
    reflection = mirror.classify([], get_archetype("Alt Pulse"))
    assert reflection.items == []
    assert reflection.mismatches == []
    assert reflection.clarity == 0


def test_jazz_retro_reviver_end_to_end():
    retro = Archetype(name="RetroReviver", color="#E5D3B3", gradient=("#E5D3B3", "#CDB4DB"),
                      description="Vinyl and cassettes.")
    scored = resolve({"genre": ["Jazz"]}, retro, affinity_table={"Jazz": {"RetroReviver": 3}})
    reflection = mirror.classify(scored, retro)

    assert len(reflection.items) == 1
    item = reflection.items[0]
    assert item.option == "Jazz"
    assert item.raw_score == 1.0
    assert item.tier == 3
    assert reflection.mismatches == []
    assert reflection.clarity == 100
