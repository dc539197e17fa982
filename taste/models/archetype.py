"""
Archetype Models

Taste archetypes are fixed, named profiles (e.g. "Retro Soul", "Zen Zest").
Quiz answers are scored against one archetype to build the mirror view:
- ScoredOption: one selected option with its normalized affinity (0..1)
- MirrorItem: a scored option classified into a sparkle tier (0..3)
- MirrorReflection: primary items, mismatches and the clarity percentage
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class Archetype(BaseModel):
    """Immutable registry entry for a taste archetype."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    color: str
    gradient: tuple[str, str]
    description: str
    icon: Optional[str] = None


class QuizCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    question: str
    options: tuple[str, ...]


class ScoredOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    option: str
    raw_score: float = Field(..., ge=0.0, le=1.0)


class ArchetypeMatch(BaseModel):
    """How strongly a set of preferences matches one archetype."""
    model_config = ConfigDict(frozen=True)

    archetype: str
    total: int = Field(..., ge=0)
    resonance: int = Field(..., ge=0, le=100)


class MirrorItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    option: str
    raw_score: float = Field(..., ge=0.0, le=1.0)
    tier: int = Field(..., ge=0, le=3)
    reflection: str
    quote: str


class MirrorReflection(BaseModel):
    """
    Result of one mirror classification pass.

    `ordered` holds every item sorted by tier (descending, stable);
    `items` and `mismatches` partition it on tier > 0 vs tier == 0.
    """
    model_config = ConfigDict(frozen=True)

    archetype: str
    items: list[MirrorItem] = Field(default_factory=list)
    mismatches: list[MirrorItem] = Field(default_factory=list)
    ordered: list[MirrorItem] = Field(default_factory=list)
    clarity: int = Field(default=0, ge=0, le=100)
