"""
Badge Models

Badges come in three shapes, distinguished by `kind`:
- flag: unlocked by a single qualifying event
- progress: a bounded counter that unlocks at max_progress
- meta: a counter derived from how many other badges are unlocked

Only `progress`, `unlocked` and `last_updated` are ever persisted; the
display fields come from the static registry.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _BadgeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    emoji: str
    description: str
    trigger: str
    unlocked: bool = False


class FlagBadge(_BadgeBase):
    kind: Literal["flag"] = "flag"
    progress: int = Field(default=0, ge=0)


class ProgressBadge(_BadgeBase):
    kind: Literal["progress"] = "progress"
    progress: int = Field(default=0, ge=0)
    max_progress: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _progress_within_bounds(self) -> "ProgressBadge":
        if self.progress > self.max_progress:
            raise ValueError("progress must not exceed max_progress")
        return self


class MetaBadge(ProgressBadge):
    kind: Literal["meta"] = "meta"  # type: ignore[assignment]


Badge = Annotated[Union[FlagBadge, ProgressBadge, MetaBadge], Field(discriminator="kind")]


class BadgeStateRecord(BaseModel):
    """Persisted per-badge state inside the per-user badge document."""

    progress: int = 0
    unlocked: bool = False
    last_updated: Optional[datetime] = None


class BadgeActivity(BaseModel):
    """Cumulative behavior counters that feed the badge triggers."""

    observed_categories: list[str] = Field(default_factory=list)
    likes_count: int = Field(default=0, ge=0)
    active_dates: list[str] = Field(default_factory=list)  # ISO YYYY-MM-DD, last 7
