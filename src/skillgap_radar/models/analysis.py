"""Pydantic models for the gap analysis returned by the model."""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

Importance = Literal["Critical", "High", "Medium", "Low"]
Priority = Literal["High", "Medium", "Low"]

MIN_LEVEL = 1
MAX_LEVEL = 5


def clamp_number(value, low: int, high: int):
    """Round a numeric value and clamp it into [low, high].

    Non-numeric input is returned untouched so field validation rejects it.
    """
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if not math.isfinite(value):
        return value
    return min(max(math.floor(value + 0.5), low), high)


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Skill(CamelModel):
    name: str
    category: str
    importance: Importance
    required_level: int
    observed_level: int
    gap: int = 0  # always recomputed from the two levels
    reasoning: str
    evidence: str

    @field_validator("required_level", "observed_level", mode="before")
    @classmethod
    def _clamp_level(cls, value):
        return clamp_number(value, MIN_LEVEL, MAX_LEVEL)

    @model_validator(mode="after")
    def _derive_gap(self) -> Skill:
        self.gap = max(self.required_level - self.observed_level, 0)
        return self


class LearningAction(CamelModel):
    action: str
    priority: Priority
    timeline: str
    resource: str  # URL or free-text pointer


class AnalysisResult(CamelModel):
    match_score: int
    executive_summary: str
    skills: list[Skill]
    learning_pathway: list[LearningAction]
    model_used: str | None = None

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        return clamp_number(value, 0, 100)

    def to_json(self) -> str:
        """Serialize with the camelCase keys used on the wire and on disk."""
        return self.model_dump_json(by_alias=True)
