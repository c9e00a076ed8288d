"""Presentation helpers that derive dashboard views from an AnalysisResult.

Nothing here mutates the result; every function returns a new value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from skillgap_radar.models.analysis import AnalysisResult, LearningAction, Skill
from skillgap_radar.utils.url_validator import is_web_url

RADAR_IMPORTANCE = ("Critical", "High")
RADAR_MAX_SKILLS = 7

# CommonMark punctuation plus "$" (LaTeX) and ":" (emoji and color directives) in Streamlit
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|~<>$:])")


@dataclass(frozen=True)
class FilteredView:
    skills: tuple[Skill, ...]
    actions: tuple[LearningAction, ...]

    @property
    def is_empty(self) -> bool:
        return not self.skills and not self.actions


@dataclass(frozen=True)
class RadarPoint:
    subject: str
    required: int
    observed: int


def _matches(query: str, *fields: str) -> bool:
    return any(query in field.lower() for field in fields)


def filter_result(result: AnalysisResult, query: str) -> FilteredView:
    """Case-insensitive search over skills (name, category) and actions (text, resource)."""
    q = query.strip().lower()
    if not q:
        return FilteredView(tuple(result.skills), tuple(result.learning_pathway))
    return FilteredView(
        skills=tuple(s for s in result.skills if _matches(q, s.name, s.category)),
        actions=tuple(a for a in result.learning_pathway if _matches(q, a.action, a.resource)),
    )


def resolve_focus(skills: tuple[Skill, ...] | list[Skill], selected_name: str | None) -> Skill | None:
    """Keep the selected skill if it is still visible, else fall back to the first one."""
    if selected_name is not None:
        for skill in skills:
            if skill.name == selected_name:
                return skill
    return skills[0] if skills else None


def toggle_completed(completed: frozenset[str], action: str) -> frozenset[str]:
    if action in completed:
        return completed - {action}
    return completed | {action}


def score_band(score: int) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def gap_label(skill: Skill) -> str:
    return f"-{skill.gap}" if skill.gap > 0 else "Match"


def coverage_percent(skill: Skill) -> int:
    """Observed as a share of required, capped at 100."""
    return min(round(skill.observed_level / skill.required_level * 100), 100)


def radar_points(skills: list[Skill]) -> list[RadarPoint]:
    """Critical and High skills only, capped to keep the chart readable."""
    important = [s for s in skills if s.importance in RADAR_IMPORTANCE]
    return [
        RadarPoint(subject=s.name, required=s.required_level, observed=s.observed_level)
        for s in important[:RADAR_MAX_SKILLS]
    ]


def resource_link(resource: str) -> str | None:
    """Return the resource when it is a usable web link, else None."""
    return resource.strip() if is_web_url(resource) else None


def escape_markdown(text: str) -> str:
    """Backslash-escape model text so Streamlit markdown shows it literally."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)
