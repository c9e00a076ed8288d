"""Application state and the pure reducer that drives it.

The UI never mutates state in place. Each interaction is an event passed to
``reduce``, which returns the next ``AppState``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Union

from skillgap_radar.dashboard.views import toggle_completed
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.storage.persistence import DEFAULT_THEME


@dataclass(frozen=True)
class AppState:
    result: AnalysisResult | None = None
    loading: bool = False
    error: str | None = None
    theme: str = DEFAULT_THEME
    search: str = ""
    selected_skill: str | None = None
    completed: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result.model_dump(by_alias=True) if self.result else None,
            "loading": self.loading,
            "error": self.error,
            "theme": self.theme,
            "search": self.search,
            "selectedSkill": self.selected_skill,
            "completed": sorted(self.completed),
        }


@dataclass(frozen=True)
class AnalyzeRequested:
    pass


@dataclass(frozen=True)
class AnalyzeSucceeded:
    result: AnalysisResult


@dataclass(frozen=True)
class AnalyzeFailed:
    message: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class ThemeToggled:
    pass


@dataclass(frozen=True)
class ResultRestored:
    result: AnalysisResult


@dataclass(frozen=True)
class SearchChanged:
    query: str


@dataclass(frozen=True)
class SkillSelected:
    name: str | None


@dataclass(frozen=True)
class ActionToggled:
    action: str


Event = Union[
    AnalyzeRequested,
    AnalyzeSucceeded,
    AnalyzeFailed,
    Reset,
    ThemeToggled,
    ResultRestored,
    SearchChanged,
    SkillSelected,
    ActionToggled,
]


def _with_result(state: AppState, result: AnalysisResult) -> AppState:
    # a new result invalidates every view-level selection made on the old one
    return replace(
        state,
        result=result,
        loading=False,
        error=None,
        search="",
        selected_skill=None,
        completed=frozenset(),
    )


def reduce(state: AppState, event: Event) -> AppState:
    """Return the state that follows ``event``."""
    if isinstance(event, AnalyzeRequested):
        if state.loading:
            return state
        return replace(state, loading=True, error=None)
    if isinstance(event, AnalyzeSucceeded):
        return _with_result(state, event.result)
    if isinstance(event, AnalyzeFailed):
        return replace(state, loading=False, error=event.message)
    if isinstance(event, Reset):
        return AppState(theme=state.theme)
    if isinstance(event, ThemeToggled):
        return replace(state, theme="light" if state.theme == "dark" else "dark")
    if isinstance(event, ResultRestored):
        if state.loading:
            return state
        return _with_result(state, event.result)
    if isinstance(event, SearchChanged):
        return replace(state, search=event.query)
    if isinstance(event, SkillSelected):
        return replace(state, selected_skill=event.name)
    if isinstance(event, ActionToggled):
        return replace(state, completed=toggle_completed(state.completed, event.action))
    raise TypeError(f"Unknown event: {event!r}")
