"""Tests for the AppState reducer."""

import pytest

from skillgap_radar.state import (
    ActionToggled,
    AnalyzeFailed,
    AnalyzeRequested,
    AnalyzeSucceeded,
    AppState,
    Reset,
    ResultRestored,
    SearchChanged,
    SkillSelected,
    ThemeToggled,
    reduce,
)


@pytest.fixture
def dashboard_state(sample_result) -> AppState:
    return AppState(
        result=sample_result,
        theme="light",
        search="react",
        selected_skill="TypeScript",
        completed=frozenset({"Migrate a React side project to TypeScript"}),
    )


class TestAnalyzeLifecycle:
    def test_request_sets_loading_and_clears_error(self):
        state = reduce(AppState(error="old"), AnalyzeRequested())
        assert state.loading is True
        assert state.error is None

    def test_request_while_loading_is_ignored(self):
        state = AppState(loading=True)
        assert reduce(state, AnalyzeRequested()) is state

    def test_success_stores_result(self, sample_result):
        state = reduce(AppState(loading=True), AnalyzeSucceeded(sample_result))
        assert state.result is sample_result
        assert state.loading is False
        assert state.error is None

    def test_success_resets_view_state(self, dashboard_state, sample_result):
        state = reduce(dashboard_state, AnalyzeSucceeded(sample_result))
        assert state.search == ""
        assert state.selected_skill is None
        assert state.completed == frozenset()
        assert state.theme == "light"

    def test_failure_records_message(self):
        state = reduce(AppState(loading=True), AnalyzeFailed("AI Request Failed: boom"))
        assert state.loading is False
        assert state.error == "AI Request Failed: boom"
        assert state.result is None

    def test_failure_keeps_previous_result(self, sample_result):
        state = reduce(AppState(result=sample_result, loading=True), AnalyzeFailed("x"))
        assert state.result is sample_result


class TestOtherEvents:
    def test_reset_keeps_only_theme(self, dashboard_state):
        state = reduce(dashboard_state, Reset())
        assert state == AppState(theme="light")

    def test_theme_toggle(self):
        state = reduce(AppState(), ThemeToggled())
        assert state.theme == "light"
        assert reduce(state, ThemeToggled()).theme == "dark"

    def test_restore(self, sample_result):
        state = reduce(AppState(), ResultRestored(sample_result))
        assert state.result is sample_result

    def test_restore_ignored_while_loading(self, sample_result):
        state = AppState(loading=True)
        assert reduce(state, ResultRestored(sample_result)) is state

    def test_search_and_select(self):
        state = reduce(AppState(), SearchChanged("type"))
        state = reduce(state, SkillSelected("TypeScript"))
        assert state.search == "type"
        assert state.selected_skill == "TypeScript"

    def test_action_toggle(self):
        state = reduce(AppState(), ActionToggled("Learn Jest"))
        assert state.completed == frozenset({"Learn Jest"})
        state = reduce(state, ActionToggled("Learn Jest"))
        assert state.completed == frozenset()

    def test_input_state_not_mutated(self):
        original = AppState()
        reduce(original, ThemeToggled())
        assert original.theme == "dark"

    def test_unknown_event(self):
        with pytest.raises(TypeError, match="Unknown event"):
            reduce(AppState(), object())


class TestToDict:
    def test_camel_case_snapshot(self, dashboard_state):
        data = dashboard_state.to_dict()
        assert data["result"]["matchScore"] == 62
        assert data["selectedSkill"] == "TypeScript"
        assert data["completed"] == ["Migrate a React side project to TypeScript"]

    def test_empty_state(self):
        assert AppState().to_dict()["result"] is None
