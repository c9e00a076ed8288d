"""Controller that owns AppState and connects it to the provider and the store."""

from __future__ import annotations

import logging
import sqlite3

from skillgap_radar.errors import PersistenceError, SkillGapError
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.models.resume import AnalysisRequest, ResumePayload
from skillgap_radar.pipeline.gap_analyst import AnalysisProvider
from skillgap_radar.state import (
    AnalyzeFailed,
    AnalyzeRequested,
    AnalyzeSucceeded,
    AppState,
    Event,
    Reset,
    ResultRestored,
    ThemeToggled,
    reduce,
)
from skillgap_radar.storage import persistence
from skillgap_radar.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Analysis failed. Please try again or check your API key."


class AnalysisController:
    """Runs analyses and keeps state, persisted result and theme in step.

    ``store`` may be None, in which case nothing is persisted.
    """

    def __init__(
        self,
        provider: AnalysisProvider,
        store: LocalStore | None = None,
        state: AppState | None = None,
    ):
        self.provider = provider
        self.store = store
        self.state = state or AppState()

    def dispatch(self, event: Event) -> AppState:
        self.state = reduce(self.state, event)
        return self.state

    @staticmethod
    def can_submit(job_description: str | None, payload: ResumePayload | None) -> bool:
        return bool(job_description and job_description.strip()) and payload is not None

    def restore(self) -> AppState:
        """Load the cached theme and result, if any."""
        if self.store is None:
            return self.state
        theme = persistence.load_theme(self.store)
        if theme != self.state.theme:
            self.dispatch(ThemeToggled())
        result = persistence.load_result(self.store)
        if result is not None:
            self.dispatch(ResultRestored(result))
        return self.state

    async def submit(self, job_description: str, payload: ResumePayload | None) -> AnalysisResult | None:
        """Run one analysis.

        Returns None without calling the provider when input is incomplete or
        an analysis is already running. Provider failures are recorded on
        ``state.error`` and also return None.
        """
        if not self.can_submit(job_description, payload):
            logger.debug("Submission blocked: job description or résumé missing")
            return None
        if self.state.loading:
            logger.debug("Submission blocked: analysis already in progress")
            return None

        self.dispatch(AnalyzeRequested())
        request = AnalysisRequest(job_description=job_description, resume=payload)
        try:
            result = await self.provider.analyze(request)
        except SkillGapError as exc:
            logger.error("AI analysis failed (%s): %s", exc.kind.value, exc)
            self.dispatch(AnalyzeFailed(str(exc)))
            return None
        except Exception:
            self.dispatch(AnalyzeFailed(GENERIC_FAILURE))
            raise

        self.dispatch(AnalyzeSucceeded(result))
        self._persist_result(result)
        return result

    def reset(self) -> AppState:
        self.dispatch(Reset())
        if self.store is not None:
            try:
                persistence.clear_result(self.store)
            except sqlite3.Error:
                logger.exception("Failed to clear cached result")
        return self.state

    def toggle_theme(self) -> AppState:
        self.dispatch(ThemeToggled())
        if self.store is not None:
            try:
                persistence.save_theme(self.store, self.state.theme)
            except PersistenceError:
                logger.exception("Failed to save theme")
        return self.state

    def _persist_result(self, result: AnalysisResult) -> None:
        if self.store is None:
            return
        try:
            persistence.save_result(self.store, result)
        except PersistenceError:
            logger.exception("Failed to persist analysis result")
