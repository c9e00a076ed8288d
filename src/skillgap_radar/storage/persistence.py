"""Save and restore the last analysis result and the theme preference."""

from __future__ import annotations

import logging
import sqlite3

from pydantic import ValidationError

from skillgap_radar.errors import PersistenceError
from skillgap_radar.models.analysis import AnalysisResult
from skillgap_radar.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

RESULT_KEY = "skillGap_result"
THEME_KEY = "skillGap_theme"

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"


def save_result(store: LocalStore, result: AnalysisResult) -> None:
    """Persist the result as camelCase JSON.

    Raises PersistenceError if the store cannot be written.
    """
    try:
        store.set_item(RESULT_KEY, result.to_json())
    except sqlite3.Error as exc:
        raise PersistenceError(f"Could not save analysis result: {exc}") from exc


def load_result(store: LocalStore) -> AnalysisResult | None:
    """Restore the cached result; corrupt or unreadable data counts as none."""
    try:
        raw = store.get_item(RESULT_KEY)
    except sqlite3.Error:
        logger.exception("Failed to read cached result")
        return None
    if raw is None:
        return None
    try:
        return AnalysisResult.model_validate_json(raw)
    except ValidationError:
        logger.warning("Failed to restore state: cached result is corrupt", exc_info=True)
        return None


def clear_result(store: LocalStore) -> None:
    store.remove_item(RESULT_KEY)


def save_theme(store: LocalStore, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme!r}")
    try:
        store.set_item(THEME_KEY, theme)
    except sqlite3.Error as exc:
        raise PersistenceError(f"Could not save theme: {exc}") from exc


def load_theme(store: LocalStore) -> str:
    try:
        theme = store.get_item(THEME_KEY)
    except sqlite3.Error:
        logger.exception("Failed to read theme preference")
        return DEFAULT_THEME
    if theme not in THEMES:
        if theme is not None:
            logger.warning("Ignoring unknown stored theme %r", theme)
        return DEFAULT_THEME
    return theme


def clear_theme(store: LocalStore) -> None:
    store.remove_item(THEME_KEY)
