"""Local persistence for the last analysis and UI preferences."""
from skillgap_radar.storage.local_store import LocalStore, open_store
from skillgap_radar.storage.persistence import (
    DEFAULT_THEME,
    RESULT_KEY,
    THEME_KEY,
    THEMES,
    clear_result,
    clear_theme,
    load_result,
    load_theme,
    save_result,
    save_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "LocalStore",
    "open_store",
    "RESULT_KEY",
    "THEME_KEY",
    "THEMES",
    "clear_result",
    "clear_theme",
    "load_result",
    "load_theme",
    "save_result",
    "save_theme",
]
