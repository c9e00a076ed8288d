"""Tests for the local key/value store and result/theme persistence."""

import sqlite3
from unittest.mock import patch

import pytest

from skillgap_radar.controller import AnalysisController
from skillgap_radar.errors import PersistenceError
from skillgap_radar.state import AppState
from skillgap_radar.storage import (
    DEFAULT_THEME,
    RESULT_KEY,
    THEME_KEY,
    LocalStore,
    clear_result,
    clear_theme,
    load_result,
    load_theme,
    open_store,
    save_result,
    save_theme,
)


class TestLocalStore:
    def test_set_and_get(self, store):
        store.set_item("k", "v")
        assert store.get_item("k") == "v"

    def test_missing_key(self, store):
        assert store.get_item("nope") is None

    def test_overwrite(self, store):
        store.set_item("k", "one")
        store.set_item("k", "two")
        assert store.get_item("k") == "two"
        assert store.keys() == ["k"]

    def test_remove(self, store):
        store.set_item("k", "v")
        store.remove_item("k")
        assert store.get_item("k") is None

    def test_remove_missing_key_is_noop(self, store):
        store.remove_item("nope")

    def test_clear(self, store):
        store.set_item("a", "1")
        store.set_item("b", "2")
        assert store.clear() == 2
        assert store.keys() == []

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "nested" / "state.db"
        LocalStore(path).set_item("k", "v")
        assert LocalStore(path).get_item("k") == "v"


class TestResultPersistence:
    def test_round_trip(self, store, sample_result):
        save_result(store, sample_result)
        assert load_result(store) == sample_result

    def test_stored_as_camel_case(self, store, sample_result):
        save_result(store, sample_result)
        assert '"matchScore"' in store.get_item(RESULT_KEY)

    def test_nothing_saved(self, store):
        assert load_result(store) is None

    def test_corrupt_json_discarded(self, store, caplog):
        store.set_item(RESULT_KEY, "{not json")
        assert load_result(store) is None
        assert "Failed to restore state" in caplog.text

    def test_wrong_shape_discarded(self, store):
        store.set_item(RESULT_KEY, '{"matchScore": 50}')
        assert load_result(store) is None

    def test_clear(self, store, sample_result):
        save_result(store, sample_result)
        clear_result(store)
        assert load_result(store) is None

    def test_write_failure_raises(self, store, sample_result):
        with patch.object(store, "set_item", side_effect=sqlite3.OperationalError("disk full")):
            with pytest.raises(PersistenceError, match="disk full"):
                save_result(store, sample_result)

    def test_read_failure_returns_none(self, store):
        with patch.object(store, "get_item", side_effect=sqlite3.OperationalError("locked")):
            assert load_result(store) is None


class TestThemePersistence:
    def test_default(self, store):
        assert load_theme(store) == DEFAULT_THEME == "dark"

    def test_round_trip(self, store):
        save_theme(store, "light")
        assert load_theme(store) == "light"

    def test_unknown_theme_rejected(self, store):
        with pytest.raises(ValueError, match="Unknown theme"):
            save_theme(store, "sepia")

    def test_unknown_stored_theme_ignored(self, store):
        store.set_item(THEME_KEY, "sepia")
        assert load_theme(store) == DEFAULT_THEME

    def test_clear(self, store):
        save_theme(store, "light")
        clear_theme(store)
        assert load_theme(store) == DEFAULT_THEME

    def test_theme_and_result_independent(self, store, sample_result):
        save_theme(store, "light")
        save_result(store, sample_result)
        clear_result(store)
        assert load_theme(store) == "light"


class TestOpenStore:
    def test_opens_new_store(self, tmp_path):
        store = open_store(tmp_path / "state.db")
        assert isinstance(store, LocalStore)

    def test_corrupt_file_returns_none(self, tmp_path, caplog):
        db = tmp_path / "state.db"
        db.write_bytes(b"this is not a sqlite database at all" * 200)
        assert open_store(db) is None
        assert "unavailable" in caplog.text

    def test_controller_runs_without_corrupt_store(self, tmp_path):
        db = tmp_path / "state.db"
        db.write_bytes(b"\x00garbage" * 500)
        controller = AnalysisController(provider=None, store=open_store(db))
        assert controller.store is None
        assert controller.restore() == AppState()

    def test_unwritable_location_returns_none(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        # parent "directory" is a regular file, so mkdir fails
        assert open_store(blocker / "state.db") is None
