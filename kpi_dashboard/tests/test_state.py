"""Tests for page session state helpers (st.session_state is mocked in conftest)."""

import json

import pytest

from kpi_dashboard.utils.constants import TEAM_NAMES_KEY
from kpi_dashboard.utils.session import login
from kpi_dashboard.utils.state import (
    FORM_KEYS,
    begin_query,
    clear_error,
    clear_page_state,
    end_query,
    get_chart,
    get_error,
    get_session_watcher,
    get_store,
    get_team_filter,
    init_page_state,
    is_loading,
    on_analyze_click,
    refresh_team_options,
    reset_form_state,
    set_chart,
    set_error,
    stop_session_watcher,
)
from kpi_dashboard.utils.storage import InMemoryStore, JsonFileStore


class TestStore:
    def test_default_store_is_json_file(self, mock_session_state):
        assert isinstance(get_store(), JsonFileStore)

    def test_injected_store_is_reused(self, mock_session_state, store):
        mock_session_state["kv_store"] = store
        assert get_store() is store


class TestPageState:
    def test_init_defaults(self, store):
        init_page_state(store)
        assert get_chart() == ([], "")
        assert get_error() is None
        assert is_loading() is False
        assert get_team_filter(store).available == []

    def test_team_filter_seeded_from_cache(self, store):
        store.set(TEAM_NAMES_KEY, json.dumps(["A", "B"]))
        assert get_team_filter(store).available == ["A", "B"]

    def test_refresh_team_options_only_with_new_names(self, store):
        f = get_team_filter(store)
        refresh_team_options(store, None)
        assert f.available == []
        refresh_team_options(store, ["X", "Y"])
        assert f.available == ["X", "Y"]

    def test_reset_form_state_reloads_cache(self, store):
        store.set(TEAM_NAMES_KEY, json.dumps(["A", "B", "C"]))
        f = get_team_filter(store)
        f.select("all")
        reset_form_state(store)
        assert f.available == ["A", "B", "C"]
        assert f.selected == []

    def test_chart_round_trip(self):
        set_chart([{"teamName": "A", "year": "2020", "won": 1}], "won")
        rows, kpi = get_chart()
        assert kpi == "won"
        assert rows[0]["teamName"] == "A"

    def test_error_set_and_clear(self):
        set_error("Error: boom")
        assert get_error() == "Error: boom"
        clear_error()
        assert get_error() is None

    def test_clear_page_state(self, store, mock_session_state):
        init_page_state(store)
        set_chart([{"teamName": "A"}], "won")
        clear_page_state()
        assert "chart_rows" not in mock_session_state
        assert "team_filter" not in mock_session_state


class TestLoadingGuard:
    def test_second_query_blocked_while_loading(self):
        assert begin_query() is True
        assert is_loading() is True
        assert begin_query() is False
        end_query()
        assert begin_query() is True

    def test_valid_analyze_click_marks_query_in_flight(self, mock_session_state):
        for key, value in zip(FORM_KEYS, (2021, 2023, "won")):
            mock_session_state[key] = value
        on_analyze_click()
        assert is_loading() is True

    @pytest.mark.parametrize("values", [(2024, 2020, "won"), (2020, 2021, None), (None, None, None)])
    def test_invalid_analyze_click_leaves_button_enabled(self, mock_session_state, values):
        for key, value in zip(FORM_KEYS, values):
            mock_session_state[key] = value
        on_analyze_click()
        assert is_loading() is False


class TestSessionWatcherOwnership:
    def test_watcher_started_once_and_stopped(self, store, mock_session_state):
        login(store, "token")
        try:
            watcher = get_session_watcher(store, interval=0.05)
            assert watcher.is_running
            assert get_session_watcher(store, interval=0.05) is watcher
        finally:
            stop_session_watcher()
        assert not watcher.is_running
        assert "session_watcher" not in mock_session_state

    def test_expired_watcher_replaced(self, store):
        watcher = get_session_watcher(store, interval=0.05)
        assert watcher.expired.wait(1.0)
        login(store, "token")
        try:
            replacement = get_session_watcher(store, interval=0.05)
            assert replacement is not watcher
            assert not replacement.expired.is_set()
        finally:
            stop_session_watcher()

    def test_stop_without_watcher_is_noop(self):
        stop_session_watcher()
