"""Centralized session state management for the KPI page."""

from typing import List, Optional, Tuple

import streamlit as st

from kpi_dashboard.utils.config import SESSION_CHECK_SECONDS, STORAGE_PATH
from kpi_dashboard.utils.filters import TeamFilter
from kpi_dashboard.utils.session import SessionWatcher, is_authorized
from kpi_dashboard.utils.storage import JsonFileStore, KeyValueStore, load_team_names
from kpi_dashboard.utils.types import ChartRow
from kpi_dashboard.utils.validation import validate_query_form

_STORE_KEY = "kv_store"
_WATCHER_KEY = "session_watcher"
_FILTER_KEY = "team_filter"
_CHART_ROWS_KEY = "chart_rows"
_KPI_KEY = "selected_kpi"
_ERROR_KEY = "display_error"
_LOADING_KEY = "query_loading"

_PAGE_KEYS = (_FILTER_KEY, _CHART_ROWS_KEY, _KPI_KEY, _ERROR_KEY, _LOADING_KEY)

# Widget keys of the KPI form.
FORM_KEYS = ("start_year", "end_year", "kpi_name")


def get_store() -> KeyValueStore:
    """Local storage (JSON file unless one was injected).

    Every browser session opens the same ``STORAGE_PATH``, so they share one login.
    """
    if _STORE_KEY not in st.session_state:
        st.session_state[_STORE_KEY] = JsonFileStore(STORAGE_PATH)
    return st.session_state[_STORE_KEY]


def init_page_state(store: KeyValueStore) -> None:
    """Initialize page state if not present."""
    if _FILTER_KEY not in st.session_state:
        st.session_state[_FILTER_KEY] = TeamFilter.from_cache(load_team_names(store))
    if _CHART_ROWS_KEY not in st.session_state:
        st.session_state[_CHART_ROWS_KEY] = []
    if _KPI_KEY not in st.session_state:
        st.session_state[_KPI_KEY] = ""
    if _ERROR_KEY not in st.session_state:
        st.session_state[_ERROR_KEY] = None
    if _LOADING_KEY not in st.session_state:
        st.session_state[_LOADING_KEY] = False


def clear_page_state() -> None:
    for key in _PAGE_KEYS:
        if key in st.session_state:
            del st.session_state[key]


# ---------------------------------------------------------------------------
# Team filter
# ---------------------------------------------------------------------------

def get_team_filter(store: KeyValueStore) -> TeamFilter:
    init_page_state(store)
    return st.session_state[_FILTER_KEY]


def refresh_team_options(store: KeyValueStore, new_team_names: Optional[List[str]]) -> None:
    """Populate the filter after the first query discovered team names."""
    if new_team_names is None:
        return
    get_team_filter(store).reset(new_team_names)


def reset_form_state(store: KeyValueStore) -> None:
    """Clear selected teams and reload the available ones from the cache."""
    get_team_filter(store).reset(load_team_names(store))


# ---------------------------------------------------------------------------
# Chart data
# ---------------------------------------------------------------------------

def set_chart(rows: List[ChartRow], kpi: str) -> None:
    st.session_state[_CHART_ROWS_KEY] = rows
    st.session_state[_KPI_KEY] = kpi


def get_chart() -> Tuple[List[ChartRow], str]:
    return (
        st.session_state.get(_CHART_ROWS_KEY, []),
        st.session_state.get(_KPI_KEY, ""),
    )


# ---------------------------------------------------------------------------
# Error view
# ---------------------------------------------------------------------------

def set_error(message: str) -> None:
    st.session_state[_ERROR_KEY] = message


def get_error() -> Optional[str]:
    return st.session_state.get(_ERROR_KEY)


def clear_error() -> None:
    st.session_state[_ERROR_KEY] = None


# ---------------------------------------------------------------------------
# Loading flag
# ---------------------------------------------------------------------------

def begin_query() -> bool:
    """Mark a query as in flight.

    Returns:
        False if another query is already running (the submit should be ignored).
    """
    if st.session_state.get(_LOADING_KEY, False):
        return False
    st.session_state[_LOADING_KEY] = True
    return True


def end_query() -> None:
    st.session_state[_LOADING_KEY] = False


def is_loading() -> bool:
    return bool(st.session_state.get(_LOADING_KEY, False))


def on_analyze_click() -> None:
    """Analyze button callback.

    Runs before the script reruns, so a valid submit is marked in flight and the
    button renders disabled until the query finishes.
    """
    start_year, end_year, kpi = (st.session_state.get(key) for key in FORM_KEYS)
    if not validate_query_form(start_year, end_year, kpi):
        begin_query()


# ---------------------------------------------------------------------------
# Session watcher (owned by the shell, stopped on logout)
# ---------------------------------------------------------------------------

def get_session_watcher(store: KeyValueStore, interval: float = SESSION_CHECK_SECONDS) -> SessionWatcher:
    """Return the running watcher for this session, starting one if needed."""
    watcher = st.session_state.get(_WATCHER_KEY)
    if watcher is None or watcher.expired.is_set():
        if watcher is not None:
            watcher.stop()
        watcher = SessionWatcher(lambda: is_authorized(store), interval=interval)
        st.session_state[_WATCHER_KEY] = watcher
    return watcher.start()


def stop_session_watcher() -> None:
    watcher = st.session_state.get(_WATCHER_KEY)
    if watcher is not None:
        watcher.stop()
        del st.session_state[_WATCHER_KEY]
