"""Team KPI Analysis — season-by-season team comparison.

Entry point: streamlit run kpi_dashboard/app.py
"""

import sys
import pathlib

_project_root = pathlib.Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from kpi_dashboard.utils.analysis import format_error, run_kpi_query
from kpi_dashboard.utils.charts import kpi_grouped_bar
from kpi_dashboard.utils.config import ENV, LOG_LEVEL, SENTRY_DSN, SESSION_CHECK_SECONDS
from kpi_dashboard.utils.constants import (
    ALL_TEAMS_LABEL,
    ALL_TEAMS_OPTION,
    KPI_LABELS,
    KPI_NAMES,
    LOGIN_PAGE,
    YEAR_OPTIONS,
)
from kpi_dashboard.utils.football_client import FootballDataClient
from kpi_dashboard.utils.monitoring import capture_exception, configure_logging, init_sentry, logger
from kpi_dashboard.utils.session import get_token, is_authorized, logout
from kpi_dashboard.utils.sidebar import render_sidebar
from kpi_dashboard.utils.state import (
    FORM_KEYS,
    clear_error,
    clear_page_state,
    end_query,
    get_chart,
    get_error,
    get_session_watcher,
    get_store,
    get_team_filter,
    is_loading,
    on_analyze_click,
    refresh_team_options,
    reset_form_state,
    set_chart,
    set_error,
    stop_session_watcher,
)
from kpi_dashboard.utils.validation import validate_query_form

st.set_page_config(
    page_title="Team KPI Analysis",
    page_icon="⚽",
    layout="wide",
    initial_sidebar_state="expanded",
)

configure_logging(LOG_LEVEL)
init_sentry(SENTRY_DSN, environment=ENV)

store = get_store()

# ---------------------------------------------------------------------------
# Session guard
# ---------------------------------------------------------------------------
if not is_authorized(store):
    stop_session_watcher()
    st.switch_page(LOGIN_PAGE)

watcher = get_session_watcher(store)


@st.fragment(run_every=SESSION_CHECK_SECONDS)
def _session_guard() -> None:
    if watcher.expired.is_set():
        st.switch_page(LOGIN_PAGE)


_session_guard()


def _logout() -> None:
    stop_session_watcher()
    logout(store)
    clear_page_state()
    st.switch_page(LOGIN_PAGE)


render_sidebar(on_logout=_logout)

# ---------------------------------------------------------------------------
# Error view replaces the page
# ---------------------------------------------------------------------------
error = get_error()
if error:
    st.error(error)
    if st.button("Try again"):
        clear_error()
        st.rerun()
    st.stop()

st.markdown(
    """
    <div class="page-hero">
        <div class="page-hero-title">📊 Team KPI Analysis</div>
        <div class="page-hero-sub">
            Pick a season range, optionally narrow the teams, and compare a KPI across seasons.
        </div>
    </div>
    """,
    unsafe_allow_html=True,
)

team_filter = get_team_filter(store)


def _on_team_pick() -> None:
    picked = st.session_state.get("team_pick")
    if picked:
        team_filter.select(picked)
    st.session_state["team_pick"] = None


def _on_reset() -> None:
    for key in FORM_KEYS + ("team_pick",):
        st.session_state[key] = None
    reset_form_state(store)


left, right = st.columns([1, 2.5], gap="large")

with left:
    # Team filter lives outside the form so picks apply immediately.
    if team_filter.has_options:
        st.selectbox(
            "Team Names",
            options=[ALL_TEAMS_OPTION] + team_filter.available,
            index=None,
            placeholder="Select teams",
            format_func=lambda v: ALL_TEAMS_LABEL if v == ALL_TEAMS_OPTION else v,
            key="team_pick",
            on_change=_on_team_pick,
        )
        for team in list(team_filter.selected):
            st.button(
                f"{team}  ✕",
                key=f"remove_team_{team}",
                on_click=team_filter.remove,
                args=(team,),
            )

    with st.form("kpi_form"):
        start_year = st.selectbox(
            "Start Year", YEAR_OPTIONS, index=None, placeholder="Select start year", key="start_year",
        )
        end_year = st.selectbox(
            "End Year", YEAR_OPTIONS, index=None, placeholder="Select end year", key="end_year",
        )
        kpi_name = st.selectbox(
            "KPI",
            KPI_NAMES,
            index=None,
            placeholder="Select KPI",
            format_func=lambda k: KPI_LABELS[k],
            key="kpi_name",
        )
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button(
            "Analyze",
            type="primary",
            disabled=is_loading(),
            on_click=on_analyze_click,
            use_container_width=True,
        )
        c2.form_submit_button("Reset", on_click=_on_reset, use_container_width=True)

    if submitted:
        problems = validate_query_form(start_year, end_year, kpi_name)
        if problems:
            for msg in problems:
                st.warning(msg)
        else:
            try:
                with st.spinner("Fetching football data…"):
                    with FootballDataClient(token=get_token(store)) as client:
                        result = run_kpi_query(
                            client, store, start_year, end_year, team_filter.query_value, kpi_name,
                        )
                refresh_team_options(store, result.new_team_names)
                set_chart(result.chart_rows, result.kpi)
            except Exception as e:
                logger.exception("KPI query failed")
                capture_exception(e, {"kpi": kpi_name, "start_year": start_year, "end_year": end_year})
                set_error(format_error(e))
            finally:
                end_query()
            st.rerun()
    elif is_loading():
        # A run cut short before the query started leaves the flag set.
        end_query()

with right:
    rows, selected_kpi = get_chart()
    if rows:
        st.plotly_chart(kpi_grouped_bar(rows, selected_kpi), use_container_width=True)
    else:
        st.caption("Analyze a KPI to see the chart.")
