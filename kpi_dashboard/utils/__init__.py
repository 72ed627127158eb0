"""Dashboard utilities package.

This package provides the building blocks of the Team KPI Analysis page:
- Settings, logging and error tracking
- Local storage and the session guard
- The football data client
- Team ranking for the chart, the team filter and chart builders
"""

# Data service and aggregation
from kpi_dashboard.utils.football_client import (
    FootballDataClient,
    FootballDataError,
)
from kpi_dashboard.utils.aggregation import (
    MissingMetricError,
    compute_team_averages,
    rank_teams,
    order_chart_rows,
)
from kpi_dashboard.utils.analysis import (
    QueryResult,
    run_kpi_query,
    format_error,
)

# Local storage and session
from kpi_dashboard.utils.storage import (
    KeyValueStore,
    InMemoryStore,
    JsonFileStore,
    load_team_names,
    remember_team_names,
    save_football_data,
)
from kpi_dashboard.utils.session import (
    SessionWatcher,
    is_authorized,
    login,
    logout,
)

# Filters and charts
from kpi_dashboard.utils.filters import TeamFilter
from kpi_dashboard.utils.charts import chart_config, kpi_grouped_bar

# Type definitions
from kpi_dashboard.utils.types import (
    KPI,
    StatRecord,
    ChartRow,
    TeamAverage,
)

__all__ = [
    "FootballDataClient",
    "FootballDataError",
    "MissingMetricError",
    "compute_team_averages",
    "rank_teams",
    "order_chart_rows",
    "QueryResult",
    "run_kpi_query",
    "format_error",
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "load_team_names",
    "remember_team_names",
    "save_football_data",
    "SessionWatcher",
    "is_authorized",
    "login",
    "logout",
    "TeamFilter",
    "chart_config",
    "kpi_grouped_bar",
    "KPI",
    "StatRecord",
    "ChartRow",
    "TeamAverage",
]
