"""Submit pipeline for the KPI form: query, cache, aggregate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from kpi_dashboard.utils.aggregation import order_chart_rows
from kpi_dashboard.utils.football_client import FootballDataClient
from kpi_dashboard.utils.monitoring import monitor_performance
from kpi_dashboard.utils.storage import KeyValueStore, remember_team_names, save_football_data
from kpi_dashboard.utils.types import ChartRow
from kpi_dashboard.utils.validation import validate_query_form

logger = logging.getLogger("kpi_dashboard")


@dataclass
class QueryResult:
    chart_rows: List[ChartRow]
    kpi: str
    new_team_names: Optional[List[str]] = None


def run_kpi_query(
    client: FootballDataClient,
    store: KeyValueStore,
    start_year: Optional[int],
    end_year: Optional[int],
    team_name: str,
    kpi: Optional[str],
) -> QueryResult:
    """Fetch records, refresh the local cache and return chart rows in display order.

    The raw dataset is cached on every success; team names only on the first one.
    """
    errs = validate_query_form(start_year, end_year, kpi)
    if errs:
        raise ValueError("; ".join(errs))

    with monitor_performance("kpi_query", kpi=kpi, start_year=start_year, end_year=end_year):
        records = client.query_football_data(start_year, end_year, team_name, kpi)

    save_football_data(store, records)
    new_team_names = remember_team_names(store, records)

    rows = order_chart_rows(records, kpi)
    logger.info(f"Prepared {len(rows)} chart rows for '{kpi}' ({start_year}-{end_year})")
    return QueryResult(chart_rows=rows, kpi=kpi, new_team_names=new_team_names)


def format_error(exc: Exception) -> str:
    """Single-line message shown in place of the page."""
    return f"Error: {exc}"
