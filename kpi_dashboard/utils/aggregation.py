"""Team ranking for the KPI chart.

Records are grouped by team, each team is ranked by the average of the selected
KPI (highest first), and the raw rows are re-ordered so every team's seasons sit
together in rank order. Teams with equal averages keep the order in which they
first appear in the input; rows inside a team keep their input order.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from kpi_dashboard.utils.constants import KPI_NAMES
from kpi_dashboard.utils.monitoring import timing_decorator
from kpi_dashboard.utils.types import ChartRow, StatRecord, TeamAverage
from kpi_dashboard.utils.validation import invalid_metric_rows


class MissingMetricError(ValueError):
    """Some records have no usable value for the selected KPI."""

    def __init__(self, kpi: str, rows: List[int]):
        self.kpi = kpi
        self.rows = rows
        preview = ", ".join(str(i) for i in rows[:10])
        more = f" (+{len(rows) - 10} more)" if len(rows) > 10 else ""
        super().__init__(
            f"{len(rows)} record(s) missing a numeric '{kpi}' value at position(s) {preview}{more}"
        )


def _check_records(records: List[StatRecord], kpi: str) -> None:
    if kpi not in KPI_NAMES:
        raise ValueError(f"Unknown KPI: {kpi}")
    bad = invalid_metric_rows(records, kpi)
    if bad:
        raise MissingMetricError(kpi, bad)


def compute_team_averages(records: List[StatRecord], kpi: str) -> List[TeamAverage]:
    """Mean of kpi per team, teams listed in first-seen order."""
    _check_records(records, kpi)
    if not records:
        return []
    df = pd.DataFrame(
        {
            "teamName": [rec["teamName"] for rec in records],
            "value": [float(rec[kpi]) for rec in records],
        }
    )
    means = df.groupby("teamName", sort=False)["value"].mean()
    return [{"teamName": team, "average": float(avg)} for team, avg in means.items()]


def rank_teams(averages: List[TeamAverage]) -> List[str]:
    """Team names by average, highest first; ties keep their given order."""
    ordered = sorted(averages, key=lambda t: -t["average"])
    return [t["teamName"] for t in ordered]


@timing_decorator
def order_chart_rows(records: List[StatRecord], kpi: str) -> List[ChartRow]:
    """Chart-ready copy of records, grouped by team in descending KPI-average order.

    Raises:
        ValueError: kpi is not a known KPI.
        MissingMetricError: a record lacks a team name or a finite numeric kpi value.
    """
    ranking = rank_teams(compute_team_averages(records, kpi))
    rank = {team: i for i, team in enumerate(ranking)}
    ordered = sorted(records, key=lambda rec: rank[rec["teamName"]])
    rows: List[ChartRow] = []
    for rec in ordered:
        row = dict(rec)
        if "year" in row:
            row["year"] = str(row["year"])
        rows.append(row)
    return rows
