"""Form rules and record checks for the KPI query.

Every helper returns a list of human-readable problems (empty when valid) so
pages can show all messages at once and the pipeline can raise on any.
"""

from __future__ import annotations

import numbers
from typing import Any, List, Optional

import numpy as np

from kpi_dashboard.utils.constants import KPI_NAMES
from kpi_dashboard.utils.types import StatRecord


def validate_year_range(start_year: Optional[int], end_year: Optional[int]) -> List[str]:
    errs = []
    if start_year is None:
        errs.append("Please select start year!")
    if end_year is None:
        errs.append("Please select end year!")
    if start_year is not None and end_year is not None and start_year > end_year:
        errs.append("Start year cannot be later than end year!")
        errs.append("End year cannot be earlier than start year!")
    return errs


def validate_kpi(kpi: Optional[str]) -> List[str]:
    if not kpi:
        return ["Please select a KPI!"]
    if kpi not in KPI_NAMES:
        return [f"Unknown KPI: {kpi}"]
    return []


def validate_query_form(
    start_year: Optional[int],
    end_year: Optional[int],
    kpi: Optional[str],
) -> List[str]:
    """All problems with a submitted form; empty list means the query may be sent."""
    return validate_year_range(start_year, end_year) + validate_kpi(kpi)


def is_metric_value(value: Any) -> bool:
    """True for finite real numbers (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return bool(np.isfinite(float(value)))
    except (OverflowError, ValueError):
        return False


def is_team_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def invalid_metric_rows(records: List[StatRecord], kpi: str) -> List[int]:
    """Positions of records lacking a string team name or a usable value for kpi."""
    return [
        i for i, rec in enumerate(records)
        if not isinstance(rec, dict)
        or not is_team_name(rec.get("teamName"))
        or not is_metric_value(rec.get(kpi))
    ]
