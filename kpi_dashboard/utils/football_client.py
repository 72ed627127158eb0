"""HTTP client for the football statistics service.

Usage:
    with FootballDataClient(token=get_token(store)) as client:
        records = client.query_football_data(2021, 2023, "", "won")
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from kpi_dashboard.utils.config import API_BASE, API_TIMEOUT
from kpi_dashboard.utils.monitoring import timing_decorator
from kpi_dashboard.utils.types import StatRecord
from kpi_dashboard.utils.validation import is_team_name, validate_query_form

logger = logging.getLogger("kpi_dashboard")

HEADERS = {
    "Accept": "application/json",
}

QUERY_PATH = "/football-data"


class FootballDataError(Exception):
    """The service could not be reached or returned something unusable."""


class FootballDataClient:
    def __init__(
        self,
        base_url: str = API_BASE,
        timeout: float = API_TIMEOUT,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = dict(HEADERS)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @timing_decorator
    def query_football_data(
        self,
        start_year: int,
        end_year: int,
        team_name: str,
        kpi: str,
    ) -> List[StatRecord]:
        """Fetch per-team, per-season records for the year range.

        ``team_name`` is a ", "-joined list of teams, or "" for every team.
        Raises ValueError on invalid arguments (before any request) and
        FootballDataError on transport, status or payload problems.
        """
        errs = validate_query_form(start_year, end_year, kpi)
        if errs:
            raise ValueError("; ".join(errs))

        url = f"{self.base_url}{QUERY_PATH}"
        params = {
            "startYear": start_year,
            "endYear": end_year,
            "teamName": team_name or "",
            "kpiName": kpi,
        }
        logger.info(f"Querying football data {params}")
        try:
            r = self.session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise FootballDataError(f"Request to {url} failed: {e}") from e

        if r.status_code != 200:
            raise FootballDataError(f"{url} returned HTTP {r.status_code}")

        try:
            data = r.json()
        except ValueError as e:
            raise FootballDataError(f"{url} returned a non-JSON body") from e

        result = data.get("Result") if isinstance(data, dict) else None
        if not isinstance(result, list):
            raise FootballDataError("Response is missing the 'Result' list")
        if not all(isinstance(rec, dict) for rec in result):
            raise FootballDataError("Response 'Result' must contain objects")
        bad_names = [i for i, rec in enumerate(result) if not is_team_name(rec.get("teamName"))]
        if bad_names:
            raise FootballDataError(
                f"Response has {len(bad_names)} record(s) without a string 'teamName' "
                f"(first at position {bad_names[0]})"
            )

        logger.info(f"Received {len(result)} records")
        return result

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FootballDataClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
