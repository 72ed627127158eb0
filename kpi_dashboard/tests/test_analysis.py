"""Tests for the KPI submit pipeline."""

from unittest.mock import MagicMock

import pytest

from kpi_dashboard.utils.aggregation import MissingMetricError
from kpi_dashboard.utils.analysis import QueryResult, format_error, run_kpi_query
from kpi_dashboard.utils.football_client import FootballDataError
from kpi_dashboard.utils.storage import load_football_data, load_team_names


@pytest.fixture
def client(sample_records):
    client = MagicMock()
    client.query_football_data.return_value = sample_records
    return client


class TestRunKpiQuery:
    def test_returns_ordered_rows(self, client, store):
        result = run_kpi_query(client, store, 2022, 2023, "", "won")
        assert isinstance(result, QueryResult)
        assert result.kpi == "won"
        assert [r["teamName"] for r in result.chart_rows] == [
            "Arsenal", "Arsenal", "Chelsea", "Chelsea", "Everton", "Everton",
        ]
        client.query_football_data.assert_called_once_with(2022, 2023, "", "won")

    def test_caches_dataset_and_team_names(self, client, store, sample_records):
        result = run_kpi_query(client, store, 2022, 2023, "", "won")
        assert load_football_data(store) == sample_records
        assert load_team_names(store) == ["Arsenal", "Chelsea", "Everton"]
        assert result.new_team_names == ["Arsenal", "Chelsea", "Everton"]

    def test_second_query_keeps_first_team_names(self, client, store):
        run_kpi_query(client, store, 2022, 2023, "", "won")
        client.query_football_data.return_value = [{"teamName": "Leeds", "year": 2022, "won": 7}]
        result = run_kpi_query(client, store, 2022, 2022, "Leeds", "won")
        assert result.new_team_names is None
        assert load_team_names(store) == ["Arsenal", "Chelsea", "Everton"]
        assert load_football_data(store) == [{"teamName": "Leeds", "year": 2022, "won": 7}]

    def test_invalid_form_never_queries(self, client, store):
        with pytest.raises(ValueError, match="Please select a KPI!"):
            run_kpi_query(client, store, 2022, 2023, "", None)
        with pytest.raises(ValueError, match="Start year cannot be later"):
            run_kpi_query(client, store, 2024, 2023, "", "won")
        client.query_football_data.assert_not_called()

    def test_client_error_propagates_and_nothing_cached(self, client, store):
        client.query_football_data.side_effect = FootballDataError("HTTP 502")
        with pytest.raises(FootballDataError):
            run_kpi_query(client, store, 2022, 2023, "", "won")
        assert store.keys() == []

    def test_missing_metric_raises(self, client, store):
        client.query_football_data.return_value = [{"teamName": "A", "year": 2022}]
        with pytest.raises(MissingMetricError):
            run_kpi_query(client, store, 2022, 2022, "", "won")

    def test_list_team_name_raises_missing_metric(self, client, store):
        client.query_football_data.return_value = [
            {"teamName": ["A"], "year": 2022, "won": 3},
            {"teamName": "B", "year": 2022, "won": 1},
        ]
        with pytest.raises(MissingMetricError) as exc:
            run_kpi_query(client, store, 2022, 2022, "", "won")
        assert exc.value.rows == [0]
        assert load_team_names(store) == ["B"]

    def test_huge_metric_raises_missing_metric(self, client, store):
        client.query_football_data.return_value = [{"teamName": "A", "year": 2022, "won": 10**400}]
        with pytest.raises(MissingMetricError):
            run_kpi_query(client, store, 2022, 2022, "", "won")


def test_format_error():
    assert format_error(FootballDataError("HTTP 500")) == "Error: HTTP 500"
