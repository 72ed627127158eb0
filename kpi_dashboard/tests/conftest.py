"""Pytest configuration and fixtures for dashboard tests.

This module provides:
- Mock session state for Streamlit
- Sample football statistics records
- In-memory local storage and a mocked HTTP session

Usage:
    pytest kpi_dashboard/tests/
"""

import pytest
from typing import Dict, Any, Generator, List
from unittest.mock import MagicMock, patch

# Add project root to path
import sys
import pathlib
_project_root = pathlib.Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from kpi_dashboard.utils.storage import InMemoryStore


# =============================================================================
# MOCK STREAMLIT SESSION STATE
# =============================================================================

class MockSessionState:
    """Mock Streamlit session state for testing."""

    def __init__(self):
        object.__setattr__(self, "_state", {})

    def __getitem__(self, key: str) -> Any:
        return self._state[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._state[key] = value

    def __delitem__(self, key: str) -> None:
        del self._state[key]

    def __contains__(self, key: str) -> bool:
        return key in self._state

    def __getattr__(self, key: str) -> Any:
        try:
            return self._state[key]
        except KeyError:
            raise AttributeError(key)

    def __setattr__(self, key: str, value: Any) -> None:
        self._state[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def clear(self) -> None:
        self._state.clear()


@pytest.fixture
def mock_session_state() -> MockSessionState:
    """Provide a mock session state."""
    return MockSessionState()


@pytest.fixture(autouse=True)
def patch_streamlit_session_state(mock_session_state):
    """Automatically patch st.session_state in all tests."""
    with patch('streamlit.session_state', mock_session_state):
        yield mock_session_state


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Three teams over two seasons, in service order."""
    return [
        {'teamName': 'Arsenal', 'year': 2022, 'won': 23, 'draw': 6, 'lost': 9, 'goalsFor': 61, 'goalsAgainst': 48},
        {'teamName': 'Chelsea', 'year': 2022, 'won': 21, 'draw': 11, 'lost': 6, 'goalsFor': 76, 'goalsAgainst': 33},
        {'teamName': 'Everton', 'year': 2022, 'won': 8, 'draw': 12, 'lost': 18, 'goalsFor': 34, 'goalsAgainst': 57},
        {'teamName': 'Arsenal', 'year': 2023, 'won': 26, 'draw': 6, 'lost': 6, 'goalsFor': 88, 'goalsAgainst': 43},
        {'teamName': 'Chelsea', 'year': 2023, 'won': 11, 'draw': 11, 'lost': 16, 'goalsFor': 38, 'goalsAgainst': 47},
        {'teamName': 'Everton', 'year': 2023, 'won': 8, 'draw': 12, 'lost': 18, 'goalsFor': 34, 'goalsAgainst': 57},
    ]


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory local storage."""
    return InMemoryStore()


# =============================================================================
# HTTP FIXTURES
# =============================================================================

@pytest.fixture
def make_response():
    """Build a fake requests.Response with a status code and JSON payload."""
    def _make(status_code: int = 200, payload: Any = None, json_error: bool = False) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        if json_error:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def http_session() -> MagicMock:
    """A requests.Session stand-in; set .get.return_value / side_effect per test."""
    return MagicMock()


# =============================================================================
# UTILITIES
# =============================================================================

@pytest.fixture
def mock_time() -> Generator:
    """Mock time.time() for consistent timing tests."""
    with patch('time.time') as mock:
        mock.return_value = 1234567890.0
        yield mock
