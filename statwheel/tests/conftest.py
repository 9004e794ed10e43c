"""Pytest configuration and fixtures for stats wheel tests.

This module provides:
- Mock session state for Streamlit
- Small stats trees with known totals
- A fixed clock for timing tests

Usage:
    pytest statwheel/tests/
"""

import pytest
from typing import Dict, Any, Generator
from unittest.mock import patch

# Add project root to path
import sys
import pathlib
_project_root = pathlib.Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from statwheel.utils.hierarchy import annotate_tree


# =============================================================================
# MOCK STREAMLIT SESSION STATE
# =============================================================================

class MockSessionState:
    """Mock Streamlit session state for testing."""

    def __init__(self):
        self._state: Dict[str, Any] = {}

    def __getitem__(self, key: str) -> Any:
        return self._state[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._state[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._state

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def pop(self, key: str, default: Any = None) -> Any:
        return self._state.pop(key, default)

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
# SAMPLE TREES
# =============================================================================

@pytest.fixture
def basic_stats_tree() -> Dict[str, Any]:
    """Two categories; Passes = 40, Shots = 20 (one missing leaf), total 60."""
    return {
        "id": "root",
        "name": "All Stats",
        "value": None,
        "level": 0,
        "children": [
            {
                "id": "A",
                "name": "Passes",
                "value": None,
                "level": 1,
                "children": [
                    {"id": "A1", "name": "Key Passes", "value": 30, "level": 2},
                    {"id": "A2", "name": "Crosses", "value": 10, "level": 2},
                ],
            },
            {
                "id": "B",
                "name": "Shots",
                "value": None,
                "level": 1,
                "children": [
                    {"id": "B1", "name": "On Target", "value": None, "level": 2},
                    {"id": "B2", "name": "Off Target", "value": 20, "level": 2, "suffix": "%"},
                ],
            },
        ],
    }


@pytest.fixture
def single_category_tree() -> Dict[str, Any]:
    """Root -> A -> (A1 = 30, A2 = 10)."""
    return {
        "id": "root",
        "name": "All Stats",
        "level": 0,
        "children": [
            {
                "id": "A",
                "name": "Passes",
                "level": 1,
                "children": [
                    {"id": "A1", "name": "Key Passes", "value": 30, "level": 2},
                    {"id": "A2", "name": "Crosses", "value": 10, "level": 2},
                ],
            },
        ],
    }


@pytest.fixture
def annotated(basic_stats_tree):
    """Aggregated, angled and indexed copy of the basic tree."""
    return annotate_tree(basic_stats_tree)


# =============================================================================
# MARKERS AND CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# =============================================================================
# UTILITIES
# =============================================================================

@pytest.fixture
def mock_time() -> Generator:
    """Mock time.time() for consistent timing tests."""
    with patch('time.time') as mock:
        mock.return_value = 1234567890.0
        yield mock
