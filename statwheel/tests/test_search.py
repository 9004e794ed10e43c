"""Tests for stat search: flattening, filtering and the keyboard cursor."""

import pytest

from statwheel.utils.search_components import (
    SearchState,
    StatsSearchIndex,
    empty_state_message,
    filter_stats,
    flatten_stats,
    get_search_suggestions,
    results_footer,
)


@pytest.fixture
def items(annotated):
    return flatten_stats(annotated.root)


# =============================================================================
# FLATTENING AND FILTERING
# =============================================================================

class TestFlattenStats:
    """Test the depth-first flat list."""

    def test_excludes_root(self, items):
        assert [i.id for i in items] == ["A", "A1", "A2", "B", "B1", "B2"]

    def test_ancestor_trail(self, items):
        key_passes = items[1]
        assert key_passes.ancestor_names == ("Passes",)
        assert key_passes.path == ["A", "A1"]
        assert key_passes.category_name == "Passes"
        assert items[0].category_name == "Passes"

    def test_carries_aggregated_values(self, items):
        assert items[0].value == 40
        assert items[4].value is None
        assert items[5].suffix == "%"


class TestFilterStats:
    """Test case-insensitive matching."""

    def test_matches_name_or_ancestor(self, items):
        """Test a category match pulls in all its descendants."""
        assert [i.id for i in filter_stats(items, "pass")] == ["A", "A1", "A2"]

    def test_case_insensitive(self, items):
        assert [i.id for i in filter_stats(items, "TARGET")] == ["B1", "B2"]

    def test_blank_query_returns_all(self, items):
        assert len(filter_stats(items, "")) == 6
        assert len(filter_stats(items, "   ")) == 6

    def test_no_match(self, items):
        assert filter_stats(items, "zzz") == []


class TestSuggestions:
    """Test the empty-state helpers."""

    def test_close_match(self, annotated):
        index = StatsSearchIndex(annotated.root)
        assert index.suggestions("Crosess") == ["Crosses"]

    def test_short_query_has_no_suggestions(self):
        assert get_search_suggestions("x", ["Crosses"]) == []

    def test_empty_message(self):
        assert empty_state_message("xyz") == 'No stats found for "xyz"'

    def test_footer(self):
        assert results_footer(25, 20) == "Showing 20 of 25 results"
        assert results_footer(20, 20) is None


# =============================================================================
# SEARCH STATE
# =============================================================================

class TestSearchState:
    """Test SearchState functionality."""

    def test_initialization(self, mock_session_state):
        """Test state keys are created with defaults."""
        state = SearchState("s")
        assert state.query == ""
        assert state.is_open is False
        assert state.selected_index == 0
        assert "s_result_ids" in mock_session_state

    def test_cursor_clamps(self):
        """Test the cursor stops at both ends without wrapping."""
        state = SearchState("s")
        for _ in range(5):
            state.move_next(3)
        assert state.selected_index == 2
        for _ in range(5):
            state.move_previous()
        assert state.selected_index == 0

    def test_cursor_with_no_results(self):
        state = SearchState("s")
        assert state.move_next(0) == 0

    def test_cursor_resets_when_results_change(self, items):
        state = SearchState("s")
        state.set_query("pass", filter_stats(items, "pass"))
        state.move_next(3)
        state.sync_results(filter_stats(items, "pass"))
        assert state.selected_index == 1
        state.set_query("key", filter_stats(items, "key"))
        assert state.selected_index == 0

    def test_set_query_opens(self, items):
        state = SearchState("s")
        state.set_query("shot", filter_stats(items, "shot"))
        assert state.is_open
        assert state.query == "shot"

    def test_confirm_returns_selected(self, items):
        state = SearchState("s")
        results = filter_stats(items, "pass")
        state.set_query("pass", results)
        state.handle_key("ArrowDown", results)
        assert state.handle_key("Enter", results).id == "A1"

    def test_confirm_without_results(self):
        state = SearchState("s")
        assert state.handle_key("confirm", []) is None

    def test_cancel_closes_and_clears(self, items):
        state = SearchState("s")
        state.set_query("pass", filter_stats(items, "pass"))
        assert state.handle_key("Escape", []) is None
        assert state.query == ""
        assert not state.is_open

    def test_unknown_key_ignored(self, items):
        state = SearchState("s")
        assert state.handle_key("Tab", items) is None
        assert state.selected_index == 0

    def test_hover_moves_cursor(self):
        state = SearchState("s")
        state.hover(7, 3)
        assert state.selected_index == 2

    def test_select_result(self, items):
        state = SearchState("s")
        state.set_query("cross", filter_stats(items, "cross"))
        assert state.select_result(items[2]) == ["A", "A2"]
        assert state.query == ""
        assert not state.is_open
