"""
View State Normalization Tests
"""

import pytest

from core.filters import ViewState, normalize_view_state


class TestNormalizeViewState:
    def test_empty_input_gives_defaults(self):
        assert normalize_view_state({}) == ViewState()

    def test_valid_values_kept(self):
        view = normalize_view_state(
            {
                "search_term": "lane",
                "status_filter": "Pending",
                "sort_key": "user",
                "sort_direction": "descending",
                "page_size": 20,
                "current_page": 3,
            }
        )
        assert view == ViewState("lane", "Pending", "user", "descending", 20, 3)
        assert view.descending is True

    @pytest.mark.parametrize(
        "raw, attr, expected",
        [
            ({"status_filter": "Shipped"}, "status_filter", "All"),
            ({"sort_key": "avatar"}, "sort_key", None),
            ({"sort_direction": "sideways"}, "sort_direction", "ascending"),
            ({"page_size": 15}, "page_size", 10),
            ({"page_size": "many"}, "page_size", 10),
            ({"current_page": 0}, "current_page", 1),
            ({"current_page": None}, "current_page", 1),
            ({"search_term": None}, "search_term", ""),
        ],
    )
    def test_invalid_values_fall_back(self, raw, attr, expected):
        assert getattr(normalize_view_state(raw), attr) == expected

    def test_custom_page_size_options(self):
        view = normalize_view_state({"page_size": 99}, page_size_options=(5, 25))
        assert view.page_size == 5

    def test_custom_sort_keys(self):
        assert normalize_view_state({"sort_key": "amount"}, sort_keys=["amount"]).sort_key == "amount"

    def test_view_state_is_frozen(self):
        with pytest.raises(Exception):
            ViewState().search_term = "x"
