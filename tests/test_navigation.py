"""Tests for PageNavigator."""

import pytest

from pagequill.exceptions import ConfigurationError
from pagequill.models.page import HeadingEntry
from pagequill.navigation import PageNavigator


class TestPageNavigator:
    def test_starts_on_first_page(self):
        navigator = PageNavigator(page_count=3)

        assert navigator.current_page == 1
        assert navigator.current_anchor == "page-1"

    def test_go_to_is_clamped(self):
        navigator = PageNavigator(page_count=3)

        assert navigator.go_to(2) == 2
        assert navigator.go_to(99) == 3
        assert navigator.go_to(-4) == 1

    def test_next_and_previous(self):
        navigator = PageNavigator(page_count=2)

        assert navigator.next_page() == 2
        assert navigator.next_page() == 2
        assert navigator.previous_page() == 1
        assert navigator.previous_page() == 1

    def test_go_to_heading(self):
        navigator = PageNavigator(page_count=5)

        assert navigator.go_to_heading(HeadingEntry(text="Results", page_index=4)) == 4
        assert navigator.current_anchor == "page-4"

    def test_shrink_resets_to_first_page_by_default(self):
        navigator = PageNavigator(page_count=5)
        navigator.go_to(5)

        assert navigator.on_page_count_changed(3) == 1

    def test_shrink_with_last_policy(self):
        navigator = PageNavigator(page_count=5, clamp_policy="last")
        navigator.go_to(5)

        assert navigator.on_page_count_changed(3) == 3

    def test_growth_keeps_current_page(self):
        navigator = PageNavigator(page_count=2)
        navigator.go_to(2)

        assert navigator.on_page_count_changed(8) == 2
        assert navigator.page_count == 8

    def test_page_count_is_at_least_one(self):
        navigator = PageNavigator(page_count=3)

        navigator.on_page_count_changed(0)

        assert navigator.page_count == 1

    def test_on_change_callback(self):
        changes = []
        navigator = PageNavigator(page_count=3, on_change=changes.append)

        navigator.go_to(3)
        navigator.go_to(3)
        navigator.on_page_count_changed(1)

        assert changes == [3, 1]

    def test_unknown_policy_rejected(self):
        with pytest.raises(ConfigurationError):
            PageNavigator(clamp_policy="middle")
