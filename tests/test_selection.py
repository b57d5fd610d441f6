"""Tests for the duration catalog."""

import pytest

from timertime.timer.lifecycle import SessionSelection
from timertime.timer.selection import (
    CATALOG, DurationChoice, present_choices, select, choice_for_label,
)


EXPECTED = [
    ("10", 3, 10),
    ("15", 5, 15),
    ("30", 11, 30),
    ("60", 21, 60),
]


class TestCatalog:

    def test_present_choices_in_order(self):
        assert [tuple(c) for c in present_choices()] == EXPECTED

    def test_present_choices_is_repeatable(self):
        assert list(present_choices()) == list(present_choices())

    def test_catalog_entries_are_duration_choices(self):
        assert all(isinstance(c, DurationChoice) for c in CATALOG)

    @pytest.mark.parametrize("label, repeat_count, total_seconds", EXPECTED)
    def test_select_by_label(self, label, repeat_count, total_seconds):
        assert select(label) == SessionSelection(repeat_count, total_seconds)

    def test_select_by_choice(self):
        assert select(CATALOG[1]) == SessionSelection(5, 15)

    def test_unknown_label(self):
        with pytest.raises(KeyError):
            choice_for_label("45")
