"""Tests for cell parsers."""
import math

import pytest

from alchemist.parsing import parse_comma_separated, parse_int_or_zero, parse_slots, safe_int


class TestSafeInt:
    """Tests for safe_int."""

    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("3", 3),
        (" 7 ", 7),
        ("4.0", 4),
        (5.0, 5),
        ("-2", -2),
    ])
    def test_integers(self, value, expected):
        assert safe_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "  ", "abc", "2.5", 2.5, math.nan, True, False])
    def test_not_integers(self, value):
        assert safe_int(value) is None

    def test_parse_int_or_zero(self):
        """Grid edits store 0 for anything unparseable."""
        assert parse_int_or_zero("abc") == 0
        assert parse_int_or_zero("") == 0
        assert parse_int_or_zero("4") == 4


class TestCommaSeparated:
    """Tests for parse_comma_separated."""

    def test_split_and_trim(self):
        assert parse_comma_separated("a, b,,c ") == ["a", "b", "c"]

    def test_empty(self):
        assert parse_comma_separated("") == []
        assert parse_comma_separated(None) == []
        assert parse_comma_separated(" , ,") == []

    def test_list_input(self):
        assert parse_comma_separated(["x", " y ", ""]) == ["x", "y"]


class TestParseSlots:
    """Tests for AvailableSlots parsing."""

    def test_range(self):
        assert parse_slots("1-3") == [1, 2, 3]
        assert parse_slots("2-2") == [2]

    def test_range_uses_first_two_parts(self):
        assert parse_slots("1-2-3") == [1, 2]

    def test_reversed_range_is_empty(self):
        assert parse_slots("3-1") == []

    def test_bad_range(self):
        assert parse_slots("a-3") == []
        assert parse_slots("1-") == []

    def test_json_array(self):
        assert parse_slots("[1,2,3]") == [1, 2, 3]
        assert parse_slots("[]") == []

    def test_json_non_integer_elements(self):
        assert parse_slots('[1, "x"]') == []
        assert parse_slots("[1.5]") == []

    def test_json_not_an_array(self):
        assert parse_slots("3") == []
        assert parse_slots('{"a": 1}') == []

    def test_garbage(self):
        assert parse_slots("abc") == []
        assert parse_slots("") == []
        assert parse_slots(None) == []

    def test_list_input(self):
        assert parse_slots([1, 2]) == [1, 2]
        assert parse_slots([1, "x"]) == []
