"""
Tests for path resolution and comparison operators.
"""

import datetime
import re
from collections import OrderedDict
from decimal import Decimal

import pytest

from backend.ruleval import UNDEFINED, resolve
from backend.ruleval.logic import OPERATORS, has_path, resolve_path, strict_equals


class Profile:
    def __init__(self):
        self.name = "Example"
        self.address = {"city": "Paris"}
        self._secret = "hidden"


class TestResolvePath:
    """Tests for resolve_path()."""

    def test_nested_mapping(self):
        """Test walking nested mappings."""
        value = {"skills": {"programming": ["python"]}}
        assert resolve_path(value, "skills.programming") == ["python"]
        assert resolve_path(value, "skills") == {"programming": ["python"]}

    def test_missing_segments(self):
        """Test any missing segment gives UNDEFINED."""
        value = {"a": {"b": 1}}
        assert resolve_path(value, "a.c") is UNDEFINED
        assert resolve_path(value, "x.y.z") is UNDEFINED
        assert resolve_path(value, "a.b.c") is UNDEFINED

    def test_empty_path_returns_value(self):
        """Test an empty path resolves to the value itself."""
        value = {"a": 1}
        assert resolve_path(value, "") is value

    def test_list_index(self):
        """Test integer segments index into lists and tuples."""
        value = {"items": [{"name": "first"}, {"name": "second"}], "pair": (1, 2)}
        assert resolve_path(value, "items.1.name") == "second"
        assert resolve_path(value, "pair.0") == 1
        assert resolve_path(value, "items.5") is UNDEFINED
        assert resolve_path(value, "items.-1") is UNDEFINED

    def test_non_ascii_digits_are_not_indices(self):
        """Test Unicode digits and numerals never index into lists."""
        value = {"a": [1, 2]}
        for segment in ("\u00b2", "\u0661", "\u2460", "\uff11"):
            assert resolve_path(value, f"a.{segment}") is UNDEFINED
        assert resolve_path(value, "a.01") == 2

    def test_list_element_by_value(self):
        """Test a non-index segment finds an equal element in a list."""
        value = {"languages": ["en", "fr"]}
        assert resolve_path(value, "languages.fr") == "fr"
        assert resolve_path(value, "languages.de") is UNDEFINED

    def test_other_mappings(self):
        """Test non-dict mappings are walked by key."""
        value = OrderedDict(a=OrderedDict(b=2))
        assert resolve_path(value, "a.b") == 2

    def test_object_attributes(self):
        """Test public attributes of plain objects."""
        profile = Profile()
        assert resolve_path(profile, "name") == "Example"
        assert resolve_path(profile, "address.city") == "Paris"
        assert resolve_path(profile, "_secret") is UNDEFINED
        assert resolve_path(profile, "missing") is UNDEFINED

    def test_non_indexable_values(self):
        """Test primitives cannot be walked into."""
        assert resolve_path("string", "length") is UNDEFINED
        assert resolve_path(5, "real") is UNDEFINED
        assert resolve_path(None, "a") is UNDEFINED
        assert resolve_path(UNDEFINED, "a") is UNDEFINED

    def test_non_string_path(self):
        """Test a non-string path never resolves."""
        assert resolve_path({"1": 1}, 1) is UNDEFINED

    def test_none_is_a_value(self):
        """Test a None property resolves to None."""
        assert resolve_path({"a": None}, "a") is None


class TestFallback:
    """Tests for resolve() with fallback data."""

    def test_primary_wins(self):
        """Test the value is used before the fallback."""
        assert resolve({"a": 1}, "a", {"a": 2}) == 1

    def test_fallback_used_when_absent(self):
        """Test the fallback is used when the path is absent."""
        assert resolve({}, "a.b", {"a": {"b": 2}}) == 2
        assert resolve({}, "a.b", {"a": {}}) is UNDEFINED

    def test_none_does_not_fall_back(self):
        """Test a None property does not trigger the fallback."""
        assert resolve({"a": None}, "a", {"a": 2}) is None

    def test_has_path(self):
        """Test has_path with and without fallback."""
        assert has_path({"a": 1}, "a")
        assert not has_path({}, "a")
        assert has_path({}, "a", {"a": 0})


class TestOperators:
    """Tests for comparison operators."""

    @pytest.mark.parametrize("name,current,argument,expected", [
        ("gt", 5, 3, True),
        ("gt", 3, 5, False),
        ("gte", 5, 5, True),
        ("lt", 2.5, 3, True),
        ("lte", 3, 3, True),
        ("gt", "b", "a", True),
        ("gt", "5", 3, False),
        ("gt", None, 3, False),
        ("gt", True, 0, False),
        ("lt", float("nan"), 3, False),
        ("gt", float("inf"), 10, True),
        ("gt", datetime.date(2020, 1, 2), datetime.date(2020, 1, 1), True),
        ("gt", datetime.datetime(2020, 1, 2), datetime.date(2020, 1, 1), False),
        ("startsWith", "Matt", "Ma", True),
        ("startsWith", "Matt", ["X", "M"], True),
        ("startsWith", 123, "1", False),
        ("startsWith", "Matt", 1, False),
        ("endsWith", "file.py", ".py", True),
        ("endsWith", "file.py", [], False),
        ("matches", "abc123", r"\d+", True),
        ("matches", "abc", re.compile("^a"), True),
        ("matches", "abc", "(", False),
        ("matches", 123, r"\d", False),
        ("eq", 1, 1.0, True),
        ("eq", 1, True, False),
        ("eq", float("nan"), float("nan"), False),
        ("neq", "a", "b", True),
        ("eq", Decimal("sNaN"), 1, False),
        ("eq", Decimal("sNaN"), Decimal("sNaN"), False),
        ("neq", Decimal("sNaN"), 1, True),
        ("gt", Decimal("sNaN"), 1, False),
        ("lte", 1, Decimal("sNaN"), False),
        ("eq", Decimal("1.5"), 1.5, True),
    ])
    def test_operator(self, name, current, argument, expected):
        """Test each operator is total and type-aware."""
        assert OPERATORS[name](current, argument) is expected

    def test_strict_equals_containers(self):
        """Test strict equality on containers."""
        assert strict_equals([1, 2], [1, 2])
        assert strict_equals({"a": 1}, {"a": 1})
        assert not strict_equals([1], (1,))
