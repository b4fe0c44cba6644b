"""Tests for the core rule library."""

import pytest

from fieldcheck.runtime import (
    Cell,
    Custom,
    InvalidLength,
    MissingRequired,
    NotContained,
    OutOfRange,
    UnsupportedView,
    check,
    validate_contains,
    validate_length,
    validate_range,
    validate_required,
)


class TestLength:
    def test_inside_bounds(self):
        validate_length("John", min=1, max=16)

    @pytest.mark.parametrize("value", ["a", "a" * 16])
    def test_bounds_are_exclusive(self, value):
        with pytest.raises(InvalidLength) as exc_info:
            validate_length(value, min=1, max=16, field="name")
        assert exc_info.value.field == "name"
        assert (exc_info.value.min, exc_info.value.max) == (1, 16)

    def test_single_bound(self):
        validate_length("abc", max=4)
        with pytest.raises(InvalidLength):
            validate_length("abcd", max=4)

    def test_no_bounds_never_fails(self):
        validate_length("")

    def test_absent_passes(self):
        validate_length(None, min=1)

    def test_collections(self):
        validate_length(["a", "b"], min=1, max=3)

    def test_custom_message_replaces_error(self):
        with pytest.raises(Custom) as exc_info:
            validate_length("", min=0, max=5, msg="Too short", field="name")
        assert str(exc_info.value) == "Too short"
        assert exc_info.value.field == "name"

    def test_unsupported_type_is_a_programming_error(self):
        with pytest.raises(UnsupportedView):
            validate_length(42, min=1)


class TestRange:
    @pytest.mark.parametrize("value", [18, 20, 120])
    def test_bounds_are_inclusive(self, value):
        validate_range(value, min=18, max=120)

    @pytest.mark.parametrize("value", [17, 121])
    def test_outside(self, value):
        with pytest.raises(OutOfRange):
            validate_range(value, min=18, max=120)

    def test_fraction_truncated_before_comparison(self):
        # 17.9 truncates to 17, which is below 18
        with pytest.raises(OutOfRange):
            validate_range(17.9, min=18)
        validate_range(120.5, max=120)

    def test_absent_passes(self):
        validate_range(None, min=18)

    def test_wrapped_value(self):
        with pytest.raises(Custom, match="The age must be at least 18"):
            validate_range(Cell(15), min=18, max=120, msg="The age must be at least 18")


class TestContains:
    def test_all_present(self):
        validate_contains("john@example.com", ["@", "."])

    def test_any_missing_fails(self):
        with pytest.raises(NotContained) as exc_info:
            validate_contains("john@example", ["@", "."])
        assert exc_info.value.values == ("@", ".")

    def test_collection_elements(self):
        validate_contains(["user", "admin"], ["admin"])
        with pytest.raises(NotContained):
            validate_contains(["user"], ["admin"])

    def test_absent_passes(self):
        validate_contains(None, ["@"])

    def test_empty_value_set(self):
        with pytest.raises(ValueError):
            validate_contains("x", [])


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", [], Cell()])
    def test_missing(self, value):
        with pytest.raises(MissingRequired):
            validate_required(value)

    @pytest.mark.parametrize("value", [True, False, 0, "x", ["user"]])
    def test_present(self, value):
        validate_required(value)

    def test_custom_message(self):
        with pytest.raises(Custom, match="At least 1 role is required"):
            validate_required([], msg="At least 1 role is required")


def test_check_returns_error_instead_of_raising():
    assert check(validate_length, "abc", min=1, max=5) is None

    error = check(validate_range, 3, min=5, field="count")
    assert isinstance(error, OutOfRange)
    assert error.field == "count"
    assert error.code == "out_of_range"
