"""
Core rule library.

One function per rule kind. Each takes the field value, the bound
parameters, an optional custom message, and the field name for error
reporting. A rule returns None when the value passes and raises a
`ValidationError` when it does not. Values are read through capability
views, so every function is written once regardless of the concrete type
or wrapper.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .errors import (
    InvalidLength,
    MissingRequired,
    NotContained,
    OutOfRange,
    ValidationError,
    fail,
)
from .views import is_empty, length_of, membership_of, number_of


def validate_length(
    value: Any,
    min: int | None = None,
    max: int | None = None,
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check that the value's length lies strictly between `min` and `max`.

    Both bounds are exclusive: a count equal to either bound fails. An absent
    value passes; combine with `validate_required` to demand presence.
    """
    if min is None and max is None:
        return

    count = length_of(value)
    if count is None:
        return

    if (min is not None and count <= min) or (max is not None and count >= max):
        raise fail(InvalidLength(min, max, field=field), msg)


def validate_range(
    value: Any,
    min: int | None = None,
    max: int | None = None,
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check that the value's magnitude lies within `min` and `max`.

    Both bounds are inclusive. An absent value passes.
    """
    if min is None and max is None:
        return

    number = number_of(value)
    if number is None:
        return

    if (min is not None and number < min) or (max is not None and number > max):
        raise fail(OutOfRange(min, max, field=field), msg)


def validate_contains(
    value: Any,
    values: Sequence[Any],
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check that every one of `values` is present in the value.

    Strings test substrings, mappings test keys, other collections test
    elements. An absent value passes.
    """
    if not values:
        raise ValueError("contains requires at least one value")

    contains = membership_of(value)
    if contains is None:
        return

    for needle in values:
        if not contains(needle):
            raise fail(NotContained(values, field=field), msg)


def validate_required(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    """Check that the value is present and not empty."""
    if is_empty(value):
        raise fail(MissingRequired(field=field), msg)


def check(rule: Callable[..., None], value: Any, *args: Any, **kwargs: Any) -> ValidationError | None:
    """
    Run one rule and return its error instead of raising it.

    Generated validators stop at the first failure; callers that want every
    violation can run the rules they care about through this helper.
    """
    try:
        rule(value, *args, **kwargs)
    except ValidationError as exc:
        return exc
    return None
