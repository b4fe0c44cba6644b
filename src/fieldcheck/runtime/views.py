"""
Capability views over field values.

Rules never switch on concrete types. They ask for a view instead:

- length_of: number of logical units (code points, elements)
- string_of: the string form
- number_of: an orderable integer magnitude
- real_of: the untruncated number, for sign checks
- membership_of: a membership test
- is_empty: whether the value is empty or absent

Each view is a `functools.singledispatch` function, so a type gains a view by
registering one implementation. Forwarding wrappers (`Cell`, `weakref.ref`,
`contextvars.ContextVar`, and anything added with `register_wrapper`) are
resolved by `unwrap` before any view is taken, and `None` projects to absent
(returned as None) instead of failing.
"""

from __future__ import annotations

import contextvars
import decimal
import math
import numbers
import weakref
from collections.abc import Callable, Collection, Sized
from enum import Enum
from functools import singledispatch
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class View(str, Enum):
    """Names of the capability views."""

    LENGTH = "length"
    STRING = "string"
    NUMERIC = "numeric"
    MEMBERSHIP = "membership"
    EMPTINESS = "emptiness"


class UnsupportedView(TypeError):
    """Raised when a value cannot provide the view a rule needs."""

    def __init__(self, value: Any, view: View):
        self.value = value
        self.view = view
        super().__init__(f"{type(value).__name__} value has no {view.value} view")


class Cell(Generic[T]):
    """
    Interior-mutable holder.

    The held value may be replaced at any time; views always see the
    current one.
    """

    __slots__ = ("_value",)

    def __init__(self, value: T | None = None):
        self._value = value

    def get(self) -> T | None:
        return self._value

    def set(self, value: T | None) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"


# =============================================================================
# Wrapper forwarding
# =============================================================================


@singledispatch
def unwrap(value: Any) -> Any:
    """Strip forwarding wrappers, returning the innermost value (None if absent)."""
    return value


@unwrap.register
def _(value: Cell) -> Any:
    return unwrap(value.get())


@unwrap.register(weakref.ref)
def _(value: weakref.ref) -> Any:
    # A dead reference is absent
    return unwrap(value())


@unwrap.register(contextvars.ContextVar)
def _(value: contextvars.ContextVar) -> Any:
    return unwrap(value.get(None))


def register_wrapper(cls: type, accessor: Callable[[Any], Any]) -> None:
    """
    Make every view forward through instances of `cls`.

    Args:
        cls: Wrapper type
        accessor: Returns the wrapped value (None when empty)
    """
    unwrap.register(cls)(lambda value: unwrap(accessor(value)))


# =============================================================================
# Length
# =============================================================================


@singledispatch
def _length(value: Any) -> int:
    raise UnsupportedView(value, View.LENGTH)


@_length.register
def _(value: str) -> int:
    # Code points, not bytes
    return len(value)


@_length.register
def _(value: Sized) -> int:
    return len(value)


def length_of(value: Any) -> int | None:
    """Number of logical units, or None when absent."""
    value = unwrap(value)
    if value is None:
        return None
    return _length(value)


# =============================================================================
# String
# =============================================================================


@singledispatch
def _string(value: Any) -> str:
    raise UnsupportedView(value, View.STRING)


@_string.register
def _(value: str) -> str:
    return value


def string_of(value: Any) -> str | None:
    """String form, or None when absent."""
    value = unwrap(value)
    if value is None:
        return None
    return _string(value)


# =============================================================================
# Numeric
# =============================================================================


@singledispatch
def _number(value: Any) -> int | float:
    raise UnsupportedView(value, View.NUMERIC)


@_number.register
def _(value: bool) -> int:
    raise UnsupportedView(value, View.NUMERIC)


@_number.register
def _(value: numbers.Integral) -> int:
    return int(value)


@_number.register
def _(value: numbers.Real) -> int | float:
    if math.isnan(value):
        raise UnsupportedView(value, View.NUMERIC)
    if math.isinf(value):
        return float(value)
    return math.trunc(value)


@_number.register
def _(value: decimal.Decimal) -> int | float:
    if value.is_nan():
        raise UnsupportedView(value, View.NUMERIC)
    if value.is_infinite():
        return float(value)
    return int(value)


def number_of(value: Any) -> int | float | None:
    """
    Integer magnitude (truncated toward zero), or None when absent.

    Infinite values are passed through as floats so they still order
    against bounds.
    """
    value = unwrap(value)
    if value is None:
        return None
    return _number(value)


@singledispatch
def _real(value: Any) -> Any:
    raise UnsupportedView(value, View.NUMERIC)


@_real.register
def _(value: bool) -> Any:
    raise UnsupportedView(value, View.NUMERIC)


@_real.register
def _(value: numbers.Real) -> Any:
    if math.isnan(value):
        raise UnsupportedView(value, View.NUMERIC)
    return value


@_real.register
def _(value: decimal.Decimal) -> Any:
    if value.is_nan():
        raise UnsupportedView(value, View.NUMERIC)
    return value


def real_of(value: Any) -> Any | None:
    """Untruncated numeric value for sign tests, or None when absent."""
    value = unwrap(value)
    if value is None:
        return None
    return _real(value)


# =============================================================================
# Membership
# =============================================================================


@singledispatch
def _membership(value: Any) -> Callable[[Any], bool]:
    raise UnsupportedView(value, View.MEMBERSHIP)


@_membership.register
def _(value: str) -> Callable[[Any], bool]:
    # Substrings and single characters
    return lambda needle: isinstance(needle, str) and needle in value


@_membership.register
def _(value: Collection) -> Callable[[Any], bool]:
    # Mappings test their keys
    return lambda needle: needle in value


def membership_of(value: Any) -> Callable[[Any], bool] | None:
    """Membership test, or None when absent."""
    value = unwrap(value)
    if value is None:
        return None
    return _membership(value)


# =============================================================================
# Emptiness
# =============================================================================


@singledispatch
def _empty(value: Any) -> bool:
    return False


@_empty.register
def _(value: Sized) -> bool:
    return len(value) == 0


def is_empty(value: Any) -> bool:
    """True for absent values, empty strings and empty collections."""
    value = unwrap(value)
    if value is None:
        return True
    return _empty(value)


__all__ = [
    "Cell",
    "UnsupportedView",
    "View",
    "is_empty",
    "length_of",
    "membership_of",
    "number_of",
    "real_of",
    "register_wrapper",
    "string_of",
    "unwrap",
]
