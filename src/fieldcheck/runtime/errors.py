"""
Run-time validation errors.

A closed taxonomy: one exception per rule family plus `Custom`, which carries
an author-supplied message and replaces the structured error whenever the
failing rule declared one. A generated `validate` raises exactly one of these,
for the first failing rule.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any


class ValidationError(Exception):
    """
    Base class for validation failures.

    Attributes:
        message: Human-readable description
        field: Name of the field whose rule failed, when known
        code: Stable machine-readable identifier of the failure kind
    """

    code = "invalid"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, *, field: str | None = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, field={self.field!r})"


class InvalidLength(ValidationError):
    code = "invalid_length"

    def __init__(self, min: int | None, max: int | None, *, field: str | None = None):
        self.min = min
        self.max = max
        super().__init__(f"Invalid length: min = {min}, max = {max}", field=field)


class OutOfRange(ValidationError):
    code = "out_of_range"

    def __init__(self, min: int | None, max: int | None, *, field: str | None = None):
        self.min = min
        self.max = max
        super().__init__(f"Value out of range: min = {min}, max = {max}", field=field)


class NotContained(ValidationError):
    code = "not_contained"

    def __init__(self, values: Sequence[Any], *, field: str | None = None):
        self.values = tuple(values)
        shown = ", ".join(repr(v) for v in self.values)
        super().__init__(f"Does not contain required values: {shown}", field=field)


class MissingRequired(ValidationError):
    code = "required"
    default_message = "Field is required"


class NotNegative(ValidationError):
    code = "negative"
    default_message = "Number must be negative"


class NotPositive(ValidationError):
    code = "positive"
    default_message = "Number must be positive"


class InvalidEmail(ValidationError):
    code = "email"
    default_message = "Email is invalid"


class InvalidIp(ValidationError):
    code = "ip"
    default_message = "IP address is invalid"


class InvalidPhone(ValidationError):
    code = "phone"
    default_message = "Invalid phone number"


class ColorProblem(str, Enum):
    FORMAT = "format"
    OUT_OF_RANGE = "out_of_range"


class InvalidColor(ValidationError):
    code = "color"

    def __init__(self, reason: ColorProblem, *, field: str | None = None):
        self.reason = reason
        text = "Invalid color format" if reason is ColorProblem.FORMAT else "Color values out of range"
        super().__init__(text, field=field)


class PatternMismatch(ValidationError):
    code = "regex"

    def __init__(self, pattern: str, *, field: str | None = None):
        self.pattern = pattern
        super().__init__("String doesn't match the pattern", field=field)


class NotAlphanumeric(ValidationError):
    code = "alphanumeric"
    default_message = "String is not alphanumeric"


class NotAlphabetic(ValidationError):
    code = "alphabetic"
    default_message = "String is not alphabetic"


class NotAscii(ValidationError):
    code = "ascii"
    default_message = "String is not ascii"


class NotLowercase(ValidationError):
    code = "lowercase"
    default_message = "String is not lowercase"


class NotUppercase(ValidationError):
    code = "uppercase"
    default_message = "String is not uppercase"


class Custom(ValidationError):
    """Failure carrying the message declared on the rule."""

    code = "custom"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message, field=field)


class PatternError(ValueError):
    """A regex pattern handed to the rule library does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern {pattern!r}: {reason}")


def fail(default: ValidationError, msg: str | None) -> ValidationError:
    """Pick the error to raise: Custom when a message was declared."""
    if msg is not None:
        return Custom(msg, field=default.field)
    return default
