"""
Format rules.

Single-predicate checks read through the string view (the sign checks
through the numeric view). Like the core rules, an absent value passes and a
declared message replaces the structured error.

Compiled patterns are cached process-wide: built lazily on first use and
only read afterwards.
"""

from __future__ import annotations

import ipaddress
import re
from functools import lru_cache
from typing import Any

import phonenumbers

from .errors import (
    ColorProblem,
    InvalidColor,
    InvalidEmail,
    InvalidIp,
    InvalidPhone,
    NotAlphabetic,
    NotAlphanumeric,
    NotAscii,
    NotLowercase,
    NotNegative,
    NotPositive,
    NotUppercase,
    PatternError,
    PatternMismatch,
    fail,
)
from .views import real_of, string_of

EMAIL_PATTERN = r"([a-z0-9_+]([a-z0-9_+.]*[a-z0-9_+])?)@([a-z0-9]+([\-.][a-z0-9]+)*\.[a-z]{2,6})"


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str]:
    """
    Compile and cache a pattern.

    Raises:
        PatternError: If the pattern is malformed
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def validate_email(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    text = string_of(value)
    if text is None:
        return
    if not compile_pattern(EMAIL_PATTERN, re.IGNORECASE).fullmatch(text):
        raise fail(InvalidEmail(field=field), msg)


def validate_ip(
    value: Any,
    version: str | None = None,
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """Check an IPv4 or IPv6 address; `version` is "v4" or "v6" to demand one."""
    text = string_of(value)
    if text is None:
        return
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        raise fail(InvalidIp(field=field), msg) from None

    if version == "v4" and address.version != 4:
        raise fail(InvalidIp(field=field), msg)
    if version == "v6" and address.version != 6:
        raise fail(InvalidIp(field=field), msg)


def validate_phone(
    value: Any,
    region: str | None = None,
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check a phone number.

    Without a `region`, numbers must be in international (+CC) form.
    """
    text = string_of(value)
    if text is None:
        return
    try:
        number = phonenumbers.parse(text, region)
    except phonenumbers.NumberParseException:
        raise fail(InvalidPhone(field=field), msg) from None

    if not phonenumbers.is_possible_number(number):
        raise fail(InvalidPhone(field=field), msg)


def validate_regex(
    value: Any,
    pattern: str | re.Pattern[str],
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check that the pattern matches somewhere in the string.

    Raises:
        PatternError: If `pattern` is a malformed string pattern
    """
    compiled = compile_pattern(pattern) if isinstance(pattern, str) else pattern
    text = string_of(value)
    if text is None:
        return
    if compiled.search(text) is None:
        raise fail(PatternMismatch(compiled.pattern, field=field), msg)


# =============================================================================
# Character classes
# =============================================================================


def validate_alphanumeric(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    text = string_of(value)
    if text is not None and not all(c.isalnum() for c in text):
        raise fail(NotAlphanumeric(field=field), msg)


def validate_alphabetic(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    text = string_of(value)
    if text is not None and not all(c.isalpha() for c in text):
        raise fail(NotAlphabetic(field=field), msg)


def validate_ascii(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    text = string_of(value)
    if text is not None and not text.isascii():
        raise fail(NotAscii(field=field), msg)


def validate_lowercase(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    # Per character: digits and punctuation are not lowercase
    text = string_of(value)
    if text is not None and not all(c.islower() for c in text):
        raise fail(NotLowercase(field=field), msg)


def validate_uppercase(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    text = string_of(value)
    if text is not None and not all(c.isupper() for c in text):
        raise fail(NotUppercase(field=field), msg)


# =============================================================================
# Sign
# =============================================================================


def validate_negative(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    # Compared untruncated so -0.5 counts as negative
    number = real_of(value)
    if number is None:
        return
    if not number < 0:
        raise fail(NotNegative(field=field), msg)


def validate_positive(value: Any, msg: str | None = None, *, field: str | None = None) -> None:
    number = real_of(value)
    if number is None:
        return
    if not number > 0:
        raise fail(NotPositive(field=field), msg)


# =============================================================================
# Color
# =============================================================================


def validate_color(
    value: Any,
    format: str | None = None,
    msg: str | None = None,
    *,
    field: str | None = None,
) -> None:
    """
    Check a CSS-style color string.

    `format` is one of hex, rgb, rgba, hsl, hsla; without it the format is
    detected from the prefix.
    """
    text = string_of(value)
    if text is None:
        return

    problem = _color_problem(text, format)
    if problem is not None:
        raise fail(InvalidColor(problem, field=field), msg)


def _color_problem(color: str, format: str | None) -> ColorProblem | None:
    if format is None:
        format = _detect_color_format(color)
        if format is None:
            return ColorProblem.FORMAT

    if format == "hex":
        return _hex_problem(color)
    if format in ("rgb", "rgba"):
        return _rgb_problem(color, alpha=format == "rgba")
    if format in ("hsl", "hsla"):
        return _hsl_problem(color, alpha=format == "hsla")
    return ColorProblem.FORMAT


def _detect_color_format(color: str) -> str | None:
    if color.startswith("#"):
        return "hex"
    for prefix in ("rgba", "rgb", "hsla", "hsl"):
        if color.startswith(f"{prefix}("):
            return prefix
    return None


def _hex_problem(color: str) -> ColorProblem | None:
    if not color.startswith("#"):
        return ColorProblem.FORMAT
    digits = color[1:]
    if len(digits) not in (3, 4, 6, 8):
        return ColorProblem.FORMAT
    if not all(c in "0123456789abcdefABCDEF" for c in digits):
        return ColorProblem.FORMAT
    return None


def _function_args(color: str, name: str, count: int) -> list[str] | None:
    if not color.startswith(f"{name}(") or not color.endswith(")"):
        return None
    parts = [p.strip() for p in color[len(name) + 1 : -1].split(",")]
    if len(parts) != count:
        return None
    return parts


def _rgb_problem(color: str, alpha: bool) -> ColorProblem | None:
    parts = _function_args(color, "rgba" if alpha else "rgb", 4 if alpha else 3)
    if parts is None:
        return ColorProblem.FORMAT
    for i, part in enumerate(parts):
        problem = _component_problem(part, 1.0 if i == 3 else 255.0)
        if problem is not None:
            return problem
    return None


def _hsl_problem(color: str, alpha: bool) -> ColorProblem | None:
    parts = _function_args(color, "hsla" if alpha else "hsl", 4 if alpha else 3)
    if parts is None:
        return ColorProblem.FORMAT

    hue = _parse_float(parts[0])
    if hue is None:
        return ColorProblem.FORMAT
    if not 0.0 <= hue < 360.0:
        return ColorProblem.OUT_OF_RANGE

    for part in parts[1:3]:
        if not part.endswith("%"):
            return ColorProblem.FORMAT
        problem = _component_problem(part, 100.0)
        if problem is not None:
            return problem

    if alpha:
        value = _parse_float(parts[3])
        if value is None:
            return ColorProblem.FORMAT
        if not 0.0 <= value <= 1.0:
            return ColorProblem.OUT_OF_RANGE
    return None


def _component_problem(part: str, max: float) -> ColorProblem | None:
    if part.endswith("%"):
        value = _parse_float(part[:-1])
        max = 100.0
    else:
        value = _parse_float(part)
    if value is None:
        return ColorProblem.FORMAT
    if not 0.0 <= value <= max:
        return ColorProblem.OUT_OF_RANGE
    return None


def _parse_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None
