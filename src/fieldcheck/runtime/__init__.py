"""
fieldcheck run-time rule library.

Generated validators import this package and nothing else from fieldcheck.

Usage:
    from fieldcheck import runtime

    runtime.validate_length("alice", min=1, max=16)
    runtime.validate_email(user.email, msg="Please enter a valid address")
"""

from .errors import (
    ColorProblem,
    Custom,
    InvalidColor,
    InvalidEmail,
    InvalidIp,
    InvalidLength,
    InvalidPhone,
    MissingRequired,
    NotAlphabetic,
    NotAlphanumeric,
    NotAscii,
    NotContained,
    NotLowercase,
    NotNegative,
    NotPositive,
    NotUppercase,
    OutOfRange,
    PatternError,
    PatternMismatch,
    ValidationError,
)
from .formats import (
    compile_pattern,
    validate_alphabetic,
    validate_alphanumeric,
    validate_ascii,
    validate_color,
    validate_email,
    validate_ip,
    validate_lowercase,
    validate_negative,
    validate_phone,
    validate_positive,
    validate_regex,
    validate_uppercase,
)
from .rules import (
    check,
    validate_contains,
    validate_length,
    validate_range,
    validate_required,
)
from .views import Cell, UnsupportedView, View, register_wrapper

__all__ = [
    # Core rules
    "check",
    "validate_contains",
    "validate_length",
    "validate_range",
    "validate_required",
    # Format rules
    "compile_pattern",
    "validate_alphabetic",
    "validate_alphanumeric",
    "validate_ascii",
    "validate_color",
    "validate_email",
    "validate_ip",
    "validate_lowercase",
    "validate_negative",
    "validate_phone",
    "validate_positive",
    "validate_regex",
    "validate_uppercase",
    # Views
    "Cell",
    "UnsupportedView",
    "View",
    "register_wrapper",
    # Errors
    "ColorProblem",
    "Custom",
    "InvalidColor",
    "InvalidEmail",
    "InvalidIp",
    "InvalidLength",
    "InvalidPhone",
    "MissingRequired",
    "NotAlphabetic",
    "NotAlphanumeric",
    "NotAscii",
    "NotContained",
    "NotLowercase",
    "NotNegative",
    "NotPositive",
    "NotUppercase",
    "OutOfRange",
    "PatternError",
    "PatternMismatch",
    "ValidationError",
]
