"""
Bound rule definitions for fieldcheck IR.

A bound rule is a rule invocation whose arguments have been resolved into
typed parameters and whose message template has been checked and rendered.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .rules import RuleKind


class IpVersion(str, Enum):
    V4 = "v4"
    V6 = "v6"


class ColorFormat(str, Enum):
    HEX = "hex"
    RGB = "rgb"
    RGBA = "rgba"
    HSL = "hsl"
    HSLA = "hsla"


class LengthRule(BaseModel):
    """len(min, max): count must be strictly between the bounds."""

    kind: Literal[RuleKind.LENGTH] = RuleKind.LENGTH
    min: int | None = None
    max: int | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_noop(self) -> bool:
        return self.min is None and self.max is None


class RangeRule(BaseModel):
    """rng(min, max): value must lie within the bounds, inclusive."""

    kind: Literal[RuleKind.RANGE] = RuleKind.RANGE
    min: int | None = None
    max: int | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_noop(self) -> bool:
        return self.min is None and self.max is None


class ContainsRule(BaseModel):
    """contains([...]): every listed value must be present."""

    kind: Literal[RuleKind.CONTAINS] = RuleKind.CONTAINS
    values: tuple[bool | int | float | str, ...]
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class RequiredRule(BaseModel):
    kind: Literal[RuleKind.REQUIRED] = RuleKind.REQUIRED
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class EmailRule(BaseModel):
    kind: Literal[RuleKind.EMAIL] = RuleKind.EMAIL
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class IpRule(BaseModel):
    kind: Literal[RuleKind.IP] = RuleKind.IP
    version: IpVersion | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class PhoneRule(BaseModel):
    kind: Literal[RuleKind.PHONE] = RuleKind.PHONE
    region: str | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class ColorRule(BaseModel):
    kind: Literal[RuleKind.COLOR] = RuleKind.COLOR
    format: ColorFormat | None = None
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class RegexRule(BaseModel):
    kind: Literal[RuleKind.REGEX] = RuleKind.REGEX
    pattern: str
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class CharClassRule(BaseModel):
    """Every character of the string belongs to one character class."""

    kind: Literal[
        RuleKind.ALPHANUMERIC,
        RuleKind.ALPHABETIC,
        RuleKind.ASCII,
        RuleKind.LOWERCASE,
        RuleKind.UPPERCASE,
    ]
    message: str | None = None

    model_config = ConfigDict(frozen=True)


class SignRule(BaseModel):
    kind: Literal[RuleKind.NEGATIVE, RuleKind.POSITIVE]
    message: str | None = None

    model_config = ConfigDict(frozen=True)


BoundRule = Annotated[
    LengthRule
    | RangeRule
    | ContainsRule
    | RequiredRule
    | EmailRule
    | IpRule
    | PhoneRule
    | ColorRule
    | RegexRule
    | CharClassRule
    | SignRule,
    Field(discriminator="kind"),
]
