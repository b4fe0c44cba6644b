"""
Rule invocation types for fieldcheck IR.

This module contains the parser's output: rule kinds, raw literal arguments,
and the per-field and per-struct declarations they hang off. Nothing here is
evaluated or coerced; that happens in the binder.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RuleFamily(str, Enum):
    """Coarse grouping of rule kinds."""

    LENGTH = "length"
    RANGE = "range"
    CONTAINS = "contains"
    REQUIRED = "required"
    OTHER = "other"


class RuleKind(str, Enum):
    """Closed set of rule names recognized in declarations."""

    LENGTH = "len"
    RANGE = "rng"
    CONTAINS = "contains"
    REQUIRED = "required"
    # Format leaves
    EMAIL = "email"
    IP = "ip"
    PHONE = "phone"
    COLOR = "color"
    REGEX = "regex"
    ALPHANUMERIC = "alphanumeric"
    ALPHABETIC = "alphabetic"
    ASCII = "ascii"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    NEGATIVE = "negative"
    POSITIVE = "positive"

    @property
    def family(self) -> RuleFamily:
        return _FAMILIES.get(self, RuleFamily.OTHER)

    @property
    def allows_bare(self) -> bool:
        """Whether the kind may be written without a call (all parameters optional)."""
        return self not in _CALL_ONLY

    @classmethod
    def lookup(cls, name: str) -> RuleKind | None:
        """Case-sensitive lookup by declared name."""
        try:
            return cls(name)
        except ValueError:
            return None


_FAMILIES = {
    RuleKind.LENGTH: RuleFamily.LENGTH,
    RuleKind.RANGE: RuleFamily.RANGE,
    RuleKind.CONTAINS: RuleFamily.CONTAINS,
    RuleKind.REQUIRED: RuleFamily.REQUIRED,
}

_CALL_ONLY = frozenset({RuleKind.LENGTH, RuleKind.RANGE, RuleKind.CONTAINS, RuleKind.REGEX})


class SourceLocation(BaseModel):
    """Position of a token in a schema source."""

    file: Path
    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


LiteralValue = bool | int | float | str


class ArrayLiteral(BaseModel):
    """A bracketed list of literals, e.g. ["@", "."]."""

    items: list[LiteralValue] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class RuleArgument(BaseModel):
    """
    One raw argument of a rule call.

    Attributes:
        name: Keyword for `key = value` arguments, None for positional ones
        value: The literal as written
        location: Where the argument starts
    """

    name: str | None = None
    value: ArrayLiteral | LiteralValue
    location: SourceLocation

    model_config = ConfigDict(frozen=True)

    @property
    def is_positional(self) -> bool:
        return self.name is None


class RuleInvocation(BaseModel):
    """
    A single rule entry as written on a field.

    Examples:
        - required: RuleInvocation(kind=REQUIRED, arguments=[])
        - len(min = 1, max = 16): RuleInvocation(kind=LENGTH, arguments=[min, max])
        - contains(["@"]): RuleInvocation(kind=CONTAINS, arguments=[<array>])
    """

    field: str
    kind: RuleKind
    arguments: list[RuleArgument] = Field(default_factory=list)
    location: SourceLocation
    bare: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def positional(self) -> list[RuleArgument]:
        return [a for a in self.arguments if a.is_positional]

    @property
    def named(self) -> list[RuleArgument]:
        return [a for a in self.arguments if not a.is_positional]

    @property
    def message(self) -> str | None:
        """Raw `msg` template, if one was supplied as a string."""
        for arg in self.named:
            if arg.name == "msg" and isinstance(arg.value, str):
                return arg.value
        return None


class FieldDeclaration(BaseModel):
    """
    A field with its declared type and ordered rule entries.

    Attributes:
        name: Field identifier
        type_expr: Type as written (e.g. "list[str]"), None if not declared
        optional: Type carried a `?` suffix
        rules: Rule entries in declaration order
    """

    name: str
    type_expr: str | None = None
    optional: bool = False
    rules: list[RuleInvocation] = Field(default_factory=list)
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


class StructDeclaration(BaseModel):
    """A struct and its fields in declaration order."""

    name: str
    title: str | None = None
    fields: list[FieldDeclaration] = Field(default_factory=list)
    location: SourceLocation

    model_config = ConfigDict(frozen=True)


class SchemaModule(BaseModel):
    """Everything parsed from one schema source."""

    name: str
    file: Path
    structs: list[StructDeclaration] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
