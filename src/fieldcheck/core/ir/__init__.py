"""
fieldcheck Internal Representation (IR).

Build-time types only: what the parser produces, what the binder resolves it
into, and the plan the code synthesizer consumes. None of these exist once a
validator has been generated.
"""

from .bound import (
    BoundRule,
    CharClassRule,
    ColorFormat,
    ColorRule,
    ContainsRule,
    EmailRule,
    IpRule,
    IpVersion,
    LengthRule,
    PhoneRule,
    RangeRule,
    RegexRule,
    RequiredRule,
    SignRule,
)
from .plan import FieldPlan, StructPlan, ValidationPlan
from .rules import (
    ArrayLiteral,
    FieldDeclaration,
    LiteralValue,
    RuleArgument,
    RuleFamily,
    RuleInvocation,
    RuleKind,
    SchemaModule,
    SourceLocation,
    StructDeclaration,
)

__all__ = [
    # Parser output
    "ArrayLiteral",
    "FieldDeclaration",
    "LiteralValue",
    "RuleArgument",
    "RuleFamily",
    "RuleInvocation",
    "RuleKind",
    "SchemaModule",
    "SourceLocation",
    "StructDeclaration",
    # Bound rules
    "BoundRule",
    "CharClassRule",
    "ColorFormat",
    "ColorRule",
    "ContainsRule",
    "EmailRule",
    "IpRule",
    "IpVersion",
    "LengthRule",
    "PhoneRule",
    "RangeRule",
    "RegexRule",
    "RequiredRule",
    "SignRule",
    # Plans
    "FieldPlan",
    "StructPlan",
    "ValidationPlan",
]
