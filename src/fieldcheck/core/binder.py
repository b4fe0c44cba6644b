"""
Argument binder.

Turns each parsed RuleInvocation into a typed BoundRule:

1. Named arguments are checked against the keys the rule kind accepts
2. Positional arguments are accepted only where the kind defines one
3. Parameter values are type-checked (non-negative ints, enum members, ...)
4. The message template is checked against the bound parameters and rendered
5. The rule's capability view is checked against the field's declared type

Any problem raises BindError anchored at the offending argument or rule.
"""

import logging
from collections.abc import Callable

import phonenumbers

from . import ir
from ..runtime.errors import PatternError
from ..runtime.formats import compile_pattern
from ..runtime.views import View
from .errors import BindError, make_bind_error
from .templates import check_template, render_template

logger = logging.getLogger(__name__)

# Parameters each rule kind exposes to {{...}} placeholders in messages.
TEMPLATE_PARAMETERS: dict[ir.RuleKind, tuple[str, ...]] = {
    ir.RuleKind.LENGTH: ("min", "max"),
    ir.RuleKind.RANGE: ("min", "max"),
}

ACCEPTED_KEYS: dict[ir.RuleKind, frozenset[str]] = {
    ir.RuleKind.LENGTH: frozenset({"min", "max", "msg"}),
    ir.RuleKind.RANGE: frozenset({"min", "max", "msg"}),
    ir.RuleKind.IP: frozenset({"version", "msg"}),
    ir.RuleKind.PHONE: frozenset({"region", "msg"}),
    ir.RuleKind.COLOR: frozenset({"format", "msg"}),
    ir.RuleKind.REGEX: frozenset({"pattern", "msg"}),
}
_MESSAGE_ONLY = frozenset({"msg"})

# View each rule kind reads the field value through.
RULE_VIEWS: dict[ir.RuleKind, View] = {
    ir.RuleKind.LENGTH: View.LENGTH,
    ir.RuleKind.RANGE: View.NUMERIC,
    ir.RuleKind.CONTAINS: View.MEMBERSHIP,
    ir.RuleKind.REQUIRED: View.EMPTINESS,
    ir.RuleKind.NEGATIVE: View.NUMERIC,
    ir.RuleKind.POSITIVE: View.NUMERIC,
}

_COLLECTION_VIEWS = frozenset({View.LENGTH, View.MEMBERSHIP, View.EMPTINESS})
_NUMERIC_VIEWS = frozenset({View.NUMERIC, View.EMPTINESS})

# Views the builtin types provide. Types not listed here are not checked.
TYPE_VIEWS: dict[str, frozenset[View]] = {
    "str": frozenset({View.LENGTH, View.STRING, View.MEMBERSHIP, View.EMPTINESS}),
    "int": _NUMERIC_VIEWS,
    "float": _NUMERIC_VIEWS,
    "Decimal": _NUMERIC_VIEWS,
    "decimal.Decimal": _NUMERIC_VIEWS,
    "bool": frozenset({View.EMPTINESS}),
    "bytes": _COLLECTION_VIEWS,
    "list": _COLLECTION_VIEWS,
    "tuple": _COLLECTION_VIEWS,
    "set": _COLLECTION_VIEWS,
    "frozenset": _COLLECTION_VIEWS,
    "dict": _COLLECTION_VIEWS,
}


def rule_view(kind: ir.RuleKind) -> View:
    return RULE_VIEWS.get(kind, View.STRING)


def base_type(type_expr: str | None) -> str | None:
    """Outer type name of an expression: 'list[str] | None' -> 'list'."""
    if not type_expr:
        return None
    head = type_expr.removesuffix(" | None")
    return head.split("[", 1)[0].strip()


class _Binding:
    """Binding state for one invocation."""

    def __init__(self, invocation: ir.RuleInvocation, struct: str | None):
        self.invocation = invocation
        self.struct = struct
        self.kind = invocation.kind
        self.named: dict[str, ir.RuleArgument] = {}

    @property
    def label(self) -> str:
        return f"{self.kind.value}() on field '{self.invocation.field}'"

    def error(self, message: str, location: ir.SourceLocation | None = None) -> BindError:
        loc = location or self.invocation.location
        return make_bind_error(message, loc.file, loc.line, loc.column, struct=self.struct)

    def collect(self) -> None:
        accepted = ACCEPTED_KEYS.get(self.kind, _MESSAGE_ONLY)
        for arg in self.invocation.arguments:
            name = arg.name
            if name is None:
                continue
            if name in self.named:
                raise self.error(f"Duplicate argument '{name}' in {self.label}", arg.location)
            if name not in accepted:
                expected = ", ".join(sorted(accepted))
                raise self.error(
                    f"Unknown argument '{name}' in {self.label}; expected one of: {expected}",
                    arg.location,
                )
            self.named[name] = arg

    def value(self, name: str) -> ir.ArrayLiteral | ir.LiteralValue | None:
        arg = self.named.get(name)
        return arg.value if arg else None

    def location(self, name: str) -> ir.SourceLocation | None:
        arg = self.named.get(name)
        return arg.location if arg else None

    def string(self, name: str) -> str | None:
        value = self.value(name)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self.error(f"'{name}' of {self.label} must be a string", self.location(name))
        return value

    def bound(self, name: str) -> int | None:
        value = self.value(name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise self.error(
                f"'{name}' of {self.label} must be a non-negative integer, got {value!r}",
                self.location(name),
            )
        return value

    def no_positional(self) -> None:
        positional = self.invocation.positional
        if positional:
            raise self.error(f"{self.label} takes only named arguments", positional[0].location)


def bind_rule(
    invocation: ir.RuleInvocation,
    type_expr: str | None = None,
    struct: str | None = None,
) -> ir.BoundRule:
    """
    Bind one rule invocation.

    Args:
        invocation: Parsed rule entry
        type_expr: Declared type of the field, for the capability check
        struct: Owning struct name, for diagnostics

    Returns:
        The typed rule with its message rendered

    Raises:
        BindError: If arguments, message template or field type do not fit the rule
    """
    binding = _Binding(invocation, struct)
    binding.collect()

    message = _bind_message(binding)
    binder = _BINDERS.get(invocation.kind, _bind_simple)
    rule = binder(binding, message)

    _check_capability(binding, type_expr)
    logger.debug("Bound %s", binding.label)
    return rule


def bind_field(field: ir.FieldDeclaration, struct: str | None = None) -> ir.FieldPlan:
    """Bind every rule of a field, keeping declaration order."""
    rules = [bind_rule(inv, field.type_expr, struct) for inv in field.rules]
    return ir.FieldPlan(
        name=field.name,
        type_expr=field.type_expr,
        optional=field.optional,
        rules=rules,
    )


# =============================================================================
# Messages
# =============================================================================


def _template_values(binding: _Binding) -> dict[str, object | None]:
    return {name: binding.value(name) for name in TEMPLATE_PARAMETERS.get(binding.kind, ())}


def _bind_message(binding: _Binding) -> str | None:
    template = binding.string("msg")
    if template is None:
        return None

    values = _template_values(binding)
    result = check_template(template, TEMPLATE_PARAMETERS.get(binding.kind, ()), values)

    if result.missing:
        placeholder = result.missing[0]
        raise binding.error(
            f"Message of {binding.label} uses {placeholder.text} "
            f"but no '{placeholder.name}' argument is given",
            binding.location("msg"),
        )

    for placeholder in result.unknown:
        logger.warning(
            "Message of %s uses %s, which %s() does not define; left as written",
            binding.label,
            placeholder.text,
            binding.kind.value,
        )

    return render_template(template, values)


# =============================================================================
# Per-kind binders
# =============================================================================


def _bind_bounds(binding: _Binding) -> tuple[int | None, int | None]:
    binding.no_positional()
    low = binding.bound("min")
    high = binding.bound("max")
    if low is not None and high is not None and low > high:
        raise binding.error(f"{binding.label} has min = {low} greater than max = {high}")
    if low is None and high is None:
        logger.debug("%s has no bounds and never fails", binding.label)
    return low, high


def _bind_length(binding: _Binding, message: str | None) -> ir.BoundRule:
    low, high = _bind_bounds(binding)
    return ir.LengthRule(min=low, max=high, message=message)


def _bind_range(binding: _Binding, message: str | None) -> ir.BoundRule:
    low, high = _bind_bounds(binding)
    return ir.RangeRule(min=low, max=high, message=message)


def _bind_contains(binding: _Binding, message: str | None) -> ir.BoundRule:
    positional = binding.invocation.positional
    if len(positional) > 1:
        raise binding.error(
            f"{binding.label} takes a single list of values", positional[1].location
        )
    if not positional or not isinstance(positional[0].value, ir.ArrayLiteral):
        location = positional[0].location if positional else None
        raise binding.error("contains() requires at least one value", location)

    array = positional[0].value
    if not array.items:
        raise binding.error("contains() requires at least one value", positional[0].location)
    for item in array.items:
        if isinstance(item, bool):
            raise binding.error(
                f"{binding.label} accepts only strings and numbers, got {item!r}",
                positional[0].location,
            )
    return ir.ContainsRule(values=tuple(array.items), message=message)


def _bind_ip(binding: _Binding, message: str | None) -> ir.BoundRule:
    binding.no_positional()
    version = binding.string("version")
    if version is None:
        return ir.IpRule(message=message)
    try:
        return ir.IpRule(version=ir.IpVersion(version), message=message)
    except ValueError:
        raise binding.error(
            f"'version' of {binding.label} must be 'v4' or 'v6', got '{version}'",
            binding.location("version"),
        ) from None


def _bind_phone(binding: _Binding, message: str | None) -> ir.BoundRule:
    binding.no_positional()
    region = binding.string("region")
    if region is not None and region.upper() not in phonenumbers.SUPPORTED_REGIONS:
        raise binding.error(
            f"'region' of {binding.label} is not a known region code: '{region}'",
            binding.location("region"),
        )
    return ir.PhoneRule(region=region.upper() if region else None, message=message)


def _bind_color(binding: _Binding, message: str | None) -> ir.BoundRule:
    binding.no_positional()
    fmt = binding.string("format")
    if fmt is None:
        return ir.ColorRule(message=message)
    try:
        return ir.ColorRule(format=ir.ColorFormat(fmt), message=message)
    except ValueError:
        choices = ", ".join(f.value for f in ir.ColorFormat)
        raise binding.error(
            f"'format' of {binding.label} must be one of {choices}, got '{fmt}'",
            binding.location("format"),
        ) from None


def _bind_regex(binding: _Binding, message: str | None) -> ir.BoundRule:
    positional = binding.invocation.positional
    location = binding.location("pattern")
    pattern = binding.string("pattern")

    if positional:
        if pattern is not None or len(positional) > 1:
            raise binding.error(
                f"{binding.label} takes exactly one pattern", positional[-1].location
            )
        value = positional[0].value
        location = positional[0].location
        if not isinstance(value, str):
            raise binding.error(f"Pattern of {binding.label} must be a string", location)
        pattern = value

    if pattern is None:
        raise binding.error(f"{binding.label} requires a pattern")

    try:
        compile_pattern(pattern)
    except PatternError as e:
        raise binding.error(f"Invalid pattern in {binding.label}: {e.reason}", location) from e
    return ir.RegexRule(pattern=pattern, message=message)


def _bind_simple(binding: _Binding, message: str | None) -> ir.BoundRule:
    binding.no_positional()
    kind = binding.kind
    if kind is ir.RuleKind.REQUIRED:
        return ir.RequiredRule(message=message)
    if kind is ir.RuleKind.EMAIL:
        return ir.EmailRule(message=message)
    if kind in (ir.RuleKind.NEGATIVE, ir.RuleKind.POSITIVE):
        return ir.SignRule(kind=kind, message=message)
    return ir.CharClassRule(kind=kind, message=message)


_BINDERS: dict[ir.RuleKind, Callable[[_Binding, str | None], ir.BoundRule]] = {
    ir.RuleKind.LENGTH: _bind_length,
    ir.RuleKind.RANGE: _bind_range,
    ir.RuleKind.CONTAINS: _bind_contains,
    ir.RuleKind.IP: _bind_ip,
    ir.RuleKind.PHONE: _bind_phone,
    ir.RuleKind.COLOR: _bind_color,
    ir.RuleKind.REGEX: _bind_regex,
}


# =============================================================================
# Capability check
# =============================================================================


def _check_capability(binding: _Binding, type_expr: str | None) -> None:
    name = base_type(type_expr)
    if name is None or name not in TYPE_VIEWS:
        return

    view = rule_view(binding.kind)
    if view not in TYPE_VIEWS[name]:
        raise binding.error(
            f"{binding.label} needs a {view.value} view, which type '{type_expr}' does not provide"
        )
