"""
In-process declaration surface.

Rules are attached to class attributes with `typing.Annotated`:

    @validated
    @dataclass
    class User:
        name: Annotated[str, Valid("len(min = 1, max = 16)")]
        age: Annotated[int, Valid("rng(min = 18, max = 120)")]
        allow: Annotated[bool | None, Valid("required")] = None

Class decoration runs the same parse, bind and synthesis steps as a schema
file, once, and attaches the resulting `validate` method. Diagnostics name
the pseudo path `<User.name>`.
"""

from __future__ import annotations

import logging
import types
import typing
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any, TypeVar, overload

from .codegen.loader import load_function
from .codegen.synthesizer import render_validate_function
from .core import ir
from .core.dsl_parser_impl import parse_rule_text
from .core.errors import GenerationError
from .core.planner import plan_struct

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=type)


class Valid:
    """
    Rule entries for one field.

    Each string holds one or more comma-separated entries, e.g.
    `Valid("len(min = 1)", "required")`.
    """

    __slots__ = ("entries",)

    def __init__(self, *entries: str):
        if not entries:
            raise TypeError("Valid() needs at least one rule entry")
        for entry in entries:
            if not isinstance(entry, str):
                raise TypeError(f"Valid() entries must be strings, got {type(entry).__name__}")
        self.entries = entries

    def __repr__(self) -> str:
        return f"Valid({', '.join(repr(e) for e in self.entries)})"


def _split_optional(tp: Any) -> tuple[Any, bool]:
    """Strip `| None` from a union, reporting whether it was there."""
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) < len(typing.get_args(tp)):
            if len(args) == 1:
                return args[0], True
            return typing.Union[tuple(args)], True
    return tp, False


def _type_expr(tp: Any) -> str | None:
    """Render a runtime type as a type expression, or None when it has no simple name."""
    origin = typing.get_origin(tp)
    if origin is None:
        return getattr(tp, "__name__", None) if isinstance(tp, type) else None
    if origin is typing.Union or origin is types.UnionType:
        return None
    base = getattr(origin, "__name__", None)
    if base is None:
        return None
    args = [_type_expr(a) or "Any" for a in typing.get_args(tp)]
    return f"{base}[{', '.join(args)}]" if args else base


def _field_declaration(struct: str, name: str, hint: Any) -> ir.FieldDeclaration | None:
    hint, outer_optional = _split_optional(hint)
    if typing.get_origin(hint) is not Annotated:
        return None

    inner, *metadata = typing.get_args(hint)
    entries = [e for m in metadata if isinstance(m, Valid) for e in m.entries]
    if not entries:
        return None

    inner, inner_optional = _split_optional(inner)
    pseudo = Path(f"<{struct}.{name}>")

    rules: list[ir.RuleInvocation] = []
    for entry in entries:
        rules.extend(parse_rule_text(entry, name, pseudo))

    return ir.FieldDeclaration(
        name=name,
        type_expr=_type_expr(inner),
        optional=outer_optional or inner_optional,
        rules=rules,
        location=ir.SourceLocation(file=pseudo, line=1, column=1),
    )


def build_struct_plan(cls: type) -> ir.StructPlan:
    """
    Build the plan for a class's `Valid` annotations.

    Raises:
        ParseError: If an entry is malformed
        BindError: If an entry cannot be bound to its field
    """
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError as e:
        raise GenerationError(f"Cannot resolve annotations of {cls.__name__}: {e}") from e

    fields = []
    for name, hint in hints.items():
        decl = _field_declaration(cls.__name__, name, hint)
        if decl is not None:
            fields.append(decl)

    struct = ir.StructDeclaration(
        name=cls.__name__,
        title=None,
        fields=fields,
        location=ir.SourceLocation(file=Path(f"<{cls.__name__}>"), line=1, column=1),
    )
    return plan_struct(struct)


def _attach(cls: C) -> C:
    if "validate" in cls.__dict__:
        raise GenerationError(f"{cls.__name__} already defines 'validate'")

    plan = build_struct_plan(cls)
    source = render_validate_function(plan)
    validate = load_function(source, "validate", module=cls.__module__)
    validate.__qualname__ = f"{cls.__qualname__}.validate"

    cls.validate = validate  # type: ignore[attr-defined]
    cls.__validation_plan__ = plan  # type: ignore[attr-defined]
    logger.debug("Attached validate to %s (%d rule(s))", cls.__qualname__, plan.rule_count)
    return cls


@overload
def validated(cls: C) -> C: ...


@overload
def validated(cls: None = None) -> Callable[[C], C]: ...


def validated(cls: C | None = None) -> C | Callable[[C], C]:
    """
    Class decorator attaching a generated `validate` method.

    Usable bare (`@validated`) or called (`@validated()`).
    """
    if cls is None:
        return _attach
    return _attach(cls)
