"""
Validator source synthesis.

Renders Python source from a ValidationPlan:

- render_module: a module with one dataclass per struct, each carrying a
  `validate` method
- render_validate_function: the `validate` function for one struct, on its
  own, for attaching to an existing class

Generated code imports only `fieldcheck.runtime`. Every rule becomes one
call into the rule library, emitted in declaration order, so the first
failing call decides which error `validate` raises.
"""

import keyword
from textwrap import dedent, indent

from fieldcheck.core import ir
from fieldcheck.core.errors import GenerationError
from fieldcheck.core.manifest import DEFAULT_HEADER

_INDENT = "    "

# Names a generated module binds at top level; structs may not reuse them.
MODULE_GLOBALS = frozenset({"runtime", "dataclass", "Any"})


def _rule_arguments(rule: ir.BoundRule) -> list[str]:
    """Keyword arguments for a rule call, excluding the value and msg."""
    if isinstance(rule, ir.LengthRule | ir.RangeRule):
        args = []
        if rule.min is not None:
            args.append(f"min={rule.min!r}")
        if rule.max is not None:
            args.append(f"max={rule.max!r}")
        return args
    if isinstance(rule, ir.ContainsRule):
        return [f"values={rule.values!r}"]
    if isinstance(rule, ir.IpRule) and rule.version:
        return [f"version={rule.version.value!r}"]
    if isinstance(rule, ir.PhoneRule) and rule.region:
        return [f"region={rule.region!r}"]
    if isinstance(rule, ir.ColorRule) and rule.format:
        return [f"format={rule.format.value!r}"]
    if isinstance(rule, ir.RegexRule):
        return [f"pattern={rule.pattern!r}"]
    return []


def render_rule_call(rule: ir.BoundRule, field: str) -> str | None:
    """
    Render the library call for one bound rule.

    Returns None for bound-free length and range rules, which never fail.
    """
    if isinstance(rule, ir.LengthRule | ir.RangeRule) and rule.is_noop:
        return None

    args = [f"self.{field}", *_rule_arguments(rule)]
    if rule.message is not None:
        args.append(f"msg={rule.message!r}")
    args.append(f"field={field!r}")
    return f"runtime.validate_{_function_suffix(rule)}({', '.join(args)})"


def _function_suffix(rule: ir.BoundRule) -> str:
    if isinstance(rule, ir.LengthRule):
        return "length"
    if isinstance(rule, ir.RangeRule):
        return "range"
    return rule.kind.value


def _check_names(struct: ir.StructPlan) -> None:
    if not struct.name.isidentifier() or keyword.iskeyword(struct.name):
        raise GenerationError(f"Struct name '{struct.name}' is not a valid Python identifier")
    for field in struct.fields:
        if keyword.iskeyword(field.name):
            raise GenerationError(
                f"Field '{field.name}' of struct {struct.name} is a Python keyword"
            )
        if field.name == "validate":
            raise GenerationError(
                f"Field 'validate' of struct {struct.name} clashes with the generated validate method"
            )


def render_validate_function(struct: ir.StructPlan) -> str:
    """
    Render `def validate(self) -> None` for one struct, at top level.

    Raises:
        GenerationError: If a field name cannot be used as an attribute
    """
    _check_names(struct)

    calls = []
    for field in struct.fields:
        for rule in field.rules:
            call = render_rule_call(rule, field.name)
            if call is not None:
                calls.append(call)

    lines = [
        "def validate(self) -> None:",
        f'{_INDENT}"""Check {struct.name} rules in declaration order; raise the first failure."""',
    ]
    lines.extend(f"{_INDENT}{call}" for call in calls)
    if not calls:
        lines.append(f"{_INDENT}return None")
    return "\n".join(lines) + "\n"


def render_dataclass(struct: ir.StructPlan) -> str:
    """Render a dataclass for one struct, with its validate method."""
    lines = ["@dataclass(kw_only=True)", f"class {struct.name}:"]
    if struct.title:
        lines.append(f"{_INDENT}{_docstring(struct.title)}")
        lines.append("")

    for field in struct.fields:
        default = " = None" if field.optional else ""
        lines.append(f"{_INDENT}{field.name}: {field.annotation}{default}")
    if struct.fields:
        lines.append("")

    lines.append(indent(render_validate_function(struct), _INDENT).rstrip("\n"))
    return "\n".join(lines) + "\n"


def _docstring(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    return f'"""{escaped}"""'


def render_module(plan: ir.ValidationPlan, header: str = DEFAULT_HEADER) -> str:
    """
    Render a complete validator module for one plan.

    Args:
        plan: Bound plan for one schema module
        header: Docstring text; `{source}` is replaced with the schema file name

    Raises:
        GenerationError: If a struct name would shadow a name the module imports
    """
    for struct in plan.structs:
        if struct.name in MODULE_GLOBALS:
            raise GenerationError(
                f"Struct name '{struct.name}' is reserved in generated module '{plan.module}'"
            )

    source = plan.source.name if plan.source else plan.module
    names = [s.name for s in plan.structs]
    text = header.replace("{source}", source).replace("{module}", plan.module)

    content = dedent(f'''
        {_docstring(text)}

        from __future__ import annotations

        from dataclasses import dataclass
        from typing import Any

        from fieldcheck import runtime

        __all__ = {names!r}
    ''').lstrip("\n")

    parts = [content]
    for struct in plan.structs:
        parts.append("\n\n" + render_dataclass(struct))
    return "".join(parts)
