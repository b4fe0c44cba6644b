"""
Message template checking.

Custom messages may reference rule parameters with `{{name}}` placeholders.
Before a rule is bound, every placeholder that names a parameter of the rule
kind must have that parameter supplied; the bound values are then substituted
textually, so generated code only ever carries the final message.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


@dataclass(frozen=True)
class Placeholder:
    """A `{{name}}` occurrence in a template."""

    name: str
    text: str


@dataclass(frozen=True)
class TemplateCheck:
    """
    Result of checking a template against a rule's parameters.

    Attributes:
        missing: Placeholders naming a known parameter that was not supplied
        unknown: Placeholders naming nothing the rule kind defines
    """

    missing: tuple[Placeholder, ...] = ()
    unknown: tuple[Placeholder, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing


def extract_placeholders(template: str) -> list[Placeholder]:
    """Return placeholders in order of first appearance, without duplicates."""
    seen: set[str] = set()
    found = []
    for match in PLACEHOLDER_RE.finditer(template):
        name = match.group(1)
        if name in seen:
            continue
        seen.add(name)
        found.append(Placeholder(name=name, text=match.group(0)))
    return found


def check_template(
    template: str,
    parameters: Iterable[str],
    bound: Mapping[str, object | None],
) -> TemplateCheck:
    """
    Verify that every known placeholder has a bound value.

    Args:
        template: Message text
        parameters: Parameter names the rule kind exposes to templates
        bound: Parameter values as supplied (None when absent)
    """
    known = set(parameters)
    missing = []
    unknown = []
    for placeholder in extract_placeholders(template):
        if placeholder.name not in known:
            unknown.append(placeholder)
        elif bound.get(placeholder.name) is None:
            missing.append(placeholder)
    return TemplateCheck(missing=tuple(missing), unknown=tuple(unknown))


def render_template(template: str, bound: Mapping[str, object | None]) -> str:
    """Substitute bound parameter values; leave other placeholders untouched."""

    def replace(match: re.Match[str]) -> str:
        value = bound.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_RE.sub(replace, template)
