"""
Plan builder.

Binds every rule of every field of every struct and assembles the result
into ValidationPlans, one per schema module. Declaration order is preserved
at all three levels.
"""

import logging
from pathlib import Path

from . import ir
from .binder import bind_field
from .errors import BindError
from .parser import parse_schemas

logger = logging.getLogger(__name__)


def plan_struct(struct: ir.StructDeclaration) -> ir.StructPlan:
    """
    Bind one struct declaration.

    Raises:
        BindError: On the first rule that cannot be bound
    """
    fields = [bind_field(f, struct=struct.name) for f in struct.fields]
    plan = ir.StructPlan(
        name=struct.name,
        title=struct.title,
        fields=fields,
        location=struct.location,
    )
    logger.debug("Planned struct %s with %d rule(s)", plan.name, plan.rule_count)
    return plan


def plan_module(module: ir.SchemaModule) -> ir.ValidationPlan:
    """Bind every struct of a parsed module."""
    return ir.ValidationPlan(
        module=module.name,
        source=module.file,
        structs=[plan_struct(s) for s in module.structs],
    )


def build_plans(files: list[Path]) -> list[ir.ValidationPlan]:
    """
    Parse and bind schema files.

    Performs:
    1. Parsing (syntax, rule names, entry forms)
    2. Duplicate module detection
    3. Binding (arguments, message templates, field capabilities)

    Args:
        files: Schema files to build

    Returns:
        One ValidationPlan per file, in the order given

    Raises:
        ParseError: If any file fails to parse
        BindError: If any rule fails to bind, or two files declare the same module
    """
    modules = parse_schemas(files)

    seen: dict[str, Path] = {}
    for module in modules:
        if module.name in seen:
            raise BindError(
                f"Module '{module.name}' is declared in both {seen[module.name]} and {module.file}"
            )
        seen[module.name] = module.file

    return [plan_module(m) for m in modules]
