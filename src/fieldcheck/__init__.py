"""
fieldcheck - declarative field validation compiled ahead of time.

Rules declared on struct fields, in `*.rules` schema files or through
`Annotated[..., Valid(...)]`, are parsed and bound once and turned into a
plain `validate` method that reports the first violation.
"""

from __future__ import annotations

import types
from pathlib import Path

from ._version import __version__
from .codegen.loader import load_module
from .codegen.synthesizer import render_module
from .core import ir
from .core.dsl_parser_impl import parse_schema
from .core.errors import BindError, FieldcheckError, GenerationError, ParseError
from .core.manifest import DEFAULT_HEADER
from .core.planner import build_plans, plan_module
from .declare import Valid, validated
from .runtime.errors import ValidationError


def plan_source(text: str, file: Path | None = None) -> ir.ValidationPlan:
    """
    Parse and bind schema text.

    Args:
        text: Schema source
        file: Path used in diagnostics (and as the default module name)
    """
    return plan_module(parse_schema(text, file or Path("schema.rules")))


def compile_source(text: str, file: Path | None = None, header: str = DEFAULT_HEADER) -> str:
    """Parse, bind and synthesize schema text into validator module source."""
    return render_module(plan_source(text, file), header)


def load_source(text: str, file: Path | None = None) -> types.ModuleType:
    """
    Build schema text into a live module.

    Example:
        accounts = load_source(schema_text)
        user = accounts.User(name="alice", age=30)
        user.validate()
    """
    plan = plan_source(text, file)
    return load_module(render_module(plan), f"fieldcheck.generated.{plan.module}")


__all__ = [
    "__version__",
    "ir",
    "FieldcheckError",
    "ParseError",
    "BindError",
    "GenerationError",
    "ValidationError",
    "Valid",
    "validated",
    "build_plans",
    "plan_source",
    "compile_source",
    "load_source",
]
