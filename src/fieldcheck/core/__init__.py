"""Core fieldcheck functionality: IR, lexer, parser, binder, planner, project configuration."""

from . import ir
from .binder import bind_field, bind_rule
from .errors import (
    BindError,
    ErrorContext,
    FieldcheckError,
    GenerationError,
    ParseError,
)
from .fileset import discover_schema_files
from .manifest import ProjectManifest, load_manifest
from .parser import parse_schemas
from .planner import build_plans, plan_module, plan_struct

__all__ = [
    "ir",
    "FieldcheckError",
    "ParseError",
    "BindError",
    "GenerationError",
    "ErrorContext",
    "bind_rule",
    "bind_field",
    "parse_schemas",
    "build_plans",
    "plan_module",
    "plan_struct",
    "discover_schema_files",
    "ProjectManifest",
    "load_manifest",
]
