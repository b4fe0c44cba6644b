"""
fieldcheck code generation: plan → Python source → loaded validators.
"""

from .generator import Generator, GeneratorResult, ValidatorModuleGenerator
from .loader import load_function, load_module
from .synthesizer import (
    render_dataclass,
    render_module,
    render_rule_call,
    render_validate_function,
)

__all__ = [
    "Generator",
    "GeneratorResult",
    "ValidatorModuleGenerator",
    "load_function",
    "load_module",
    "render_dataclass",
    "render_module",
    "render_rule_call",
    "render_validate_function",
]
