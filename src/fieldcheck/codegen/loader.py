"""
In-process loading of generated source.

Generated code is compiled and executed exactly like an imported module:
the module is registered in `sys.modules` while its body runs so dataclass
processing can resolve string annotations.
"""

import sys
import types
from collections.abc import Callable
from typing import Any

from fieldcheck import runtime
from fieldcheck.core.errors import GenerationError


def load_module(source: str, name: str) -> types.ModuleType:
    """
    Execute generated module source and return the module.

    Raises:
        GenerationError: If the source does not compile
    """
    try:
        code = compile(source, f"<fieldcheck:{name}>", "exec")
    except SyntaxError as e:
        raise GenerationError(f"Generated module '{name}' does not compile: {e}") from e

    module = types.ModuleType(name)
    previous = sys.modules.get(name)
    sys.modules[name] = module
    try:
        exec(code, module.__dict__)
    finally:
        if previous is None:
            sys.modules.pop(name, None)
        else:
            sys.modules[name] = previous
    return module


def load_function(source: str, name: str, module: str | None = None) -> Callable[..., Any]:
    """
    Execute a single generated function definition and return the function.

    Args:
        source: Source containing `def <name>(...)`
        name: Function name to return
        module: Value for the function's `__module__`

    Raises:
        GenerationError: If the source does not compile or define `name`
    """
    try:
        code = compile(source, f"<fieldcheck:{name}>", "exec")
    except SyntaxError as e:
        raise GenerationError(f"Generated function '{name}' does not compile: {e}") from e

    namespace: dict[str, Any] = {"runtime": runtime, "__name__": module or __name__}
    exec(code, namespace)
    if name not in namespace:
        raise GenerationError(f"Generated source does not define '{name}'")
    return namespace[name]
