import logging
from pathlib import Path

from . import ir
from .dsl_parser_impl import parse_schema

logger = logging.getLogger(__name__)


def parse_schemas(files: list[Path]) -> list[ir.SchemaModule]:
    """
    Parse schema files into SchemaModule structures.

    Args:
        files: List of .rules file paths to parse

    Returns:
        One SchemaModule per file, in the order given

    Raises:
        ParseError: On the first syntax problem in any file
    """
    modules: list[ir.SchemaModule] = []

    for f in files:
        text = f.read_text(encoding="utf-8")
        module = parse_schema(text, f)
        logger.debug("Parsed %s: module %s, %d struct(s)", f, module.name, len(module.structs))
        modules.append(module)

    return modules
