"""
fieldcheck CLI Utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
from pathlib import Path

import typer

from fieldcheck._version import get_version
from fieldcheck.core.errors import FieldcheckError

LOG_LEVEL_ENV = "FIELDCHECK_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"fieldcheck {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """
    Configure root logging for a CLI run.

    `--verbose` selects DEBUG; otherwise FIELDCHECK_LOG_LEVEL is used,
    defaulting to WARNING.
    """
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = logging.getLevelNamesMapping().get(name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def relative_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def print_vscode_error(error: FieldcheckError, root: Path) -> None:
    """Print a build error in VS Code format: file:line:col: error: message"""
    if error.context:
        rel_path = relative_path(Path(error.context.file), root)
        line = error.context.line or 1
        col = error.context.column or 1
        typer.echo(f"{rel_path}:{line}:{col}: error: {error.message}", err=True)
    else:
        typer.echo(f"::error: {error.message}", err=True)
