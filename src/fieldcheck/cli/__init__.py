"""
fieldcheck CLI.

- project.py: check, build, inspect
- utils.py: version display, logging setup, diagnostic formatting
"""

import sys

import typer

from fieldcheck._version import __version__
from fieldcheck.cli.project import build_command, check_command, inspect_command
from fieldcheck.cli.utils import setup_logging, version_callback

app = typer.Typer(
    help="""fieldcheck - declarative field validation compiled ahead of time

Commands operate on the project described by fieldcheck.toml:
  • check    parse and bind every schema, report problems
  • build    write generated validator modules
  • inspect  show each struct's rules in evaluation order
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """fieldcheck CLI main callback for global options."""
    setup_logging(verbose)


app.command(name="check")(check_command)
app.command(name="build")(build_command)
app.command(name="inspect")(inspect_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["__version__", "app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
