"""
Project commands: check, build, inspect.

All three operate on the project described by a fieldcheck.toml manifest
(default: the one in the current directory).
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from fieldcheck.codegen.generator import ValidatorModuleGenerator
from fieldcheck.core import ir
from fieldcheck.core.errors import FieldcheckError
from fieldcheck.core.fileset import discover_schema_files
from fieldcheck.core.manifest import ProjectManifest, load_manifest
from fieldcheck.core.planner import build_plans

from .utils import print_vscode_error, relative_path

console = Console()


def _load_project(manifest: str) -> tuple[Path, ProjectManifest, list[Path]]:
    manifest_path = Path(manifest).resolve()
    if not manifest_path.exists():
        typer.echo(f"Error: manifest not found: {manifest_path}", err=True)
        raise typer.Exit(code=1)

    root = manifest_path.parent
    mf = load_manifest(manifest_path)
    files = discover_schema_files(root, mf)
    return root, mf, files


def _report_error(error: FieldcheckError, format: str, root: Path) -> None:
    if format == "vscode":
        print_vscode_error(error, root)
    else:
        typer.echo(f"{type(error).__name__}: {error}", err=True)


def describe_rule(rule: ir.BoundRule) -> str:
    """One-line rendering of a bound rule, in declaration syntax."""
    params: list[str] = []
    if isinstance(rule, ir.LengthRule | ir.RangeRule):
        if rule.min is not None:
            params.append(f"min = {rule.min}")
        if rule.max is not None:
            params.append(f"max = {rule.max}")
    elif isinstance(rule, ir.ContainsRule):
        params.append("[" + ", ".join(repr(v) for v in rule.values) + "]")
    elif isinstance(rule, ir.IpRule) and rule.version:
        params.append(f'version = "{rule.version.value}"')
    elif isinstance(rule, ir.PhoneRule) and rule.region:
        params.append(f'region = "{rule.region}"')
    elif isinstance(rule, ir.ColorRule) and rule.format:
        params.append(f'format = "{rule.format.value}"')
    elif isinstance(rule, ir.RegexRule):
        params.append(repr(rule.pattern))

    name = rule.kind.value
    return f"{name}({', '.join(params)})" if params else name


def check_command(
    manifest: str = typer.Option(
        "fieldcheck.toml", "--manifest", "-m", help="Path to fieldcheck.toml"
    ),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
) -> None:
    """
    Parse and bind every schema file; report the first problem.
    """
    root, _, files = _load_project(manifest)

    if not files:
        if format == "vscode":
            typer.echo("::warning: No schema files found")
        else:
            typer.echo("WARNING: no schema files found")
        return

    try:
        plans = build_plans(files)
    except FieldcheckError as e:
        _report_error(e, format, root)
        raise typer.Exit(code=1)

    structs = sum(len(p.structs) for p in plans)
    rules = sum(s.rule_count for p in plans for s in p.structs)
    if format == "vscode":
        typer.echo("::notice: Schemas are valid")
    else:
        typer.echo(f"OK: {len(files)} schema file(s), {structs} struct(s), {rules} rule(s).")


def build_command(
    manifest: str = typer.Option(
        "fieldcheck.toml", "--manifest", "-m", help="Path to fieldcheck.toml"
    ),
    out: str | None = typer.Option(
        None, "--out", "-o", help="Output directory (default: [output] dir)"
    ),
) -> None:
    """
    Generate one validator module per schema file.
    """
    root, mf, files = _load_project(manifest)
    output_dir = Path(out).resolve() if out else mf.output_dir

    try:
        plans = build_plans(files)
        result = ValidatorModuleGenerator(plans, output_dir, header=mf.output.header).generate()
    except FieldcheckError as e:
        _report_error(e, "human", root)
        raise typer.Exit(code=1)

    for warning in result.warnings:
        typer.echo(f"WARNING: {warning}")
    for error in result.errors:
        typer.echo(f"ERROR: {error}", err=True)
    if not result.success:
        raise typer.Exit(code=1)

    for path in result.files_created:
        typer.echo(f"  wrote {relative_path(path, root)}")
    typer.echo(f"Built {len(plans)} module(s) into {relative_path(output_dir, root)}")


def inspect_command(
    manifest: str = typer.Option(
        "fieldcheck.toml", "--manifest", "-m", help="Path to fieldcheck.toml"
    ),
) -> None:
    """
    Show each struct's fields and rules in evaluation order.
    """
    root, _, files = _load_project(manifest)

    try:
        plans = build_plans(files)
    except FieldcheckError as e:
        _report_error(e, "human", root)
        raise typer.Exit(code=1)

    for plan in plans:
        for struct in plan.structs:
            title = f"{plan.module}.{struct.name}"
            if struct.title:
                title += f" - {struct.title}"
            table = Table(title=title)
            table.add_column("#", style="dim")
            table.add_column("Field", no_wrap=True)
            table.add_column("Type", no_wrap=True)
            table.add_column("Rule", no_wrap=True)
            table.add_column("Message")

            order = 0
            for field in struct.fields:
                if not field.rules:
                    table.add_row("", field.name, field.annotation, "[dim]-[/dim]", "")
                    continue
                for rule in field.rules:
                    order += 1
                    table.add_row(
                        str(order),
                        field.name,
                        field.annotation,
                        describe_rule(rule),
                        rule.message or "",
                    )

            console.print(table)
        console.print(f"[dim]{relative_path(plan.source, root) if plan.source else plan.module}[/dim]\n")
