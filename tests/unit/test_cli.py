"""Tests for CLI commands."""

import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fieldcheck.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def test_project(tmp_path: Path, user_schema: Path, contact_schema: Path) -> Path:
    """Create a temporary project with two schema files."""
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    shutil.copy(user_schema, schemas / "user.rules")
    shutil.copy(contact_schema, schemas / "contact.rules")

    (tmp_path / "fieldcheck.toml").write_text(
        """
[project]
name = "accounts"
version = "0.1.0"

[schemas]
paths = ["schemas"]

[output]
dir = "generated"
"""
    )
    return tmp_path


@pytest.fixture
def broken_project(test_project: Path, fixtures_dir: Path) -> Path:
    shutil.copy(fixtures_dir / "broken.rules", test_project / "schemas" / "broken.rules")
    return test_project


def manifest_arg(project: Path) -> list[str]:
    return ["--manifest", str(project / "fieldcheck.toml")]


class TestCheck:
    def test_valid_project(self, cli_runner, test_project):
        result = cli_runner.invoke(app, ["check", *manifest_arg(test_project)])
        assert result.exit_code == 0, result.output
        assert "OK: 2 schema file(s), 2 struct(s)" in result.output

    def test_bind_error_exits_nonzero(self, cli_runner, broken_project):
        result = cli_runner.invoke(app, ["check", *manifest_arg(broken_project)])
        assert result.exit_code == 1
        assert "BindError" in result.output
        assert "no 'min' argument" in result.output

    def test_vscode_format(self, cli_runner, broken_project):
        result = cli_runner.invoke(
            app, ["check", *manifest_arg(broken_project), "--format", "vscode"]
        )
        assert result.exit_code == 1
        assert "schemas/broken.rules:4:" in result.output
        assert ": error: " in result.output

    def test_parse_error(self, cli_runner, test_project):
        (test_project / "schemas" / "typo.rules").write_text(
            "struct Typo:\n  name: str valid(lenght(min = 1))\n"
        )
        result = cli_runner.invoke(app, ["check", *manifest_arg(test_project)])
        assert result.exit_code == 1
        assert "ParseError" in result.output
        assert "Unknown validator 'lenght'" in result.output

    def test_malformed_number_is_a_diagnostic(self, cli_runner, test_project):
        (test_project / "schemas" / "numbers.rules").write_text(
            "struct Counter:\n  count: int valid(rng(min = 1.2.3))\n"
        )
        result = cli_runner.invoke(app, ["check", *manifest_arg(test_project)])
        assert result.exit_code == 1
        assert "ParseError" in result.output
        assert "Malformed number '1.2.3'" in result.output

    def test_missing_manifest(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["check", "--manifest", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1
        assert "manifest not found" in result.output


class TestBuild:
    def test_writes_modules(self, cli_runner, test_project):
        result = cli_runner.invoke(app, ["build", *manifest_arg(test_project)])
        assert result.exit_code == 0, result.output

        out = test_project / "generated"
        assert (out / "accounts.py").exists()
        assert (out / "contacts.py").exists()
        assert "from .accounts import User" in (out / "__init__.py").read_text()

    def test_out_option(self, cli_runner, test_project, tmp_path):
        target = tmp_path / "elsewhere"
        result = cli_runner.invoke(app, ["build", *manifest_arg(test_project), "--out", str(target)])
        assert result.exit_code == 0, result.output
        assert (target / "accounts.py").exists()

    def test_build_fails_on_bind_error(self, cli_runner, broken_project):
        result = cli_runner.invoke(app, ["build", *manifest_arg(broken_project)])
        assert result.exit_code == 1
        assert not (broken_project / "generated").exists()


class TestInspect:
    def test_shows_rules_in_order(self, cli_runner, test_project):
        result = cli_runner.invoke(app, ["inspect", *manifest_arg(test_project)])
        assert result.exit_code == 0, result.output
        assert "accounts.User" in result.output
        assert "len(min = 1, max = 16)" in result.output
        assert "rng(min = 18, max = 120)" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("fieldcheck ")
