"""Shared pytest fixtures for fieldcheck tests."""

from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "unit" / "fixtures"


@pytest.fixture
def user_schema(fixtures_dir: Path) -> Path:
    """Return path to the accounts schema declaring User."""
    return fixtures_dir / "user.rules"


@pytest.fixture
def contact_schema(fixtures_dir: Path) -> Path:
    """Return path to the contacts schema exercising format rules."""
    return fixtures_dir / "contact.rules"
