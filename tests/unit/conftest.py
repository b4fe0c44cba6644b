"""Unit test fixtures: loaded validator modules built from the schema fixtures."""

from __future__ import annotations

import types
from pathlib import Path

import pytest

from fieldcheck import load_source


@pytest.fixture
def accounts(user_schema: Path) -> types.ModuleType:
    """Validator module generated from user.rules."""
    return load_source(user_schema.read_text(encoding="utf-8"), user_schema)


@pytest.fixture
def contacts(contact_schema: Path) -> types.ModuleType:
    """Validator module generated from contact.rules."""
    return load_source(contact_schema.read_text(encoding="utf-8"), contact_schema)


@pytest.fixture
def valid_user(accounts: types.ModuleType):
    """A User for which every rule passes."""
    return accounts.User(
        name="John",
        age=20,
        email="@.",
        allow=True,
        roles=["user"],
    )
