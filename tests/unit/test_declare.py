"""Tests for the Annotated / @validated declaration surface."""

from dataclasses import dataclass, field
from typing import Annotated

import pytest

from fieldcheck import Valid, validated
from fieldcheck.core import ir
from fieldcheck.core.errors import BindError, GenerationError, ParseError
from fieldcheck.runtime import Cell, Custom, MissingRequired, NotContained, ValidationError


@validated
@dataclass
class User:
    name: Annotated[str, Valid("len(min = 1, max = 16)")]
    age: Annotated[int, Valid('rng(min = 18, max = 120, msg = "The age must be at least {{min}} and no more than {{max}}")')]
    email: Annotated[str, Valid('contains(["@", "."])')]
    roles: Annotated[list[str], Valid('required(msg = "At least 1 role is required")')] = field(
        default_factory=list
    )
    allow: Annotated[bool | None, Valid("required")] = None
    nickname: str | None = None


def make_user(**overrides) -> User:
    values = {"name": "John", "age": 20, "email": "@.", "allow": True, "roles": ["user"]}
    values.update(overrides)
    return User(**values)


class TestDecoratedClass:
    def test_valid_instance(self):
        assert make_user().validate() is None

    def test_custom_message_rendered(self):
        with pytest.raises(Custom) as exc_info:
            make_user(age=15).validate()
        assert exc_info.value.message == "The age must be at least 18 and no more than 120"

    def test_structured_error(self):
        with pytest.raises(NotContained):
            make_user(email="nomatch").validate()

    def test_optional_required(self):
        with pytest.raises(MissingRequired):
            make_user(allow=None).validate()

    def test_plan_is_attached(self):
        plan = User.__validation_plan__
        assert [f.name for f in plan.fields] == ["name", "age", "email", "roles", "allow"]
        assert plan.get_field("allow").optional is True
        assert plan.get_field("roles").type_expr == "list[str]"

    def test_method_identity(self):
        assert User.validate.__qualname__ == "User.validate"


class TestDecoratorForms:
    def test_called_form_and_plain_class(self):
        @validated()
        class Account:
            balance: Annotated[int, Valid("negative")]

            def __init__(self, balance):
                self.balance = balance

        Account(-5).validate()
        with pytest.raises(ValidationError) as exc_info:
            Account(5).validate()
        assert exc_info.value.code == "negative"

    def test_multiple_valid_entries_and_strings(self):
        @validated
        @dataclass
        class Handle:
            value: Annotated[str, Valid("required", "len(max = 8), lowercase")]

        assert [r.kind for r in Handle.__validation_plan__.fields[0].rules] == [
            ir.RuleKind.REQUIRED,
            ir.RuleKind.LENGTH,
            ir.RuleKind.LOWERCASE,
        ]
        with pytest.raises(ValidationError) as exc_info:
            Handle(value="Upper").validate()
        assert exc_info.value.code == "lowercase"

    def test_wrapped_field(self):
        @validated
        @dataclass
        class Settings:
            title: Annotated[Cell, Valid("len(min = 2)")]

        Settings(title=Cell("abc")).validate()
        with pytest.raises(ValidationError):
            Settings(title=Cell("a")).validate()


class TestBuildErrors:
    def test_parse_error_names_pseudo_path(self):
        with pytest.raises(ParseError) as exc_info:

            @validated
            @dataclass
            class Bad:
                name: Annotated[str, Valid("lenght(min = 1)")]

        assert str(exc_info.value.context.file) == "<Bad.name>"

    def test_unbound_placeholder(self):
        with pytest.raises(BindError, match="no 'min' argument"):

            @validated
            @dataclass
            class Bad:
                name: Annotated[str, Valid('len(max = 4, msg = "At least {{min}}")')]

    def test_capability_mismatch(self):
        with pytest.raises(BindError, match="numeric view"):

            @validated
            @dataclass
            class Bad:
                name: Annotated[str, Valid("rng(min = 1)")]

    def test_existing_validate_method(self):
        with pytest.raises(GenerationError, match="already defines 'validate'"):

            @validated
            class Bad:
                name: Annotated[str, Valid("required")]

                def validate(self):
                    return None

    def test_valid_requires_entries(self):
        with pytest.raises(TypeError):
            Valid()
