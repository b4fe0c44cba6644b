"""Tests for the schema parser."""

from pathlib import Path

import pytest

from fieldcheck.core import ir
from fieldcheck.core.dsl_parser_impl import parse_rule_text, parse_schema
from fieldcheck.core.errors import ParseError

FILE = Path("test.rules")


def parse(text: str) -> ir.SchemaModule:
    return parse_schema(text, FILE)


def rules(text: str, field: str = "f") -> list[ir.RuleInvocation]:
    return parse_rule_text(text, field, FILE)


class TestModuleAndStructs:
    def test_module_header(self):
        module = parse("module accounts\n\nstruct User:\n  name: str\n")
        assert module.name == "accounts"
        assert [s.name for s in module.structs] == ["User"]

    def test_default_module_name_is_file_stem(self):
        module = parse("struct User:\n  name: str\n")
        assert module.name == "test"

    def test_struct_title(self):
        module = parse('struct User "Application user":\n  name: str\n')
        assert module.structs[0].title == "Application user"

    def test_structs_and_fields_keep_declaration_order(self):
        module = parse(
            "struct B:\n  z: str\n  a: str\n\nstruct A:\n  m: int\n",
        )
        assert [s.name for s in module.structs] == ["B", "A"]
        assert [f.name for f in module.structs[0].fields] == ["z", "a"]

    def test_duplicate_struct(self):
        with pytest.raises(ParseError, match="Duplicate struct 'User'"):
            parse("struct User:\n  a: str\nstruct User:\n  b: str\n")

    def test_duplicate_field(self):
        with pytest.raises(ParseError, match="Duplicate field 'a'") as exc_info:
            parse("struct User:\n  a: str\n  a: int\n")
        assert exc_info.value.context.line == 3

    def test_top_level_must_be_struct(self):
        with pytest.raises(ParseError, match="Expected 'struct'"):
            parse("entity User:\n  a: str\n")


class TestFields:
    def test_type_expressions(self):
        module = parse(
            "struct T:\n"
            "  a: str\n"
            "  b: list[str]\n"
            "  c: dict[str, int]\n"
            "  d: decimal.Decimal\n"
            "  e: list[str?]\n"
        )
        types = [f.type_expr for f in module.structs[0].fields]
        assert types == ["str", "list[str]", "dict[str, int]", "decimal.Decimal", "list[str | None]"]

    def test_optional_suffix(self):
        field = parse("struct T:\n  a: bool? valid(required)\n").structs[0].fields[0]
        assert field.optional is True
        assert field.type_expr == "bool"

    def test_type_may_be_omitted(self):
        field = parse("struct T:\n  a: valid(required)\n").structs[0].fields[0]
        assert field.type_expr is None
        assert [r.kind for r in field.rules] == [ir.RuleKind.REQUIRED]

    def test_keyword_as_field_name(self):
        field = parse("struct T:\n  valid: str\n").structs[0].fields[0]
        assert field.name == "valid"

    def test_rules_may_span_lines(self):
        text = (
            "struct T:\n"
            "  a: str valid(\n"
            "    len(min = 1,\n"
            "        max = 5),\n"
            "    required,\n"
            "  )\n"
            "  b: int\n"
        )
        fields = parse(text).structs[0].fields
        assert [r.kind for r in fields[0].rules] == [ir.RuleKind.LENGTH, ir.RuleKind.REQUIRED]
        assert fields[1].name == "b"

    def test_field_location(self):
        field = parse("struct T:\n  a: str\n").structs[0].fields[0]
        assert (field.location.line, field.location.column) == (2, 3)


class TestRuleEntries:
    def test_bare_and_call_entries(self):
        parsed = rules("required, email, len(min = 1)")
        assert [r.kind for r in parsed] == [ir.RuleKind.REQUIRED, ir.RuleKind.EMAIL, ir.RuleKind.LENGTH]
        assert parsed[0].bare is True
        assert parsed[2].bare is False

    def test_named_arguments(self):
        (entry,) = rules('len(min = 1, max = 16, msg = "Between {{min}} and {{max}}")')
        assert [(a.name, a.value) for a in entry.arguments] == [
            ("min", 1),
            ("max", 16),
            ("msg", "Between {{min}} and {{max}}"),
        ]
        assert entry.message == "Between {{min}} and {{max}}"

    def test_array_argument(self):
        (entry,) = rules('contains(["@", "."], msg = "x")')
        (array,) = entry.positional
        assert isinstance(array.value, ir.ArrayLiteral)
        assert array.value.items == ["@", "."]

    def test_literal_kinds(self):
        (entry,) = rules("contains([1, -2, 2.5, true, 'x'])")
        assert entry.positional[0].value.items == [1, -2, 2.5, True, "x"]

    def test_trailing_comma(self):
        assert len(rules("required, email,")) == 2

    def test_unknown_rule(self):
        with pytest.raises(ParseError, match="Unknown validator 'lenght' on field 'name'"):
            rules("lenght(min = 1)", field="name")

    def test_rule_names_are_case_sensitive(self):
        with pytest.raises(ParseError, match="Unknown validator 'Required'"):
            rules("Required")

    @pytest.mark.parametrize("name", ["len", "rng", "contains", "regex"])
    def test_call_only_kinds_cannot_be_bare(self, name):
        with pytest.raises(ParseError, match=f"write it as {name}"):
            rules(name)

    def test_entry_must_be_name_or_call(self):
        with pytest.raises(ParseError, match="Unknown validator '42'"):
            rules("42")

    def test_positional_after_named(self):
        with pytest.raises(ParseError, match="Positional argument follows named argument"):
            rules('contains(msg = "x", ["@"])')

    def test_missing_comma_between_rules(self):
        with pytest.raises(ParseError, match="Expected ','"):
            rules("required email")

    def test_nested_arrays_rejected(self):
        with pytest.raises(ParseError, match="Nested arrays"):
            rules('contains([["a"]])')

    @pytest.mark.parametrize("number", ["1_", "1__0", "1.2.3"])
    def test_malformed_number(self, number):
        with pytest.raises(ParseError, match=f"Malformed number '{number}'") as exc_info:
            rules(f"len(min = {number})")
        assert exc_info.value.context.column == 11

    def test_malformed_number_in_array(self):
        with pytest.raises(ParseError, match="Malformed number"):
            rules("contains([1, 2.3.4])")

    def test_error_carries_location_and_snippet(self):
        with pytest.raises(ParseError) as exc_info:
            parse("struct T:\n  a: str valid(required, bogus)\n")
        context = exc_info.value.context
        assert (context.line, context.column) == (2, 26)
        assert context.snippet == "  a: str valid(required, bogus)"
        assert "^^^" in str(exc_info.value)
