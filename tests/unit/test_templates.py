"""Tests for message template checking."""

from fieldcheck.core.templates import check_template, extract_placeholders, render_template


def test_extract_in_order_without_duplicates():
    found = extract_placeholders("{{max}} then {{ min }} then {{max}}")
    assert [p.name for p in found] == ["max", "min"]
    assert found[1].text == "{{ min }}"


def test_single_braces_are_not_placeholders():
    assert extract_placeholders("{min} and {{}}") == []


def test_missing_parameter_is_reported():
    result = check_template("At least {{min}}", ["min", "max"], {"min": None, "max": 4})
    assert not result.ok
    assert [p.name for p in result.missing] == ["min"]


def test_unknown_placeholder_is_not_fatal():
    result = check_template("Hello {{name}}", ["min", "max"], {"min": 1, "max": None})
    assert result.ok
    assert [p.name for p in result.unknown] == ["name"]


def test_render_substitutes_bound_values():
    text = render_template("Between {{min}} and {{ max }}", {"min": 1, "max": 16})
    assert text == "Between 1 and 16"


def test_render_leaves_unbound_placeholders():
    assert render_template("Hi {{name}}", {"min": 1}) == "Hi {{name}}"
