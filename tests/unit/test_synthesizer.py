"""Tests for validator source synthesis and module generation."""

from pathlib import Path

import pytest

from fieldcheck import compile_source, load_source, plan_source
from fieldcheck.codegen import (
    ValidatorModuleGenerator,
    load_module,
    render_module,
    render_rule_call,
    render_validate_function,
)
from fieldcheck.core import ir
from fieldcheck.core.errors import GenerationError

SCHEMA = """\
module shop

struct Item "Catalog item":
  sku: str valid(len(min = 3, max = 12), regex(r"^[A-Z0-9-]+$"))
  price: int valid(rng(min = 1, msg = "Price must be at least {{min}}"))
  tags: list[str]? valid(contains(["sale"]))
"""


class TestRuleCalls:
    def test_length_with_message(self):
        rule = ir.LengthRule(min=1, max=16, message="Bad name")
        assert render_rule_call(rule, "name") == (
            "runtime.validate_length(self.name, min=1, max=16, msg='Bad name', field='name')"
        )

    def test_contains(self):
        rule = ir.ContainsRule(values=("@", "."))
        assert render_rule_call(rule, "email") == (
            "runtime.validate_contains(self.email, values=('@', '.'), field='email')"
        )

    def test_format_kinds(self):
        assert render_rule_call(ir.IpRule(version=ir.IpVersion.V4), "ip") == (
            "runtime.validate_ip(self.ip, version='v4', field='ip')"
        )
        assert render_rule_call(ir.SignRule(kind=ir.RuleKind.NEGATIVE), "n") == (
            "runtime.validate_negative(self.n, field='n')"
        )
        assert render_rule_call(ir.RegexRule(pattern=r"^\d$"), "code") == (
            "runtime.validate_regex(self.code, pattern='^\\\\d$', field='code')"
        )

    def test_noop_rules_emit_nothing(self):
        assert render_rule_call(ir.RangeRule(), "age") is None

    def test_message_quotes_are_escaped(self):
        call = render_rule_call(ir.RequiredRule(message='Say "hi" it\'s'), "x")
        assert "msg='Say \"hi\" it\\'s'" in call


class TestValidateFunction:
    def test_calls_follow_declaration_order(self):
        struct = plan_source(SCHEMA).structs[0]
        source = render_validate_function(struct)
        calls = [line.strip() for line in source.splitlines() if "runtime." in line]
        assert [c.split("(")[0] for c in calls] == [
            "runtime.validate_length",
            "runtime.validate_regex",
            "runtime.validate_range",
            "runtime.validate_contains",
        ]
        assert "msg='Price must be at least 1'" in calls[2]

    def test_struct_without_rules_returns_none(self):
        struct = ir.StructPlan(name="Empty", fields=[ir.FieldPlan(name="a", type_expr="str")])
        assert "return None" in render_validate_function(struct)

    def test_keyword_field_rejected(self):
        struct = ir.StructPlan(name="T", fields=[ir.FieldPlan(name="from", type_expr="str")])
        with pytest.raises(GenerationError, match="Python keyword"):
            render_validate_function(struct)

    def test_validate_field_rejected(self):
        struct = ir.StructPlan(name="T", fields=[ir.FieldPlan(name="validate")])
        with pytest.raises(GenerationError, match="clashes"):
            render_validate_function(struct)


class TestModule:
    def test_module_source(self):
        source = compile_source(SCHEMA, Path("shop.rules"))
        assert source.startswith('"""Generated by fieldcheck from shop.rules. DO NOT EDIT."""')
        assert "from fieldcheck import runtime" in source
        assert "@dataclass(kw_only=True)\nclass Item:" in source
        assert '"""Catalog item"""' in source
        assert "tags: list[str] | None = None" in source
        compile(source, "shop.py", "exec")

    def test_custom_header(self):
        plan = plan_source(SCHEMA, Path("shop.rules"))
        source = render_module(plan, header="Built from {source} ({module}) {keep}")
        assert source.startswith('"""Built from shop.rules (shop) {keep}"""')

    def test_loaded_module_validates(self):
        module = load_module(compile_source(SCHEMA), "shop_test")
        item = module.Item(sku="AB-1234", price=10)
        item.validate()

        with pytest.raises(module.runtime.Custom, match="Price must be at least 1"):
            module.Item(sku="AB-1234", price=0).validate()

    @pytest.mark.parametrize("name", ["runtime", "dataclass", "Any"])
    def test_struct_cannot_shadow_module_imports(self, name):
        schema = f"module m\n\nstruct {name}:\n  title: str valid(len(min = 1))\n"
        with pytest.raises(GenerationError, match=f"Struct name '{name}' is reserved"):
            compile_source(schema)
        with pytest.raises(GenerationError):
            load_source(schema)

    def test_load_module_rejects_bad_source(self):
        with pytest.raises(GenerationError, match="does not compile"):
            load_module("def broken(:\n", "broken")


class TestGenerator:
    def test_writes_modules_and_package_init(self, tmp_path: Path):
        plans = [plan_source(SCHEMA, Path("shop.rules"))]
        result = ValidatorModuleGenerator(plans, tmp_path / "out").generate()

        assert result.success
        assert sorted(p.name for p in result.files_created) == ["__init__.py", "shop.py"]
        assert result.artifacts["shop"] == ["Item"]
        init = (tmp_path / "out" / "__init__.py").read_text()
        assert "from .shop import Item" in init

    def test_invalid_module_name_is_an_error(self, tmp_path: Path):
        plans = [plan_source(SCHEMA.replace("module shop", "module my.shop"))]
        result = ValidatorModuleGenerator(plans, tmp_path).generate()
        assert not result.success
        assert "my.shop" in result.errors[0]

    def test_struct_exported_by_two_modules_is_an_error(self, tmp_path: Path):
        plans = [
            plan_source(SCHEMA, Path("shop.rules")),
            plan_source(SCHEMA.replace("module shop", "module store"), Path("store.rules")),
        ]
        result = ValidatorModuleGenerator(plans, tmp_path).generate()

        assert not result.success
        assert result.errors == [
            "Struct 'Item' is declared in both module 'shop' and module 'store'; "
            "the package __init__.py cannot export both"
        ]
