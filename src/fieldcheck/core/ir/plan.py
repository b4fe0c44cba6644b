"""
Validation plan types for fieldcheck IR.

The plan is the complete build-time artifact handed to the code synthesizer:
structs in declaration order, fields in declaration order, and bound rules in
declaration order. That ordering decides which violation a generated
validator reports first.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .bound import BoundRule
from .rules import SourceLocation


class FieldPlan(BaseModel):
    """
    Ordered rules for one field.

    Attributes:
        name: Field identifier
        type_expr: Declared type, used for annotations in generated code
        optional: Whether the field may be absent (None)
        rules: Bound rules in declaration order
    """

    name: str
    type_expr: str | None = None
    optional: bool = False
    rules: list[BoundRule] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def annotation(self) -> str:
        """Python annotation for the field."""
        base = self.type_expr or "Any"
        if self.optional:
            return f"{base} | None"
        return base


class StructPlan(BaseModel):
    """Ordered field plans for one struct."""

    name: str
    title: str | None = None
    fields: list[FieldPlan] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def rule_count(self) -> int:
        return sum(len(f.rules) for f in self.fields)

    def get_field(self, name: str) -> FieldPlan | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class ValidationPlan(BaseModel):
    """
    All struct plans built from one schema source.

    Attributes:
        module: Module name (declared, or the file stem)
        source: Schema file the plan was built from
        structs: Struct plans in declaration order
    """

    module: str
    source: Path | None = None
    structs: list[StructPlan] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
