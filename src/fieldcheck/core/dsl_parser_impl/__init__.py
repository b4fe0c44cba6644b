"""
fieldcheck Schema Parser Package.

The parser is built from mixins that split the grammar by construct:

- RuleParserMixin: rule entries and their literal arguments
- StructParserMixin: struct declarations, field lines, type expressions

The main exports are:
- Parser: The complete parser class
- parse_schema: Parse a whole schema source
- parse_rule_text: Parse a bare entry list, as found in a `Valid(...)` annotation

Usage:
    from fieldcheck.core.dsl_parser_impl import parse_schema

    module = parse_schema(text, Path("user.rules"))
"""

from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .base import BaseParser
from .rules import RuleParserMixin
from .struct import StructParserMixin


class Parser(
    BaseParser,
    RuleParserMixin,
    StructParserMixin,
):
    """Complete fieldcheck schema parser."""

    def parse(self, default_module: str) -> ir.SchemaModule:
        """
        Parse an entire schema source.

        Args:
            default_module: Module name used when the source has no header

        Returns:
            SchemaModule with structs in declaration order
        """
        module_name = self.parse_module_header() or default_module

        structs: list[ir.StructDeclaration] = []
        seen: set[str] = set()

        while not self.match(TokenType.EOF):
            self.skip_newlines()
            if self.match(TokenType.EOF):
                break

            token = self.current_token()
            if not self.match(TokenType.STRUCT):
                raise self.error_at(
                    f"Expected 'struct' declaration, got '{token.value or token.type.value}'",
                    token,
                )

            struct = self.parse_struct()
            if struct.name in seen:
                raise self.error_at(f"Duplicate struct '{struct.name}'", token)
            seen.add(struct.name)
            structs.append(struct)

        return ir.SchemaModule(name=module_name, file=self.file, structs=structs)


def parse_schema(text: str, file: Path) -> ir.SchemaModule:
    """
    Parse schema text into a SchemaModule.

    Args:
        text: Schema source
        file: Source path (for error reporting; its stem is the default module name)

    Raises:
        ParseError: On any syntax problem
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, source=text)
    return parser.parse(default_module=file.stem)


def parse_rule_text(text: str, field: str, file: Path) -> list[ir.RuleInvocation]:
    """
    Parse a comma-separated rule entry list on its own.

    Args:
        text: Entry list, e.g. 'len(min = 1), required'
        field: Field the entries belong to
        file: Pseudo path used in diagnostics

    Raises:
        ParseError: On any syntax problem
    """
    tokens = tokenize(text, file, track_layout=False)
    parser = Parser(tokens, file, source=text)
    rules = parser.parse_rule_list(field, end=TokenType.EOF)
    parser.expect(TokenType.EOF)
    return rules


__all__ = [
    "Parser",
    "parse_schema",
    "parse_rule_text",
]
