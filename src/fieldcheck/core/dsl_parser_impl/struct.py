"""
Struct parsing for fieldcheck schemas.

Handles struct declarations and their field lines:

    struct User "Application user":
      name: str valid(len(min = 1, max = 16))
      allow: bool? valid(required)
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class StructParserMixin:
    """
    Mixin providing struct, field, and type expression parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        skip_newlines: Any
        expect_identifier_or_keyword: Any
        current_token: Any
        error_at: Any
        location_of: Any
        parse_rule_list: Any

    def parse_struct(self) -> ir.StructDeclaration:
        """Parse struct declaration."""
        start = self.expect(TokenType.STRUCT)

        name = self.expect(TokenType.IDENTIFIER).value
        title = None

        if self.match(TokenType.STRING):
            title = self.advance().value

        self.expect(TokenType.COLON)
        self.expect(TokenType.NEWLINE)
        self.skip_newlines()
        self.expect(TokenType.INDENT)

        fields: list[ir.FieldDeclaration] = []
        seen: set[str] = set()

        while not self.match(TokenType.DEDENT, TokenType.EOF):
            self.skip_newlines()
            if self.match(TokenType.DEDENT, TokenType.EOF):
                break

            name_token = self.current_token()
            field = self.parse_field()
            if field.name in seen:
                raise self.error_at(
                    f"Duplicate field '{field.name}' in struct '{name}'", name_token
                )
            seen.add(field.name)
            fields.append(field)

        if self.match(TokenType.DEDENT):
            self.advance()

        return ir.StructDeclaration(
            name=name,
            title=title,
            fields=fields,
            location=self.location_of(start),
        )

    def parse_field(self) -> ir.FieldDeclaration:
        """Parse `name: type [valid(rules...)]`."""
        name_token = self.expect_identifier_or_keyword()
        name = name_token.value
        self.expect(TokenType.COLON)

        type_expr = None
        optional = False
        if not self.match(TokenType.VALID, TokenType.NEWLINE):
            type_expr = self.parse_type_expr()
            if self.match(TokenType.QUESTION):
                self.advance()
                optional = True

        rules: list[ir.RuleInvocation] = []
        if self.match(TokenType.VALID):
            self.advance()
            self.expect(TokenType.LPAREN)
            rules = self.parse_rule_list(name, end=TokenType.RPAREN)
            self.expect(TokenType.RPAREN)

        self.expect(TokenType.NEWLINE)

        return ir.FieldDeclaration(
            name=name,
            type_expr=type_expr,
            optional=optional,
            rules=rules,
            location=self.location_of(name_token),
        )

    def parse_type_expr(self) -> str:
        """
        Parse a type expression and render it as Python annotation text.

        Examples: str, list[str], dict[str, int], decimal.Decimal, list[str?]
        """
        parts = [self.expect(TokenType.IDENTIFIER).value]
        while self.match(TokenType.DOT):
            self.advance()
            parts.append(self.expect(TokenType.IDENTIFIER).value)
        rendered = ".".join(parts)

        if self.match(TokenType.LBRACKET):
            self.advance()
            args = []
            while not self.match(TokenType.RBRACKET):
                arg = self.parse_type_expr()
                if self.match(TokenType.QUESTION):
                    self.advance()
                    arg = f"{arg} | None"
                args.append(arg)
                if self.match(TokenType.COMMA):
                    self.advance()
                elif not self.match(TokenType.RBRACKET):
                    token = self.current_token()
                    raise self.error_at(
                        f"Expected ',' or ']' in type arguments, got '{token.value}'", token
                    )
            self.expect(TokenType.RBRACKET)
            rendered = f"{rendered}[{', '.join(args)}]"

        return rendered
