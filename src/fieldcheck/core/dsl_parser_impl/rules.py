"""
Rule entry parsing for fieldcheck.

Reads the ordered entry list attached to one field. Each entry is a bare
rule name (`required`) or a call with positional and named literal
arguments (`len(min = 1, max = 16)`, `contains(["@", "."], msg = "...")`).
Arguments are kept exactly as written; the binder interprets them.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class RuleParserMixin:
    """
    Mixin providing rule entry and argument parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        current_token: Any
        peek_token: Any
        error_at: Any
        location_of: Any

    def parse_rule_list(self, field: str, end: TokenType) -> list[ir.RuleInvocation]:
        """
        Parse comma-separated rule entries up to (not including) `end`.

        A trailing comma is accepted.
        """
        rules: list[ir.RuleInvocation] = []

        while not self.match(end):
            rules.append(self.parse_rule_entry(field))

            if self.match(TokenType.COMMA):
                self.advance()
                continue

            if not self.match(end):
                token = self.current_token()
                raise self.error_at(
                    f"Expected ',' between rules on field '{field}', got '{token.value}'",
                    token,
                )

        return rules

    def parse_rule_entry(self, field: str) -> ir.RuleInvocation:
        """Parse one bare rule name or rule call."""
        token = self.current_token()

        if token.type != TokenType.IDENTIFIER:
            shown = token.value or token.type.value
            raise self.error_at(f"Unknown validator '{shown}' on field '{field}'", token)

        kind = ir.RuleKind.lookup(token.value)
        if kind is None:
            raise self.error_at(f"Unknown validator '{token.value}' on field '{field}'", token)

        self.advance()

        if self.match(TokenType.LPAREN):
            arguments = self.parse_rule_arguments(field, kind)
            return ir.RuleInvocation(
                field=field,
                kind=kind,
                arguments=arguments,
                location=self.location_of(token),
            )

        if not kind.allows_bare:
            raise self.error_at(
                f"Validator '{kind.value}' on field '{field}' takes arguments; "
                f"write it as {kind.value}(...)",
                token,
            )

        return ir.RuleInvocation(
            field=field,
            kind=kind,
            location=self.location_of(token),
            bare=True,
        )

    def parse_rule_arguments(self, field: str, kind: ir.RuleKind) -> list[ir.RuleArgument]:
        """Parse `( arg, name = arg, ... )`."""
        self.expect(TokenType.LPAREN)

        arguments: list[ir.RuleArgument] = []
        seen_named = False

        while not self.match(TokenType.RPAREN):
            start = self.current_token()

            if start.type == TokenType.IDENTIFIER and self.peek_token().type == TokenType.EQUALS:
                self.advance()
                self.advance()
                value = self.parse_literal(field)
                arguments.append(
                    ir.RuleArgument(name=start.value, value=value, location=self.location_of(start))
                )
                seen_named = True
            else:
                if seen_named:
                    raise self.error_at(
                        f"Positional argument follows named argument in "
                        f"{kind.value}() on field '{field}'",
                        start,
                    )
                value = self.parse_literal(field)
                arguments.append(ir.RuleArgument(value=value, location=self.location_of(start)))

            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RPAREN):
                token = self.current_token()
                raise self.error_at(
                    f"Malformed argument list for {kind.value}() on field '{field}': "
                    f"unexpected '{token.value}'",
                    token,
                )

        self.expect(TokenType.RPAREN)
        return arguments

    def parse_literal(self, field: str) -> ir.ArrayLiteral | ir.LiteralValue:
        """Parse a string, number, boolean or array literal."""
        if self.match(TokenType.LBRACKET):
            return self._parse_array(field)
        return self.parse_scalar(field)

    def parse_scalar(self, field: str) -> ir.LiteralValue:
        """Parse a string, number or boolean literal."""
        token = self.current_token()

        if token.type == TokenType.STRING:
            return self.advance().value

        if token.type == TokenType.NUMBER:
            return self._parse_number(field)

        if token.type == TokenType.MINUS and self.peek_token().type == TokenType.NUMBER:
            self.advance()
            return -self._parse_number(field)

        if token.type == TokenType.TRUE:
            self.advance()
            return True

        if token.type == TokenType.FALSE:
            self.advance()
            return False

        shown = token.value or token.type.value
        raise self.error_at(f"Expected a literal value on field '{field}', got '{shown}'", token)

    def _parse_number(self, field: str) -> int | float:
        token = self.advance()
        try:
            if "." in token.value:
                return float(token.value)
            return int(token.value)
        except ValueError:
            raise self.error_at(
                f"Malformed number '{token.value}' on field '{field}'", token
            ) from None

    def _parse_array(self, field: str) -> ir.ArrayLiteral:
        self.expect(TokenType.LBRACKET)

        items: list[ir.LiteralValue] = []
        while not self.match(TokenType.RBRACKET):
            if self.match(TokenType.LBRACKET):
                raise self.error_at(
                    f"Nested arrays are not supported on field '{field}'", self.current_token()
                )
            items.append(self.parse_scalar(field))

            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RBRACKET):
                token = self.current_token()
                raise self.error_at(
                    f"Expected ',' or ']' in array on field '{field}', got '{token.value}'",
                    token,
                )

        self.expect(TokenType.RBRACKET)
        return ir.ArrayLiteral(items=items)
