"""
Base parser class for fieldcheck schemas.

Provides common token manipulation and utility methods used by all parser mixins.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import ParseError, make_parse_error
from ..lexer import Token, TokenType

if TYPE_CHECKING:
    from .. import ir


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing,
    including token navigation, matching, and error generation.
    """

    def __init__(self, tokens: list[Token], file: Path, source: str | None = None):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            source: Original text, used for error snippets
        """
        self.tokens = tokens
        self.file = file
        self.pos = 0
        self._lines = source.splitlines() if source is not None else []

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error_at(
                f"Expected {_describe(token_type)}, got {_describe(token.type, token.value)}",
                token,
            )
        return self.advance()

    def expect_identifier_or_keyword(self) -> Token:
        """
        Expect an identifier or accept a keyword as an identifier.

        Field names such as `module` or `valid` are legal; only the grammar
        positions that need the keyword treat it specially.
        """
        token = self.current_token()
        if token.type == TokenType.IDENTIFIER or token.type in KEYWORD_AS_IDENTIFIER_TYPES:
            return self.advance()

        raise self.error_at(
            f"Unexpected {_describe(token.type, token.value)} - expected identifier",
            token,
        )

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def error_at(self, message: str, token: Token) -> ParseError:
        """Build a ParseError anchored at a token, with the source line as snippet."""
        snippet = None
        if 1 <= token.line <= len(self._lines):
            snippet = self._lines[token.line - 1]
        return make_parse_error(message, self.file, token.line, token.column, snippet)

    def location_of(self, token: Token) -> "ir.SourceLocation":
        from .. import ir

        return ir.SourceLocation(file=self.file, line=token.line, column=token.column)

    def parse_module_header(self) -> str | None:
        """
        Parse the optional module declaration.

        Returns:
            Dotted module name, or None if the source has no header
        """
        self.skip_newlines()

        if not self.match(TokenType.MODULE):
            return None

        self.advance()
        name = self.parse_module_name()
        self.expect(TokenType.NEWLINE)
        self.skip_newlines()
        return name

    def parse_module_name(self) -> str:
        """Parse dotted module name (e.g., foo.bar.baz)."""
        parts = [self.expect_identifier_or_keyword().value]

        while self.match(TokenType.DOT):
            self.advance()
            parts.append(self.expect_identifier_or_keyword().value)

        return ".".join(parts)


# Keywords that can be used as identifiers in name positions
KEYWORD_AS_IDENTIFIER_TYPES = (
    TokenType.MODULE,
    TokenType.STRUCT,
    TokenType.VALID,
    TokenType.TRUE,
    TokenType.FALSE,
)


def _describe(token_type: TokenType, value: str | None = None) -> str:
    if token_type == TokenType.EOF:
        return "end of input"
    if token_type == TokenType.NEWLINE:
        return "end of line"
    if token_type in (TokenType.INDENT, TokenType.DEDENT):
        return "indented block" if token_type == TokenType.INDENT else "end of block"
    if value:
        return f"'{value}'"
    return f"'{token_type.value}'"
