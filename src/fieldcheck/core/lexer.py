"""
Lexer/Tokenizer for fieldcheck schema files.

Converts raw schema text into a stream of tokens with source location tracking.
Handles indentation-based blocks (Python-style) with INDENT/DEDENT tokens.
Newlines inside parentheses or brackets are ignored, so a long rule list may
span several lines.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import make_parse_error


class TokenType(Enum):
    """Token types in the schema language."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    MODULE = "module"
    STRUCT = "struct"
    VALID = "valid"
    TRUE = "true"
    FALSE = "false"

    # Operators
    COLON = ":"
    COMMA = ","
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    EQUALS = "="
    QUESTION = "?"
    DOT = "."
    MINUS = "-"

    # Special
    NEWLINE = "NEWLINE"
    INDENT = "INDENT"
    DEDENT = "DEDENT"
    EOF = "EOF"


KEYWORDS = {
    "module",
    "struct",
    "valid",
    "true",
    "false",
}

_SINGLE_CHAR_TOKENS = {
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "=": TokenType.EQUALS,
    "?": TokenType.QUESTION,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
}

_CLOSING = {")": "(", "]": "["}


@dataclass
class Token:
    """
    A single token in the schema source.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for fieldcheck schema files.

    Converts source text into a stream of tokens with indentation tracking.
    With ``track_layout=False`` newlines are plain whitespace and no
    INDENT/DEDENT tokens are produced; this is the mode used for rule entry
    lists embedded in Python annotations.
    """

    def __init__(self, text: str, file: Path, track_layout: bool = True):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
            track_layout: Emit NEWLINE/INDENT/DEDENT tokens
        """
        self.text = text
        self.file = file
        self.track_layout = track_layout
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.indent_stack = [0]
        self.brackets: list[tuple[str, int, int]] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self, skip_newlines: bool = False) -> None:
        """Skip whitespace characters."""
        while self.current_char() in (" ", "\t", "\r") or (
            skip_newlines and self.current_char() == "\n"
        ):
            self.advance()

    def skip_comment(self) -> None:
        """Skip comment (from # to end of line)."""
        if self.current_char() == "#":
            while self.current_char() and self.current_char() != "\n":
                self.advance()

    def source_line(self, line: int) -> str | None:
        """Return the text of a 1-indexed source line."""
        lines = self.text.splitlines()
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return None

    def read_string(self, raw: bool = False) -> str:
        """
        Read a quoted string.

        Recognized escapes are \\n, \\t, \\\\ and the quote character. Any other
        backslash sequence is kept verbatim so regex patterns survive intact.
        Raw strings (r"...") keep every backslash.
        """
        start_line = self.line
        start_col = self.column
        quote = self.current_char()
        self.advance()

        chars = []
        while True:
            current = self.current_char()
            if not current or current == quote or current == "\n":
                break

            if current == "\\":
                escape_char = self.peek_char()
                if raw:
                    chars.append("\\")
                    if escape_char == quote:
                        chars.append(quote)
                        self.advance()
                elif escape_char == "n":
                    chars.append("\n")
                    self.advance()
                elif escape_char == "t":
                    chars.append("\t")
                    self.advance()
                elif escape_char in ("\\", quote):
                    chars.append(escape_char)
                    self.advance()
                else:
                    chars.append("\\")
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != quote:
            raise make_parse_error(
                "Unterminated string literal",
                self.file,
                start_line,
                start_col,
                self.source_line(start_line),
            )

        self.advance()
        return "".join(chars)

    def read_number(self) -> str:
        """Read an integer or decimal number."""
        chars = []
        current = self.current_char()
        while current and (current.isdigit() or current in "._"):
            if current == "." and not (self.peek_char() or "").isdigit():
                break
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def handle_indentation(self, indent_level: int) -> None:
        """Generate INDENT/DEDENT tokens based on indentation level."""
        current_indent = self.indent_stack[-1]

        if indent_level > current_indent:
            self.indent_stack.append(indent_level)
            self.tokens.append(Token(TokenType.INDENT, "", self.line, 1))

        elif indent_level < current_indent:
            while self.indent_stack and self.indent_stack[-1] > indent_level:
                self.indent_stack.pop()
                self.tokens.append(Token(TokenType.DEDENT, "", self.line, 1))

            if self.indent_stack[-1] != indent_level:
                raise make_parse_error(
                    f"Inconsistent indentation (expected {self.indent_stack[-1]} spaces, got {indent_level})",
                    self.file,
                    self.line,
                    1,
                    self.source_line(self.line),
                )

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens including INDENT/DEDENT and EOF

        Raises:
            ParseError: If a lexical error is encountered
        """
        at_line_start = self.track_layout

        while self.pos < len(self.text):
            if at_line_start and not self.brackets:
                indent_level = 0
                while self.current_char() in (" ", "\t"):
                    if self.current_char() == " ":
                        indent_level += 1
                    else:
                        indent_level += 4  # Treat tab as 4 spaces
                    self.advance()

                # Skip blank lines and comments
                if self.current_char() in ("\n", "#", "\r"):
                    self.skip_whitespace()
                    self.skip_comment()
                    if self.current_char() == "\n":
                        self.advance()
                    continue

                if self.current_char() is not None:
                    self.handle_indentation(indent_level)

                at_line_start = False

            self.skip_whitespace(skip_newlines=not self.track_layout or bool(self.brackets))

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch == "#":
                self.skip_comment()
                continue

            elif ch == "\n":
                self.tokens.append(Token(TokenType.NEWLINE, "\\n", token_line, token_col))
                self.advance()
                at_line_start = True

            elif ch in ('"', "'"):
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch in ("r", "R") and self.peek_char() in ('"', "'"):
                self.advance()
                value = self.read_string(raw=True)
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif ch.isdigit():
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_col))

            elif ch.isalpha() or ch == "_":
                value = self.read_identifier()
                if value in KEYWORDS:
                    token_type = TokenType(value)
                else:
                    token_type = TokenType.IDENTIFIER
                self.tokens.append(Token(token_type, value, token_line, token_col))

            elif ch in _SINGLE_CHAR_TOKENS:
                if ch in "([":
                    self.brackets.append((ch, token_line, token_col))
                elif ch in ")]":
                    if not self.brackets or self.brackets[-1][0] != _CLOSING[ch]:
                        raise make_parse_error(
                            f"Unmatched {ch!r}",
                            self.file,
                            token_line,
                            token_col,
                            self.source_line(token_line),
                        )
                    self.brackets.pop()
                self.advance()
                self.tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, token_line, token_col))

            else:
                raise make_parse_error(
                    f"Unexpected character: {ch!r}",
                    self.file,
                    token_line,
                    token_col,
                    self.source_line(token_line),
                )

        if self.brackets:
            opener, line, col = self.brackets[-1]
            raise make_parse_error(
                f"Unclosed {opener!r}",
                self.file,
                line,
                col,
                self.source_line(line),
            )

        if self.track_layout:
            if self.tokens and self.tokens[-1].type != TokenType.NEWLINE:
                self.tokens.append(Token(TokenType.NEWLINE, "\\n", self.line, self.column))

            while len(self.indent_stack) > 1:
                self.indent_stack.pop()
                self.tokens.append(Token(TokenType.DEDENT, "", self.line, self.column))

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))

        return self.tokens


def tokenize(text: str, file: Path, track_layout: bool = True) -> list[Token]:
    """
    Convenience function to tokenize schema text.

    Args:
        text: Source text
        file: Source file path
        track_layout: Emit NEWLINE/INDENT/DEDENT tokens

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file, track_layout=track_layout)
    return lexer.tokenize()
