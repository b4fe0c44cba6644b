"""
Build-time diagnostics for fieldcheck schema parsing, binding, and generation.

Every error raised while turning declarations into a validator is fatal: the
build stops and no partial plan is produced.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FieldcheckError(Exception):
    """Base exception for all fieldcheck build-time errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(FieldcheckError):
    """
    Raised when declaration syntax cannot be parsed.

    Examples:
    - Unknown rule name
    - Rule entry that is neither a bare name nor a call
    - Unterminated string or bracket
    - Indentation errors
    """

    pass


class BindError(FieldcheckError):
    """
    Raised when a parsed rule cannot be bound to typed parameters.

    Examples:
    - contains() without values
    - Message placeholder referencing an unbound parameter
    - Unknown or duplicate argument names
    - Rule applied to a field type that cannot provide its view
    """

    pass


class GenerationError(FieldcheckError):
    """
    Raised when the synthesizer cannot emit or load a validator.

    Examples:
    - Struct already defines a validate attribute
    - Output directory issues
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source where the error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source snippet showing the error location
        struct: Optional struct name where the error occurred
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None
    struct: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "user.rules:10:5 in struct User"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.struct:
            location += f" in struct {self.struct}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending source line with a marker under the column."""
        if not self.snippet:
            return ""

        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ParseError(message, context)


def make_bind_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
    column: int | None = None,
    struct: str | None = None,
) -> BindError:
    """
    Helper to create a BindError with optional context.

    Returns:
        BindError with context if a location is provided
    """
    if file and line and column:
        context = ErrorContext(file=file, line=line, column=column, struct=struct)
        return BindError(message, context)
    return BindError(message)
