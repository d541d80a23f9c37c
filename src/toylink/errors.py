"""
toylink Error Hierarchy
=======================

This module defines the exception hierarchy for the toylink package.
All exceptions inherit from LinkerError, allowing callers to catch all
linker-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
LinkerError (base)
├── InputFormatError - malformed or truncated module description
└── LinkerStateError - passes run out of order or more than once

Recoverable Conditions
----------------------
Multiply-defined symbols, oversized definitions, out-of-range operands,
undefined externals and unused symbols are NOT exceptions. They are
recorded on the data they describe and surfaced in the final Report, so
one bad instruction never stops the rest of the link.

Error messages for fatal input errors follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LinkerError(Exception):
    """
    Base exception for all toylink errors.

        try:
            report = link(read_modules_file("input-1.txt"))
        except LinkerError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the input text for error reporting.

    Attributes:
        filename: Name of the input file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Fatal Input Errors
# =============================================================================

class InputFormatError(LinkerError):
    """
    The module description does not match the expected shape.

    Raised by the reader when a count or value cannot be parsed, a mode
    letter is unknown, a word is not four digits, or the input ends
    before every declared module has been read. This aborts the run.

    Attributes:
        message: The error description
        location: Where in the input the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            input-3.txt:4:7: error: expected an instruction word, found 'R'
            hint: each instruction is a mode letter followed by a 4-digit word
        """
        if self.location:
            parts = [f"{self.location}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Pipeline Errors
# =============================================================================

class LinkerStateError(LinkerError):
    """
    The two-pass pipeline was driven out of order.

    A Resolver is single-shot: pass 1 must complete before pass 2, and
    neither pass may be repeated on the same instance.
    """
    pass
