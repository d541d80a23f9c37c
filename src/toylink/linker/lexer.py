"""
Module Description Lexer
========================

Splits linker input into whitespace-separated tokens. The input format has
no punctuation or comments: counts, symbol names, offsets, mode letters
and instruction words are all separated by arbitrary whitespace, including
newlines, so module boundaries carry no layout meaning.

Each token remembers its line and column so that the reader can point at
the exact place where the input stops matching the expected shape.

Example
-------
>>> from toylink.linker.lexer import Lexer
>>> for token in Lexer("1 xy 2\\n0").tokenize():
...     print(token)
Token('1', 1:1)
Token('xy', 1:3)
Token('2', 1:6)
Token('0', 2:1)
"""

from dataclasses import dataclass
from typing import Iterator
import re

from toylink.errors import SourceLocation


# Anything that is not whitespace is part of a token
TOKEN_PATTERN = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited token.

    Attributes:
        value: The token text
        line: Line number in input (1-indexed)
        column: Column number in input (1-indexed)
        filename: Name of the input file
    """
    value: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        return f"Token({self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


class Lexer:
    """
    Tokenizes a module description.

    Usage:
        lexer = Lexer(text, filename)
        tokens = list(lexer.tokenize())
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def tokenize(self) -> Iterator[Token]:
        """Yield every token in input order."""
        for line_number, line in enumerate(self.source.splitlines(), start=1):
            for match in TOKEN_PATTERN.finditer(line):
                yield Token(match.group(), line_number, match.start() + 1, self.filename)

    def end_location(self) -> SourceLocation:
        """Location just past the last character, for end-of-input errors."""
        lines = self.source.splitlines() or [""]
        return SourceLocation(self.filename, len(lines), len(lines[-1]) + 1)
