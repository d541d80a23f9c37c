"""
Module Description Reader
=========================

Turns the token stream of a linker input file into ModuleSource records.

Input Grammar
-------------
```
input       := module_count module*
module      := def_list use_list program_text
def_list    := count (symbol offset)*
use_list    := count symbol*
program_text:= count (mode word)*
mode        := I | A | R | E
word        := 4 decimal digits: opcode digit + 3 operand digits
```

For example, this input describes two modules:

```
2
1 xy 2
2 z xy
5 R 1004  I 5678  E 2000  R 8002  E 7001
0
1 z
6 R 8001  E 1000  E 1000  E 3000  R 1002  A 1010
```

Any deviation from this shape is fatal and raises InputFormatError with
the location of the offending token. Range problems inside well-formed
values (an operand that points past the module, a definition offset past
the module end) are NOT reader errors; the resolver reports them.
"""

from pathlib import Path
from typing import Iterator
import logging

from toylink.errors import InputFormatError
from toylink.linker.lexer import Lexer, Token
from toylink.linker.model import (
    AddressMode,
    Definition,
    Instruction,
    ModuleSource,
)

logger = logging.getLogger(__name__)

WORD_DIGITS = 4


class ModuleReader:
    """
    Reads module descriptions from a token stream.

    Usage:
        reader = ModuleReader(text, "input-1.txt")
        sources = reader.read()
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self._lexer = Lexer(source, filename)
        self._tokens: Iterator[Token] = self._lexer.tokenize()

    # =========================================================================
    # Public Interface
    # =========================================================================

    def read(self) -> list[ModuleSource]:
        """
        Read every module declared by the leading module count.

        Raises:
            InputFormatError: If the input does not match the grammar
        """
        module_count = self._expect_count("module count")
        modules = [self._read_module(i) for i in range(module_count)]

        extra = next(self._tokens, None)
        if extra is not None:
            raise InputFormatError(
                f"unexpected token '{extra.value}' after the last module",
                extra.location,
                hint=f"the input declares {module_count} module(s)",
            )

        logger.debug(f"Read {len(modules)} module(s)")
        return modules

    # =========================================================================
    # Module Sections
    # =========================================================================

    def _read_module(self, index: int) -> ModuleSource:
        definitions = []
        for _ in range(self._expect_count(f"definition count of module {index}")):
            name = self._expect_symbol("definition name")
            offset = self._expect_count(f"offset of '{name}'")
            definitions.append(Definition(name, offset))

        uses = [
            self._expect_symbol("use-list symbol")
            for _ in range(self._expect_count(f"use count of module {index}"))
        ]

        instructions = [
            self._read_instruction()
            for _ in range(self._expect_count(f"instruction count of module {index}"))
        ]

        logger.debug(
            f"Module {index}: {len(definitions)} definition(s), "
            f"{len(uses)} use(s), {len(instructions)} instruction(s)"
        )
        return ModuleSource(tuple(definitions), tuple(uses), tuple(instructions))

    def _read_instruction(self) -> Instruction:
        token = self._next("addressing mode")
        try:
            mode = AddressMode.from_letter(token.value)
        except ValueError:
            raise InputFormatError(
                f"invalid addressing mode '{token.value}'",
                token.location,
                hint="mode must be one of I, A, R, E",
            ) from None

        token = self._next("instruction word")
        word = token.value
        if len(word) != WORD_DIGITS or not word.isdigit() or not word.isascii():
            raise InputFormatError(
                f"invalid instruction word '{word}'",
                token.location,
                hint="each instruction is a mode letter followed by a 4-digit word",
            )
        return Instruction.from_word(mode, int(word))

    # =========================================================================
    # Token Helpers
    # =========================================================================

    def _next(self, expected: str) -> Token:
        token = next(self._tokens, None)
        if token is None:
            raise InputFormatError(
                f"unexpected end of input, expected {expected}",
                self._lexer.end_location(),
            )
        return token

    def _expect_count(self, expected: str) -> int:
        """Read a non-negative decimal integer."""
        token = self._next(expected)
        if not token.value.isdigit() or not token.value.isascii():
            raise InputFormatError(
                f"expected {expected}, found '{token.value}'",
                token.location,
                hint="counts and offsets are non-negative decimal integers",
            )
        return int(token.value)

    def _expect_symbol(self, expected: str) -> str:
        return self._next(expected).value


# =============================================================================
# Convenience Functions
# =============================================================================

def read_modules(source: str, filename: str = "<input>") -> list[ModuleSource]:
    """Read module descriptions from a string."""
    return ModuleReader(source, filename).read()


def read_modules_file(path: str | Path) -> list[ModuleSource]:
    """Read module descriptions from a file."""
    path = Path(path)
    return read_modules(path.read_text(), str(path))
