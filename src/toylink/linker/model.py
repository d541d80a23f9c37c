"""
Linker Data Model
=================

Value types shared by the reader, the two resolver passes and the report.

Instruction Words
-----------------
Every instruction is a 4-digit decimal word tagged with an addressing
mode. The leading digit is the opcode and the remaining three digits are
the operand:

```
  mode  word    opcode  operand
  ----  ----    ------  -------
  R     8001    8       001
  E     1000    1       000
```

| Letter | Mode      | Operand meaning                         |
|--------|-----------|-----------------------------------------|
| I      | Immediate | literal value, never relocated          |
| A      | Absolute  | address in the whole machine            |
| R      | Relative  | offset from the module's base address   |
| E      | External  | index into the module's use list        |

Ownership
---------
ModuleSource, Definition and Instruction are frozen: they describe the
input and are never rewritten. Module adds the base address computed in
pass 1 and the diagnostic lists. Symbol is the only mutable record; its
flags are flipped in place while it lives in a SymbolTable.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Optional


# =============================================================================
# Addressing Modes
# =============================================================================

class AddressMode(Enum):
    """Addressing mode of an instruction word, keyed by its input letter."""

    IMMEDIATE = "I"
    ABSOLUTE = "A"
    RELATIVE = "R"
    EXTERNAL = "E"

    @classmethod
    def from_letter(cls, letter: str) -> "AddressMode":
        """
        Look up a mode by its single-letter tag.

        Raises:
            ValueError: If the letter is not one of I, A, R, E
        """
        return cls(letter)

    @property
    def letter(self) -> str:
        return self.value


# =============================================================================
# Input Records
# =============================================================================

OPCODE_MAX = 9
OPERAND_MAX = 999


@dataclass(frozen=True)
class Instruction:
    """
    One relocatable instruction word.

    Attributes:
        mode: How the operand is interpreted during pass 2
        opcode: Leading digit of the word (0-9)
        operand: Trailing three digits of the word (0-999)
    """
    mode: AddressMode
    opcode: int
    operand: int

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= OPCODE_MAX:
            raise ValueError(f"opcode {self.opcode} out of range 0-{OPCODE_MAX}")
        if not 0 <= self.operand <= OPERAND_MAX:
            raise ValueError(f"operand {self.operand} out of range 0-{OPERAND_MAX}")

    @classmethod
    def from_word(cls, mode: AddressMode, word: int) -> "Instruction":
        """Split a 4-digit word into opcode and operand."""
        return cls(mode, word // 1000, word % 1000)

    @property
    def word(self) -> int:
        """The instruction as it appeared in the input."""
        return self.opcode * 1000 + self.operand

    def __str__(self) -> str:
        return f"{self.mode.letter} {self.word:04d}"


@dataclass(frozen=True)
class Definition:
    """A symbol declared by a module at a module-relative offset."""
    name: str
    offset: int


@dataclass(frozen=True)
class ModuleSource:
    """
    One module exactly as the reader produced it.

    Attributes:
        definitions: Symbols the module declares, in input order
        uses: External symbol names, indexed by E-mode operands
        instructions: The module's program text
    """
    definitions: tuple[Definition, ...] = ()
    uses: tuple[str, ...] = ()
    instructions: tuple[Instruction, ...] = ()

    @property
    def length(self) -> int:
        """Module length is its instruction count."""
        return len(self.instructions)


# =============================================================================
# Linked Module
# =============================================================================

@dataclass(frozen=True)
class Module:
    """
    A module placed in the combined address space.

    Attributes:
        index: Position of the module in the input (0-based)
        base_address: Sum of the lengths of all earlier modules
        source: The parsed module description
        oversized_definitions: Names whose offset exceeded the module
            length and were clamped to the base address (pass 1)
        unused_uses: Use-list names never resolved by an External
            instruction in this module (pass 2)
    """
    index: int
    base_address: int
    source: ModuleSource
    oversized_definitions: tuple[str, ...] = ()
    unused_uses: tuple[str, ...] = ()

    @property
    def length(self) -> int:
        return self.source.length

    @property
    def definitions(self) -> tuple[Definition, ...]:
        return self.source.definitions

    @property
    def uses(self) -> tuple[str, ...]:
        return self.source.uses

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self.source.instructions

    @property
    def end_address(self) -> int:
        """First address after this module (the next module's base)."""
        return self.base_address + self.length

    def with_unused_uses(self, names: tuple[str, ...]) -> "Module":
        return replace(self, unused_uses=names)


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        address: Absolute address of the definition
        module_index: Index of the module that defined it first
        multiply_defined: True once a later definition was rejected
        used: True once an External instruction resolved to it
    """
    name: str
    address: int
    module_index: int
    multiply_defined: bool = False
    used: bool = False


class SymbolTable:
    """
    Global symbol table built by pass 1 and consulted by pass 2.

    The table is append-only: the first definition of a name wins and
    later definitions only flag the existing entry. Iteration follows
    insertion order, which is the order pass 1 discovered the symbols.
    """

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}

    def admit(self, symbol: Symbol) -> bool:
        """
        Add a symbol unless its name is already defined.

        When the name exists, the existing entry is marked multiply
        defined and keeps its address.

        Returns:
            True if the symbol was added, False if it was rejected
        """
        existing = self._symbols.get(symbol.name)
        if existing is not None:
            existing.multiply_defined = True
            return False
        self._symbols[symbol.name] = symbol
        return True

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def mark_used(self, name: str) -> Symbol:
        symbol = self._symbols[name]
        symbol.used = True
        return symbol

    def copy(self) -> "SymbolTable":
        """Deep copy, so pass 2 can flag usage without touching pass 1 output."""
        table = SymbolTable()
        for symbol in self._symbols.values():
            table._symbols[symbol.name] = replace(symbol)
        return table

    def names(self) -> list[str]:
        return list(self._symbols)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> Symbol:
        return self._symbols[name]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        entries = ", ".join(f"{s.name}={s.address}" for s in self)
        return f"SymbolTable({entries})"


# =============================================================================
# Memory Map
# =============================================================================

@dataclass(frozen=True)
class MemoryMapEntry:
    """
    One resolved word of the linked memory image.

    The source instruction is kept untouched; the resolved address is a
    separate field.

    Attributes:
        index: Global address of the word (0-based, contiguous)
        module_index: Module the instruction came from
        instruction: The instruction as read
        resolved_address: Address after relocation or resolution
        diagnostic: Error text when a fallback value was used
    """
    index: int
    module_index: int
    instruction: Instruction
    resolved_address: int
    diagnostic: Optional[str] = None

    @property
    def value(self) -> int:
        return self.instruction.opcode * 1000 + self.resolved_address

    @property
    def has_error(self) -> bool:
        return self.diagnostic is not None
