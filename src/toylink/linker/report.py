"""
Link Report
===========

The Report is the complete, ordered result of a link run: the symbol
table, the memory map, and every warning and error collected on the way.
It is plain data; format_report() renders it in the classic two-pass
linker layout:

```
Symbol Table
xy=2
z=15 Error: This variable is multiply defined; first value used.

Memory Map
0:  1004
1:  5678
2:  2015
3:  8000 Error: Relative address exceeds module size; zero used.
Warning: In module 1 xy appeared in the use list but was not actually used.

Warning: xy was defined in module 0 but never used.

Error: In module 2 the def of q exceeds the module size; zero (relative) used.
```

Section order is fixed: symbol table, memory map, unused use-list
entries (module order), unused symbols (symbol-table order), oversized
definitions (module order).
"""

from dataclasses import dataclass
from typing import Optional

from toylink.linker.model import MemoryMapEntry, Module, SymbolTable


MULTIPLY_DEFINED_MESSAGE = "This variable is multiply defined; first value used."


# =============================================================================
# Report Records
# =============================================================================

@dataclass(frozen=True)
class SymbolListing:
    """One line of the symbol table section."""
    name: str
    address: int
    module_index: int
    multiply_defined: bool = False


@dataclass(frozen=True)
class UnusedUseWarning:
    """A use-list entry that no External instruction in its module resolved."""
    module_index: int
    name: str

    def __str__(self) -> str:
        return (
            f"Warning: In module {self.module_index} {self.name} "
            f"appeared in the use list but was not actually used."
        )


@dataclass(frozen=True)
class UnusedSymbolWarning:
    """A defined symbol that no module ever referenced."""
    name: str
    module_index: int

    def __str__(self) -> str:
        return (
            f"Warning: {self.name} was defined in module "
            f"{self.module_index} but never used."
        )


@dataclass(frozen=True)
class OversizedDefinitionError:
    """A definition whose offset exceeded its module and was treated as 0."""
    module_index: int
    name: str

    def __str__(self) -> str:
        return (
            f"Error: In module {self.module_index} the def of {self.name} "
            f"exceeds the module size; zero (relative) used."
        )


# =============================================================================
# Report
# =============================================================================

@dataclass(frozen=True)
class Report:
    """
    Ordered result of pass 2.

    Attributes:
        symbols: Symbol table in discovery order
        memory_map: One entry per instruction, in global address order
        unused_uses: Use-list warnings, modules in input order
        unused_symbols: Never-used symbol warnings, symbol-table order
        oversized_definitions: Oversized definition errors, module order
        modules: The linked modules with their diagnostic lists
    """
    symbols: tuple[SymbolListing, ...]
    memory_map: tuple[MemoryMapEntry, ...]
    unused_uses: tuple[UnusedUseWarning, ...]
    unused_symbols: tuple[UnusedSymbolWarning, ...]
    oversized_definitions: tuple[OversizedDefinitionError, ...]
    modules: tuple[Module, ...] = ()

    def symbol_address(self, name: str) -> Optional[int]:
        for listing in self.symbols:
            if listing.name == name:
                return listing.address
        return None

    def values(self) -> list[int]:
        """The linked memory image as plain integers."""
        return [entry.value for entry in self.memory_map]

    def errors(self) -> list[str]:
        """All error messages, in report order."""
        messages = [
            f"Error: {listing.name}: {MULTIPLY_DEFINED_MESSAGE}"
            for listing in self.symbols
            if listing.multiply_defined
        ]
        messages.extend(
            f"Error: {entry.index}: {entry.diagnostic}."
            for entry in self.memory_map
            if entry.has_error
        )
        messages.extend(str(error) for error in self.oversized_definitions)
        return messages

    def warnings(self) -> list[str]:
        """All warning messages, in report order."""
        return [str(w) for w in self.unused_uses] + [str(w) for w in self.unused_symbols]

    def has_errors(self) -> bool:
        return bool(self.errors())


def build_report(
    modules: list[Module],
    symbol_table: SymbolTable,
    memory_map: list[MemoryMapEntry],
) -> Report:
    """Assemble the report sections in their fixed order."""
    symbols = tuple(
        SymbolListing(s.name, s.address, s.module_index, s.multiply_defined)
        for s in symbol_table
    )
    unused_uses = tuple(
        UnusedUseWarning(module.index, name)
        for module in modules
        for name in module.unused_uses
    )
    unused_symbols = tuple(
        UnusedSymbolWarning(s.name, s.module_index)
        for s in symbol_table
        if not s.used
    )
    oversized = tuple(
        OversizedDefinitionError(module.index, name)
        for module in modules
        for name in module.oversized_definitions
    )
    return Report(
        symbols=symbols,
        memory_map=tuple(memory_map),
        unused_uses=unused_uses,
        unused_symbols=unused_symbols,
        oversized_definitions=oversized,
        modules=tuple(modules),
    )


# =============================================================================
# Text Output
# =============================================================================

def format_report(report: Report) -> str:
    """Render the report as text, one trailing newline included."""
    lines = ["Symbol Table"]
    for listing in report.symbols:
        line = f"{listing.name}={listing.address}"
        if listing.multiply_defined:
            line += f" Error: {MULTIPLY_DEFINED_MESSAGE}"
        lines.append(line)

    lines.append("")
    lines.append("Memory Map")
    for entry in report.memory_map:
        line = f"{str(entry.index) + ':':<3} {entry.value}"
        if entry.diagnostic is not None:
            line += f" Error: {entry.diagnostic}."
        lines.append(line)

    lines.extend(str(warning) for warning in report.unused_uses)
    lines.append("")
    lines.extend(str(warning) for warning in report.unused_symbols)
    lines.append("")
    lines.extend(str(error) for error in report.oversized_definitions)

    return "\n".join(lines) + "\n"
