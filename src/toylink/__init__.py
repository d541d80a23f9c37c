"""
toylink - Two-Pass Linker for a Toy Decimal Machine
===================================================

This package simulates the linking phase of a small assembler/loader
toolchain. Given several independently assembled modules, each with
symbol definitions, a use list and relocatable instruction words, it
computes absolute addresses, resolves references between modules, and
produces a combined memory map with a diagnostic report.

The target machine has 200 words of memory (configurable) and 4-digit
decimal instructions: one opcode digit followed by a 3-digit address.

Main Components
---------------
- **linker**: Reader, two-pass Resolver and Report
- **config**: LinkerConfig (machine memory size)
- **cli**: The `toylink` command

Quick Start
-----------
Link a file:
    >>> from toylink import read_modules_file, link, format_report
    >>> report = link(read_modules_file("input-1.txt"))
    >>> print(format_report(report), end="")

Or use the command-line tool:
    $ toylink input-1.txt
    $ toylink --machine-size 300 input-1.txt -o input-1.out

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from toylink.config import LinkerConfig, DEFAULT_MACHINE_MEMORY_SIZE
from toylink.errors import (
    LinkerError,
    InputFormatError,
    LinkerStateError,
    SourceLocation,
)
from toylink.linker import (
    AddressMode,
    Instruction,
    Definition,
    ModuleSource,
    Module,
    Symbol,
    SymbolTable,
    MemoryMapEntry,
    ModuleReader,
    read_modules,
    read_modules_file,
    Resolver,
    ResolverState,
    run_pass1,
    run_pass2,
    link,
    Report,
    format_report,
)

__all__ = [
    "__version__",
    # Configuration
    "LinkerConfig",
    "DEFAULT_MACHINE_MEMORY_SIZE",
    # Exception hierarchy
    "LinkerError",
    "InputFormatError",
    "LinkerStateError",
    "SourceLocation",
    # Data model
    "AddressMode",
    "Instruction",
    "Definition",
    "ModuleSource",
    "Module",
    "Symbol",
    "SymbolTable",
    "MemoryMapEntry",
    # Linking
    "ModuleReader",
    "read_modules",
    "read_modules_file",
    "Resolver",
    "ResolverState",
    "run_pass1",
    "run_pass2",
    "link",
    "Report",
    "format_report",
]
