"""
Two-Pass Linker
===============

This package links independently assembled modules into one memory image.

Main Components
---------------
- **ModuleReader**: Parses the textual module description format
- **Resolver**: Runs pass 1 (base addresses, symbol table) and pass 2
  (relocation, external resolution, memory map)
- **Report**: Ordered symbol table, memory map, warnings and errors
- **format_report**: Renders a Report as text

Linking Process
---------------
1. **Reading (Lexer + ModuleReader)**:
   - Tokenize the input on whitespace
   - Build one ModuleSource per module: definitions, uses, instructions

2. **Pass 1 (run_pass1)**:
   - Place each module directly after the previous one
   - Enter every definition into the global symbol table

3. **Pass 2 (run_pass2)**:
   - Relocate Relative addresses, resolve External references
   - Produce the memory map and collect unused-symbol warnings

Example Usage
-------------
>>> from toylink.linker import read_modules, link, format_report
>>> report = link(read_modules(open("input-1.txt").read()))
>>> print(format_report(report))
"""

from toylink.linker.model import (
    AddressMode,
    Instruction,
    Definition,
    ModuleSource,
    Module,
    Symbol,
    SymbolTable,
    MemoryMapEntry,
)
from toylink.linker.lexer import Lexer, Token
from toylink.linker.reader import ModuleReader, read_modules, read_modules_file
from toylink.linker.resolver import (
    Pass1Result,
    Resolver,
    ResolverState,
    run_pass1,
    run_pass2,
    resolve_instruction,
    link,
    ABSOLUTE_EXCEEDS_MACHINE,
    RELATIVE_EXCEEDS_MODULE,
    EXTERNAL_EXCEEDS_USES,
    undefined_symbol_message,
)
from toylink.linker.report import (
    Report,
    SymbolListing,
    UnusedUseWarning,
    UnusedSymbolWarning,
    OversizedDefinitionError,
    build_report,
    format_report,
)

__all__ = [
    # Data model
    "AddressMode",
    "Instruction",
    "Definition",
    "ModuleSource",
    "Module",
    "Symbol",
    "SymbolTable",
    "MemoryMapEntry",
    # Reading
    "Lexer",
    "Token",
    "ModuleReader",
    "read_modules",
    "read_modules_file",
    # Resolution
    "Pass1Result",
    "Resolver",
    "ResolverState",
    "run_pass1",
    "run_pass2",
    "resolve_instruction",
    "link",
    "ABSOLUTE_EXCEEDS_MACHINE",
    "RELATIVE_EXCEEDS_MODULE",
    "EXTERNAL_EXCEEDS_USES",
    "undefined_symbol_message",
    # Report
    "Report",
    "SymbolListing",
    "UnusedUseWarning",
    "UnusedSymbolWarning",
    "OversizedDefinitionError",
    "build_report",
    "format_report",
]
