"""
Two-Pass Resolver
=================

Links independently assembled modules into a single memory image.

Pass 1 (Base Addresses and Symbol Table)
----------------------------------------
- Module 0 starts at address 0; module k+1 starts where module k ends
- Each definition becomes base + offset in the global symbol table
- A name already in the table is rejected and the existing entry is
  flagged as multiply defined (first value wins)
- An offset past the end of its module is replaced by 0 and recorded
  on the module as an oversized definition

Pass 2 (Relocation and Resolution)
----------------------------------
Every instruction is resolved according to its addressing mode:

| Mode | Resolved address      | Fallback                                |
|------|-----------------------|-----------------------------------------|
| I    | operand               | none                                    |
| A    | operand               | 0 if operand >= machine memory size     |
| R    | operand + base        | 0 if operand > module length            |
| E    | address of uses[op]   | operand if op >= len(uses);             |
|      |                       | 0 if uses[op] is not defined            |

Each fallback attaches exactly one diagnostic to the memory map entry.
Nothing in either pass raises for bad data: diagnostics are collected and
surfaced in the Report.

Usage
-----
>>> from toylink.linker import read_modules, link
>>> report = link(read_modules("1  1 X 0  1 X  2 E 1000 R 2001"))
>>> report.values()
[1000, 2001]
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence
import logging

from toylink.config import DEFAULT_MACHINE_MEMORY_SIZE, LinkerConfig
from toylink.errors import LinkerStateError
from toylink.linker.model import (
    AddressMode,
    Instruction,
    MemoryMapEntry,
    Module,
    ModuleSource,
    Symbol,
    SymbolTable,
)
from toylink.linker.report import Report, build_report

logger = logging.getLogger(__name__)


# =============================================================================
# Diagnostics
# =============================================================================

ABSOLUTE_EXCEEDS_MACHINE = "Absolute address exceeds machine size; zero used"
RELATIVE_EXCEEDS_MODULE = "Relative address exceeds module size; zero used"
EXTERNAL_EXCEEDS_USES = "External address exceeds length of use list; treated as immediate"


def undefined_symbol_message(name: str) -> str:
    return f"{name} is not defined; zero used"


# =============================================================================
# Pass 1
# =============================================================================

@dataclass(frozen=True)
class Pass1Result:
    """
    Output of pass 1 and input of pass 2.

    Attributes:
        modules: Modules with base addresses and oversized definitions
        symbol_table: Every admitted symbol with its absolute address
    """
    modules: tuple[Module, ...]
    symbol_table: SymbolTable


def run_pass1(sources: Sequence[ModuleSource]) -> Pass1Result:
    """
    Assign base addresses and build the symbol table.

    Args:
        sources: Module descriptions in input order

    Returns:
        Pass1Result holding the placed modules and the symbol table
    """
    table = SymbolTable()
    modules = []
    base_address = 0

    for index, source in enumerate(sources):
        oversized = []

        for definition in source.definitions:
            # Boundary is inclusive: an offset equal to the length is accepted
            too_large = definition.offset > source.length
            address = base_address if too_large else base_address + definition.offset

            admitted = table.admit(Symbol(definition.name, address, index))
            if not admitted:
                logger.info(f"Symbol '{definition.name}' multiply defined in module {index}; first value kept")
                continue

            if too_large:
                oversized.append(definition.name)
                logger.info(
                    f"Definition of '{definition.name}' at offset {definition.offset} "
                    f"exceeds module {index} size {source.length}; zero used"
                )
            logger.debug(f"Defined '{definition.name}' = {address}")

        modules.append(Module(index, base_address, source, tuple(oversized)))
        logger.debug(f"Module {index} placed at {base_address}, length {source.length}")
        base_address += source.length

    return Pass1Result(tuple(modules), table)


# =============================================================================
# Pass 2
# =============================================================================

def resolve_instruction(
    instruction: Instruction,
    module: Module,
    symbol_table: SymbolTable,
    machine_memory_size: int = DEFAULT_MACHINE_MEMORY_SIZE,
) -> tuple[int, Optional[str]]:
    """
    Compute the resolved address of one instruction.

    Marks the referenced symbol as used when an External instruction
    resolves successfully.

    Returns:
        (resolved_address, diagnostic) where diagnostic is None on success
    """
    operand = instruction.operand
    mode = instruction.mode

    if mode == AddressMode.IMMEDIATE:
        return operand, None

    if mode == AddressMode.ABSOLUTE:
        if operand >= machine_memory_size:
            return 0, ABSOLUTE_EXCEEDS_MACHINE
        return operand, None

    if mode == AddressMode.RELATIVE:
        if operand > module.length:
            return 0, RELATIVE_EXCEEDS_MODULE
        return module.base_address + operand, None

    # External: the operand indexes the use list. An index past the end
    # is passed through unchanged and no lookup happens.
    if operand >= len(module.uses):
        return operand, EXTERNAL_EXCEEDS_USES

    name = module.uses[operand]
    if name not in symbol_table:
        return 0, undefined_symbol_message(name)
    return symbol_table.mark_used(name).address, None


def run_pass2(
    pass1: Pass1Result,
    machine_memory_size: int = DEFAULT_MACHINE_MEMORY_SIZE,
) -> Report:
    """
    Resolve every instruction and assemble the report.

    The pass 1 result is left untouched: usage flags are recorded on a
    copy of the symbol table, and modules are re-created with their
    unused use-list entries.

    Args:
        pass1: Output of run_pass1()
        machine_memory_size: Bound for Absolute addresses

    Returns:
        The complete Report
    """
    table = pass1.symbol_table.copy()
    memory_map: list[MemoryMapEntry] = []
    modules = []

    for module in pass1.modules:
        resolved_names = set()

        for instruction in module.instructions:
            address, diagnostic = resolve_instruction(
                instruction, module, table, machine_memory_size
            )
            if instruction.mode == AddressMode.EXTERNAL and diagnostic is None:
                resolved_names.add(module.uses[instruction.operand])

            entry = MemoryMapEntry(
                index=len(memory_map),
                module_index=module.index,
                instruction=instruction,
                resolved_address=address,
                diagnostic=diagnostic,
            )
            if diagnostic is not None:
                logger.info(f"Address {entry.index} ({instruction}): {diagnostic}")
            memory_map.append(entry)

        # Unique names, kept in use-list order
        unused = tuple(dict.fromkeys(
            name for name in module.uses if name not in resolved_names
        ))
        for name in unused:
            logger.info(f"Module {module.index}: '{name}' in use list but not used")
        modules.append(module.with_unused_uses(unused))

    logger.debug(f"Pass 2 complete: {len(memory_map)} word(s) resolved")
    return build_report(modules, table, memory_map)


# =============================================================================
# Resolver
# =============================================================================

class ResolverState(Enum):
    """Progress of a single-shot Resolver."""
    NEW = auto()
    PASS1_COMPLETE = auto()
    PASS2_COMPLETE = auto()


class Resolver:
    """
    Runs the two linker passes in strict order.

    A Resolver links exactly once. Pass 1 must complete before pass 2,
    and neither pass may run again on the same instance.

    Usage:
        resolver = Resolver(LinkerConfig(machine_memory_size=300))
        resolver.pass1(sources)
        report = resolver.pass2()

    Attributes:
        config: Machine parameters used by pass 2
    """

    def __init__(self, config: Optional[LinkerConfig] = None):
        self.config = config or LinkerConfig()
        self._state = ResolverState.NEW
        self._pass1: Optional[Pass1Result] = None
        self._report: Optional[Report] = None

    @property
    def state(self) -> ResolverState:
        return self._state

    @property
    def pass1_result(self) -> Optional[Pass1Result]:
        return self._pass1

    @property
    def report(self) -> Optional[Report]:
        return self._report

    def pass1(self, sources: Sequence[ModuleSource]) -> Pass1Result:
        """
        Run pass 1.

        Raises:
            LinkerStateError: If pass 1 already ran on this resolver
        """
        if self._state != ResolverState.NEW:
            raise LinkerStateError("pass 1 has already run on this resolver")

        logger.debug(f"Pass 1 over {len(sources)} module(s)")
        self._pass1 = run_pass1(sources)
        self._state = ResolverState.PASS1_COMPLETE
        return self._pass1

    def pass2(self) -> Report:
        """
        Run pass 2 over the pass 1 result.

        Raises:
            LinkerStateError: If pass 1 has not completed or pass 2 already ran
        """
        if self._state == ResolverState.NEW:
            raise LinkerStateError("pass 2 requires a completed pass 1")
        if self._state == ResolverState.PASS2_COMPLETE:
            raise LinkerStateError("pass 2 has already run on this resolver")

        self._report = run_pass2(self._pass1, self.config.machine_memory_size)
        self._state = ResolverState.PASS2_COMPLETE
        return self._report

    def link(self, sources: Sequence[ModuleSource]) -> Report:
        """Run both passes."""
        self.pass1(sources)
        return self.pass2()


def link(
    sources: Sequence[ModuleSource],
    config: Optional[LinkerConfig] = None,
) -> Report:
    """Link module descriptions with a fresh Resolver."""
    return Resolver(config).link(sources)
