# =============================================================================
# test_report.py - Report Assembly and Formatting Tests
# =============================================================================
# Tests for the Report data and its text rendering.
#
# Test coverage includes:
#   - Fixed section order
#   - Exact text layout of every message kind
#   - Memory map index padding
#   - errors()/warnings() summaries
# =============================================================================

import pytest

from toylink.linker import format_report, link, read_modules


INPUT_1 = """
4
1 xy 2
2 z xy
5 R 1004  I 5678  E 2000  R 8002  E 7001
0
1 z
6 R 8001  E 1000  E 1000  E 3000  R 1002  A 1010
0
1 z
2 R 5001  E 4000
1 z 2
2 xy z
3 A 8000  E 1001  E 2000
"""

# Exercises every diagnostic kind at once
INPUT_ERRORS = """
3
1 X 0
2 Y Z
2 E 1000 A 1500
1 X 5
0
1 R 1002
1 Q 9
0
1 I 1234
"""

EXPECTED_ERRORS = """\
Symbol Table
X=0 Error: This variable is multiply defined; first value used.
Q=3

Memory Map
0:  1000 Error: Y is not defined; zero used.
1:  1000 Error: Absolute address exceeds machine size; zero used.
2:  1000 Error: Relative address exceeds module size; zero used.
3:  1234
Warning: In module 0 Y appeared in the use list but was not actually used.
Warning: In module 0 Z appeared in the use list but was not actually used.

Warning: X was defined in module 0 but never used.
Warning: Q was defined in module 2 but never used.

Error: In module 2 the def of Q exceeds the module size; zero (relative) used.
"""


@pytest.fixture
def error_report():
    return link(read_modules(INPUT_ERRORS))


# =============================================================================
# Text Layout
# =============================================================================

class TestFormatReport:
    """Test the rendered report text."""

    def test_clean_link(self):
        """Reference input renders symbol table and memory map only."""
        text = format_report(link(read_modules(INPUT_1)))
        lines = text.split("\n")
        assert lines[:5] == ["Symbol Table", "xy=2", "z=15", "", "Memory Map"]
        assert lines[5] == "0:  1004"
        assert lines[15] == "10: 1010"
        assert lines[20] == "15: 2002"
        assert text.endswith("15: 2002\n\n\n")

    def test_every_diagnostic(self, error_report):
        """All sections appear in their fixed order."""
        assert format_report(error_report) == EXPECTED_ERRORS

    def test_empty_report(self):
        """Zero modules still prints both headings."""
        assert format_report(link(read_modules("0"))) == "Symbol Table\n\nMemory Map\n\n\n"


# =============================================================================
# Report Data
# =============================================================================

class TestReportData:
    """Test the structured report contents."""

    def test_symbol_listing(self, error_report):
        """Listings carry address, owner and multiply-defined flag."""
        x, q = error_report.symbols
        assert (x.name, x.address, x.module_index, x.multiply_defined) == ("X", 0, 0, True)
        assert (q.name, q.address, q.module_index, q.multiply_defined) == ("Q", 3, 2, False)

    def test_symbol_address(self, error_report):
        """symbol_address() looks up listed symbols."""
        assert error_report.symbol_address("Q") == 3
        assert error_report.symbol_address("missing") is None

    def test_oversized_definitions(self, error_report):
        """Oversized definitions are listed by module."""
        assert [(e.module_index, e.name) for e in error_report.oversized_definitions] == [(2, "Q")]

    def test_errors(self, error_report):
        """errors() lists every error in report order."""
        errors = error_report.errors()
        assert len(errors) == 5
        assert errors[0].startswith("Error: X:")
        assert errors[1] == "Error: 0: Y is not defined; zero used."
        assert errors[-1].startswith("Error: In module 2 the def of Q")
        assert error_report.has_errors()

    def test_warnings(self, error_report):
        """warnings() lists use-list warnings before unused symbols."""
        warnings = error_report.warnings()
        assert len(warnings) == 4
        assert "Y appeared in the use list" in warnings[0]
        assert warnings[3] == "Warning: Q was defined in module 2 but never used."

    def test_modules_included(self, error_report):
        """The report carries the linked modules."""
        assert [m.base_address for m in error_report.modules] == [0, 2, 3]
        assert error_report.modules[0].unused_uses == ("Y", "Z")
