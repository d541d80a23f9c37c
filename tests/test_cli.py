# =============================================================================
# test_cli.py - Command-Line Interface Tests
# =============================================================================
# Tests for the toylink command.
#
# Test coverage includes:
#   - Report printed to stdout or written to a file
#   - --machine-size and TOYLINK_MACHINE_SIZE
#   - --strict exit status
#   - Exit codes for fatal input errors and missing files
# =============================================================================

import pytest
from click.testing import CliRunner

from toylink.cli.toylink import main


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


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def input_1(tmp_path):
    path = tmp_path / "input-1.txt"
    path.write_text(INPUT_1)
    return path


@pytest.fixture
def absolute_250(tmp_path):
    path = tmp_path / "abs.txt"
    path.write_text("1 0 0 1 A 1250")
    return path


class TestToylinkCLI:
    """Tests for the toylink CLI tool."""

    def test_cli_help(self, runner):
        """Help text describes the command."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Link the modules" in result.output

    def test_cli_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "toylink" in result.output

    def test_cli_prints_report(self, runner, input_1):
        """The report goes to stdout."""
        result = runner.invoke(main, [str(input_1)])
        assert result.exit_code == 0
        assert result.output.startswith("Symbol Table\nxy=2\nz=15\n\nMemory Map\n0:  1004\n")
        assert "15: 2002" in result.output

    def test_cli_output_file(self, runner, input_1, tmp_path):
        """-o writes the report to a file."""
        out = tmp_path / "input-1.out"
        result = runner.invoke(main, [str(input_1), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text().startswith("Symbol Table\n")
        assert "Memory Map" not in result.output

    def test_cli_machine_size(self, runner, absolute_250):
        """--machine-size widens the absolute address range."""
        result = runner.invoke(main, [str(absolute_250)])
        assert "Absolute address exceeds machine size" in result.output

        result = runner.invoke(main, [str(absolute_250), "--machine-size", "300"])
        assert result.exit_code == 0
        assert "0:  1250" in result.output

    def test_cli_machine_size_from_env(self, runner, absolute_250, monkeypatch):
        """TOYLINK_MACHINE_SIZE is used when no option is given."""
        monkeypatch.setenv("TOYLINK_MACHINE_SIZE", "300")
        result = runner.invoke(main, [str(absolute_250)])
        assert "0:  1250" in result.output

    def test_cli_machine_size_option_wins(self, runner, absolute_250, monkeypatch):
        """--machine-size overrides the environment."""
        monkeypatch.setenv("TOYLINK_MACHINE_SIZE", "300")
        result = runner.invoke(main, [str(absolute_250), "-m", "100"])
        assert "Absolute address exceeds machine size" in result.output

    def test_cli_invalid_machine_size(self, runner, input_1):
        """Machine size must be positive."""
        result = runner.invoke(main, [str(input_1), "--machine-size", "0"])
        assert result.exit_code == 2

    def test_cli_errors_not_fatal(self, runner, absolute_250):
        """Link errors are reported without failing by default."""
        result = runner.invoke(main, [str(absolute_250)])
        assert result.exit_code == 0

    def test_cli_strict(self, runner, absolute_250):
        """--strict fails when the report has errors, after printing it."""
        result = runner.invoke(main, [str(absolute_250), "--strict"])
        assert result.exit_code == 1
        assert "Memory Map" in result.output

    def test_cli_strict_clean(self, runner, input_1):
        """--strict succeeds on a clean link."""
        result = runner.invoke(main, [str(input_1), "--strict"])
        assert result.exit_code == 0

    def test_cli_malformed_input(self, runner, tmp_path):
        """Fatal input errors exit with status 1 and a located message."""
        path = tmp_path / "bad.txt"
        path.write_text("1 0 0 1 X 1000")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 1
        assert "error: invalid addressing mode 'X'" in result.output

    def test_cli_missing_file(self, runner, tmp_path):
        """A missing input file is an argument error."""
        result = runner.invoke(main, [str(tmp_path / "missing.txt")])
        assert result.exit_code == 2

    def test_cli_verbose_summary(self, runner, input_1):
        """-v prints a link summary."""
        result = runner.invoke(main, [str(input_1), "-v"])
        assert result.exit_code == 0
        assert "Linked 4 module(s), 16 word(s)" in result.output
