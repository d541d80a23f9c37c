"""
toylink - Two-Pass Linker Command-Line Interface
=================================================

Reads a module description file, links the modules, and prints the
symbol table, memory map, warnings and errors.

Usage Examples
--------------
Link a file and print the report:
    $ toylink input-1.txt

Write the report to a file:
    $ toylink input-1.txt -o input-1.out

Target a larger machine:
    $ toylink --machine-size 300 input-1.txt

Fail the build when the report contains errors:
    $ toylink --strict input-1.txt

The machine size may also be set with the TOYLINK_MACHINE_SIZE
environment variable; --machine-size takes precedence.

Exit Codes
----------
0 - Success (the report may still contain errors unless --strict)
1 - Fatal input error, or report errors with --strict
2 - Invalid arguments or unreadable input file
3 - Internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from toylink import __version__
from toylink.cli.errors import ExitCode, handle_cli_exception
from toylink.config import LinkerConfig
from toylink.linker import Resolver, format_report, read_modules_file

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to a file (default: stdout)",
)
@click.option(
    "-m", "--machine-size",
    type=click.IntRange(min=1),
    default=None,
    help="Machine memory size in words (default: 200, or TOYLINK_MACHINE_SIZE)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if the report contains errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="toylink")
def main(
    input_file: Path,
    output: Optional[Path],
    machine_size: Optional[int],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Link the modules described in INPUT_FILE.

    INPUT_FILE starts with a module count; each module then lists its
    definitions, its use list, and its program text.

    \b
    Examples:
        toylink input-1.txt                  # Print report to stdout
        toylink input-1.txt -o input-1.out   # Write report to file
        toylink -m 300 input-1.txt           # 300-word machine
    """
    setup_logging(verbose)

    config = LinkerConfig.from_env()
    if machine_size is not None:
        config.machine_memory_size = machine_size

    try:
        logger.debug(f"Linking {input_file} (machine size {config.machine_memory_size})")
        sources = read_modules_file(input_file)
        report = Resolver(config).link(sources)
        text = format_report(report)

        if output:
            output.write_text(text)
            logger.debug(f"Wrote report to {output}")
        else:
            click.echo(text, nl=False)

        if verbose:
            click.echo(
                f"Linked {len(report.modules)} module(s), {len(report.memory_map)} word(s): "
                f"{len(report.errors())} error(s), {len(report.warnings())} warning(s)",
                err=True,
            )

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Link")

    if strict and report.has_errors():
        sys.exit(ExitCode.LINK_ERROR)


if __name__ == "__main__":
    main()
