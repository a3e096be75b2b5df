"""
sham - Shack Translator Command-Line Interface
==============================================

This module implements the command-line interface for the Shack to
Hack translator.

Usage Examples
--------------
Basic translation (writes program.asm next to the source):
    $ sham program.shk

With output file:
    $ sham program.shk -o build/program.asm

Print to standard output and write the symbol table:
    $ sham program.shk --stdout -s program.sym

Verbose mode:
    $ sham -v program.shk

Diagnostics go to standard error. The translated lines are written even
when errors were found, and the exit status is then 1.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click

from shack import __version__
from shack.config import TranslatorConfig
from shack.translator import Translator
from shack.cli.errors import ExitCode, handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output Hack file (default: input.asm)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the symbol table (variables, then labels)",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the translated lines instead of writing a file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sham")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    to_stdout: bool,
    verbose: bool,
) -> None:
    """
    Translate Shack assembly into Hack assembly.

    INPUT_FILE is the Shack source file (.shk) to translate.

    \b
    Examples:
        sham loop.shk                # Outputs loop.asm
        sham loop.shk -o out.asm     # Specify output file
        sham loop.shk --stdout       # Print to the terminal
    """
    setup_logging(verbose)
    config = TranslatorConfig.from_env()

    if input_file.suffix != config.source_suffix:
        click.echo(f"Usage: sham file{config.source_suffix}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    output_file = output if output is not None else input_file.with_suffix(config.output_suffix)
    translator = Translator(config=config, verbose=verbose)

    try:
        try:
            result = translator.translate_file(input_file)
        except OSError:
            click.echo(f"Unable to read {input_file}", err=True)
            sys.exit(ExitCode.INVALID_ARGS)

        if to_stdout:
            click.echo(result.get_text(), nl=False)
        else:
            output_file.write_text(result.get_text())
            if verbose:
                click.echo(f"Wrote {len(result.output)} lines to {output_file}")

        if symbols:
            symbols.write_text(result.symbols.format_listing())
            if verbose and not to_stdout:
                click.echo(f"Wrote symbols to {symbols}")

        for diagnostic in result.diagnostics:
            click.echo(str(diagnostic), err=True)

        if result.has_errors:
            sys.exit(ExitCode.BUILD_ERROR)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Translation")


if __name__ == "__main__":
    main()
