"""
assem2mac - SSBC Assembler Command-Line Interface
=================================================

This module implements the command-line interface for the SSBC assembler.

Usage Examples
--------------
Basic assembly:
    $ assem2mac -i prog.asm -o prog.mac

With hex addresses and noops carrying comments:
    $ assem2mac -i prog.asm -o prog.mac --hex-line-number --add-noops

With a symbol table:
    $ assem2mac -i prog.asm -o prog.mac -s prog.sym

Verbose mode:
    $ assem2mac -v -i prog.asm -o prog.mac
"""

from pathlib import Path
from typing import Optional

import click

from ssbc_sdk import __version__
from ssbc_sdk.assembler import Assembler, AssemblerConfig
from ssbc_sdk.cli.errors import SsbcCommand, handle_cli_exception, setup_logging


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=SsbcCommand)
@click.option(
    "-i", "--input", "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Assembly source file",
)
@click.option(
    "-o", "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Machine-code output file",
)
@click.option(
    "--add-noops",
    is_flag=True,
    help="Emit a noop instruction to carry each comment on a line without code",
)
@click.option(
    "--hex-line-number",
    is_flag=True,
    help="Prefix every binary line with its address (0xNNNN)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="assem2mac")
def main(
    input_file: Path,
    output: Path,
    add_noops: bool,
    hex_line_number: bool,
    symbols: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble SSBC source code into machine-code text.

    The output has one line per memory byte: eight binary digits, then
    the instruction or value it encodes and any comment from the source.

    \b
    Examples:
        assem2mac -i prog.asm -o prog.mac
        assem2mac -i prog.asm -o prog.mac --hex-line-number
    """
    setup_logging(verbose)

    config = AssemblerConfig(
        add_noops_for_comments=add_noops,
        hex_line_numbers=hex_line_number,
    )
    asm = Assembler(config)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)

        # Machine code is written last: a failed symbol write leaves no output
        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        asm.write_output(output)
        if verbose:
            click.echo(f"Wrote {len(asm.get_code())} bytes to {output}")
            click.echo(f"Defined {len(asm.get_symbols())} labels")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
