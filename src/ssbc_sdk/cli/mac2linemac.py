"""
mac2linemac - Machine-Code Address Annotator
============================================

Prefixes every binary line of a pure machine-code file with its address
and its value in hex, which makes the file easy to compare against a
memory dump:

    00000010    ->    0000 02 00000010
    00000101    ->    0001 05 00000101

Lines that are not a single binary byte are copied unchanged.

Usage Examples
--------------
    $ mac2linemac -i prog.bin -o prog.lst
"""

from pathlib import Path

import click

from ssbc_sdk import __version__
from ssbc_sdk.cli.errors import SsbcCommand, handle_cli_exception, setup_logging
from ssbc_sdk.machinecode import annotate_addresses


@click.command(cls=SsbcCommand)
@click.option(
    "-i", "--input", "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Machine-code file",
)
@click.option(
    "-o", "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mac2linemac")
def main(input_file: Path, output: Path, verbose: bool) -> None:
    """Add hex address and byte columns to machine-code text."""
    setup_logging(verbose)
    try:
        text = annotate_addresses(input_file.read_text())
        output.write_text(text)
        if verbose:
            click.echo(f"Wrote {output}")
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
