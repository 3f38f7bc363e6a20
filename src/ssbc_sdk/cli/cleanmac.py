"""
cleanmac - Machine-Code Annotation Stripper
===========================================

Reduces annotated machine code (as written by ``assem2mac``) to pure
binary: the leading binary digits of each line are kept and everything
else is dropped.

Usage Examples
--------------
    $ cleanmac -i prog.mac -o prog.bin
    $ assem2mac -i prog.asm -o /dev/stdout | cleanmac > prog.bin
"""

import click

from ssbc_sdk import __version__
from ssbc_sdk.cli.errors import SsbcCommand, handle_cli_exception, setup_logging
from ssbc_sdk.machinecode import strip_annotations


@click.command(cls=SsbcCommand)
@click.option(
    "-i", "--input", "input_file",
    type=click.File("r"),
    default="-",
    help="Annotated machine-code file (default: stdin)",
)
@click.option(
    "-o", "--output",
    type=click.File("w"),
    default="-",
    help="Output file (default: stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="cleanmac")
def main(input_file, output, verbose: bool) -> None:
    """
    Strip everything but the binary code from machine-code text.

    Lines that do not start with binary digits are removed.
    """
    setup_logging(verbose)
    try:
        output.write(strip_annotations(input_file.read()))
    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
