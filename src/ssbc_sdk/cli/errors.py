"""
Unified CLI Error Handling
==========================

Provides consistent error handling, exit codes and logging setup across
all CLI tools.
"""

import logging
import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    FAILURE = 1          # Usage, I/O, or assembly error
    INTERNAL_ERROR = 3   # Unexpected internal error


class SsbcCommand(click.Command):
    """
    Click command that reports usage errors with exit status 1.

    Click's own convention is status 2 for usage errors; the SSBC tools
    use 1 for every failure.
    """

    def main(self, *args, **kwargs):
        kwargs["standalone_mode"] = False
        try:
            return super().main(*args, **kwargs)
        except click.ClickException as e:
            e.show()
            sys.exit(ExitCode.FAILURE)
        except click.Abort:
            click.echo("Aborted!", err=True)
            sys.exit(ExitCode.FAILURE)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Unified exception handler for all CLI tools.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Assembly")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from ssbc_sdk.errors import AssemblerError, SsbcError

    if isinstance(error, AssemblerError):
        # Already formatted as "file:line:col: error: ..." with source context
        click.echo(str(error), err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, SsbcError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, click.ClickException):
        click.echo(f"Error: {error.format_message()}", err=True)
        sys.exit(ExitCode.FAILURE)

    elif isinstance(error, OSError):
        # Unreadable input, unwritable output
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.FAILURE)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
