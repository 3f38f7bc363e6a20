"""
SSBC Assembler - Main Interface
===============================

This module provides the main Assembler class, the primary interface for
turning SSBC assembly source into machine-code text. It coordinates the
code generator (both passes) and the emitter.

Example Usage
-------------
>>> from ssbc_sdk.assembler import Assembler, AssemblerConfig
>>>
>>> asm = Assembler(AssemblerConfig(hex_line_numbers=True))
>>> asm.assemble_string('''
... #start
...     pushext @data   // load the value stored at data
...     halt
... #data
...     0x2A
... ''')
>>> print(asm.get_output())
>>> asm.write_output("prog.mac")

Command-Line Usage
------------------
    $ assem2mac -i prog.asm -o prog.mac --hex-line-number

Options:
    -i, --input FILE       Assembly source file (required)
    -o, --output FILE      Machine-code output file (required)
    --add-noops            Emit a noop to carry comment-only lines
    --hex-line-number      Prefix binary lines with their hex address
    -s, --symbols FILE     Write the symbol table
    -v, --verbose          Verbose output
"""

import logging
from pathlib import Path
from typing import Optional

from ssbc_sdk.assembler.codegen import CodeGenerator, MachineCodeEntry
from ssbc_sdk.assembler.config import AssemblerConfig
from ssbc_sdk.assembler.emitter import format_entries, format_symbols, write_text
from ssbc_sdk.errors import AssemblerError


logger = logging.getLogger(__name__)


class Assembler:
    """
    Main SSBC assembler class.

    An assembly run is all-or-nothing: output is only available after the
    whole source has been processed and every address reference resolved.

    Attributes:
        config: Options for this assembler (immutable)
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self._codegen = CodeGenerator(self.config)
        self._entries: Optional[list[MachineCodeEntry]] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[MachineCodeEntry]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The output entries, in order

        Raises:
            AssemblerError: If assembly fails
        """
        self._entries = None
        logger.debug(f"Assembling {filename}")
        entries = self._codegen.generate(source, filename)
        self._entries = entries
        return entries

    def assemble_file(self, filepath: str | Path) -> list[MachineCodeEntry]:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            OSError: If the source file cannot be read
        """
        filepath = Path(filepath)
        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _require_result(self) -> list[MachineCodeEntry]:
        if self._entries is None:
            raise AssemblerError("no successful assembly to output")
        return self._entries

    def get_entries(self) -> list[MachineCodeEntry]:
        return list(self._require_result())

    def get_code(self) -> list[str]:
        """
        Get the machine code as one binary string per byte.

        Returns:
            Binary strings in address order (no annotations)
        """
        self._require_result()
        return self._codegen.get_code()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping label names to machine lines
        """
        self._require_result()
        return self._codegen.get_symbols()

    def get_output(self) -> str:
        """Get the annotated machine-code text."""
        return format_entries(self._require_result(), self.config)

    def write_output(self, filepath: str | Path) -> None:
        """Write the annotated machine-code text to a file."""
        text = self.get_output()
        write_text(filepath, text)
        logger.debug(f"Wrote {len(self.get_code())} bytes of machine code to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table file."""
        write_text(filepath, format_symbols(self.get_symbols()))
        logger.debug(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, config: Optional[AssemblerConfig] = None,
             filename: str = "<input>") -> str:
    """
    Convenience function to assemble source code.

    Returns:
        Annotated machine-code text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(config)
    asm.assemble_string(source, filename)
    return asm.get_output()


def assemble_file(filepath: str | Path, config: Optional[AssemblerConfig] = None) -> str:
    """
    Convenience function to assemble a file.

    Returns:
        Annotated machine-code text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(config)
    asm.assemble_file(filepath)
    return asm.get_output()
