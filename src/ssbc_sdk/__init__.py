"""
SSBC SDK - Toolchain for the Simple Stack-Based Computer
========================================================

This package provides tools for writing programs for the SSBC, a small
8-bit stack machine with a 16-bit address space. Programs are loaded as
machine-code text: one line of eight '0'/'1' characters per memory byte.

Main Components
---------------
- **assembler**: SSBC assembler (assem2mac)
    Converts assembly source files (.asm) to annotated machine code (.mac)

- **machinecode**: Machine-code text filters (cleanmac, mac2linemac)
    Strip annotations from machine code, or add address/hex columns

Quick Start
-----------
Assemble a program:
    >>> from ssbc_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("prog.asm")
    >>> asm.write_output("prog.mac")

Strip the annotations for loading:
    >>> from ssbc_sdk.machinecode import strip_annotations
    >>> binary = strip_annotations(open("prog.mac").read())

Or use the command-line tools:
    $ assem2mac -i prog.asm -o prog.mac
    $ cleanmac -i prog.mac -o prog.bin
    $ mac2linemac -i prog.bin -o prog.lst
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ssbc_sdk.assembler import Assembler, AssemblerConfig, assemble
from ssbc_sdk.errors import (
    SsbcError,
    SourceLocation,
    AssemblerError,
    AssemblySyntaxError,
    UnclosedCommentError,
    OperandWidthError,
    LiteralOverflowError,
    DuplicateSymbolError,
    UndefinedSymbolError,
    AddressRangeError,
    UnknownMnemonicError,
)
from ssbc_sdk.machinecode import annotate_addresses, strip_annotations

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "assemble",
    # Machine-code filters
    "strip_annotations",
    "annotate_addresses",
    # Exception hierarchy
    "SsbcError",
    "SourceLocation",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnclosedCommentError",
    "OperandWidthError",
    "LiteralOverflowError",
    "DuplicateSymbolError",
    "UndefinedSymbolError",
    "AddressRangeError",
    "UnknownMnemonicError",
]
