"""
SSBC Assembler
==============

This package provides the assembler for the SSBC stack machine. It turns
assembly source into annotated machine-code text, one binary byte per
output line.

Main Components
---------------
- **Assembler**: Main class that runs an assembly and writes the output
- **Cursor**: Character-level scanner over one source line
- **CodeGenerator**: Two-pass line processor and address resolver
- **AssemblerConfig**: Options (noops for comments, hex line numbers)

Assembly Process
----------------
1. **Pass 1 (line processing)**:
   - Scan each line for comments, labels, addresses, literals and opcodes
   - Track the operand width expected by ``pushimm``/``pushext``
   - Commit each line's bytes, assigning machine line numbers and
     binding labels

2. **Pass 2 (resolution)**:
   - Replace every address reference with the bits of the label's
     machine line (plus offset)

Example Usage
-------------
>>> from ssbc_sdk.assembler import assemble
>>> print(assemble('''
... #top
...     pushimm 5    // five
...     pushext @top
... '''), end="")
<BLANKLINE>
00000010 pushimm #top ; five
00000101 5
00000011 pushext
00000000 @top.H
00000000 @top.L
"""

from ssbc_sdk.assembler.assembler import Assembler, assemble, assemble_file
from ssbc_sdk.assembler.codegen import CodeGenerator, MachineCodeEntry, Symbol, SymbolTable
from ssbc_sdk.assembler.config import AssemblerConfig
from ssbc_sdk.assembler.emitter import format_entries, format_entry, format_symbols
from ssbc_sdk.assembler.lexer import Cursor, LiteralKind, NumberLiteral, parse_number
from ssbc_sdk.assembler.opcodes import (
    MNEMONICS,
    OPCODE_TABLE,
    InstructionInfo,
    OperandWidth,
)
from ssbc_sdk.assembler.parser import Address, AddressPart, BytePart

__all__ = [
    # Main class and functions
    "Assembler",
    "AssemblerConfig",
    "assemble",
    "assemble_file",
    # Lexer
    "Cursor",
    "LiteralKind",
    "NumberLiteral",
    "parse_number",
    # Address model
    "Address",
    "AddressPart",
    "BytePart",
    # Code generator
    "CodeGenerator",
    "MachineCodeEntry",
    "Symbol",
    "SymbolTable",
    # Emitter
    "format_entry",
    "format_entries",
    "format_symbols",
    # Opcodes
    "InstructionInfo",
    "OperandWidth",
    "OPCODE_TABLE",
    "MNEMONICS",
]
