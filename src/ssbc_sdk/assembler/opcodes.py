"""
SSBC Instruction Set Definition
===============================

This module defines the instruction set of the SSBC, a small 8/16-bit
stack machine. Every opcode is a single byte. Two instructions take an
inline operand that follows the opcode in memory:

- **pushimm**: push immediate, followed by a 1-byte value
- **pushext**: push external, followed by a 2-byte address (high byte first)

All other instructions are encoded as the opcode byte alone. The jump
instructions (``jnz``, ``jnn``) take their target from the stack, so they
carry no inline operand either.

Operand Width
-------------
The operand width of the most recently emitted opcode drives the
assembler's expectation for the next token:

    NONE  - no pending operand
    BYTE  - the next token must encode to exactly one byte
    WORD  - the next token must encode to two bytes (or one byte, followed
            by a second explicit byte)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import difflib


# =============================================================================
# Operand Width Enumeration
# =============================================================================

class OperandWidth(Enum):
    """Number of operand bytes an instruction expects after its opcode."""
    NONE = 0
    BYTE = 1
    WORD = 2

    def __str__(self) -> str:
        return {
            OperandWidth.NONE: "no operand",
            OperandWidth.BYTE: "1 byte",
            OperandWidth.WORD: "2 bytes",
        }[self]


# =============================================================================
# Instruction Information
# =============================================================================

@dataclass(frozen=True)
class InstructionInfo:
    """
    Information about one SSBC instruction.

    Attributes:
        mnemonic: Assembly mnemonic (lowercase)
        opcode: The opcode byte
        operand_width: Width of the inline operand following the opcode
        description: Short human-readable description
    """
    mnemonic: str
    opcode: int
    operand_width: OperandWidth
    description: str

    def __repr__(self) -> str:
        return f"InstructionInfo({self.mnemonic}, opcode=0x{self.opcode:02X})"


# =============================================================================
# Opcode Table
# =============================================================================

OPCODE_TABLE: dict[str, InstructionInfo] = {
    info.mnemonic: info for info in (
        InstructionInfo("noop", 0x00, OperandWidth.NONE, "no operation"),
        InstructionInfo("halt", 0x01, OperandWidth.NONE, "halt"),
        InstructionInfo("pushimm", 0x02, OperandWidth.BYTE, "push immediate"),
        InstructionInfo("pushext", 0x03, OperandWidth.WORD, "push external"),
        InstructionInfo("popinh", 0x04, OperandWidth.NONE, "pop inherent"),
        InstructionInfo("popext", 0x05, OperandWidth.NONE, "pop external"),
        InstructionInfo("jnz", 0x06, OperandWidth.NONE, "jump not zero"),
        InstructionInfo("jnn", 0x07, OperandWidth.NONE, "jump not negative"),
        InstructionInfo("add", 0x08, OperandWidth.NONE, "add"),
        InstructionInfo("sub", 0x09, OperandWidth.NONE, "subtract"),
        InstructionInfo("nor", 0x0A, OperandWidth.NONE, "nor"),
    )
}

MNEMONICS: frozenset[str] = frozenset(OPCODE_TABLE)

NOOP = OPCODE_TABLE["noop"]


# =============================================================================
# Lookup Functions
# =============================================================================

def get_instruction_info(mnemonic: str) -> Optional[InstructionInfo]:
    """
    Look up an instruction by mnemonic.

    Mnemonics are case-sensitive: ``pushimm`` is an instruction,
    ``PUSHIMM`` is not.

    Returns:
        InstructionInfo if found, None otherwise
    """
    return OPCODE_TABLE.get(mnemonic)


def similar_mnemonics(token: str) -> list[str]:
    """Return known mnemonics that look like ``token``, best match first."""
    return difflib.get_close_matches(token.lower(), sorted(MNEMONICS), n=3)
