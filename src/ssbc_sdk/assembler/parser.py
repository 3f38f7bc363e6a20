"""
SSBC Address Grammar
====================

This module parses the label and address constructs of SSBC assembly
and defines the address data model used by the code generator.

Grammar
-------
    label_definition := '#' token
    address          := '@' token [('+' | '-') decimal]
    address_part     := address '.' ('H' | 'h' | 'L' | 'l')

A label definition binds the next committed machine-code byte to a name.
A full address reference expands to two bytes (high, then low) holding
the machine line number of the label plus the offset; an address part
selects just one of those bytes.

Examples
--------
    #loop               ; define 'loop'
    pushext @loop       ; two bytes: high and low byte of loop
    pushimm @table+2.L  ; one byte: low byte of (table + 2)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ssbc_sdk.assembler.encoding import (
    encode_byte,
    high_byte,
    is_valid_address,
    low_byte,
)
from ssbc_sdk.assembler.lexer import Cursor, parse_decimal


# =============================================================================
# Address Data Model
# =============================================================================

class BytePart(Enum):
    """Selects the high or the low byte of a two-byte address."""
    HIGH = "H"
    LOW = "L"


@dataclass
class AddressPart:
    """
    A reference to one byte of a label's address.

    The resolver fills ``resolved_line`` once, after all labels are known.

    Attributes:
        label: Referenced label name
        byte_part: Which byte of the address this part encodes
        offset: Signed offset added to the label's machine line
        resolved_line: Label machine line plus offset, once resolved
    """
    label: str
    byte_part: BytePart
    offset: int = 0
    resolved_line: Optional[int] = None

    def __str__(self) -> str:
        return f"{format_address(self.label, self.offset)}.{self.byte_part.value}"

    @property
    def is_resolved(self) -> bool:
        return self.resolved_line is not None

    def resolve(self, machine_line: int) -> bool:
        """
        Resolve against the label's machine line.

        Returns:
            False (leaving the part unresolved) if the offset address falls
            outside 0x0000..0xFFFF
        """
        target = machine_line + self.offset
        if not is_valid_address(target):
            return False
        self.resolved_line = target
        return True

    def get_bits(self) -> str:
        """
        Binary encoding of the selected byte of the resolved address.

        Raises:
            ValueError: If the part has not been resolved yet
        """
        if self.resolved_line is None:
            raise ValueError(f"address part '{self}' has not been resolved")
        if self.byte_part is BytePart.HIGH:
            return encode_byte(high_byte(self.resolved_line))
        return encode_byte(low_byte(self.resolved_line))


@dataclass
class Address:
    """
    A full two-byte address reference.

    Always emitted as an adjacent pair, high byte first.
    """
    label: str
    offset: int = 0
    high: AddressPart = field(init=False)
    low: AddressPart = field(init=False)

    def __post_init__(self) -> None:
        self.high = AddressPart(self.label, BytePart.HIGH, self.offset)
        self.low = AddressPart(self.label, BytePart.LOW, self.offset)

    def __str__(self) -> str:
        return format_address(self.label, self.offset)

    @property
    def parts(self) -> tuple[AddressPart, AddressPart]:
        return self.high, self.low


def format_address(label: str, offset: int = 0) -> str:
    """Format '@label', '@label+n' or '@label-n'."""
    if offset > 0:
        return f"@{label}+{offset}"
    if offset < 0:
        return f"@{label}{offset}"
    return f"@{label}"


# =============================================================================
# Grammar
# =============================================================================

def parse_label_definition(cursor: Cursor) -> Optional[str]:
    """Parse '#name' and return the label name."""
    start = cursor.pos
    if not cursor.match_char("#"):
        return None
    name = cursor.fetch_token()
    if name is None:
        cursor.pos = start
        return None
    return name


def _parse_label_and_offset(cursor: Cursor) -> Optional[tuple[str, int]]:
    """Parse '@name' with an optional '+n'/'-n' decimal offset."""
    start = cursor.pos
    if not cursor.match_char("@"):
        return None
    label = cursor.fetch_token()
    if label is None:
        cursor.pos = start
        return None

    sign = 0
    if cursor.match_char("-"):
        sign = -1
    elif cursor.match_char("+"):
        sign = 1
    if sign == 0:
        return label, 0

    literal = parse_decimal(cursor)
    # the sign was already consumed; '@x+-3' is not an offset
    if literal is None or literal.text[0] in "+-":
        cursor.pos = start
        return None
    return label, sign * literal.value


def parse_address_part(cursor: Cursor) -> Optional[AddressPart]:
    """Parse '@name[+/-n].H' or '@name[+/-n].L'."""
    start = cursor.pos
    parsed = _parse_label_and_offset(cursor)
    if parsed is None:
        return None
    label, offset = parsed

    if not cursor.match_char("."):
        cursor.pos = start
        return None

    if cursor.match_char("H") or cursor.match_char("h"):
        byte_part = BytePart.HIGH
    elif cursor.match_char("L") or cursor.match_char("l"):
        byte_part = BytePart.LOW
    else:
        cursor.pos = start
        return None

    if not cursor.at_token_boundary():
        cursor.pos = start
        return None
    return AddressPart(label, byte_part, offset)


def parse_address(cursor: Cursor) -> Optional[Address]:
    """Parse a full address reference '@name[+/-n]'."""
    parsed = _parse_label_and_offset(cursor)
    if parsed is None:
        return None
    label, offset = parsed
    return Address(label, offset)
