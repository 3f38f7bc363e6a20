"""
SSBC Machine Code Encoding
==========================

Conversions between integers and the textual machine-code representation:
one 8-character string of '0'/'1' per memory byte, most significant bit
first.

Encoding truncates to the low 8 bits, so negative values come out in
two's complement:

>>> encode_byte(5)
'00000101'
>>> encode_byte(-1)
'11111111'
>>> split_word(0x1234)
(18, 52)
"""

from typing import Optional


# Two's-complement ranges for literal values
BYTE_MIN = -0x80
BYTE_MAX = 0x7F
WORD_MIN = -0x8000
WORD_MAX = 0x7FFF

# Addressable memory
ADDRESS_MIN = 0x0000
ADDRESS_MAX = 0xFFFF

BITS_PER_BYTE = 8


def encode_byte(value: int) -> str:
    """Encode the low 8 bits of ``value`` as a binary digit string."""
    return format(value & 0xFF, "08b")


def decode_byte(bits: str, signed: bool = False) -> int:
    """
    Decode an 8-character binary string.

    Args:
        bits: String of exactly eight '0'/'1' characters
        signed: Interpret the byte as two's complement

    Raises:
        ValueError: If ``bits`` is not an 8-bit binary string
    """
    if len(bits) != BITS_PER_BYTE or set(bits) - {"0", "1"}:
        raise ValueError(f"not an 8-bit binary string: {bits!r}")
    value = int(bits, 2)
    if signed and value > BYTE_MAX:
        value -= 0x100
    return value


def high_byte(value: int) -> int:
    return (value >> 8) & 0xFF


def low_byte(value: int) -> int:
    return value & 0xFF


def split_word(value: int) -> tuple[int, int]:
    """Split a 16-bit value into (high, low) bytes."""
    return high_byte(value), low_byte(value)


def decimal_width(value: int) -> Optional[int]:
    """
    Number of bytes a signed decimal value occupies.

    Returns:
        1 for -0x80..0x7F, 2 for -0x8000..0x7FFF, None if it does not fit
    """
    if BYTE_MIN <= value <= BYTE_MAX:
        return 1
    if WORD_MIN <= value <= WORD_MAX:
        return 2
    return None


def is_valid_address(value: int) -> bool:
    return ADDRESS_MIN <= value <= ADDRESS_MAX
