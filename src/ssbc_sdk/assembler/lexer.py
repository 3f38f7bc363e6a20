"""
SSBC Assembly Language Lexer
============================

This module implements the character-level scanning used by the SSBC
assembler. SSBC assembly is line-oriented and free-format within a line,
so instead of producing a token stream up front, the assembler drives a
``Cursor`` over one source line and asks it to recognise one construct at
a time.

Every ``match_*``/``parse_*`` operation follows the same contract:

- whitespace is skipped before the attempt
- on success the cursor advances past the construct and the value is
  returned
- on failure the cursor is left exactly where it was and ``None`` (or
  ``False``) is returned

A *token* is a maximal run of letters, digits, and underscores.

Number Formats
--------------
| Format      | Example        | Width                          |
|-------------|----------------|--------------------------------|
| Decimal     | 5, -3, +200    | by magnitude (1 or 2 bytes)    |
| Hexadecimal | 0xFF, 0X7      | 1-2 digits: 1 byte             |
| Hexadecimal | 0x00FF, 0x1FF  | 3-4 digits: 2 bytes            |

The width of a hexadecimal literal comes from its digit count, not its
value: ``0xFF`` is one byte while ``0x00FF`` is two.

Comments
--------
- ``// comment`` and ``; comment`` run to the end of the line
- ``/* comment */`` may span several lines

Example
-------
>>> cursor = Cursor("  pushimm 0x2A ; answer")
>>> cursor.fetch_token()
'pushimm'
>>> parse_number(cursor)
NumberLiteral(text='0x2A', value=42, kind=<LiteralKind.HEX: 2>)
>>> cursor.parse_line_comment()
'answer'
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import string

from ssbc_sdk.assembler.encoding import decimal_width


# =============================================================================
# Cursor
# =============================================================================

class Cursor:
    """
    A scan position over a single line of assembly source.

    Attributes:
        text: The line being scanned
        pos: Index of the next unread character
    """

    WHITESPACE = frozenset(" \t\r\n\v\f")
    TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "_")
    DIGITS = frozenset(string.digits)
    HEX_DIGITS = frozenset(string.hexdigits)
    SIGNS = frozenset("+-")

    LINE_COMMENT_MARKERS = ("//", ";")
    BLOCK_COMMENT_OPEN = "/*"
    BLOCK_COMMENT_CLOSE = "*/"

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Cursor({self.text!r}, pos={self.pos})"

    @property
    def column(self) -> int:
        """1-based column of the cursor position."""
        return self.pos + 1

    @property
    def remaining(self) -> str:
        """The unread remainder of the line."""
        return self.text[self.pos:]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Character at pos + offset, or '' past the end."""
        index = self.pos + offset
        if index >= len(self.text):
            return ""
        return self.text[index]

    # =========================================================================
    # Grammar Primitives
    # =========================================================================

    def skip_whitespace(self) -> bool:
        """
        Advance past whitespace.

        Returns:
            True if any whitespace was skipped
        """
        start = self.pos
        while not self.at_end() and self.text[self.pos] in self.WHITESPACE:
            self.pos += 1
        return self.pos > start

    def match_char(self, char: str) -> bool:
        """Consume ``char`` if it is the next non-blank character."""
        return self.match_string(char)

    def match_string(self, pattern: str) -> bool:
        """Consume ``pattern`` if the next non-blank text starts with it."""
        start = self.pos
        self.skip_whitespace()
        if self.text.startswith(pattern, self.pos):
            self.pos += len(pattern)
            return True
        self.pos = start
        return False

    def fetch_token(self) -> Optional[str]:
        """
        Consume the next token.

        Returns:
            The token text, or None if the next non-blank character
            cannot start a token
        """
        start = self.pos
        self.skip_whitespace()
        begin = self.pos
        while not self.at_end() and self.text[self.pos] in self.TOKEN_CHARS:
            self.pos += 1
        if self.pos == begin:
            self.pos = start
            return None
        return self.text[begin:self.pos]

    def at_token_boundary(self) -> bool:
        """True if the next character cannot continue a token."""
        return self.peek() not in self.TOKEN_CHARS

    def peek_word(self) -> str:
        """Text from the cursor up to the next whitespace, without consuming it."""
        end = self.pos
        while end < len(self.text) and self.text[end] not in self.WHITESPACE:
            end += 1
        return self.text[self.pos:end]

    # =========================================================================
    # Comments
    # =========================================================================

    def parse_line_comment(self) -> Optional[str]:
        """
        Consume a ``//`` or ``;`` comment through the end of the line.

        Returns:
            The comment text with leading whitespace removed, or None
        """
        if not any(self.match_string(m) for m in self.LINE_COMMENT_MARKERS):
            return None
        self.skip_whitespace()
        comment = self.text[self.pos:].rstrip()
        self.pos = len(self.text)
        return comment

    def match_block_comment_open(self) -> bool:
        """Consume the ``/*`` that opens a multi-line comment."""
        return self.match_string(self.BLOCK_COMMENT_OPEN)

    def read_block_comment_body(self) -> tuple[str, bool]:
        """
        Consume multi-line comment text up to and including ``*/``.

        If the comment does not close on this line, the rest of the line
        is consumed.

        Returns:
            (comment text stripped of surrounding blanks, closed)
        """
        end = self.text.find(self.BLOCK_COMMENT_CLOSE, self.pos)
        if end == -1:
            body = self.text[self.pos:]
            self.pos = len(self.text)
            return body.strip(), False
        body = self.text[self.pos:end]
        self.pos = end + len(self.BLOCK_COMMENT_CLOSE)
        return body.strip(), True


# =============================================================================
# Literal Parsers
# =============================================================================

class LiteralKind(Enum):
    """Source notation of a numeric literal."""
    DECIMAL = auto()
    HEX = auto()


@dataclass(frozen=True)
class NumberLiteral:
    """
    A numeric literal as written in the source.

    Attributes:
        text: Display text (hex literals are normalised to a '0x' prefix)
        value: Integer value (signed for decimals, unsigned for hex)
        kind: Decimal or hexadecimal notation
    """
    text: str
    value: int
    kind: LiteralKind

    @property
    def hex_digits(self) -> int:
        """Number of hex digits written (0 for decimal literals)."""
        if self.kind is LiteralKind.HEX:
            return len(self.text) - 2
        return 0

    @property
    def byte_width(self) -> Optional[int]:
        """
        Number of bytes this literal encodes to, or None if it is too large.

        Hex literals are sized by digit count (1-2 digits: 1 byte, 3-4
        digits: 2 bytes). Decimal literals are sized by two's-complement
        magnitude.
        """
        if self.kind is LiteralKind.HEX:
            if self.hex_digits <= 2:
                return 1
            if self.hex_digits <= 4:
                return 2
            return None
        return decimal_width(self.value)


def parse_decimal(cursor: Cursor) -> Optional[NumberLiteral]:
    """
    Parse an optionally signed decimal literal such as ``5``, ``-12``, ``+7``.

    The literal must end at a token boundary, so ``5abc`` is not a decimal.
    """
    start = cursor.pos
    cursor.skip_whitespace()
    begin = cursor.pos

    sign = 1
    if cursor.peek() in Cursor.SIGNS:
        if cursor.peek() == "-":
            sign = -1
        cursor.pos += 1

    digits_start = cursor.pos
    while cursor.peek() in Cursor.DIGITS:
        cursor.pos += 1

    if cursor.pos == digits_start or not cursor.at_token_boundary():
        cursor.pos = start
        return None

    magnitude = int(cursor.text[digits_start:cursor.pos])
    return NumberLiteral(
        text=cursor.text[begin:cursor.pos],
        value=sign * magnitude,
        kind=LiteralKind.DECIMAL,
    )


def parse_hex(cursor: Cursor) -> Optional[NumberLiteral]:
    """
    Parse a hexadecimal literal such as ``0xFF`` or ``0X00ff``.

    Any number of digits is accepted here; callers reject literals wider
    than four digits via ``NumberLiteral.byte_width``.
    """
    start = cursor.pos
    if not (cursor.match_string("0x") or cursor.match_string("0X")):
        return None

    digits_start = cursor.pos
    while cursor.peek() in Cursor.HEX_DIGITS:
        cursor.pos += 1

    if cursor.pos == digits_start or not cursor.at_token_boundary():
        cursor.pos = start
        return None

    digits = cursor.text[digits_start:cursor.pos]
    return NumberLiteral(
        text=f"0x{digits}",
        value=int(digits, 16),
        kind=LiteralKind.HEX,
    )


def parse_number(cursor: Cursor) -> Optional[NumberLiteral]:
    """Parse a hexadecimal or decimal literal, trying hex first."""
    return parse_hex(cursor) or parse_decimal(cursor)
