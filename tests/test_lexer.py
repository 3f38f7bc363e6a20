# =============================================================================
# test_lexer.py - Cursor and Literal Parser Tests
# =============================================================================
# Tests for the character-level scanner and the numeric literal parsers.
#
# Test coverage includes:
#   - Whitespace skipping and token fetching
#   - Position restore on failed matches
#   - Line and multi-line comments
#   - Decimal and hexadecimal literals and their byte widths
# =============================================================================

import pytest

from ssbc_sdk.assembler.lexer import (
    Cursor,
    LiteralKind,
    parse_decimal,
    parse_hex,
    parse_number,
)


# =============================================================================
# Cursor Primitive Tests
# =============================================================================

class TestCursorPrimitives:
    """Test the basic scanning operations."""

    def test_skip_whitespace(self):
        """Whitespace is skipped and reported."""
        cursor = Cursor(" \t halt")
        assert cursor.skip_whitespace()
        assert cursor.pos == 3
        assert not cursor.skip_whitespace()

    def test_fetch_token(self):
        """Tokens are maximal runs of letters, digits and underscores."""
        cursor = Cursor("  my_label2 rest")
        assert cursor.fetch_token() == "my_label2"
        assert cursor.remaining == " rest"

    def test_fetch_token_stops_at_punctuation(self):
        """Punctuation ends a token."""
        cursor = Cursor("abc.H")
        assert cursor.fetch_token() == "abc"
        assert cursor.peek() == "."

    def test_fetch_token_failure_restores_position(self):
        """A failed fetch leaves the cursor where it was."""
        cursor = Cursor("   @x")
        assert cursor.fetch_token() is None
        assert cursor.pos == 0

    def test_match_char_skips_whitespace(self):
        """match_char skips leading whitespace."""
        cursor = Cursor("   #loop")
        assert cursor.match_char("#")
        assert cursor.pos == 4

    def test_match_char_failure_restores_position(self):
        """A failed match does not consume the skipped whitespace."""
        cursor = Cursor("   #loop")
        assert not cursor.match_char("@")
        assert cursor.pos == 0

    def test_peek_past_end(self):
        """peek returns an empty string past the end of the line."""
        cursor = Cursor("a")
        assert cursor.peek() == "a"
        assert cursor.peek(1) == ""

    def test_column_is_one_based(self):
        """column reports the 1-based position."""
        cursor = Cursor("  halt")
        cursor.skip_whitespace()
        assert cursor.column == 3

    def test_peek_word(self):
        """peek_word returns the text up to the next blank without moving."""
        cursor = Cursor("$$x; y")
        assert cursor.peek_word() == "$$x;"
        assert cursor.pos == 0
        assert Cursor("").peek_word() == ""

    def test_token_boundary(self):
        """A boundary is any character that cannot continue a token."""
        assert Cursor("").at_token_boundary()
        assert Cursor(" x").at_token_boundary()
        assert Cursor(";").at_token_boundary()
        assert not Cursor("x").at_token_boundary()


# =============================================================================
# Comment Tests
# =============================================================================

class TestComments:
    """Test comment recognition."""

    def test_slash_comment(self):
        """// runs to the end of the line."""
        cursor = Cursor("  // push five  ")
        assert cursor.parse_line_comment() == "push five"
        assert cursor.at_end()

    def test_semicolon_comment(self):
        """; runs to the end of the line."""
        cursor = Cursor(";note")
        assert cursor.parse_line_comment() == "note"

    def test_empty_comment(self):
        """A bare marker gives an empty comment."""
        assert Cursor("//").parse_line_comment() == ""

    def test_not_a_comment(self):
        """Other text is not a comment and is left alone."""
        cursor = Cursor("halt // x")
        assert cursor.parse_line_comment() is None
        assert cursor.pos == 0

    def test_block_comment_closed_on_same_line(self):
        """The body stops at */ and scanning continues after it."""
        cursor = Cursor("/* setup */ halt")
        assert cursor.match_block_comment_open()
        assert cursor.read_block_comment_body() == ("setup", True)
        assert cursor.remaining == " halt"

    def test_block_comment_left_open(self):
        """An unclosed body consumes the rest of the line."""
        cursor = Cursor("/* first line")
        assert cursor.match_block_comment_open()
        assert cursor.read_block_comment_body() == ("first line", False)
        assert cursor.at_end()


# =============================================================================
# Decimal Literal Tests
# =============================================================================

class TestDecimalLiterals:
    """Test parsing of decimal literals."""

    def test_unsigned(self):
        """Plain digits parse as a positive value."""
        literal = parse_decimal(Cursor("5"))
        assert literal.value == 5
        assert literal.text == "5"
        assert literal.kind is LiteralKind.DECIMAL

    def test_signed(self):
        """Leading + and - set the sign and are kept in the text."""
        assert parse_decimal(Cursor("-12")).value == -12
        plus = parse_decimal(Cursor("+7"))
        assert plus.value == 7
        assert plus.text == "+7"

    def test_sign_alone_is_not_a_literal(self):
        """A sign without digits does not match."""
        cursor = Cursor("- 5")
        assert parse_decimal(cursor) is None
        assert cursor.pos == 0

    def test_must_end_at_token_boundary(self):
        """Digits followed by letters are not a decimal literal."""
        cursor = Cursor("5abc")
        assert parse_decimal(cursor) is None
        assert cursor.pos == 0

    @pytest.mark.parametrize("text,width", [
        ("127", 1), ("-128", 1), ("128", 2), ("-129", 2),
        ("32767", 2), ("-32768", 2), ("32768", None), ("-32769", None),
    ])
    def test_width_by_magnitude(self, text, width):
        """Decimal width follows the two's-complement range."""
        assert parse_decimal(Cursor(text)).byte_width == width


# =============================================================================
# Hexadecimal Literal Tests
# =============================================================================

class TestHexLiterals:
    """Test parsing of hexadecimal literals."""

    def test_basic(self):
        """0x prefix followed by hex digits."""
        literal = parse_hex(Cursor("0x2A"))
        assert literal.value == 42
        assert literal.kind is LiteralKind.HEX

    def test_uppercase_prefix_is_normalised(self):
        """0X is accepted and shown as 0x."""
        literal = parse_hex(Cursor("0X7f"))
        assert literal.text == "0x7f"
        assert literal.value == 0x7F

    def test_width_by_digit_count(self):
        """0xFF is one byte while 0x00FF is two."""
        assert parse_hex(Cursor("0xFF")).byte_width == 1
        assert parse_hex(Cursor("0x00FF")).byte_width == 2
        assert parse_hex(Cursor("0x1FF")).byte_width == 2

    def test_too_many_digits(self):
        """More than four digits does not fit."""
        literal = parse_hex(Cursor("0x12345"))
        assert literal.hex_digits == 5
        assert literal.byte_width is None

    def test_prefix_without_digits(self):
        """0x alone is not a literal."""
        cursor = Cursor("0x")
        assert parse_hex(cursor) is None
        assert cursor.pos == 0

    def test_must_end_at_token_boundary(self):
        """A non-hex letter directly after the digits is rejected."""
        assert parse_hex(Cursor("0x12G")) is None


class TestParseNumber:
    """Test the combined number parser."""

    def test_prefers_hex(self):
        """0x10 is hexadecimal, not decimal 0 followed by junk."""
        literal = parse_number(Cursor("0x10"))
        assert literal.kind is LiteralKind.HEX
        assert literal.value == 16

    def test_falls_back_to_decimal(self):
        """Plain numbers parse as decimal."""
        literal = parse_number(Cursor("  -5 ; x"))
        assert literal.kind is LiteralKind.DECIMAL
        assert literal.value == -5

    def test_no_number(self):
        """Mnemonics are not numbers."""
        assert parse_number(Cursor("halt")) is None
