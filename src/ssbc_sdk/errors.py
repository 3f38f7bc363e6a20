"""
SSBC SDK Error Hierarchy
========================

This module defines the exception hierarchy for the SSBC toolchain.
All exceptions inherit from SsbcError, allowing callers to catch every
toolchain error with a single except clause.

Exception Hierarchy
-------------------
SsbcError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - no grammar rule matches the source text
    │   └── UnclosedCommentError - /* ... */ still open at end of file
    ├── OperandWidthError - operand of the wrong byte width
    ├── LiteralOverflowError - literal does not fit in 16 bits
    ├── DuplicateSymbolError - label defined more than once
    ├── UndefinedSymbolError - reference to a label never defined
    ├── AddressRangeError - resolved address outside 0x0000-0xFFFF
    └── UnknownMnemonicError - token is not a known opcode

Every assembler error is fatal: the assembler stops at the first one and
produces no output.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SsbcError(Exception):
    """
    Base exception for all SSBC SDK errors.

        try:
            assembler.assemble_file("program.asm")
        except SsbcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in assembly source for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(SsbcError):
    """
    Base exception for all assembler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.asm:3:9: error: expected 1 byte value for operation 'pushimm'
                pushimm 0x1FF
                        ^
            hint: use a 1-2 digit hex literal or a decimal in -128..127
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Syntax error in assembly source code.

    Raised when no grammar rule matches the remaining text of a line,
    or when a label definition cannot be attached to any code.
    """
    pass


class UnclosedCommentError(AssemblySyntaxError):
    """
    A multi-line /* ... */ comment is still open at end of file.

    The location points at the line that opened the comment.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated multi-line comment",
            location=location,
            hint="close the comment with '*/'",
            source_line=source_line,
        )


class OperandWidthError(AssemblerError):
    """
    An operand of the wrong byte width was supplied.

    The operand-width state machine raises this when the token after an
    operand-consuming opcode cannot encode to the width the opcode expects,
    for example a full two-byte address after ``pushimm``.
    """

    def __init__(
        self,
        operation: str,
        expected_width: int,
        received: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.operation = operation
        self.expected_width = expected_width
        self.received = received

        unit = "byte" if expected_width == 1 else "bytes"
        super().__init__(
            f"expected {expected_width} {unit} value for operation "
            f"'{operation}', received {received}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class LiteralOverflowError(AssemblerError):
    """
    Numeric literal too large to encode.

    Decimal literals must lie in -0x8000..0x7FFF and hexadecimal literals
    may have at most four digits.
    """

    def __init__(
        self,
        literal: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        super().__init__(
            f"number too large to convert: {literal}",
            location=location,
            hint="values must fit in 16 bits (-32768..32767 or 0x0000..0xFFFF)",
            source_line=source_line,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined multiple times.

    Includes the location of the original definition when available.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"address label used already: '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Reference to a label that is never defined.

    Raised during the second pass. Similarly-named labels are offered as
    a hint to help catch typos.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        if not hint and self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unrecognized address label: '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    A resolved address falls outside the 16-bit address space.

    Happens when a label offset pushes the target below 0x0000 or
    above 0xFFFF.
    """

    def __init__(
        self,
        reference: str,
        address: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.reference = reference
        self.address = address
        super().__init__(
            f"address out of range: '{reference}' resolves to {address}",
            location=location,
            hint="resolved addresses must lie in 0x0000..0xFFFF",
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """
    Token that is neither a literal, an address form, nor a known opcode.
    """

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_mnemonics: Optional[list[str]] = None,
    ):
        self.token = token
        self.similar_mnemonics = similar_mnemonics or []

        hint = None
        if self.similar_mnemonics:
            suggestions = ", ".join(f"'{m}'" for m in self.similar_mnemonics[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unrecognized token: '{token}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )
