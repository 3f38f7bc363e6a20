"""
SSBC Code Generator
===================

This module turns SSBC assembly source into machine-code entries using a
two-pass algorithm:

Pass 1 (line processor):
    Each source line is scanned with the grammar rules below, in priority
    order. Matching constructs queue machine-code entries; at the end of
    the line the queue is committed, assigning every entry its final
    machine line number and binding any pending label.

        a. comment             // text, ; text, /* text */
        b. label definition    #name
        c. address part        @name[+n].H / .L
        d. full address        @name[+n]
        e. operand literal     (when an opcode expects an operand)
        f. literal             0xFF, 0x00FF, -5, 300
        g. opcode mnemonic     pushimm, pushext, add, ...

Pass 2 (resolver):
    Every entry holding an address reference is resolved against the
    symbol table, which is complete after pass 1. Forward references
    therefore work.

The operand-width state tracks what the last opcode expects next:

    pushimm  -> BYTE  (one byte must follow)
    pushext  -> WORD  (two bytes must follow)
    others   -> NONE

Committed entries live in a single list; entries that still need an
address are tracked by their index in that list.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ssbc_sdk.assembler.config import AssemblerConfig
from ssbc_sdk.assembler.encoding import encode_byte, low_byte, split_word
from ssbc_sdk.assembler.lexer import Cursor, LiteralKind, NumberLiteral, parse_number
from ssbc_sdk.assembler.opcodes import (
    NOOP,
    InstructionInfo,
    OperandWidth,
    get_instruction_info,
    similar_mnemonics,
)
from ssbc_sdk.assembler.parser import (
    Address,
    AddressPart,
    parse_address,
    parse_address_part,
    parse_label_definition,
)
from ssbc_sdk.errors import (
    AddressRangeError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    LiteralOverflowError,
    OperandWidthError,
    SourceLocation,
    UnclosedCommentError,
    UndefinedSymbolError,
    UnknownMnemonicError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Machine Code Entry
# =============================================================================

@dataclass
class MachineCodeEntry:
    """
    One line of assembler output.

    Most entries are a single byte of the program. Blank source lines and
    comment-only lines are kept as entries without code so the output
    keeps the layout of the source; those have no machine line.

    Attributes:
        source_line: 1-based source line that produced the entry
        bits: 8-character binary string, or None while unresolved or
              for display-only lines
        text: Annotation shown next to the bits (mnemonic, literal,
              address expression)
        machine_line: 0-based address of the byte, assigned on commit
        label: Label bound to this byte
        comment: Comment carried on this line
        address_ref: Address part to resolve in pass 2
    """
    source_line: int
    bits: Optional[str] = None
    text: str = ""
    machine_line: Optional[int] = None
    label: Optional[str] = None
    comment: Optional[str] = None
    address_ref: Optional[AddressPart] = None

    @property
    def is_code(self) -> bool:
        """True if the entry occupies a byte of memory."""
        return self.bits is not None or self.address_ref is not None

    @property
    def is_pending(self) -> bool:
        """True if the entry still waits for address resolution."""
        return self.bits is None and self.address_ref is not None


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name
        machine_line: Machine line the label is bound to
        location: Where the label was defined
    """
    name: str
    machine_line: int
    location: SourceLocation


class SymbolTable:
    """Mapping from label name to the machine line it is bound to."""

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def define(self, name: str, machine_line: int, location: SourceLocation) -> bool:
        """
        Add a label.

        Returns:
            False (leaving the table unchanged) if the label already exists
        """
        if name in self._symbols:
            return False
        self._symbols[name] = Symbol(name, machine_line, location)
        return True

    def get(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def similar(self, name: str) -> list[str]:
        """Defined labels that look like ``name``, for error hints."""
        return difflib.get_close_matches(name, list(self._symbols), n=3)

    def as_dict(self) -> dict[str, int]:
        return {name: sym.machine_line for name, sym in self._symbols.items()}


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates SSBC machine-code entries from assembly source.

    Usage:
        codegen = CodeGenerator()
        entries = codegen.generate(source, "prog.asm")
        symbols = codegen.get_symbols()

    A generator can be reused; every call to ``generate`` starts afresh.
    Any error aborts the run by raising an ``AssemblerError`` subclass.
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self._config = config or AssemblerConfig()
        self._reset("<input>", [])

    def _reset(self, filename: str, lines: list[str]) -> None:
        self._filename = filename
        self._lines = lines

        # Committed output, in order, and indices of entries to resolve
        self._entries: list[MachineCodeEntry] = []
        self._unresolved: list[int] = []
        self._symbols = SymbolTable()
        self._next_machine_line = 0

        # Operand-width state
        self._operand_width = OperandWidth.NONE
        self._operand_owner = ""
        self._operand_location: Optional[SourceLocation] = None

        # Per-line queues, flushed at the end of every line
        self._line_queue: list[MachineCodeEntry] = []
        self._comment_queue: list[str] = []

        # Carried across lines
        self._pending_label: Optional[tuple[str, SourceLocation]] = None
        self._block_comment_start: Optional[SourceLocation] = None

        self._line_number = 0
        self._line_text = ""

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, source: str, filename: str = "<input>") -> list[MachineCodeEntry]:
        """
        Assemble source text.

        Args:
            source: Assembly source code
            filename: Name used in error messages

        Returns:
            All output entries in order, with every address resolved

        Raises:
            AssemblerError: On the first error found
        """
        lines = source.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        self._reset(filename, [line.rstrip("\r") for line in lines])

        self._pass1()
        self._pass2()

        logger.debug(
            f"Generated {self._next_machine_line} bytes from {len(self._lines)} lines, "
            f"{len(self._symbols)} labels"
        )
        return list(self._entries)

    def get_code(self) -> list[str]:
        """Binary strings of all code entries, in address order."""
        return [entry.bits for entry in self._entries if entry.bits is not None]

    def get_symbols(self) -> dict[str, int]:
        """Map of label name to machine line."""
        return self._symbols.as_dict()

    # =========================================================================
    # Pass 1 - Line Processing
    # =========================================================================

    def _pass1(self) -> None:
        for number, text in enumerate(self._lines, start=1):
            self._process_line(number, text)

        if self._block_comment_start is not None:
            raise UnclosedCommentError(
                location=self._block_comment_start,
                source_line=self._source_text(self._block_comment_start.line),
            )

        if self._operand_width is not OperandWidth.NONE:
            location = self._operand_location
            raise OperandWidthError(
                self._operand_owner,
                self._operand_width.value,
                "end of input",
                location=location,
                source_line=self._source_text(location.line) if location else None,
            )

        if self._pending_label is not None:
            name, location = self._pending_label
            raise AssemblySyntaxError(
                f"label '{name}' is not followed by any code",
                location=location,
                hint="a label names the next machine-code byte",
                source_line=self._source_text(location.line),
            )

        logger.debug(
            f"Pass 1 complete: {self._next_machine_line} bytes, "
            f"{len(self._unresolved)} address references"
        )

    def _process_line(self, number: int, text: str) -> None:
        """Scan one source line and commit whatever it produced."""
        self._line_number = number
        self._line_text = text
        cursor = Cursor(text)

        if self._block_comment_start is not None:
            self._continue_block_comment(cursor)
        elif not text.strip():
            # Blank lines keep the vertical layout of the source
            self._entries.append(MachineCodeEntry(source_line=number))
            return

        while True:
            cursor.skip_whitespace()
            if cursor.at_end():
                break
            self._process_next(cursor)

        self._flush_line(blank=not text.strip())

    def _process_next(self, cursor: Cursor) -> None:
        """Apply the first grammar rule that matches at the cursor."""
        column = cursor.column

        comment = cursor.parse_line_comment()
        if comment is not None:
            self._comment_queue.append(comment)
            return

        if cursor.match_block_comment_open():
            self._block_comment_start = self._location(column)
            self._continue_block_comment(cursor)
            return

        label = parse_label_definition(cursor)
        if label is not None:
            self._set_pending_label(label, column)
            return

        part = parse_address_part(cursor)
        if part is not None:
            self._emit_address_part(part)
            return

        address = parse_address(cursor)
        if address is not None:
            self._emit_address(address, column)
            return

        literal = parse_number(cursor)
        if literal is not None:
            if self._operand_width is OperandWidth.NONE:
                self._emit_literal(literal, column)
            else:
                self._emit_operand(literal, column)
            return

        if cursor.at_token_boundary():
            raise AssemblySyntaxError(
                f"could not parse '{cursor.peek_word()}'",
                location=self._location(column),
                source_line=self._line_text,
            )

        if self._operand_width is not OperandWidth.NONE:
            raise self._width_error(f"'{cursor.peek_word()}'", column)

        token = cursor.fetch_token()
        info = get_instruction_info(token)
        if info is None:
            raise UnknownMnemonicError(
                token,
                location=self._location(column),
                source_line=self._line_text,
                similar_mnemonics=similar_mnemonics(token),
            )
        self._emit_opcode(info, column)

    def _continue_block_comment(self, cursor: Cursor) -> None:
        body, closed = cursor.read_block_comment_body()
        if body:
            self._comment_queue.append(body)
        if closed:
            self._block_comment_start = None

    # =========================================================================
    # Labels
    # =========================================================================

    def _set_pending_label(self, name: str, column: int) -> None:
        if self._pending_label is not None:
            pending, _ = self._pending_label
            raise AssemblySyntaxError(
                f"label '{name}' defined while label '{pending}' has no code yet",
                location=self._location(column),
                hint="only one label can name a machine-code byte",
                source_line=self._line_text,
            )
        self._pending_label = (name, self._location(column))

    def _bind_pending_label(self, entry: MachineCodeEntry) -> None:
        name, location = self._pending_label
        existing = self._symbols.get(name)
        if existing is not None:
            raise DuplicateSymbolError(
                name,
                location=location,
                original_location=existing.location,
                source_line=self._source_text(location.line),
            )
        self._symbols.define(name, entry.machine_line, location)
        entry.label = name
        self._pending_label = None
        logger.debug(f"Label '{name}' bound to machine line {entry.machine_line}")

    # =========================================================================
    # Emitters
    # =========================================================================

    def _queue(self, entry: MachineCodeEntry) -> None:
        self._line_queue.append(entry)

    def _queue_byte(self, value: int, text: str) -> None:
        self._queue(MachineCodeEntry(self._line_number, encode_byte(value), text))

    def _queue_word(self, value: int, text: str) -> None:
        """Queue a 16-bit value as high then low byte, low aligned under text."""
        high, low = split_word(value)
        self._queue(MachineCodeEntry(self._line_number, encode_byte(high), f"{text} H"))
        self._queue(MachineCodeEntry(self._line_number, encode_byte(low), f"{' ' * len(text)} L"))

    def _queue_reference(self, part: AddressPart) -> None:
        self._queue(MachineCodeEntry(self._line_number, text=str(part), address_ref=part))

    def _emit_opcode(self, info: InstructionInfo, column: int) -> None:
        self._queue_byte(info.opcode, info.mnemonic)
        self._operand_width = info.operand_width
        if info.operand_width is not OperandWidth.NONE:
            self._operand_owner = info.mnemonic
            self._operand_location = self._location(column)

    def _emit_address_part(self, part: AddressPart) -> None:
        # A single address byte satisfies one byte of a pending operand
        if self._operand_width is OperandWidth.WORD:
            self._operand_width = OperandWidth.BYTE
        else:
            self._operand_width = OperandWidth.NONE
        self._queue_reference(part)

    def _emit_address(self, address: Address, column: int) -> None:
        if self._operand_width is OperandWidth.BYTE:
            raise self._width_error(
                f"full address reference '{address}'",
                column,
                hint=(
                    f"use '{address}.H' or '{address}.L' instead to use the "
                    f"high-byte or low-byte of an address respectively"
                ),
            )
        self._operand_width = OperandWidth.NONE
        for part in address.parts:
            self._queue_reference(part)

    def _emit_literal(self, literal: NumberLiteral, column: int) -> None:
        """Literal with no operand expectation: sized by its own notation."""
        if self._literal_width(literal, column) == 1:
            self._queue_byte(literal.value, literal.text)
        else:
            self._queue_word(literal.value, literal.text)

    def _emit_operand(self, literal: NumberLiteral, column: int) -> None:
        """Literal consumed by the pending operand of the last opcode."""
        width = self._literal_width(literal, column)

        if self._operand_width is OperandWidth.BYTE:
            if width != 1:
                raise self._width_error(
                    f"'{literal.text}'",
                    column,
                    hint="use a 1-2 digit hex literal or a decimal in -128..127",
                )
            self._queue_byte(literal.value, literal.text)
            self._operand_width = OperandWidth.NONE
            return

        if literal.kind is LiteralKind.HEX and width == 1:
            # 0xFF is one byte; the second byte must follow as its own token
            self._queue_byte(literal.value, literal.text)
            self._operand_width = OperandWidth.BYTE
            return

        value = literal.value
        if width == 1:
            # one-byte decimals take a zero high byte
            value = low_byte(value)
        self._queue_word(value, literal.text)
        self._operand_width = OperandWidth.NONE

    def _literal_width(self, literal: NumberLiteral, column: int) -> int:
        width = literal.byte_width
        if width is None:
            raise LiteralOverflowError(
                literal.text,
                location=self._location(column),
                source_line=self._line_text,
            )
        return width

    def _width_error(
        self, received: str, column: int, hint: Optional[str] = None
    ) -> OperandWidthError:
        return OperandWidthError(
            self._operand_owner,
            self._operand_width.value,
            received,
            location=self._location(column),
            hint=hint,
            source_line=self._line_text,
        )

    # =========================================================================
    # Line Commit
    # =========================================================================

    def _flush_line(self, blank: bool) -> None:
        """
        Commit the entries queued for the current line.

        Every entry gets the next machine line number. A pending label is
        bound to the first entry; comments attach to entries in order.
        Comments on a line without code become comment-only lines, or
        ``noop`` bytes carrying the comment when configured.
        """
        if not self._line_queue:
            if self._comment_queue:
                for comment in self._comment_queue:
                    if self._config.add_noops_for_comments:
                        self._queue(MachineCodeEntry(
                            self._line_number, encode_byte(NOOP.opcode), comment=comment
                        ))
                    else:
                        self._entries.append(
                            MachineCodeEntry(self._line_number, comment=comment)
                        )
                self._comment_queue.clear()
            elif blank:
                self._entries.append(MachineCodeEntry(self._line_number))

        for index, entry in enumerate(self._line_queue):
            entry.machine_line = self._next_machine_line
            self._next_machine_line += 1

            if index == 0 and self._pending_label is not None:
                self._bind_pending_label(entry)

            if entry.comment is None and self._comment_queue:
                entry.comment = self._comment_queue.pop(0)

            self._entries.append(entry)
            if entry.is_pending:
                self._unresolved.append(len(self._entries) - 1)

        if self._comment_queue and self._line_queue:
            last = self._line_queue[-1]
            last.comment = " ".join([last.comment or "", *self._comment_queue]).strip()

        self._line_queue.clear()
        self._comment_queue.clear()

    # =========================================================================
    # Pass 2 - Address Resolution
    # =========================================================================

    def _pass2(self) -> None:
        for index in self._unresolved:
            entry = self._entries[index]
            part = entry.address_ref
            location = SourceLocation(self._filename, entry.source_line)
            source_line = self._source_text(entry.source_line)

            symbol = self._symbols.get(part.label)
            if symbol is None:
                raise UndefinedSymbolError(
                    part.label,
                    location=location,
                    source_line=source_line,
                    similar_symbols=self._symbols.similar(part.label),
                )

            if not part.resolve(symbol.machine_line):
                raise AddressRangeError(
                    str(part),
                    symbol.machine_line + part.offset,
                    location=location,
                    source_line=source_line,
                )
            entry.bits = part.get_bits()

        logger.debug(f"Pass 2 complete: resolved {len(self._unresolved)} address references")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _location(self, column: int = 0) -> SourceLocation:
        return SourceLocation(self._filename, self._line_number, column)

    def _source_text(self, line_number: int) -> Optional[str]:
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return None
