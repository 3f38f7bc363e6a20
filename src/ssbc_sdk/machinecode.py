"""
SSBC Machine-Code Text Filters
==============================

Helpers for the machine-code text format produced by the assembler: one
line per memory byte, each an 8-character string of '0'/'1', optionally
followed by annotations.

strip_annotations
    Reduce annotated machine code to pure binary. Every line that starts
    with a run of binary digits (after blanks) is cut at the first other
    character; every other line is dropped.

        00000010 pushimm #top ; five      ->  00000010
        ; a comment                       ->  (dropped)

annotate_addresses
    Prefix every pure 8-bit binary line with its address and hex value,
    counting from zero:

        00000010                          ->  0000 02 00000010
        00000101                          ->  0001 05 00000101

Both work on whole text and are what the ``cleanmac`` and ``mac2linemac``
commands run.
"""

import logging
import re

from ssbc_sdk.assembler.encoding import BITS_PER_BYTE, decode_byte


logger = logging.getLogger(__name__)

_LEADING_BLANKS = " \t\r"
_BINARY_RUN = re.compile(r"[01]+")
_BYTE_LINE = re.compile(r"[01]{%d}" % BITS_PER_BYTE)


def strip_annotations(text: str) -> str:
    """
    Keep only the leading binary digits of each line.

    Lines without leading binary digits (blank, comment-only, or
    starting with anything else) are removed. A binary run that ends the
    input without a newline is emitted without one.

    Args:
        text: Annotated machine-code text

    Returns:
        Pure machine-code text
    """
    out = []
    lines = text.split("\n")
    kept = 0
    for index, line in enumerate(lines):
        line = line.lstrip(_LEADING_BLANKS)
        match = _BINARY_RUN.match(line)
        if match is None:
            continue
        out.append(match.group())
        # Anything after the run, even the end of the line, ends it
        if index < len(lines) - 1 or match.end() < len(line):
            out.append("\n")
        kept += 1

    logger.debug(f"Kept {kept} of {len(lines)} lines")
    return "".join(out)


def annotate_addresses(text: str) -> str:
    """
    Prefix each 8-bit binary line with its address and byte value.

    The address is a running count of binary lines starting at 0, written
    as 4 uppercase hex digits; the byte value follows as 2 uppercase hex
    digits. Lines that are not exactly one binary byte (a trailing CR is
    ignored) are copied unchanged and do not advance the count.

    Args:
        text: Machine-code text, normally the output of strip_annotations

    Returns:
        Annotated text
    """
    out = []
    address = 0
    for line in text.splitlines(keepends=True):
        body = line.rstrip("\r\n")
        if _BYTE_LINE.fullmatch(body):
            value = decode_byte(body)
            out.append(f"{address:04X} {value:02X} {line}")
            address += 1
        else:
            out.append(line)

    logger.debug(f"Annotated {address} bytes")
    return "".join(out)
