"""
SSBC Machine Code Emitter
=========================

Formats assembled entries as machine-code text, one output line per
entry:

    [0xNNNN ]<bits>[ <text>][ #<label>][ ; <comment>]

Example (with hex line numbers):

    0x0000 00000010 pushimm #start ; push five
    0x0001 00000101 5

    ; a comment-only line

Lines without code (blank source lines, comment-only lines) carry no bits
and no address. The binary column can be recovered with the
``cleanmac`` filter.
"""

from pathlib import Path
from typing import Iterable, Mapping

from ssbc_sdk.assembler.codegen import MachineCodeEntry
from ssbc_sdk.assembler.config import AssemblerConfig


def format_entry(entry: MachineCodeEntry, config: AssemblerConfig) -> str:
    """Format one entry as an output line."""
    parts = []

    if entry.bits is not None:
        if config.hex_line_numbers and entry.machine_line is not None:
            parts.append(f"0x{entry.machine_line:04X}")
        parts.append(entry.bits)
        if entry.text:
            parts.append(entry.text)

    if entry.label:
        parts.append(f"#{entry.label}")

    if entry.comment:
        parts.append(f"; {entry.comment}")

    return " ".join(parts)


def format_entries(entries: Iterable[MachineCodeEntry], config: AssemblerConfig) -> str:
    """Format all entries, one per line, with a trailing newline."""
    lines = [format_entry(entry, config) for entry in entries]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_symbols(symbols: Mapping[str, int]) -> str:
    """
    Format a symbol table, sorted by address.

    Format: name 0xNNNN (one per line)
    """
    lines = ["# Symbol table", "# Generated by assem2mac"]
    for name, address in sorted(symbols.items(), key=lambda item: (item[1], item[0])):
        lines.append(f"{name} 0x{address:04X}")
    return "\n".join(lines) + "\n"


def write_text(filepath: str | Path, text: str) -> None:
    with open(filepath, "w") as f:
        f.write(text)
