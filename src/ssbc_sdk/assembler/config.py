"""
Assembler Configuration
=======================

Options recognised by the SSBC assembler. A configuration is an immutable
value passed to the ``Assembler``; the line processor reads
``add_noops_for_comments`` and the emitter reads ``hex_line_numbers``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for one assembler run.

    Attributes:
        add_noops_for_comments: Emit a ``noop`` byte to carry a comment on a
            line without code, instead of a comment-only output line. The
            ``noop`` occupies a machine line.
        hex_line_numbers: Prefix every binary output line with its address
            as ``0xNNNN``.
    """
    add_noops_for_comments: bool = False
    hex_line_numbers: bool = False
