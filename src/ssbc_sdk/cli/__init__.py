"""
SSBC SDK Command-Line Interface
===============================

This package provides command-line tools for the SSBC SDK:

- **assem2mac**: SSBC assembler (assembly source to machine code)
- **cleanmac**: strip annotations from machine code
- **mac2linemac**: add address and hex columns to machine code

Each tool is implemented as a Click-based CLI application. All of them
exit with status 0 on success and 1 on any error.
"""

__all__ = ["assem2mac", "cleanmac", "mac2linemac"]
