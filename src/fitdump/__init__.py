"""
FIT Dump - print the contents of Garmin FIT files.

This package provides tools for:
- Decoding FIT files into typed messages (via fitparse)
- Selecting the typed data of each FIT file type
- Printing any decoded value as an indented tree, leaving out absent fields
"""

from .config import DumpConfig
from .decoder import DecodedFile, decode
from .dump import dump_file, load, main
from .files import FileType
from .printer import TreePrinter, dump, render_text
from .selector import select_body

__version__ = "0.1.0"
__author__ = "FIT Dump Contributors"

__all__ = [
    "DumpConfig",
    "DecodedFile",
    "decode",
    "load",
    "dump_file",
    "main",
    "FileType",
    "TreePrinter",
    "dump",
    "render_text",
    "select_body",
]
