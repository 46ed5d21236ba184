"""Configuration for FIT file dumps."""

from dataclasses import dataclass

from fitdump.constants import DEFAULT_INDENT, DEFAULT_KEEP_UNKNOWN, DEFAULT_SEPARATOR

__all__ = ["DumpConfig"]


@dataclass(frozen=True)
class DumpConfig:
    """Configuration for dumping a FIT file."""

    indent: str = DEFAULT_INDENT
    separator: str = DEFAULT_SEPARATOR
    keep_unknown: bool = DEFAULT_KEEP_UNKNOWN
