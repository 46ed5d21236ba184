"""
Indented tree dump of decoded FIT data.

The printer walks any value depth-first and writes one line per populated
field. It knows four node kinds:

- structs (dataclass instances), printed as a header, their public fields
  one level deeper and a separator line;
- optional values, where ``None`` prints nothing and anything else prints
  as if it had been inlined;
- sequences (lists and tuples), printed as a counted header followed by one
  subtree per element;
- scalars, printed as ``Name: value`` unless they hold the sentinel of
  their kind.

Values with a registered textual rendering (see ``render_text``) are printed
through it before any of the above, and dropped when the rendering ends in
``Invalid``.
"""

import sys
from dataclasses import Field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from functools import singledispatch
from typing import Any, Optional, TextIO

from fitdump.config import DumpConfig
from fitdump.constants import INVALID_SUFFIX
from fitdump.kinds import is_invalid

__all__ = ["TreePrinter", "render_text", "camel_case", "field_label", "dump", "dump_fields"]


@singledispatch
def render_text(value: Any) -> Optional[str]:
    """Return the custom textual rendering of value, or None if its type has none.

    Register a type with ``@render_text.register`` to have the printer show
    it on a single line instead of walking its structure.
    """
    return None


@render_text.register(Enum)
def _render_enum(value: Enum) -> str:
    return value.name


@render_text.register(datetime)
def _render_datetime(value: datetime) -> str:
    return str(value)


def camel_case(name: str) -> str:
    """Turn a snake_case name into CamelCase (``file_id`` becomes ``FileId``)."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def field_label(field: Field) -> str:
    """Name shown for a dataclass field: its ``label`` metadata or CamelCase name."""
    return field.metadata.get("label") or camel_case(field.name)


def _is_public(field: Field) -> bool:
    return not field.name.startswith("_")


def _is_struct(value: Any) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


class TreePrinter:
    """Writes the indented dump of values to a text stream."""

    def __init__(self, out: Optional[TextIO] = None, config: DumpConfig = None):
        self._out = out
        self.config = config or DumpConfig()

    @property
    def out(self) -> TextIO:
        # Resolved on use so a replaced sys.stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def _line(self, level: int, text: str) -> None:
        self.out.write(f"{self.config.indent * level}{text}\n")

    def dump(self, value: Any, name: str, level: int = 0) -> None:
        """Dump value and everything reachable from it under the given name."""
        text = render_text(value)
        if text is not None:
            if not text.endswith(INVALID_SUFFIX):
                self._line(level, f"{name}: {text}")
            return

        if value is None:
            return
        if _is_struct(value):
            self._line(level, f"{name}:")
            self.dump_fields(value, level + 1)
            self._line(level, self.config.separator)
        elif isinstance(value, (list, tuple)):
            self._dump_sequence(value, name, level)
        elif not is_invalid(value):
            self._line(level, f"{name}: {value}")

    def dump_fields(self, struct: Any, level: int = 0) -> None:
        """Dump the public fields of a dataclass instance without a header."""
        for field in fields(struct):
            if _is_public(field):
                self.dump(getattr(struct, field.name), field_label(field), level)

    def _dump_sequence(self, values, name: str, level: int) -> None:
        if not values:
            return
        self._line(level, f"{name} ({len(values)} elems):")
        for index, element in enumerate(values):
            self.dump(element, f"[{index}]", level + 1)


def dump(
    value: Any, name: str, level: int = 0, out: TextIO = None, config: DumpConfig = None
) -> None:
    """Dump value to out (standard output by default)."""
    TreePrinter(out, config).dump(value, name, level)


def dump_fields(struct: Any, level: int = 0, out: TextIO = None, config: DumpConfig = None) -> None:
    """Dump the public fields of struct to out (standard output by default)."""
    TreePrinter(out, config).dump_fields(struct, level)
