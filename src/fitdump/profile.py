"""
Typed FIT messages built from the fitparse profile.

fitparse ships the whole FIT profile: every message, its fields and their
types. This module turns that into one frozen dataclass per message (for
example ``SessionMsg`` for ``session``) whose attributes hold fixed-width
values, so the tree printer can tell which of them are absent.

A field the device did not write keeps the sentinel of its kind, enumerated
fields become ``ProfileEnum`` values and ``date_time`` fields become
``datetime`` objects (``None`` when absent).
"""

import keyword
import logging
from dataclasses import dataclass, field, make_dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Tuple

from fitparse.profile import MESSAGE_TYPES

from fitdump.constants import DATE_TIME_TYPES, INVALID_RAW_VALUES
from fitdump.kinds import ScalarKind, fits, invalid_value, make_scalar
from fitdump.printer import camel_case, render_text

__all__ = [
    "BASE_TYPE_KINDS",
    "ProfileEnum",
    "FieldSpec",
    "message_class",
    "message_names",
    "build_message",
]

logger = logging.getLogger(__name__)

# z variants share the plain kind, so their sentinels can be misjudged
BASE_TYPE_KINDS = {
    "enum": ScalarKind.UINT8,
    "sint8": ScalarKind.INT8,
    "uint8": ScalarKind.UINT8,
    "uint8z": ScalarKind.UINT8,
    "byte": ScalarKind.UINT8,
    "sint16": ScalarKind.INT16,
    "uint16": ScalarKind.UINT16,
    "uint16z": ScalarKind.UINT16,
    "sint32": ScalarKind.INT32,
    "uint32": ScalarKind.UINT32,
    "uint32z": ScalarKind.UINT32,
    "sint64": ScalarKind.INT64,
    "uint64": ScalarKind.UINT64,
    "uint64z": ScalarKind.UINT64,
    "float32": ScalarKind.FLOAT32,
    "float64": ScalarKind.FLOAT64,
    "string": ScalarKind.STRING,
}

_MESSAGES_BY_NAME = {mesg_type.name: mesg_type for mesg_type in MESSAGE_TYPES.values()}


class ProfileEnum:
    """Value of an enumerated profile type such as ``file``, ``sport`` or ``manufacturer``.

    Renders as the profile name of the value (``activity``), as the bare number
    when the profile has no name for it, and as ``<Type>Invalid`` for the
    reserved "not present" value.
    """

    __slots__ = ("type_name", "raw", "_values", "_invalid_raw")

    def __init__(
        self,
        type_name: str,
        raw: int,
        values: Optional[Mapping[int, str]] = None,
        base_type: str = "enum",
    ):
        self.type_name = type_name
        self.raw = int(raw)
        self._values = values or {}
        self._invalid_raw = INVALID_RAW_VALUES.get(base_type, 0xFF)

    @property
    def name(self) -> Optional[str]:
        """Profile name of the value, or None if the profile does not define it."""
        return self._values.get(self.raw)

    @property
    def is_invalid(self) -> bool:
        return self.raw == self._invalid_raw

    def __int__(self) -> int:
        return self.raw

    __index__ = __int__

    def __eq__(self, other):
        if isinstance(other, ProfileEnum):
            return (self.type_name, self.raw) == (other.type_name, other.raw)
        if isinstance(other, int):
            return self.raw == other
        return NotImplemented

    def __hash__(self):
        return hash(self.raw)

    def __str__(self):
        if self.is_invalid:
            return f"{camel_case(self.type_name)}Invalid"
        name = self.name
        return name if name is not None else str(self.raw)

    def __repr__(self):
        return f"ProfileEnum({self.type_name!r}, {self.raw})"


@render_text.register(ProfileEnum)
def _render_profile_enum(value: ProfileEnum) -> str:
    return str(value)


def _attribute_name(name: str, def_num: int) -> str:
    if keyword.iskeyword(name):
        return f"{name}_"
    if not name.isidentifier():
        return f"field_{def_num}"
    return name


@dataclass(frozen=True)
class FieldSpec:
    """How one profile field of a message is stored on its typed message."""

    name: str
    attr: str
    def_num: int
    type_name: str
    base_type: str
    values: Optional[Mapping[int, str]] = None

    @classmethod
    def from_profile(cls, profile_field) -> "FieldSpec":
        """Build the spec of a fitparse profile ``Field``."""
        field_type = profile_field.type
        # Fields typed directly by a base type have no separate base_type
        base_type = getattr(field_type, "base_type", field_type)
        return cls(
            name=profile_field.name,
            attr=_attribute_name(profile_field.name, profile_field.def_num),
            def_num=profile_field.def_num,
            type_name=field_type.name,
            base_type=base_type.name,
            values=getattr(field_type, "values", None) or None,
        )

    @property
    def kind(self) -> ScalarKind:
        if self.type_name == "bool":
            return ScalarKind.BOOL
        return BASE_TYPE_KINDS.get(self.base_type, ScalarKind.UINT8)

    @property
    def is_date_time(self) -> bool:
        return self.type_name in DATE_TIME_TYPES

    @property
    def is_enum(self) -> bool:
        return self.values is not None and self.type_name != "bool" and not self.is_date_time

    def invalid(self) -> Any:
        """Value the field holds when the device did not write it."""
        if self.is_date_time:
            return None
        if self.is_enum:
            return ProfileEnum(
                self.type_name,
                INVALID_RAW_VALUES.get(self.base_type, 0xFF),
                self.values,
                self.base_type,
            )
        return invalid_value(self.kind)

    def coerce(self, raw: Any, value: Any = None, wire_type: Optional[str] = None) -> Any:
        """Convert a decoded raw value (and its processed value) to the stored value.

        Array fields become tuples with one converted element per entry.
        ``wire_type`` names the base type the file's definition record used,
        which devices may choose wider or signed compared to the profile.
        """
        if isinstance(raw, (bytes, bytearray)):
            raw = tuple(raw)
        if isinstance(raw, (tuple, list)):
            if not isinstance(value, (tuple, list)) or len(value) != len(raw):
                value = (None,) * len(raw)
            return tuple(self._coerce_one(r, v, wire_type) for r, v in zip(raw, value))
        return self._coerce_one(raw, value, wire_type)

    def _coerce_one(self, raw: Any, value: Any, wire_type: Optional[str]) -> Any:
        if self.is_date_time and isinstance(value, datetime):
            return value
        if raw is None:
            return self.invalid()
        if self.is_enum and isinstance(raw, int):
            return ProfileEnum(self.type_name, raw, self.values, self.base_type)
        for kind in (self.kind, BASE_TYPE_KINDS.get(wire_type)):
            if kind is not None and fits(kind, raw):
                return make_scalar(kind, raw)
        # No fixed width holds it; plain values are always printed
        logger.debug("Keeping %s value %r of field %s as decoded", wire_type, raw, self.name)
        return raw


@lru_cache(maxsize=None)
def message_class(name: str) -> type:
    """Return the typed message class of a profile message, e.g. ``record``.

    Raises:
        LookupError: If the profile has no message of that name.
    """
    try:
        mesg_type = _MESSAGES_BY_NAME[name]
    except KeyError:
        raise LookupError(f"unknown FIT message {name!r}") from None

    specs = {}
    attrs = set()
    for def_num in sorted(mesg_type.fields):
        spec = FieldSpec.from_profile(mesg_type.fields[def_num])
        if spec.name in specs or spec.attr in attrs:
            continue
        specs[spec.name] = spec
        attrs.add(spec.attr)

    cls = make_dataclass(
        f"{camel_case(name)}Msg",
        [
            (spec.attr, Any, field(default_factory=spec.invalid, metadata={"def_num": spec.def_num}))
            for spec in specs.values()
        ],
        # Profile fields named mesg_num exist, so class attributes use other names
        namespace={"profile_name": name, "profile_num": mesg_type.mesg_num, "field_specs": specs},
        frozen=True,
    )
    cls.__module__ = __name__
    return cls


def message_names() -> List[str]:
    """Names of all messages in the profile."""
    return sorted(_MESSAGES_BY_NAME)


def build_message(message) -> Tuple[Any, List[int]]:
    """Turn a fitparse ``DataMessage`` of a known message type into its typed message.

    Returns:
        The typed message and the definition numbers of the fields the
        profile does not know.
    """
    cls = message_class(message.name)
    values = {}
    unknown = []
    for field_data in message.fields:
        if field_data.field is None:
            unknown.append(field_data.def_num)
            continue
        # Subfields resolve to their main field; component targets are fields themselves
        spec = cls.field_specs.get(field_data.field.name)
        if spec is None and field_data.parent_field is not None:
            spec = cls.field_specs.get(field_data.parent_field.name)
        if spec is None:
            logger.debug("Skipping field %s of %s message", field_data.name, message.name)
            continue
        if spec.attr not in values:
            values[spec.attr] = spec.coerce(
                field_data.raw_value, field_data.value, _wire_type(field_data)
            )
    return cls(**values), unknown


def _wire_type(field_data) -> Optional[str]:
    # Component expansions have no definition of their own
    base_type = getattr(getattr(field_data, "field_def", None), "base_type", None)
    return getattr(base_type, "name", None)
