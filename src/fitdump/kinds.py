"""
Scalar kinds of decoded FIT values and the sentinels that mark them absent.

The FIT protocol reserves one value per base type to mean "field not
present". Decoded messages carry those values for every field a device did
not write, and the printer uses ``is_invalid`` to leave them out.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional

import numpy as np

__all__ = [
    "ScalarKind",
    "INVALID_PREDICATES",
    "scalar_kind",
    "is_invalid",
    "invalid_value",
    "fits",
    "make_scalar",
]


class ScalarKind(Enum):
    """Fixed-width scalar kinds a decoded field can hold."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


_NUMPY_TYPES = {
    ScalarKind.INT8: np.int8,
    ScalarKind.INT16: np.int16,
    ScalarKind.INT32: np.int32,
    ScalarKind.INT64: np.int64,
    ScalarKind.UINT8: np.uint8,
    ScalarKind.UINT16: np.uint16,
    ScalarKind.UINT32: np.uint32,
    ScalarKind.UINT64: np.uint64,
    ScalarKind.FLOAT32: np.float32,
    ScalarKind.FLOAT64: np.float64,
}

_KINDS_BY_TYPE = {
    bool: ScalarKind.BOOL,
    np.bool_: ScalarKind.BOOL,
    float: ScalarKind.FLOAT64,
    str: ScalarKind.STRING,
    **{numpy_type: kind for kind, numpy_type in _NUMPY_TYPES.items()},
}


def _equals(sentinel: int) -> Callable[[Any], bool]:
    return lambda value: int(value) == sentinel


def _all_bits_set(float_type, uint_type, sentinel: int) -> Callable[[Any], bool]:
    # NaN never compares equal, so the bit pattern is compared instead
    return lambda value: int(np.asarray(value, dtype=float_type).view(uint_type)) == sentinel


INVALID_PREDICATES: Dict[ScalarKind, Callable[[Any], bool]] = {
    ScalarKind.BOOL: lambda value: not value,
    ScalarKind.INT8: _equals(0x7F),
    ScalarKind.INT16: _equals(0x7FFF),
    ScalarKind.INT32: _equals(0x7FFFFFFF),
    ScalarKind.INT64: _equals(0x7FFFFFFFFFFFFFFF),
    ScalarKind.UINT8: _equals(0xFF),
    ScalarKind.UINT16: _equals(0xFFFF),
    ScalarKind.UINT32: _equals(0xFFFFFFFF),
    ScalarKind.UINT64: _equals(0xFFFFFFFFFFFFFFFF),
    ScalarKind.FLOAT32: _all_bits_set(np.float32, np.uint32, 0xFFFFFFFF),
    ScalarKind.FLOAT64: _all_bits_set(np.float64, np.uint64, 0xFFFFFFFFFFFFFFFF),
    ScalarKind.STRING: lambda value: value == "",
}


def scalar_kind(value: Any) -> Optional[ScalarKind]:
    """Return the scalar kind of value, or None when it has no fixed kind.

    Plain Python ints have no width and therefore no sentinel.
    """
    return _KINDS_BY_TYPE.get(type(value))


def is_invalid(value: Any) -> bool:
    """Check whether value is the sentinel its kind reserves for "not present"."""
    kind = scalar_kind(value)
    if kind is None:
        return False
    return INVALID_PREDICATES[kind](value)


def invalid_value(kind: ScalarKind) -> Any:
    """Build the sentinel value of a scalar kind."""
    if kind is ScalarKind.BOOL:
        return False
    if kind is ScalarKind.STRING:
        return ""
    if kind is ScalarKind.FLOAT32:
        return np.array(0xFFFFFFFF, dtype=np.uint32).view(np.float32)[()]
    if kind is ScalarKind.FLOAT64:
        return np.array(0xFFFFFFFFFFFFFFFF, dtype=np.uint64).view(np.float64)[()]
    numpy_type = _NUMPY_TYPES[kind]
    return numpy_type(np.iinfo(numpy_type).max)


def fits(kind: ScalarKind, raw: Any) -> bool:
    """Check whether raw can be stored in kind without changing its value."""
    if kind is ScalarKind.STRING:
        return isinstance(raw, str)
    if kind is ScalarKind.BOOL:
        return isinstance(raw, (int, np.integer))
    if kind in (ScalarKind.FLOAT32, ScalarKind.FLOAT64):
        if not isinstance(raw, (int, float, np.integer, np.floating)):
            return False
        limit = float(np.finfo(_NUMPY_TYPES[kind]).max)
        return not abs(raw) > limit
    if not isinstance(raw, (int, np.integer)):
        return False
    limits = np.iinfo(_NUMPY_TYPES[kind])
    return limits.min <= int(raw) <= limits.max


def make_scalar(kind: ScalarKind, raw: Any) -> Any:
    """Wrap a raw decoded value in the Python type of its kind.

    Callers check ``fits`` first; out of range values raise ``OverflowError``.
    """
    if kind is ScalarKind.BOOL:
        return bool(raw)
    if kind is ScalarKind.STRING:
        return str(raw)
    return _NUMPY_TYPES[kind](raw)
