"""
Shared constants for fitdump.

Values fixed by the FIT protocol live next to the defaults used by the
command line dump.
"""

# FIT timestamps count seconds since UTC 00:00 Dec 31 1989
FIT_EPOCH_OFFSET = 631065600

# date_time values below this are seconds since device power-on, not wall time
FIT_MIN_DATE_TIME = 0x10000000

FIT_MIN_HEADER_SIZE = 12

# Renderers mark absent enum values with this suffix
INVALID_SUFFIX = "Invalid"

DEFAULT_INDENT = "\t"
DEFAULT_SEPARATOR = "---"
DEFAULT_KEEP_UNKNOWN = True

# Raw values the FIT base types reserve for "not present"
INVALID_RAW_VALUES = {
    "enum": 0xFF,
    "sint8": 0x7F,
    "uint8": 0xFF,
    "sint16": 0x7FFF,
    "uint16": 0xFFFF,
    "sint32": 0x7FFFFFFF,
    "uint32": 0xFFFFFFFF,
    "string": 0x00,
    "float32": 0xFFFFFFFF,
    "float64": 0xFFFFFFFFFFFFFFFF,
    "uint8z": 0x00,
    "uint16z": 0x0000,
    "uint32z": 0x00000000,
    "byte": 0xFF,
    "sint64": 0x7FFFFFFFFFFFFFFF,
    "uint64": 0xFFFFFFFFFFFFFFFF,
    "uint64z": 0x0000000000000000,
}

DATE_TIME_TYPES = ("date_time", "local_date_time")
