"""
Shared fixtures: a minimal FIT writer and sample FIT files built with it.

The writer emits a 14-byte header, one definition plus one data record per
message and the trailing file CRC, which is all fitparse needs to decode.
"""

import struct

import pytest

# Base type identifiers
ENUM = 0x00
SINT8 = 0x01
UINT8 = 0x02
SINT16 = 0x83
UINT16 = 0x84
SINT32 = 0x85
UINT32 = 0x86
STRING = 0x07
FLOAT32 = 0x88
UINT32Z = 0x8C

_CRC_TABLE = (
    0x0000, 0xCC01, 0xD801, 0x1400, 0xF001, 0x3C00, 0x2800, 0xE401,
    0xA001, 0x6C00, 0x7800, 0xB401, 0x5000, 0x9C01, 0x8801, 0x4400,
)

# Global message numbers
FILE_ID = 0
SESSION = 18
RECORD = 20
EVENT = 21
ACTIVITY = 34
FILE_CREATOR = 49
MANUFACTURER_SPECIFIC = 0xFF00

TIME_CREATED = 1000000000


def fit_crc(data, crc=0):
    """CRC-16 as computed by the FIT SDK."""
    for byte in data:
        tmp = _CRC_TABLE[crc & 0xF]
        crc = (crc >> 4) & 0x0FFF
        crc = crc ^ tmp ^ _CRC_TABLE[byte & 0xF]
        tmp = _CRC_TABLE[crc & 0xF]
        crc = (crc >> 4) & 0x0FFF
        crc = crc ^ tmp ^ _CRC_TABLE[(byte >> 4) & 0xF]
    return crc


class FitWriter:
    """Builds little-endian FIT data one message at a time."""

    def __init__(self):
        self._records = bytearray()

    def message(self, global_num, fields):
        """Append a message.

        Args:
            global_num: Global message number.
            fields: List of (def_num, base_type, struct format, value).
        """
        self._records += struct.pack("<BBBHB", 0x40, 0, 0, global_num, len(fields))
        for def_num, base_type, fmt, _ in fields:
            self._records += struct.pack("<BBB", def_num, struct.calcsize("<" + fmt), base_type)
        self._records.append(0x00)
        for _, _, fmt, value in fields:
            self._records += struct.pack("<" + fmt, value)
        return self

    def file_id(self, file_type):
        return self.message(
            FILE_ID,
            [
                (0, ENUM, "B", file_type),
                (1, UINT16, "H", 1),
                (2, UINT16, "H", 1234),
                (3, UINT32Z, "I", 123456789),
                (4, UINT32, "I", TIME_CREATED),
            ],
        )

    def build(self):
        header = struct.pack("<BBHI4sH", 14, 0x10, 2132, len(self._records), b".FIT", 0)
        data = header + bytes(self._records)
        return data + struct.pack("<H", fit_crc(data))


def activity_fit_bytes():
    """An activity file with two records, an event, a session and an activity."""
    writer = FitWriter().file_id(4)
    writer.message(
        FILE_CREATOR,
        [
            (0, UINT16, "H", 500),
            (1, UINT8, "B", 0xFF),
            (7, UINT8, "B", 42),
        ],
    )
    for second in range(2):
        writer.message(
            RECORD,
            [
                (253, UINT32, "I", TIME_CREATED + second),
                (3, UINT8, "B", 120 + second),
                (4, UINT8, "B", 0xFF),
            ],
        )
    writer.message(
        EVENT,
        [
            (253, UINT32, "I", TIME_CREATED),
            (0, ENUM, "B", 0),
            (1, ENUM, "B", 0),
        ],
    )
    writer.message(
        SESSION,
        [
            (253, UINT32, "I", TIME_CREATED + 60),
            (2, UINT32, "I", TIME_CREATED),
            (5, ENUM, "B", 2),
            (7, UINT32, "I", 60000),
        ],
    )
    writer.message(
        ACTIVITY,
        [
            (253, UINT32, "I", TIME_CREATED + 60),
            (0, UINT32, "I", 60000),
            (1, UINT16, "H", 1),
        ],
    )
    writer.message(MANUFACTURER_SPECIFIC, [(0, UINT8, "B", 7)])
    return writer.build()


@pytest.fixture
def activity_fit(tmp_path):
    """Path of a well-formed activity FIT file."""
    path = tmp_path / "activity.fit"
    path.write_bytes(activity_fit_bytes())
    return path


@pytest.fixture
def unknown_type_fit(tmp_path):
    """Path of a FIT file declaring a file type without a typed structure."""
    path = tmp_path / "exd.fit"
    path.write_bytes(FitWriter().file_id(40).build())
    return path


@pytest.fixture
def corrupted_fit(tmp_path):
    """Path of a file that is not FIT data."""
    path = tmp_path / "corrupted.fit"
    path.write_bytes(b"this is not a FIT file at all")
    return path
