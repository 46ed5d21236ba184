"""
Decoding of FIT data into a typed decoded file.

fitparse does the actual decoding of the binary format. This module wraps its
message stream into a ``DecodedFile``: the file header and CRC, the
top-level messages every FIT file carries, counts of the messages and fields
the profile does not know, and one accessor per file type that returns the
typed structure of that type.
"""

import io
import logging
import struct
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union

import numpy as np
from dateutil import tz
from fitparse import FitFile
from fitparse.processors import FitFileDataProcessor
from fitparse.utils import FitParseError

from fitdump.constants import (
    DEFAULT_KEEP_UNKNOWN,
    FIT_EPOCH_OFFSET,
    FIT_MIN_DATE_TIME,
    FIT_MIN_HEADER_SIZE,
)
from fitdump.exceptions import DecodeError, FileTypeMismatchError
from fitdump.files import (
    FILE_STRUCTURES,
    ActivityFile,
    ActivitySummaryFile,
    BloodPressureFile,
    CourseFile,
    DeviceFile,
    FileType,
    GoalsFile,
    MonitoringAFile,
    MonitoringBFile,
    MonitoringDailyFile,
    SchedulesFile,
    SegmentFile,
    SegmentListFile,
    SettingsFile,
    SportFile,
    TotalsFile,
    WeightFile,
    WorkoutFile,
    build_file,
)
from fitdump.kinds import ScalarKind, invalid_value
from fitdump.profile import ProfileEnum, build_message

__all__ = [
    "DumpDataProcessor",
    "Header",
    "UnknownMessage",
    "UnknownField",
    "DecodedFile",
    "decode",
]

logger = logging.getLogger(__name__)


class DumpDataProcessor(FitFileDataProcessor):
    """fitparse data processor producing timezone-aware timestamps.

    The stock processor converts with ``datetime.utcfromtimestamp``, which is
    deprecated since Python 3.12.
    """

    def process_type_date_time(self, field_data):
        value = field_data.value
        if isinstance(value, int) and value >= FIT_MIN_DATE_TIME:
            field_data.value = datetime.fromtimestamp(FIT_EPOCH_OFFSET + value, tz=tz.UTC)
            field_data.units = None

    def process_type_local_date_time(self, field_data):
        value = field_data.value
        if isinstance(value, int):
            # Wall-clock time of the device, so no timezone is attached
            field_data.value = datetime.fromtimestamp(
                FIT_EPOCH_OFFSET + value, tz=tz.UTC
            ).replace(tzinfo=None)
            field_data.units = None


@dataclass(frozen=True)
class Header:
    """FIT file header."""

    size: np.uint8
    protocol_version: np.uint8
    profile_version: np.uint16
    data_size: np.uint32
    data_type: str
    crc: np.uint16

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        """Read the header at the start of FIT data.

        Headers shorter than 14 bytes carry no CRC; theirs is left at the
        sentinel so the dump omits it.
        """
        size, protocol_version, profile_version, data_size, data_type = struct.unpack_from(
            "<BBHI4s", data
        )
        crc = invalid_value(ScalarKind.UINT16)
        if size >= FIT_MIN_HEADER_SIZE + 2:
            crc = np.uint16(struct.unpack_from("<H", data, FIT_MIN_HEADER_SIZE)[0])
        return cls(
            size=np.uint8(size),
            protocol_version=np.uint8(protocol_version),
            profile_version=np.uint16(profile_version),
            data_size=np.uint32(data_size),
            data_type=data_type.decode("ascii", errors="replace"),
            crc=crc,
        )


@dataclass(frozen=True)
class UnknownMessage:
    """Message number absent from the profile, with how often it occurred."""

    mesg_num: np.uint16
    count: int


@dataclass(frozen=True)
class UnknownField:
    """Field number a known message carried without a profile definition."""

    mesg_num: np.uint16
    field_num: np.uint8
    count: int


@dataclass(frozen=True)
class DecodedFile:
    """A decoded FIT file.

    The public fields are the metadata common to every file. The messages
    specific to the file type are reached through the accessor of that type,
    e.g. ``activity()`` for an activity file.
    """

    header: Header
    crc: np.uint16 = field(metadata={"label": "File CRC"})
    file_id: Any = None
    file_creator: Optional[Any] = None
    timestamp_correlation: Optional[Any] = None
    developer_data_ids: Tuple[Any, ...] = ()
    field_descriptions: Tuple[Any, ...] = ()
    unknown_messages: Tuple[UnknownMessage, ...] = ()
    unknown_fields: Tuple[UnknownField, ...] = ()
    _messages: Dict[str, Tuple[Any, ...]] = field(default_factory=dict, repr=False, compare=False)

    def file_type(self) -> ProfileEnum:
        """The file type declared in the file_id message."""
        return self.file_id.type

    def messages(self, name: str) -> Tuple[Any, ...]:
        """All decoded messages of the given profile name, in file order."""
        return self._messages.get(name, ())

    def _extract(self, file_type: FileType) -> Any:
        declared = self.file_type()
        if declared != file_type:
            raise FileTypeMismatchError(
                f"fit file type is {declared}, not {file_type.name.lower()}"
            )
        return build_file(FILE_STRUCTURES[file_type], self._messages)

    def activity(self) -> ActivityFile:
        return self._extract(FileType.ACTIVITY)

    def device(self) -> DeviceFile:
        return self._extract(FileType.DEVICE)

    def settings(self) -> SettingsFile:
        return self._extract(FileType.SETTINGS)

    def sport(self) -> SportFile:
        return self._extract(FileType.SPORT)

    def workout(self) -> WorkoutFile:
        return self._extract(FileType.WORKOUT)

    def course(self) -> CourseFile:
        return self._extract(FileType.COURSE)

    def schedules(self) -> SchedulesFile:
        return self._extract(FileType.SCHEDULES)

    def weight(self) -> WeightFile:
        return self._extract(FileType.WEIGHT)

    def totals(self) -> TotalsFile:
        return self._extract(FileType.TOTALS)

    def goals(self) -> GoalsFile:
        return self._extract(FileType.GOALS)

    def blood_pressure(self) -> BloodPressureFile:
        return self._extract(FileType.BLOOD_PRESSURE)

    def monitoring_a(self) -> MonitoringAFile:
        return self._extract(FileType.MONITORING_A)

    def activity_summary(self) -> ActivitySummaryFile:
        return self._extract(FileType.ACTIVITY_SUMMARY)

    def monitoring_daily(self) -> MonitoringDailyFile:
        return self._extract(FileType.MONITORING_DAILY)

    def monitoring_b(self) -> MonitoringBFile:
        return self._extract(FileType.MONITORING_B)

    def segment(self) -> SegmentFile:
        return self._extract(FileType.SEGMENT)

    def segment_list(self) -> SegmentListFile:
        return self._extract(FileType.SEGMENT_LIST)


def _read_messages(data: bytes) -> List[Any]:
    try:
        fit_file = FitFile(io.BytesIO(data), data_processor=DumpDataProcessor())
        return list(fit_file.get_messages())
    except FitParseError as exc:
        raise DecodeError(f"decoding FIT data: {exc}") from exc


def _file_crc(data: bytes, header: Header) -> np.uint16:
    offset = int(header.size) + int(header.data_size)
    if len(data) < offset + 2:
        logger.warning("FIT data ends before the file CRC")
        return invalid_value(ScalarKind.UINT16)
    return np.uint16(struct.unpack_from("<H", data, offset)[0])


def _first(messages: Dict[str, List[Any]], name: str) -> Optional[Any]:
    found = messages.get(name)
    return found[0] if found else None


def decode(
    source: Union[bytes, BinaryIO], keep_unknown: bool = DEFAULT_KEEP_UNKNOWN
) -> DecodedFile:
    """Decode FIT data into a typed decoded file.

    Args:
        source: Raw FIT bytes or a binary stream positioned at their start.
        keep_unknown: Record the messages and fields missing from the profile
            instead of dropping them.

    Returns:
        The decoded file.

    Raises:
        DecodeError: If the data is not a valid FIT file or has no file_id message.
    """
    data = bytes(source) if isinstance(source, (bytes, bytearray)) else source.read()
    raw_messages = _read_messages(data)

    messages = defaultdict(list)
    unknown_messages = Counter()
    unknown_fields = Counter()
    for message in raw_messages:
        if message.mesg_type is None:
            unknown_messages[message.mesg_num] += 1
            continue
        try:
            typed, unknown = build_message(message)
        except (TypeError, ValueError, OverflowError) as exc:
            raise DecodeError(f"decoding FIT data: {message.name} message: {exc}") from exc
        messages[message.name].append(typed)
        for def_num in unknown:
            unknown_fields[(message.mesg_num, def_num)] += 1

    logger.debug(
        "Decoded %d messages (%d of unknown type)",
        len(raw_messages),
        sum(unknown_messages.values()),
    )

    file_id = _first(messages, "file_id")
    if file_id is None:
        raise DecodeError("decoding FIT data: no file_id message")

    if not keep_unknown:
        unknown_messages.clear()
        unknown_fields.clear()

    header = Header.from_bytes(data)
    return DecodedFile(
        header=header,
        crc=_file_crc(data, header),
        file_id=file_id,
        file_creator=_first(messages, "file_creator"),
        timestamp_correlation=_first(messages, "timestamp_correlation"),
        developer_data_ids=tuple(messages.get("developer_data_id", ())),
        field_descriptions=tuple(messages.get("field_description", ())),
        unknown_messages=tuple(
            UnknownMessage(np.uint16(mesg_num), count)
            for mesg_num, count in sorted(unknown_messages.items())
        ),
        unknown_fields=tuple(
            UnknownField(np.uint16(mesg_num), np.uint8(field_num), count)
            for (mesg_num, field_num), count in sorted(unknown_fields.items())
        ),
        _messages={name: tuple(found) for name, found in messages.items()},
    )
