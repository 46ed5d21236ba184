"""
Selection of the typed structure matching a decoded file's type.
"""

from typing import Any

from fitdump.exceptions import ExtractionError, UnknownFileTypeError
from fitdump.files import FileType

__all__ = ["ACCESSORS", "select_body"]

# One accessor per known file type, no fallback between them
ACCESSORS = {
    FileType.ACTIVITY: "activity",
    FileType.DEVICE: "device",
    FileType.SETTINGS: "settings",
    FileType.SPORT: "sport",
    FileType.WORKOUT: "workout",
    FileType.COURSE: "course",
    FileType.SCHEDULES: "schedules",
    FileType.WEIGHT: "weight",
    FileType.TOTALS: "totals",
    FileType.GOALS: "goals",
    FileType.BLOOD_PRESSURE: "blood_pressure",
    FileType.MONITORING_A: "monitoring_a",
    FileType.ACTIVITY_SUMMARY: "activity_summary",
    FileType.MONITORING_DAILY: "monitoring_daily",
    FileType.MONITORING_B: "monitoring_b",
    FileType.SEGMENT: "segment",
    FileType.SEGMENT_LIST: "segment_list",
}


def select_body(decoded) -> Any:
    """Return the typed structure of a decoded file, chosen by its file type.

    Args:
        decoded: Decoded file exposing ``file_type()`` and one accessor per
            file type (see ``ACCESSORS``).

    Returns:
        The structure returned by the accessor of the declared file type.

    Raises:
        UnknownFileTypeError: If the declared type is not a known file type.
        ExtractionError: If the accessor rejects the file.
    """
    tag = decoded.file_type()
    try:
        file_type = FileType(int(tag))
    except (TypeError, ValueError):
        raise UnknownFileTypeError(f"unknown filetype '{tag}'") from None

    accessor = getattr(decoded, ACCESSORS[file_type])
    try:
        return accessor()
    except Exception as exc:
        raise ExtractionError(f"extracting {file_type.name.lower()} data: {exc}") from exc
