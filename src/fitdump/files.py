"""
FIT file types and the typed structure of each.

A FIT file declares its category in ``file_id.type``. For each known
category this module defines a frozen dataclass gathering the messages that
category carries, e.g. ``ActivityFile`` holds the activity message together
with its sessions, laps and records.
"""

from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any, Dict, Optional, Sequence, Tuple

__all__ = [
    "FileType",
    "ActivityFile",
    "DeviceFile",
    "SettingsFile",
    "SportFile",
    "WorkoutFile",
    "CourseFile",
    "SchedulesFile",
    "WeightFile",
    "TotalsFile",
    "GoalsFile",
    "BloodPressureFile",
    "MonitoringAFile",
    "ActivitySummaryFile",
    "MonitoringDailyFile",
    "MonitoringBFile",
    "SegmentFile",
    "SegmentListFile",
    "FILE_STRUCTURES",
    "build_file",
]


class FileType(IntEnum):
    """File categories with a typed structure, valued as in the FIT ``file`` type."""

    DEVICE = 1
    SETTINGS = 2
    SPORT = 3
    ACTIVITY = 4
    WORKOUT = 5
    COURSE = 6
    SCHEDULES = 7
    WEIGHT = 9
    TOTALS = 10
    GOALS = 11
    BLOOD_PRESSURE = 14
    MONITORING_A = 15
    ACTIVITY_SUMMARY = 20
    MONITORING_DAILY = 28
    MONITORING_B = 32
    SEGMENT = 34
    SEGMENT_LIST = 35


def _one(message: str):
    return field(default=None, metadata={"message": message, "single": True})


def _many(message: str):
    return field(default=(), metadata={"message": message})


Messages = Tuple[Any, ...]


@dataclass(frozen=True)
class ActivityFile:
    activity: Optional[Any] = _one("activity")
    sessions: Messages = _many("session")
    laps: Messages = _many("lap")
    lengths: Messages = _many("length")
    records: Messages = _many("record")
    events: Messages = _many("event")
    hrvs: Messages = _many("hrv")
    device_infos: Messages = _many("device_info")
    user_profiles: Messages = _many("user_profile")
    sports: Messages = _many("sport")
    zones_targets: Messages = _many("zones_target")
    workouts: Messages = _many("workout")
    workout_steps: Messages = _many("workout_step")
    segment_laps: Messages = _many("segment_lap")


@dataclass(frozen=True)
class DeviceFile:
    softwares: Messages = _many("software")
    capabilities: Messages = _many("capabilities")
    file_capabilities: Messages = _many("file_capabilities")
    mesg_capabilities: Messages = _many("mesg_capabilities")
    field_capabilities: Messages = _many("field_capabilities")


@dataclass(frozen=True)
class SettingsFile:
    user_profiles: Messages = _many("user_profile")
    hrm_profiles: Messages = _many("hrm_profile")
    sdm_profiles: Messages = _many("sdm_profile")
    bike_profiles: Messages = _many("bike_profile")
    device_settings: Messages = _many("device_settings")


@dataclass(frozen=True)
class SportFile:
    zones_targets: Messages = _many("zones_target")
    sport: Optional[Any] = _one("sport")
    hr_zones: Messages = _many("hr_zone")
    power_zones: Messages = _many("power_zone")
    met_zones: Messages = _many("met_zone")
    speed_zones: Messages = _many("speed_zone")
    cadence_zones: Messages = _many("cadence_zone")


@dataclass(frozen=True)
class WorkoutFile:
    workout: Optional[Any] = _one("workout")
    workout_steps: Messages = _many("workout_step")


@dataclass(frozen=True)
class CourseFile:
    course: Optional[Any] = _one("course")
    laps: Messages = _many("lap")
    course_points: Messages = _many("course_point")
    records: Messages = _many("record")
    events: Messages = _many("event")


@dataclass(frozen=True)
class SchedulesFile:
    schedules: Messages = _many("schedule")


@dataclass(frozen=True)
class WeightFile:
    user_profile: Optional[Any] = _one("user_profile")
    weight_scales: Messages = _many("weight_scale")
    device_infos: Messages = _many("device_info")


@dataclass(frozen=True)
class TotalsFile:
    totals: Messages = _many("totals")


@dataclass(frozen=True)
class GoalsFile:
    goals: Messages = _many("goal")


@dataclass(frozen=True)
class BloodPressureFile:
    user_profile: Optional[Any] = _one("user_profile")
    blood_pressures: Messages = _many("blood_pressure")
    device_infos: Messages = _many("device_info")


@dataclass(frozen=True)
class MonitoringAFile:
    monitoring_info: Optional[Any] = _one("monitoring_info")
    monitorings: Messages = _many("monitoring")
    device_infos: Messages = _many("device_info")


@dataclass(frozen=True)
class ActivitySummaryFile:
    activity: Optional[Any] = _one("activity")
    sessions: Messages = _many("session")
    laps: Messages = _many("lap")


@dataclass(frozen=True)
class MonitoringDailyFile:
    monitoring_info: Optional[Any] = _one("monitoring_info")
    monitorings: Messages = _many("monitoring")
    device_infos: Messages = _many("device_info")


@dataclass(frozen=True)
class MonitoringBFile:
    monitoring_info: Optional[Any] = _one("monitoring_info")
    monitorings: Messages = _many("monitoring")
    device_infos: Messages = _many("device_info")


@dataclass(frozen=True)
class SegmentFile:
    segment_id: Optional[Any] = _one("segment_id")
    segment_leaderboard_entries: Messages = _many("segment_leaderboard_entry")
    segment_lap: Optional[Any] = _one("segment_lap")
    segment_points: Messages = _many("segment_point")


@dataclass(frozen=True)
class SegmentListFile:
    segment_files: Messages = _many("segment_file")


FILE_STRUCTURES = {
    FileType.DEVICE: DeviceFile,
    FileType.SETTINGS: SettingsFile,
    FileType.SPORT: SportFile,
    FileType.ACTIVITY: ActivityFile,
    FileType.WORKOUT: WorkoutFile,
    FileType.COURSE: CourseFile,
    FileType.SCHEDULES: SchedulesFile,
    FileType.WEIGHT: WeightFile,
    FileType.TOTALS: TotalsFile,
    FileType.GOALS: GoalsFile,
    FileType.BLOOD_PRESSURE: BloodPressureFile,
    FileType.MONITORING_A: MonitoringAFile,
    FileType.ACTIVITY_SUMMARY: ActivitySummaryFile,
    FileType.MONITORING_DAILY: MonitoringDailyFile,
    FileType.MONITORING_B: MonitoringBFile,
    FileType.SEGMENT: SegmentFile,
    FileType.SEGMENT_LIST: SegmentListFile,
}


def build_file(cls: type, messages: Dict[str, Sequence[Any]]) -> Any:
    """Gather decoded messages, keyed by message name, into a file structure.

    Single-message slots take the first message of their name; a file
    holding more of them keeps only that one.
    """
    values = {}
    for slot in fields(cls):
        found = messages.get(slot.metadata["message"], ())
        if slot.metadata.get("single"):
            values[slot.name] = found[0] if found else None
        else:
            values[slot.name] = tuple(found)
    return cls(**values)
