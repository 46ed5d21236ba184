"""
Tests for file type structures.
"""

import unittest
from dataclasses import fields

from fitdump.files import (
    FILE_STRUCTURES,
    ActivityFile,
    FileType,
    SegmentFile,
    WorkoutFile,
    build_file,
)
from fitdump.profile import message_names


class TestFileStructures(unittest.TestCase):
    """Test the structure table"""

    def test_every_file_type_has_a_structure(self):
        self.assertEqual(set(FILE_STRUCTURES), set(FileType))
        self.assertEqual(len(FileType), 17)

    def test_file_type_values_match_profile(self):
        self.assertEqual(FileType.ACTIVITY, 4)
        self.assertEqual(FileType.MONITORING_DAILY, 28)
        self.assertEqual(FileType.SEGMENT_LIST, 35)

    def test_slots_name_profile_messages(self):
        """Test every slot refers to a message the profile defines"""
        known = set(message_names())
        for structure in FILE_STRUCTURES.values():
            for slot in fields(structure):
                self.assertIn(slot.metadata["message"], known, f"{structure.__name__}.{slot.name}")


class TestBuildFile(unittest.TestCase):
    """Test gathering messages into a structure"""

    def test_empty_structure(self):
        activity = build_file(ActivityFile, {})
        self.assertIsNone(activity.activity)
        self.assertEqual(activity.records, ())

    def test_many_slot_keeps_order(self):
        activity = build_file(ActivityFile, {"record": ["r1", "r2", "r3"]})
        self.assertEqual(activity.records, ("r1", "r2", "r3"))

    def test_single_slot_takes_first(self):
        workout = build_file(WorkoutFile, {"workout": ["w1", "w2"], "workout_step": ["s1"]})
        self.assertEqual(workout.workout, "w1")
        self.assertEqual(workout.workout_steps, ("s1",))

    def test_unrelated_messages_are_ignored(self):
        segment = build_file(SegmentFile, {"record": ["r1"], "segment_point": ["p1", "p2"]})
        self.assertEqual(segment.segment_points, ("p1", "p2"))
        self.assertIsNone(segment.segment_id)


if __name__ == "__main__":
    unittest.main()
