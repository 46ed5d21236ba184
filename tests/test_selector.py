"""
Tests for selecting the typed structure of a decoded file.
"""

from unittest.mock import MagicMock

import pytest

from fitdump.exceptions import ExtractionError, UnknownFileTypeError
from fitdump.files import FileType
from fitdump.profile import ProfileEnum
from fitdump.selector import ACCESSORS, select_body


def _decoded(tag):
    decoded = MagicMock()
    decoded.file_type.return_value = tag
    return decoded


def test_every_file_type_has_an_accessor():
    assert set(ACCESSORS) == set(FileType)


@pytest.mark.parametrize("file_type", list(FileType))
def test_calls_only_matching_accessor(file_type):
    """Test each tag reaches exactly one accessor and returns its result."""
    decoded = _decoded(file_type)
    body = select_body(decoded)

    accessor = getattr(decoded, ACCESSORS[file_type])
    accessor.assert_called_once_with()
    assert body is accessor.return_value
    for other in set(ACCESSORS.values()) - {ACCESSORS[file_type]}:
        getattr(decoded, other).assert_not_called()


def test_accepts_profile_enum_tag():
    decoded = _decoded(ProfileEnum("file", 4, {4: "activity"}))
    assert select_body(decoded) is decoded.activity.return_value


@pytest.mark.parametrize("tag", [0, 8, 40, 255, ProfileEnum("file", 40)])
def test_unknown_tag(tag):
    """Test unknown tags fail without calling any accessor."""
    decoded = _decoded(tag)
    with pytest.raises(UnknownFileTypeError, match="unknown filetype '"):
        select_body(decoded)
    for name in ACCESSORS.values():
        getattr(decoded, name).assert_not_called()


def test_unknown_tag_message_names_tag():
    with pytest.raises(UnknownFileTypeError) as excinfo:
        select_body(_decoded(40))
    assert str(excinfo.value) == "unknown filetype '40'"


def test_accessor_failure_becomes_extraction_error():
    """Test a failing accessor is reported with the file type and its cause."""
    decoded = _decoded(FileType.WORKOUT)
    cause = ValueError("missing workout message")
    decoded.workout.side_effect = cause

    with pytest.raises(ExtractionError) as excinfo:
        select_body(decoded)
    assert str(excinfo.value) == "extracting workout data: missing workout message"
    assert excinfo.value.__cause__ is cause


def test_mocker_spy_on_decoded_file(mocker):
    """Test selection works against a plain object with spied accessors."""

    class Decoded:
        def file_type(self):
            return FileType.TOTALS

        def totals(self):
            return "totals body"

    decoded = Decoded()
    spy = mocker.spy(decoded, "totals")
    assert select_body(decoded) == "totals body"
    spy.assert_called_once()
