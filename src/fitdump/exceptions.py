"""
Custom exceptions for fitdump.

Every failure the dump can hit is one of these, so the command line can
report it and exit with a nonzero status.
"""


class FitDumpError(Exception):
    """Base exception for all fitdump errors."""


class ArgumentError(FitDumpError):
    """Exception raised when the command line is called with the wrong arguments."""


class FitFileError(FitDumpError):
    """Exception raised for problems with the input FIT file."""


class FileOpenError(FitFileError):
    """Exception raised when a FIT file cannot be opened."""


class DecodeError(FitFileError):
    """Exception raised when a byte stream is not a valid FIT file."""


class FileTypeMismatchError(FitFileError):
    """Exception raised when typed data is requested for another file type."""


class ExtractionError(FitDumpError):
    """Exception raised when the typed data of a decoded file cannot be extracted."""


class UnknownFileTypeError(FitDumpError):
    """Exception raised for a file type outside the known FIT file categories."""
