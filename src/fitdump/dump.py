"""
Command line dump of FIT files.

Loads a FIT file, prints the metadata common to every FIT file and then the
typed data of its file type as an indented tree.

Usage:
    fit-dump data/samples/activity.fit
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO, Union

from fitdump.config import DumpConfig
from fitdump.decoder import DecodedFile, decode
from fitdump.exceptions import ArgumentError, FileOpenError, FitDumpError
from fitdump.printer import TreePrinter
from fitdump.selector import select_body

__all__ = ["load", "dump_file", "parse_arguments", "main_with_args", "main"]

logger = logging.getLogger(__name__)


def load(path: Union[str, Path], keep_unknown: bool = True) -> DecodedFile:
    """Open a FIT file and decode it.

    Args:
        path: Path to the FIT file.
        keep_unknown: Keep track of messages and fields missing from the profile.

    Returns:
        The decoded file.

    Raises:
        FileOpenError: If the file cannot be opened.
        DecodeError: If the file is not valid FIT data.
    """
    try:
        handle = open(path, "rb")  # pylint: disable=consider-using-with
    except OSError as exc:
        raise FileOpenError(f"open {path}: {exc.strerror or exc}") from exc

    logger.debug("Decoding %s", path)
    with handle:
        return decode(handle, keep_unknown=keep_unknown)


def dump_file(path: Union[str, Path], out: TextIO = None, config: DumpConfig = None) -> None:
    """Print the dump of a FIT file.

    The metadata section is written before the file type is resolved, so it
    stays on the output when selecting the typed data fails.
    """
    config = config or DumpConfig()
    printer = TreePrinter(out, config)

    decoded = load(path, keep_unknown=config.keep_unknown)
    printer.dump_fields(decoded)

    body = select_body(decoded)
    printer.dump(body, type(body).__name__)


def parse_arguments(args=None):
    """Parse command line arguments"""
    ap = argparse.ArgumentParser(
        prog="fit-dump", description="Print every populated field of a FIT file."
    )
    # Arity is checked by main_with_args so a wrong count exits like other errors
    ap.add_argument("files", nargs="*", metavar="FILE", help="FIT file to dump")
    return ap.parse_args(args)


def main_with_args(args) -> int:
    """Main function that takes parsed arguments"""
    try:
        if len(args.files) != 1:
            raise ArgumentError("Expected a single argument: FILE")
        dump_file(args.files[0])
    except FitDumpError as exc:
        print(exc)
        return 1
    return 0


def main(argv=None) -> int:
    """Main entry point for command line"""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = parse_arguments(argv)
    return main_with_args(args)


if __name__ == "__main__":
    sys.exit(main())
