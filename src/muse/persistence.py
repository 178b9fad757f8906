"""Reading and writing weight log files."""

from __future__ import annotations

from pathlib import Path

from muse.errors import NoParentDirectoryError
from muse.logconfig import get_logger
from muse.tracking.log import WeightLog

logger = get_logger(__name__)


def write_bytes(contents: bytes, path: Path) -> None:
    """Write bytes to a file, creating parent directories as needed.

    Args:
        contents: Data to write
        path: Target file

    Raises:
        NoParentDirectoryError: If the path names no file (e.g. "/" or ".")
    """
    path = Path(path)
    if not path.name:
        raise NoParentDirectoryError(f"cannot write to '{path}': no parent directory")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(contents)
    logger.debug("wrote file", path=str(path), size=len(contents))


def read_weight_log(path: Path) -> WeightLog:
    """Load a weight log from a CSV file.

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the file is not a valid weight log
    """
    with open(path, "rb") as f:
        log = WeightLog.from_csv(f)
    logger.debug("loaded weight log", path=str(path), records=len(log))
    return log


def write_weight_log(log: WeightLog, path: Path) -> None:
    """Save a weight log as CSV, creating parent directories as needed."""
    write_bytes(log.to_csv().encode("utf-8"), path)
