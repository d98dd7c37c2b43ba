"""
sudoview Log Source
Reads a line-oriented authentication log into ordered LogLine records.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sudoview.errors import SourceNotFoundError, SourceReadError


logger = logging.getLogger("sudoview.source")

DEFAULT_AUTH_LOG = Path("/var/log/auth.log")


@dataclass(frozen=True)
class LogLine:
    """A single log line and its position in the file."""
    index: int
    text: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"index": self.index, "text": self.text}


def strip_terminator(raw: str) -> str:
    """Remove the line terminator only, leaving all other whitespace."""
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def load_log(path: Path | str) -> list[LogLine]:
    """
    Load a log file preserving order and exact text.

    Args:
        path: Path to the log file

    Returns:
        LogLine records in file order

    Raises:
        SourceNotFoundError: file does not exist
        SourceReadError: file cannot be opened or read
    """
    path = Path(path)

    if not path.exists():
        raise SourceNotFoundError(path, "Log file not found")

    try:
        # undecodable bytes are replaced: log lines are opaque text.
        # lines end at "\n" only, so a stray "\r" stays inside its line
        with open(path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            lines = [LogLine(i, strip_terminator(raw)) for i, raw in enumerate(f)]
    except IsADirectoryError as e:
        raise SourceReadError(path, "Log path is a directory") from e
    except PermissionError as e:
        raise SourceReadError(path, "Permission denied reading log file") from e
    except OSError as e:
        raise SourceReadError(path, f"Failed to read log file ({e.strerror})") from e

    logger.info(f"Loaded {len(lines)} lines from {path}")
    return lines
