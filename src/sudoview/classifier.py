"""
sudoview Event Classifier
Identifies privilege escalation (sudo) events in authentication log lines
and aggregates how often each command was invoked.

A line is a privileged event when it contains the escalation marker
("sudo:") and not the PAM bookkeeping marker ("pam_unix"). The invoked
command is everything after the first "COMMAND=".
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from sudoview.errors import MalformedLineError
from sudoview.log_source import LogLine


logger = logging.getLogger("sudoview.classifier")

ESCALATION_MARKER = "sudo:"
NOISE_MARKER = "pam_unix"
COMMAND_MARKER = "COMMAND="
USER_DELIMITER = ":"


@dataclass(frozen=True)
class Markers:
    """Literal tokens used to recognise privileged events."""
    escalation: str = ESCALATION_MARKER
    noise: str = NOISE_MARKER
    command: str = COMMAND_MARKER


DEFAULT_MARKERS = Markers()


@dataclass(frozen=True)
class PrivilegedEvent:
    """A log line recording a sudo invocation."""
    line: LogLine
    user: str | None
    command: str

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def index(self) -> int:
        return self.line.index

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "user": self.user,
            "command": self.command,
            "text": self.text,
        }


class CommandFrequencyTable:
    """
    Occurrence count per invoked command.

    Filled once during classification. Ordering for display is by count
    descending, ties broken by the order commands were first seen.
    """

    def __init__(self):
        self._counts: Counter[str] = Counter()

    def record(self, command: str) -> int:
        """Count one invocation of command and return its new total."""
        self._counts[command] += 1
        return self._counts[command]

    def count(self, command: str) -> int:
        return self._counts.get(command, 0)

    def most_common(self, limit: int | None = None) -> list[tuple[str, int]]:
        """Commands sorted by count descending (stable on first-seen order)."""
        return self._counts.most_common(limit)

    def total(self) -> int:
        return sum(self._counts.values())

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, command: object) -> bool:
        return command in self._counts

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommandFrequencyTable):
            return self._counts == other._counts
        if isinstance(other, dict):
            return dict(self._counts) == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"CommandFrequencyTable({dict(self._counts)!r})"


def is_privileged(text: str, markers: Markers = DEFAULT_MARKERS) -> bool:
    """Check whether a line is a sudo event rather than PAM session noise."""
    return markers.escalation in text and markers.noise not in text


def extract_command(text: str, markers: Markers = DEFAULT_MARKERS) -> str | None:
    """Return the text after the first command marker, or None if absent."""
    start = text.find(markers.command)
    if start == -1:
        return None
    return text[start + len(markers.command):]


def extract_user(text: str, markers: Markers = DEFAULT_MARKERS) -> str | None:
    """
    Return the invoking user of a sudo line.

    The user sits between the escalation marker and the next colon, e.g.
    "sudo:    alice : TTY=pts/0 ; ..." gives "alice".
    """
    start = text.find(markers.escalation)
    if start == -1:
        return None
    start += len(markers.escalation)
    end = text.find(USER_DELIMITER, start)
    if end == -1:
        return None
    return text[start:end].strip() or None


def parse_event(line: LogLine, markers: Markers = DEFAULT_MARKERS) -> PrivilegedEvent:
    """
    Build a PrivilegedEvent from a line already known to be privileged.

    Raises:
        MalformedLineError: the line has no command marker
    """
    command = extract_command(line.text, markers)
    if command is None:
        raise MalformedLineError(line.text)
    return PrivilegedEvent(line=line, user=extract_user(line.text, markers), command=command)


def classify(
    lines: Iterable[LogLine],
    markers: Markers = DEFAULT_MARKERS,
) -> tuple[list[PrivilegedEvent], CommandFrequencyTable]:
    """
    Filter privileged events out of a log and count invoked commands.

    Malformed lines are skipped, never fatal.

    Args:
        lines: Log lines in file order
        markers: Tokens used for recognition

    Returns:
        (events in file order, command frequency table)
    """
    events: list[PrivilegedEvent] = []
    frequency = CommandFrequencyTable()
    skipped = 0

    for line in lines:
        if not is_privileged(line.text, markers):
            continue
        try:
            event = parse_event(line, markers)
        except MalformedLineError as e:
            skipped += 1
            logger.debug(f"Skipping line {line.index}: {e.reason}")
            continue
        frequency.record(event.command)
        events.append(event)

    if skipped:
        logger.info(f"Skipped {skipped} malformed sudo lines")
    logger.info(f"Classified {len(events)} sudo events, {len(frequency)} distinct commands")
    return events, frequency
