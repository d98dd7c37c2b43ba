"""
sudoview Sudoers Directory
Extracts privileged usernames from a group membership file (/etc/group format).

Record format:
    name:password:gid:member1,member2,...

A record is relevant when its group name contains the privileged group
substring ("sudo" by default). Members of all relevant groups are unioned.
"""

import logging
from pathlib import Path
from typing import Iterable

from sudoview.errors import GroupParseError, SourceNotFoundError, SourceReadError


logger = logging.getLogger("sudoview.sudoers")

DEFAULT_GROUP_FILE = Path("/etc/group")
PRIVILEGED_GROUP = "sudo"

# name, password, gid, members
GROUP_FIELD_COUNT = 4


def parse_group_members(record: str, group_substring: str = PRIVILEGED_GROUP) -> list[str]:
    """
    Return the members of a single group record if it is a privileged group.

    Records with fewer than four fields carry no member list and yield nothing.
    """
    fields = record.rstrip("\r\n").split(":")
    if len(fields) < GROUP_FIELD_COUNT:
        return []
    if group_substring not in fields[0]:
        return []
    return [member.strip() for member in fields[3].split(",") if member.strip()]


def parse_group_records(
    records: Iterable[str],
    group_substring: str = PRIVILEGED_GROUP,
) -> frozenset[str]:
    """Union the members of every privileged group in the given records."""
    usernames: set[str] = set()
    for record in records:
        usernames.update(parse_group_members(record, group_substring))
    return frozenset(usernames)


def load_sudoers(
    path: Path | str = DEFAULT_GROUP_FILE,
    group_substring: str = PRIVILEGED_GROUP,
) -> frozenset[str]:
    """
    Load the privileged username set.

    Args:
        path: Path to group membership file
        group_substring: Substring identifying privileged group names

    Returns:
        Immutable set of usernames

    Raises:
        SourceNotFoundError: file does not exist
        SourceReadError: file cannot be opened or read
        GroupParseError: file is not valid UTF-8 text
    """
    path = Path(path)

    if not path.exists():
        raise SourceNotFoundError(path, "Group file not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            sudoers = parse_group_records(f, group_substring)
    except UnicodeDecodeError as e:
        raise GroupParseError(path, "Group file is not valid text") from e
    except PermissionError as e:
        raise SourceReadError(path, "Permission denied reading group file") from e
    except OSError as e:
        raise SourceReadError(path, f"Failed to read group file ({e.strerror})") from e

    logger.info(f"Loaded {len(sudoers)} privileged users from {path}")
    logger.debug(f"Privileged users: {', '.join(sorted(sudoers))}")
    return sudoers
