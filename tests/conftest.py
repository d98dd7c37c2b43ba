"""
sudoview Test Configuration
Shared fixtures and configuration for pytest.
"""

import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sudoview.log_source import LogLine  # noqa: E402
from sudoview.session import Dataset  # noqa: E402


AUTH_LOG_LINES = [
    "Mar  1 10:00:01 host sshd[100]: Accepted publickey for alice from 10.0.0.5 port 50000 ssh2",
    "Mar  1 10:00:05 host sudo:    alice : TTY=pts/0 ; PWD=/home/alice ; USER=root ; COMMAND=/usr/bin/apt update",
    "Mar  1 10:00:05 host sudo: pam_unix(sudo:session): session opened for user root(uid=0) by alice(uid=1000)",
    "Mar  1 10:00:09 host sudo: pam_unix(sudo:session): session closed for user root",
    "Mar  1 10:01:00 host sudo:      bob : TTY=pts/1 ; PWD=/home/bob ; USER=root ; COMMAND=/bin/cat /etc/shadow",
    "Mar  1 10:02:00 host sudo:    alice : TTY=pts/0 ; PWD=/home/alice ; USER=root ; COMMAND=/usr/bin/apt update",
    "Mar  1 10:03:00 host sudo:    carol : 3 incorrect password attempts",
    "Mar  1 10:04:00 host CRON[200]: pam_unix(cron:session): session opened for user root",
]

GROUP_FILE_LINES = [
    "root:x:0:",
    "sudo:x:27:alice,bob",
    "adm:x:4:syslog,alice",
    "sudoers-extra:x:1001:dave",
    "users:x:100",
]


@pytest.fixture
def temp_directory():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def auth_log_file(temp_directory):
    """Write the sample authentication log."""
    filepath = temp_directory / "auth.log"
    filepath.write_text("\n".join(AUTH_LOG_LINES) + "\n")
    return filepath


@pytest.fixture
def group_file(temp_directory):
    """Write the sample group membership file."""
    filepath = temp_directory / "group"
    filepath.write_text("\n".join(GROUP_FILE_LINES) + "\n")
    return filepath


@pytest.fixture
def log_lines():
    """Sample log as LogLine records."""
    return [LogLine(i, text) for i, text in enumerate(AUTH_LOG_LINES)]


@pytest.fixture
def dataset(log_lines):
    """Classified sample dataset with alice and bob as sudoers."""
    return Dataset.from_lines(log_lines, frozenset({"alice", "bob"}), "/var/log/auth.log")
