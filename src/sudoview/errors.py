"""
sudoview Error Types
Startup failures, per-line classification failures and invalid display geometry.
"""


class SudoViewError(Exception):
    """Base class for sudoview errors."""


class StartupError(SudoViewError):
    """An input file could not be loaded. Fatal before the viewer starts."""

    def __init__(self, path, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class SourceNotFoundError(StartupError, FileNotFoundError):
    """Input file does not exist."""


class SourceReadError(StartupError):
    """Input file exists but cannot be read."""


class GroupParseError(StartupError):
    """Group membership file could not be decoded."""


class MalformedLineError(SudoViewError, ValueError):
    """A line carries the escalation marker but no command marker."""

    def __init__(self, text: str, reason: str = "missing command marker"):
        super().__init__(f"{reason}: {text!r}")
        self.text = text
        self.reason = reason


class ConfigurationInvalid(SudoViewError, ValueError):
    """Page capacity resolved to zero or less (display too small)."""
