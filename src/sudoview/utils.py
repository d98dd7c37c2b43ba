"""
sudoview Utilities Module
Provides logging, privilege checks, platform detection, and common helpers.
"""

import logging
import os
import platform
import sys
from pathlib import Path
from typing import Literal

# Platform type
PlatformType = Literal["windows", "linux", "darwin", "unknown"]


def get_platform() -> PlatformType:
    """Detect the current operating system."""
    system = platform.system().lower()
    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "darwin"
    return "unknown"


def is_admin() -> bool:
    """Check if the current process runs as root."""
    return os.geteuid() == 0 if hasattr(os, "geteuid") else False


def resolve_log_level(name: str | None, default: int = logging.INFO) -> int:
    """Map a level name such as "debug" to its logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_logging(
    log_file: Path | None = None,
    level: int = logging.INFO,
    console: bool = True,
) -> logging.Logger:
    """
    Configure logging for sudoview.

    Args:
        log_file: Path to log file (optional)
        level: Logging level (default: INFO)
        console: Whether to also log to console (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("sudoview")
    logger.setLevel(level)
    logger.handlers.clear()

    # Log format
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # nothing configured: keep records away from the root logger's stderr default
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def print_banner():
    """Print sudoview banner."""
    banner = r"""
   +----------------------------------+
   |  sudoview                        |
   |  Super User Management Interface |
   +----------------------------------+
    """
    print(banner)
