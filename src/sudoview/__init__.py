"""
sudoview - Super User Management Interface
Terminal viewer for sudo activity in the system authentication log.

Modules:
    - log_source: Reads the authentication log
    - sudoers: Extracts privileged users from the group file
    - classifier: Detects sudo events and counts invoked commands
    - paginator: Page arithmetic and tab navigation
    - highlighter: Highlights "sudo" and privileged usernames in a line
    - session: Viewer state and per-frame render model
    - tui: Textual terminal interface
"""

# Version is managed by setuptools_scm from git tags
# Auto-generated to _version.py on install
try:
    from sudoview._version import __version__, __version_tuple__
except ImportError:
    # Fallback for development without install or outside git repo
    __version__ = "0.1.0.dev0"
    __version_tuple__ = (0, 1, 0, "dev0")

__author__ = "sudoview contributors"

# Lazy imports to keep CLI startup fast
def __getattr__(name):
    """Lazy import modules on first access."""
    if name == "Config":
        from sudoview.config import Config
        return Config
    elif name == "classify":
        from sudoview.classifier import classify
        return classify
    elif name == "tokenize":
        from sudoview.highlighter import tokenize
        return tokenize
    elif name == "Paginator":
        from sudoview.paginator import Paginator
        return Paginator
    elif name == "ViewerSession":
        from sudoview.session import ViewerSession
        return ViewerSession
    elif name == "load_dataset":
        from sudoview.session import load_dataset
        return load_dataset
    elif name == "setup_logging":
        from sudoview.utils import setup_logging
        return setup_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "Config",
    "classify",
    "tokenize",
    "Paginator",
    "ViewerSession",
    "load_dataset",
    "setup_logging",
    "__version__",
    "__version_tuple__",
]
