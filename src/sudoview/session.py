"""
sudoview Viewer Session
Ties the loaded data to pagination and highlighting.

The session owns one Paginator. Navigation commands update it; each redraw
turns the session and the current display height into a RenderModel, a plain
snapshot the terminal layer draws without further computation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

from sudoview.classifier import (
    DEFAULT_MARKERS,
    CommandFrequencyTable,
    Markers,
    PrivilegedEvent,
    classify,
)
from sudoview.errors import ConfigurationInvalid
from sudoview.highlighter import ESCALATION_KEYWORD, Highlighter, SpanRole, StyledSpan
from sudoview.log_source import LogLine, load_log
from sudoview.paginator import TABS, PaginationState, Paginator, Tab
from sudoview.sudoers import PRIVILEGED_GROUP, load_sudoers


logger = logging.getLogger("sudoview.session")

NAVIGATION_HINT = "(use arrow keys to navigate, press q to exit)"
UNKNOWN_USER = "?"


class NavCommand(Enum):
    """Navigation commands produced by the input layer."""
    QUIT = "quit"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    NEXT_TAB = "next_tab"
    PREV_TAB = "prev_tab"


@dataclass(frozen=True)
class Dataset:
    """Everything read at startup. Never modified afterwards."""
    log_path: Path
    lines: tuple[LogLine, ...]
    events: tuple[PrivilegedEvent, ...]
    frequency: CommandFrequencyTable
    sudoers: frozenset[str]

    @classmethod
    def from_lines(
        cls,
        lines: Sequence[LogLine],
        sudoers: frozenset[str] = frozenset(),
        log_path: Path | str = "",
        markers: Markers = DEFAULT_MARKERS,
    ) -> "Dataset":
        """Classify already-loaded lines."""
        events, frequency = classify(lines, markers)
        return cls(
            log_path=Path(log_path),
            lines=tuple(lines),
            events=tuple(events),
            frequency=frequency,
            sudoers=frozenset(sudoers),
        )

    def items_for(self, tab: Tab) -> list[str]:
        """Line texts paginated under a tab."""
        if tab is Tab.ALL:
            return [line.text for line in self.lines]
        # SUDO and COMMANDS both page through the sudo events
        return [event.text for event in self.events]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "log_path": str(self.log_path),
            "total_lines": len(self.lines),
            "total_events": len(self.events),
            "sudoers": sorted(self.sudoers),
            "commands": dict(self.frequency.most_common()),
        }


def load_dataset(
    log_path: Path | str,
    group_path: Path | str,
    markers: Markers = DEFAULT_MARKERS,
    privileged_group: str = PRIVILEGED_GROUP,
) -> Dataset:
    """
    Read the log and group files and classify the log.

    Raises:
        StartupError: either file is missing or unreadable
    """
    lines = load_log(log_path)
    sudoers = load_sudoers(group_path, privileged_group)
    return Dataset.from_lines(lines, sudoers, log_path, markers)


@dataclass(frozen=True)
class RenderModel:
    """What the terminal layer needs to draw one frame."""
    tab_titles: tuple[str, ...]
    tab_index: int
    tab: Tab
    lines: tuple[tuple[StyledSpan, ...], ...] = ()
    page_index: int = 0
    num_pages: int = 0
    total_items: int = 0
    log_path: str = ""
    too_small: bool = False
    recent: tuple[tuple[StyledSpan, ...], ...] = ()
    frequency: tuple[tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def status(self) -> str:
        """Status bar text, e.g. '"/var/log/auth.log" page: 3/7 logs: 120 (...)'."""
        page = self.page_index + 1 if self.num_pages else 0
        return (
            f'"{self.log_path}" page: {page}/{self.num_pages} '
            f"logs: {self.total_items}  {NAVIGATION_HINT}"
        )


class ViewerSession:
    """
    Interactive state of one viewer run.

    Args:
        dataset: Loaded log data
        keyword: Keyword highlighted in every line
        recent_count: Number of events in the Recent panel
        top_commands: Rows in the Frequency panel (0 = all)
    """

    def __init__(
        self,
        dataset: Dataset,
        keyword: str = ESCALATION_KEYWORD,
        recent_count: int = 10,
        top_commands: int = 0,
    ):
        self.dataset = dataset
        self.highlighter = Highlighter(dataset.sudoers, keyword)
        self.recent_count = max(0, recent_count)
        self.top_commands = max(0, top_commands)
        self.paginator = Paginator(TABS)
        self.running = True

    @property
    def state(self) -> PaginationState:
        return self.paginator.state

    @property
    def tab(self) -> Tab:
        return self.paginator.tab

    def handle(self, command: NavCommand) -> bool:
        """Apply a navigation command. Returns False once the session should end."""
        if command is NavCommand.QUIT:
            self.running = False
        elif command is NavCommand.PAGE_UP:
            self.paginator.advance_page(-1)
        elif command is NavCommand.PAGE_DOWN:
            self.paginator.advance_page(1)
        elif command is NavCommand.NEXT_TAB:
            self.paginator.switch_tab(1)
        elif command is NavCommand.PREV_TAB:
            self.paginator.switch_tab(-1)
        return self.running

    def recent_commands(self) -> list[tuple[StyledSpan, ...]]:
        """Latest sudo events as "user: command" spans, oldest first."""
        if self.recent_count == 0:
            return []
        rows = []
        for event in self.dataset.events[-self.recent_count:]:
            user = event.user or UNKNOWN_USER
            role = SpanRole.USERNAME if user in self.dataset.sudoers else SpanRole.PLAIN
            rows.append((StyledSpan(user, role), StyledSpan(": "), StyledSpan(event.command)))
        return rows

    def most_used_commands(self) -> list[tuple[str, int]]:
        return self.dataset.frequency.most_common(self.top_commands or None)

    def render(self, height: int) -> RenderModel:
        """
        Build the frame for a display area of the given height in rows.

        A height below one row yields a model flagged too_small instead of
        any page content.
        On the COMMANDS tab the model carries the Recent and Frequency panels
        and no page lines; the status bar keeps counting sudo events.
        """
        tab = self.paginator.tab
        items = self.dataset.items_for(tab)
        base = dict(
            tab_titles=tuple(t.title for t in self.paginator.tabs),
            tab_index=self.state.tab_index,
            tab=tab,
            log_path=str(self.dataset.log_path),
            total_items=len(items),
        )

        try:
            state = self.paginator.recompute(len(items), height)
        except ConfigurationInvalid as e:
            logger.debug(f"Display too small: {e}")
            return RenderModel(too_small=True, **base)

        page: list[tuple[StyledSpan, ...]] = []
        recent: list[tuple[StyledSpan, ...]] = []
        frequency: list[tuple[str, int]] = []
        if tab is Tab.COMMANDS:
            # panels replace the page body; paging still counts sudo events
            recent = self.recent_commands()
            frequency = self.most_used_commands()
        else:
            page = [tuple(self.highlighter.tokenize(text)) for text in state.slice(items)]

        return RenderModel(
            lines=tuple(page),
            page_index=state.page_index,
            num_pages=state.num_pages,
            recent=tuple(recent),
            frequency=tuple(frequency),
            **base,
        )
