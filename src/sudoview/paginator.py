"""
sudoview Paginator
Page arithmetic and tab/page navigation for the log viewer.

Pages are sized to the number of visible display rows. All pages hold
exactly page_capacity items except the last, which holds the remainder.
Switching tabs jumps to the last page so the newest entries are shown.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence, TypeVar

from sudoview.errors import ConfigurationInvalid


T = TypeVar("T")


class Tab(Enum):
    """Viewer tabs, in display order."""
    ALL = "ALL"
    SUDO = "SUDO"
    COMMANDS = "COMMANDS"

    @property
    def title(self) -> str:
        return self.value


TABS: tuple[Tab, ...] = tuple(Tab)


def page_count(total_items: int, page_capacity: int) -> int:
    """
    Number of pages needed to show total_items.

    Raises:
        ConfigurationInvalid: page_capacity is zero or negative
    """
    if page_capacity <= 0:
        raise ConfigurationInvalid(f"Page capacity must be positive, got {page_capacity}")
    if total_items <= 0:
        return 0
    return -(-total_items // page_capacity)


@dataclass(frozen=True)
class PaginationState:
    """Snapshot of tab and page position for one redraw."""
    tab_index: int = 0
    page_index: int = 0
    page_capacity: int = 0
    total_items: int = 0
    num_pages: int = 0

    @property
    def is_last_page(self) -> bool:
        return self.page_index == self.num_pages - 1

    def bounds(self) -> tuple[int, int]:
        """Half-open [first, last) item range of the current page."""
        if self.num_pages == 0:
            return 0, 0
        first = self.page_index * self.page_capacity
        if self.is_last_page:
            return first, self.total_items
        return first, first + self.page_capacity

    def slice(self, items: Sequence[T]) -> Sequence[T]:
        first, last = self.bounds()
        return items[first:last]


class Paginator:
    """
    Owns the pagination state of a viewer session.

    Navigation methods never fail: moving past either end of the page range
    does nothing, and tab switching wraps in both directions.
    """

    def __init__(self, tabs: Sequence[Tab] = TABS):
        self.tabs = tuple(tabs)
        self.state = PaginationState()
        # first redraw starts on the newest page
        self.reset_pending = True

    @property
    def tab(self) -> Tab:
        return self.tabs[self.state.tab_index]

    def recompute(
        self,
        total_items: int,
        page_capacity: int,
        tab_changed: bool = False,
    ) -> PaginationState:
        """
        Refresh page geometry for the current display height.

        The page index is kept across calls (clamped to the new range) unless
        the tab changed, in which case it moves to the last page.

        Raises:
            ConfigurationInvalid: page_capacity is zero or negative
        """
        num_pages = page_count(total_items, page_capacity)

        if tab_changed or self.reset_pending:
            page_index = num_pages - 1
            self.reset_pending = False
        else:
            page_index = self.state.page_index

        page_index = max(0, min(page_index, num_pages - 1))

        self.state = replace(
            self.state,
            page_index=page_index,
            page_capacity=page_capacity,
            total_items=total_items,
            num_pages=num_pages,
        )
        return self.state

    def advance_page(self, step: int) -> PaginationState:
        """Move one page back (-1) or forward (+1), stopping at the ends."""
        if step not in (-1, 1):
            raise ValueError(f"Page step must be -1 or +1, got {step}")

        target = self.state.page_index + step
        if 0 <= target < self.state.num_pages:
            self.state = replace(self.state, page_index=target)
        return self.state

    def switch_tab(self, step: int) -> PaginationState:
        """Cycle to the next (+1) or previous (-1) tab."""
        if step not in (-1, 1):
            raise ValueError(f"Tab step must be -1 or +1, got {step}")

        tab_index = (self.state.tab_index + step) % len(self.tabs)
        self.state = replace(self.state, tab_index=tab_index)
        self.reset_pending = True
        return self.state

    def jump_to(self, page_index: int) -> PaginationState:
        """Go directly to a page, clamped to the valid range."""
        if self.state.num_pages == 0:
            return self.state
        page_index = max(0, min(page_index, self.state.num_pages - 1))
        self.state = replace(self.state, page_index=page_index)
        return self.state
