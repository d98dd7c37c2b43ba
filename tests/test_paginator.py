"""
Tests for sudoview Paginator Module
"""

import math

import pytest

from sudoview.errors import ConfigurationInvalid
from sudoview.paginator import TABS, PaginationState, Paginator, Tab, page_count


class TestPageCount:
    """Tests for page_count."""

    @pytest.mark.parametrize("capacity", [1, 2, 3, 7, 10])
    def test_ceiling_division(self, capacity):
        for total in range(0, 50):
            assert page_count(total, capacity) == math.ceil(total / capacity)

    def test_no_items(self):
        assert page_count(0, 10) == 0

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ConfigurationInvalid):
            page_count(5, capacity)


class TestPaginationState:
    """Tests for page bounds."""

    def test_full_page(self):
        state = PaginationState(page_index=0, page_capacity=3, total_items=7, num_pages=3)
        assert state.bounds() == (0, 3)

    def test_short_last_page(self):
        state = PaginationState(page_index=2, page_capacity=3, total_items=7, num_pages=3)
        assert state.bounds() == (6, 7)

    def test_last_item_included(self):
        """The final page ends at total_items, not total_items - 1."""
        items = list(range(7))
        state = PaginationState(page_index=2, page_capacity=3, total_items=7, num_pages=3)
        assert state.slice(items) == [6]

    def test_exact_last_page(self):
        state = PaginationState(page_index=1, page_capacity=3, total_items=6, num_pages=2)
        assert state.bounds() == (3, 6)

    def test_no_pages(self):
        assert PaginationState().bounds() == (0, 0)


class TestPaginator:
    """Tests for Paginator navigation."""

    def test_first_recompute_starts_on_last_page(self):
        paginator = Paginator()
        state = paginator.recompute(25, 10)

        assert state.num_pages == 3
        assert state.page_index == 2

    def test_pages_reconstruct_sequence(self):
        """All pages together cover every item exactly once."""
        for total in range(0, 30):
            for capacity in range(1, 8):
                items = list(range(total))
                paginator = Paginator()
                state = paginator.recompute(total, capacity)

                collected = []
                for index in range(state.num_pages):
                    collected.extend(paginator.jump_to(index).slice(items))

                assert collected == items

                for index in range(state.num_pages - 1):
                    assert len(paginator.jump_to(index).slice(items)) == capacity

    def test_page_index_preserved(self):
        paginator = Paginator()
        paginator.recompute(50, 10)
        paginator.advance_page(-1)
        paginator.advance_page(-1)

        assert paginator.recompute(50, 10).page_index == 2

    def test_page_index_clamped_when_pages_shrink(self):
        """A taller display means fewer pages; the index stays in range."""
        paginator = Paginator()
        paginator.recompute(50, 5)
        state = paginator.recompute(50, 25)

        assert state.num_pages == 2
        assert state.page_index == 1

    def test_advance_idempotent_at_first_page(self):
        paginator = Paginator()
        paginator.recompute(30, 10)
        paginator.jump_to(0)

        for _ in range(3):
            state = paginator.advance_page(-1)
        assert state.page_index == 0

    def test_advance_idempotent_at_last_page(self):
        paginator = Paginator()
        paginator.recompute(30, 10)

        for _ in range(3):
            state = paginator.advance_page(1)
        assert state.page_index == 2

    def test_advance_without_pages(self):
        paginator = Paginator()
        paginator.recompute(0, 10)

        assert paginator.advance_page(1).page_index == 0
        assert paginator.advance_page(-1).page_index == 0

    def test_advance_rejects_bad_step(self):
        paginator = Paginator()
        with pytest.raises(ValueError):
            paginator.advance_page(2)

    @pytest.mark.parametrize("step", [1, -1])
    def test_switch_tab_full_cycle(self, step):
        """Switching len(tabs) times returns to the starting tab."""
        paginator = Paginator()
        for start in range(len(TABS)):
            paginator.state = PaginationState(tab_index=start)
            for _ in range(len(TABS)):
                paginator.switch_tab(step)
            assert paginator.state.tab_index == start

    def test_switch_tab_wraps(self):
        paginator = Paginator()
        assert paginator.switch_tab(-1).tab_index == len(TABS) - 1
        assert paginator.tab is Tab.COMMANDS
        assert paginator.switch_tab(1).tab_index == 0
        assert paginator.tab is Tab.ALL

    def test_switch_tab_jumps_to_last_page(self):
        paginator = Paginator()
        paginator.recompute(100, 10)
        paginator.jump_to(0)
        paginator.switch_tab(1)

        assert paginator.recompute(40, 10).page_index == 3

    def test_tab_changed_flag(self):
        paginator = Paginator()
        paginator.recompute(100, 10)
        paginator.jump_to(4)

        assert paginator.recompute(100, 10, tab_changed=True).page_index == 9

    def test_invalid_capacity_keeps_pending_reset(self):
        """A too-small frame does not consume the jump to the last page."""
        paginator = Paginator()
        with pytest.raises(ConfigurationInvalid):
            paginator.recompute(30, 0)

        assert paginator.recompute(30, 10).page_index == 2

    def test_jump_to_clamps(self):
        paginator = Paginator()
        paginator.recompute(30, 10)

        assert paginator.jump_to(99).page_index == 2
        assert paginator.jump_to(-5).page_index == 0
