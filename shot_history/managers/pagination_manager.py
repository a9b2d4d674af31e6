"""Pagination state for the incrementally loaded shot list."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from shot_history.core.models import LIMIT, HistoryItem
from shot_history.utils.validation import (
    ensure_valid_count,
    is_valid_cursor,
    remaining_count,
)


class Phase(Enum):
    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    LOADING_MORE = "loading_more"
    DELETING = "deleting"


@dataclass
class PageState:
    items: Tuple[HistoryItem, ...] = ()
    cursor: int = 0
    total: int = 0
    has_more: bool = False
    phase: Phase = Phase.LOADING_INITIAL
    generation: int = 0

    @property
    def loading_initial(self) -> bool:
        return self.phase is Phase.LOADING_INITIAL

    @property
    def loading_incremental(self) -> bool:
        return self.phase in (Phase.LOADING_MORE, Phase.DELETING)


@dataclass(frozen=True)
class HistoryView:
    """Read-only snapshot handed to the presentation layer."""

    items: Tuple[HistoryItem, ...]
    total: int
    has_more: bool
    loading_initial: bool
    loading_incremental: bool

    @property
    def remaining(self) -> int:
        return remaining_count(self.total, len(self.items))

    @property
    def show_load_more(self) -> bool:
        return self.has_more and ensure_valid_count(self.total) > len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.loading_initial

    @property
    def status_label(self) -> str:
        return f"Showing {len(self.items)} of {ensure_valid_count(self.total)} shots"


class PaginationManager:
    """Owns the PageState and the only transitions allowed on it.

    Every fetch or delete runs under a generation number. Starting a reset or
    a delete bumps the generation, so results from earlier fetches that are
    still in flight are recognised as stale and dropped.
    """

    def __init__(self, page_size: int = LIMIT):
        if page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {page_size}")
        self.page_size = page_size
        self.state = PageState()

    def view(self) -> HistoryView:
        s = self.state
        return HistoryView(
            items=s.items,
            total=s.total,
            has_more=s.has_more,
            loading_initial=s.loading_initial,
            loading_incremental=s.loading_incremental,
        )

    def is_current(self, generation: int) -> bool:
        return generation == self.state.generation

    def can_continue(self) -> bool:
        """Nothing in flight and the machine reported more records."""
        return self.state.phase is Phase.IDLE and self.state.has_more

    def can_load_more(self) -> bool:
        return self.can_continue() and is_valid_cursor(self.state.cursor)

    def start_reset(self) -> int:
        """Enter LOADING_INITIAL and clear the list right away."""
        s = self.state
        s.generation += 1
        s.phase = Phase.LOADING_INITIAL
        s.items = ()
        s.cursor = 0
        return s.generation

    def start_loading_more(self) -> int:
        s = self.state
        if s.phase is not Phase.IDLE:
            raise RuntimeError(f"Cannot load more while {s.phase.value}")
        s.phase = Phase.LOADING_MORE
        return s.generation

    def can_delete(self) -> bool:
        """A delete may only supersede an idle list or a load-more fetch.

        A reset in flight has already cleared the list, and another delete
        will reload it, so both block new deletes.
        """
        return self.state.phase in (Phase.IDLE, Phase.LOADING_MORE)

    def start_delete(self) -> int:
        s = self.state
        if not self.can_delete():
            raise RuntimeError(f"Cannot delete while {s.phase.value}")
        s.generation += 1
        s.phase = Phase.DELETING
        return s.generation

    def apply_page(
        self,
        generation: int,
        offset: int,
        items: Iterable[HistoryItem],
        total: int,
        has_more: bool,
        reset: bool,
    ) -> bool:
        """Merge a fetched page. Returns False if the fetch was superseded."""
        if not self.is_current(generation):
            return False
        s = self.state
        items = tuple(items)
        s.items = items if reset else s.items + items
        s.total = total
        s.has_more = has_more
        s.cursor = offset + self.page_size
        return True

    def apply_failure(self, generation: int, reset: bool) -> bool:
        if not self.is_current(generation):
            return False
        s = self.state
        s.total = 0
        s.has_more = False
        if reset:
            s.items = ()
            s.cursor = 0
        return True

    def finish(self, generation: int) -> bool:
        """Release the busy phase held by ``generation``."""
        if not self.is_current(generation):
            return False
        self.state.phase = Phase.IDLE
        return True
