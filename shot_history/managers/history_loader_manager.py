"""History Loader Manager - keeps the local shot list in sync with the machine."""

import logging
from typing import Any, Callable, List, Optional

from shot_history.core.models import HistoryItem
from shot_history.core.protocols import ErrorSink, HistoryApiPort, RecordParser
from shot_history.managers.pagination_manager import HistoryView, PaginationManager
from shot_history.utils.history_parser import parse_history_data
from shot_history.utils.validation import (
    ensure_sequence,
    ensure_valid_bool,
    ensure_valid_count,
    ensure_valid_cursor,
)

logger = logging.getLogger("ShotHistory.HistoryLoaderManager")


def map_records(raw_records: Any, parser: RecordParser) -> List[HistoryItem]:
    """Parse raw records, dropping any the parser rejects.

    A single bad record never fails the page.
    """
    items = []
    for raw in ensure_sequence(raw_records):
        try:
            item = parser(raw)
        except Exception as e:
            logger.debug(f"Parser raised on record, dropping it: {e}")
            continue
        if item is not None:
            items.append(item)
    return items


class HistoryLoaderManager:
    """Loads, pages and deletes shot history records."""

    def __init__(
        self,
        api: HistoryApiPort,
        pagination: PaginationManager,
        parser: RecordParser = parse_history_data,
        on_change: Optional[Callable[[HistoryView], None]] = None,
        on_error: Optional[ErrorSink] = None,
    ):
        """Initialize HistoryLoaderManager.

        Args:
            api: Service issuing list/delete requests
            pagination: Owner of the page state
            parser: Turns a raw record into a HistoryItem or None
            on_change: Called with a fresh HistoryView after every state change
            on_error: Observability sink for failed fetches and deletes
        """
        self.api = api
        self.pagination = pagination
        self.parser = parser
        self.on_change = on_change
        self.on_error = on_error

    @property
    def items(self):
        return self.pagination.state.items

    @property
    def total(self) -> int:
        return self.pagination.state.total

    @property
    def has_more(self) -> bool:
        return self.pagination.state.has_more

    @property
    def loading_initial(self) -> bool:
        return self.pagination.state.loading_initial

    @property
    def loading_incremental(self) -> bool:
        return self.pagination.state.loading_incremental

    def view(self) -> HistoryView:
        return self.pagination.view()

    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self.pagination.view())
        except Exception as e:
            logger.error(f"State listener failed: {e}")

    def _report(self, message: str, error: Exception) -> None:
        logger.error(f"{message}: {error}")
        if self.on_error is None:
            return
        try:
            self.on_error(message, error)
        except Exception as e:
            logger.error(f"Error sink failed: {e}")

    async def load_history(self, reset: bool = False) -> bool:
        """Fetch one page and merge it into the list.

        Args:
            reset: Start over from offset 0 and replace the list instead of
                appending to it

        Returns:
            True if the page was applied, False if the call was refused,
            failed, or was superseded while in flight
        """
        pagination = self.pagination
        if reset:
            offset = 0
            generation = pagination.start_reset()
        else:
            if not pagination.can_continue():
                logger.debug("Continue refused: busy or nothing left to load")
                return False
            # Read at call time, never from a value captured earlier.
            offset = ensure_valid_cursor(pagination.state.cursor)
            generation = pagination.start_loading_more()
        self._notify()

        limit = pagination.page_size
        try:
            page = await self.api.list_page(offset=offset, limit=limit)
            new_items = map_records(page.history, self.parser)
            total = ensure_valid_count(page.total)
            has_more = ensure_valid_bool(page.has_more)
            applied = pagination.apply_page(
                generation,
                offset=offset,
                items=new_items,
                total=total,
                has_more=has_more,
                reset=reset,
            )
            if applied:
                logger.info(
                    f"History loaded: offset={offset} limit={limit} "
                    f"total={total} has_more={has_more} count={len(new_items)}"
                )
            else:
                logger.debug(f"Discarding superseded page at offset {offset}")
            return applied
        except Exception as e:
            if pagination.apply_failure(generation, reset=reset):
                self._report("Failed to load history", e)
            else:
                logger.debug(f"Superseded fetch at offset {offset} failed: {e}")
            return False
        finally:
            pagination.finish(generation)
            self._notify()

    async def load_more(self) -> bool:
        """Append the next page, unless busy or the machine has nothing more."""
        if self.loading_incremental or not self.pagination.can_load_more():
            return False
        return await self.load_history(reset=False)

    async def on_delete(self, item_id: str) -> bool:
        """Delete a shot on the machine, then reload the list from the start.

        If the delete fails the list is left as it was and no reload happens.
        Refused while the list is being reloaded or another delete runs.

        Returns:
            True if the delete succeeded and the reload was applied
        """
        if not self.pagination.can_delete():
            logger.debug(f"Delete of {item_id} refused: list is reloading")
            return False
        generation = self.pagination.start_delete()
        self._notify()
        try:
            await self.api.delete_record(item_id)
        except Exception as e:
            self._report(f"Failed to delete shot {item_id}", e)
            self.pagination.finish(generation)
            self._notify()
            return False
        return await self.load_history(reset=True)

    async def get_item(self, item_id: str) -> Optional[HistoryItem]:
        """Fetch and parse one shot by id, outside the paged list."""
        try:
            raw = await self.api.get_record(item_id)
        except Exception as e:
            self._report(f"Failed to load shot {item_id}", e)
            return None
        items = map_records([raw], self.parser)
        return items[0] if items else None
