"""Shot history requests on top of a request/response channel."""

import logging

from shot_history.core.exceptions import RecordNotFoundError, RequestError
from shot_history.core.models import RawPage
from shot_history.core.protocols import RequestChannel

logger = logging.getLogger("ShotHistory.HistoryApi")


class HistoryApiService:
    """Issues ``req:history:*`` requests and checks the responses."""

    def __init__(self, channel: RequestChannel):
        self.channel = channel

    async def _call(self, request_type: str, **fields) -> dict:
        payload = {"tp": request_type, **fields}
        response = await self.channel.request(payload)
        if not isinstance(response, dict):
            raise RequestError(request_type, f"unexpected response {response!r}")
        error = response.get("error")
        if error:
            if str(error).lower() == "not found":
                raise RecordNotFoundError(request_type, str(error))
            raise RequestError(request_type, str(error))
        return response

    async def list_page(self, offset: int, limit: int) -> RawPage:
        """Fetch one page of raw records.

        Args:
            offset: Number of records to skip, must be >= 0
            limit: Page size, must be > 0

        Returns:
            Sanitized RawPage
        """
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if limit <= 0:
            raise ValueError(f"limit must be > 0, got {limit}")

        response = await self._call("req:history:list", offset=offset, limit=limit)
        page = RawPage.from_response(response)
        logger.debug(
            f"Page at offset {offset}: {len(page.history)} records "
            f"(total={page.total}, has_more={page.has_more})"
        )
        return page

    async def delete_record(self, item_id: str) -> None:
        await self._call("req:history:delete", id=item_id)
        logger.info(f"Deleted shot {item_id}")

    async def get_record(self, item_id: str) -> dict:
        """Fetch a single raw record by id.

        Raises:
            RecordNotFoundError: if the machine has no record with that id
        """
        response = await self._call("req:history:get", id=item_id)
        return {"id": item_id, "history": response.get("history")}
