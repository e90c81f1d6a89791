# smartlist/services/compare_fetcher.py

"""Last-request-wins fetching of comparison rows."""

import asyncio
import logging

from smartlist.models.comparison import ComparisonRow
from smartlist.models.selection import Selection
from smartlist.services.pricing_client import PricingApiError, ProductsApiClient

logger = logging.getLogger("smartlist.fetcher")


class CompareFetcher:
    """Fetch prices for a selection, discarding superseded responses.

    Each call to :meth:`request` cancels the previous in-flight fetch.
    A call whose fetch was superseded returns ``None``, so callers only
    ever apply data for the newest selection.
    """

    def __init__(self, client: ProductsApiClient) -> None:
        self._client = client
        self._task: asyncio.Task[list[ComparisonRow]] | None = None
        self._generation = 0

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def request(
        self, selection: Selection
    ) -> list[ComparisonRow] | None:
        """Fetch rows for *selection*; ``None`` if a newer request won."""
        self._generation += 1
        generation = self._generation

        if self._task is not None and not self._task.done():
            logger.debug("Cancelling stale compare request")
            self._task.cancel()

        keys = selection.keys()
        if not keys:
            self._task = None
            return []

        task = asyncio.create_task(
            asyncio.to_thread(self._client.compare, keys)
        )
        self._task = task
        try:
            rows = await task
        except asyncio.CancelledError:
            if task.cancelled() and self._is_stale(generation):
                return None
            raise
        except PricingApiError:
            if self._is_stale(generation):
                return None
            raise

        if self._is_stale(generation):
            logger.debug("Discarding stale compare response")
            return None
        return rows
