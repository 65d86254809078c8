"""Snapshot builder: sweeps upstream pages into one cached snapshot."""

from __future__ import annotations

import asyncio
import logging
import time

from .errors import CacheError, UpstreamError
from .interface import CacheStore, Record, UpstreamSource
from .models import serialize_snapshot

logger = logging.getLogger(__name__)


def _retrieve_exception(task: asyncio.Task) -> None:
    """Mark a shared build's failure as seen even if every waiter was cancelled."""
    if not task.cancelled():
        task.exception()


class SnapshotBuilder:
    """Fetches `page_count` pages sequentially and caches the concatenation.

    Exactly one cache write happens per successful build and none on failure,
    so a failed sweep leaves the previous entry readable until it expires.

    With `coalesce=True` a build requested while another is running waits for
    the in-flight build instead of sweeping the upstream again. With
    `coalesce=False` concurrent builds race and the last write wins.
    """

    def __init__(
        self,
        upstream: UpstreamSource,
        cache: CacheStore,
        cache_key: str,
        ttl_seconds: int,
        page_count: int = 4,
        page_size: int = 250,
        coalesce: bool = True,
    ) -> None:
        self._upstream = upstream
        self._cache = cache
        self._key = cache_key
        self._ttl = ttl_seconds
        self._page_count = page_count
        self._page_size = page_size
        self._coalesce = coalesce
        self._inflight: asyncio.Task | None = None
        self.build_count: int = 0  # Successful builds only
        self.last_built_at: float | None = None

    @property
    def in_progress(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def build(self) -> list[Record]:
        """Build and cache a fresh snapshot. Returns the records.

        Raises UpstreamError if any page fetch fails; nothing is written then.
        """
        if not self._coalesce:
            return await self._build_once()

        if self.in_progress:
            logger.debug("Snapshot build already running, joining it")
        else:
            self._inflight = asyncio.create_task(self._build_once(), name="snapshot-build")
            self._inflight.add_done_callback(_retrieve_exception)
        # A cancelled waiter must not abort the shared build
        return await asyncio.shield(self._inflight)

    async def cancel(self) -> None:
        """Cancel a coalesced build that is still running. Safe to call at any time."""
        if not self.in_progress:
            return
        self._inflight.cancel()
        try:
            await self._inflight
        except asyncio.CancelledError:
            pass

    async def _build_once(self) -> list[Record]:
        started = time.monotonic()
        records: list[Record] = []
        for page_index in range(1, self._page_count + 1):
            try:
                page = await self._upstream.fetch_page(page_index, self._page_size)
            except UpstreamError as e:
                logger.error("Snapshot build aborted at page %d/%d: %s", page_index, self._page_count, e)
                raise
            except Exception as e:
                logger.error("Snapshot build aborted at page %d/%d: %r", page_index, self._page_count, e)
                raise UpstreamError(page_index, type(e).__name__) from e
            records.extend(page)

        try:
            await self._cache.set(self._key, serialize_snapshot(records), self._ttl)
        except CacheError as e:
            # The snapshot is still served to the caller that triggered the build
            logger.error("Snapshot built but not cached: %s", e)

        self.build_count += 1
        self.last_built_at = time.time()
        logger.info(
            "Snapshot built: %d records from %d pages in %.2fs",
            len(records),
            self._page_count,
            time.monotonic() - started,
        )
        return records
