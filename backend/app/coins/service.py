"""Coin service: the cache-backed refresh-and-paginate core."""

from __future__ import annotations

import logging
from typing import Any

from .builder import SnapshotBuilder
from .errors import CacheError
from .interface import CacheStore, UpstreamSource
from .models import DecodedSnapshot, PageRequest, PageResult, deserialize_snapshot
from .pagination import paginate
from .scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


class CoinService:
    """Serves pages of the cached coin snapshot, rebuilding it on a miss.

    The "read cache, else build" sequence is not atomic: concurrent misses may
    each trigger a build unless the builder coalesces them.

    Lifecycle:
        service = create_coin_service(settings)
        await service.start()         # warm-up build + periodic refresh
        page = await service.get_page(1, 10)
        await service.stop()
    """

    def __init__(
        self,
        upstream: UpstreamSource,
        cache: CacheStore,
        builder: SnapshotBuilder,
        scheduler: RefreshScheduler | None,
        cache_key: str,
        default_page: int = 1,
        default_item: int = 10,
    ) -> None:
        self._upstream = upstream
        self._cache = cache
        self._builder = builder
        self._scheduler = scheduler
        self._key = cache_key
        self._default_page = default_page
        self._default_item = default_item

    @property
    def builder(self) -> SnapshotBuilder:
        return self._builder

    @property
    def scheduler(self) -> RefreshScheduler | None:
        return self._scheduler

    async def start(self) -> None:
        if self._scheduler is not None:
            await self._scheduler.start()

    async def stop(self) -> None:
        if self._scheduler is not None:
            await self._scheduler.stop()
        await self._upstream.close()
        await self._cache.close()

    async def ensure_fresh(self) -> tuple[DecodedSnapshot, str]:
        """Return the current snapshot and where it came from ('cache' or 'upstream').

        A cache read failure counts as a miss. On a miss the snapshot is built
        synchronously; UpstreamError from that build propagates.
        """
        try:
            payload = await self._cache.get(self._key)
        except CacheError as e:
            logger.warning("Cache read failed, treating as miss: %s", e)
            payload = None

        if payload is not None:
            snapshot = deserialize_snapshot(payload)
            if snapshot.degraded:
                logger.warning("Cached snapshot is unreadable, serving empty: %s", snapshot.reason)
            else:
                logger.debug("Serving snapshot from cache (%d records)", len(snapshot))
            return snapshot, "cache"

        logger.info("Snapshot cache miss, fetching from upstream")
        records = await self._builder.build()
        return DecodedSnapshot(records=tuple(records)), "upstream"

    async def get_page(self, page: Any = None, per_page: Any = None) -> PageResult:
        """Return one page of the snapshot. Raw values are normalized first."""
        request = PageRequest.from_query(page, per_page, self._default_page, self._default_item)
        snapshot, source = await self.ensure_fresh()
        return paginate(snapshot.records, request, source=source, degraded=snapshot.degraded)

    async def refresh(self) -> int:
        """Force a rebuild regardless of cache state. Returns the record count."""
        records = await self._builder.build()
        return len(records)
