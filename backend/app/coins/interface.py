"""Abstract collaborators of the coin cache: the upstream API and the cache store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class UpstreamSource(ABC):
    """Contract for paged market-data providers.

    The core never looks inside a Record; it only concatenates pages in fetch
    order and counts them.

    Lifecycle:
        source = create_upstream_source(settings)
        records = await source.fetch_page(1, 250)
        # ... app shutting down ...
        await source.close()
    """

    @abstractmethod
    async def fetch_page(self, page_index: int, page_size: int) -> list[Record]:
        """Fetch one page (1-based) of at most `page_size` records.

        Raises UpstreamError on any network, HTTP, timeout or body failure.
        """

    async def close(self) -> None:
        """Release any held resources. Safe to call multiple times."""


class CacheStore(ABC):
    """Contract for a key-value store with per-key TTL.

    At most one live entry exists per key. `set` replaces the prior entry and
    resets its TTL.
    """

    @abstractmethod
    async def get(self, key: str) -> str | bytes | None:
        """Return the live value for `key`, or None if absent or expired.

        Stores may return undecoded bytes.

        Raises CacheError if the store cannot be reached.
        """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store `value` under `key`, expiring after `ttl_seconds`.

        Raises CacheError if the store cannot be reached.
        """

    async def close(self) -> None:
        """Release any held connections. Safe to call multiple times."""
