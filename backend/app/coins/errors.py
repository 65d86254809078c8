"""Error taxonomy for the coin snapshot cache."""

from __future__ import annotations


class CoinCacheError(Exception):
    """Base class for all errors raised by the coin cache core."""


class UpstreamError(CoinCacheError):
    """A page fetch from the market-data API failed (network, HTTP, timeout, body)."""

    def __init__(self, page_index: int, detail: str = "") -> None:
        self.page_index = page_index
        self.detail = detail
        self.message = f"Upstream fetch failed for page {page_index}: {detail}"
        super().__init__(self.message)


class CacheError(CoinCacheError):
    """Reading from or writing to the cache store failed."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        self.message = f"Cache {operation} failed: {detail}"
        super().__init__(self.message)


class DeserializationError(CoinCacheError):
    """A cached payload could not be decoded into a snapshot."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        self.message = f"Could not decode cached snapshot: {detail}"
        super().__init__(self.message)
