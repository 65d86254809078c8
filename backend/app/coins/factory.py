"""Factories for the coin cache collaborators and service."""

from __future__ import annotations

import logging

from .builder import SnapshotBuilder
from .cache import InMemoryCacheStore
from .config import CoinSettings
from .interface import CacheStore, UpstreamSource
from .scheduler import RefreshScheduler
from .service import CoinService

logger = logging.getLogger(__name__)


def create_upstream_source(settings: CoinSettings) -> UpstreamSource:
    """Create the upstream source selected by MARKET_DATA_SOURCE.

    - 'simulator' → SimulatorSource (synthetic catalog, no network)
    - anything else → CoinGeckoSource (real market data)
    """
    if settings.data_source.lower() == "simulator":
        from .simulator import SimulatorSource

        logger.info("Upstream source: simulator")
        return SimulatorSource(catalog_size=settings.page_count * settings.page_size)

    from .coingecko_client import CoinGeckoSource

    logger.info("Upstream source: CoinGecko (%s)", settings.upstream_url)
    return CoinGeckoSource(
        url=settings.upstream_url,
        vs_currency=settings.vs_currency,
        order=settings.order,
        timeout=settings.upstream_timeout,
        api_key=settings.upstream_api_key,
    )


def create_cache_store(settings: CoinSettings) -> CacheStore:
    """Create the cache store: Redis when REDIS_URL is set, in-memory otherwise."""
    if settings.redis_url:
        from .redis_store import RedisCacheStore

        logger.info("Cache store: Redis")
        return RedisCacheStore(url=settings.redis_url, password=settings.redis_password)

    logger.info("Cache store: in-memory (REDIS_URL not set)")
    return InMemoryCacheStore()


def create_coin_service(
    settings: CoinSettings,
    upstream: UpstreamSource | None = None,
    cache: CacheStore | None = None,
    schedule: bool = True,
) -> CoinService:
    """Wire builder, scheduler and service together.

    `upstream` and `cache` override the environment-selected collaborators.
    Returns an unstarted service. Caller must await service.start().
    """
    if upstream is None:
        upstream = create_upstream_source(settings)
    if cache is None:
        cache = create_cache_store(settings)
    builder = SnapshotBuilder(
        upstream=upstream,
        cache=cache,
        cache_key=settings.cache_key,
        ttl_seconds=settings.cache_ttl,
        page_count=settings.page_count,
        page_size=settings.page_size,
        coalesce=settings.coalesce_builds,
    )
    scheduler = RefreshScheduler(builder, interval=settings.refresh_interval) if schedule else None
    return CoinService(
        upstream=upstream,
        cache=cache,
        builder=builder,
        scheduler=scheduler,
        cache_key=settings.cache_key,
        default_page=settings.default_page,
        default_item=settings.default_item,
    )
