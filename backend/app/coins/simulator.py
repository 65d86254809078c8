"""Synthetic coin catalog for running without the real market-data API."""

from __future__ import annotations

import asyncio
import logging

import numpy as np

from .errors import UpstreamError
from .interface import Record, UpstreamSource
from .seed_coins import (
    CHANGE_24H_SIGMA,
    MARKET_CAP_LOG_MEAN,
    MARKET_CAP_LOG_SIGMA,
    PRICE_LOG_MEAN,
    PRICE_LOG_SIGMA,
    SEED_COINS,
    VOLUME_RATIO_HIGH,
    VOLUME_RATIO_LOW,
)

logger = logging.getLogger(__name__)


def generate_catalog(size: int, seed: int = 42) -> list[Record]:
    """Generate `size` coin records ordered by market cap, descending.

    Records mimic the shape of a CoinGecko markets listing. The same seed
    always yields the same catalog.
    """
    rng = np.random.default_rng(seed)

    market_caps = rng.lognormal(MARKET_CAP_LOG_MEAN, MARKET_CAP_LOG_SIGMA, size)
    prices = rng.lognormal(PRICE_LOG_MEAN, PRICE_LOG_SIGMA, size)
    volume_ratios = rng.uniform(VOLUME_RATIO_LOW, VOLUME_RATIO_HIGH, size)
    changes = rng.normal(0.0, CHANGE_24H_SIGMA, size)

    # Seed coins take the largest caps so they head the listing
    market_caps = np.sort(market_caps)[::-1]
    for i, (_, _, _, price) in enumerate(SEED_COINS[:size]):
        prices[i] = price

    catalog: list[Record] = []
    for i in range(size):
        if i < len(SEED_COINS):
            coin_id, symbol, name, _ = SEED_COINS[i]
        else:
            coin_id, symbol, name = f"simcoin-{i + 1}", f"sim{i + 1}", f"SimCoin {i + 1}"
        catalog.append(
            {
                "id": coin_id,
                "symbol": symbol,
                "name": name,
                "current_price": round(float(prices[i]), 6),
                "market_cap": int(market_caps[i]),
                "market_cap_rank": i + 1,
                "total_volume": int(market_caps[i] * volume_ratios[i]),
                "price_change_percentage_24h": round(float(changes[i]), 4),
            }
        )
    return catalog


class SimulatorSource(UpstreamSource):
    """UpstreamSource serving pages out of a fixed synthetic catalog.

    `fail_pages` makes fetches of those 1-based page indexes raise
    UpstreamError, which is handy for exercising stale-but-available behaviour.
    """

    def __init__(
        self,
        catalog_size: int = 1000,
        seed: int = 42,
        latency: float = 0.0,
        fail_pages: set[int] | None = None,
    ) -> None:
        self._catalog = generate_catalog(catalog_size, seed)
        self._latency = latency
        self._fail_pages = set(fail_pages or ())
        self.calls: int = 0

    async def fetch_page(self, page_index: int, page_size: int) -> list[Record]:
        self.calls += 1
        if self._latency:
            await asyncio.sleep(self._latency)
        if page_index in self._fail_pages:
            raise UpstreamError(page_index, "simulated outage")
        start = (page_index - 1) * page_size
        page = [dict(record) for record in self._catalog[start : start + page_size]]
        logger.debug("Simulator page %d: %d records", page_index, len(page))
        return page

    def fail_on(self, *page_indexes: int) -> None:
        """Make the given pages fail from now on."""
        self._fail_pages.update(page_indexes)

    def recover(self) -> None:
        """Clear all simulated failures."""
        self._fail_pages.clear()

    def __len__(self) -> int:
        return len(self._catalog)
