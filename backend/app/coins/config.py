"""Runtime settings for the coin cache, read from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

COINS_CACHE_KEY = "coins:snapshot"
CACHE_EXPIRATION = 600  # seconds
COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class CoinSettings:
    """Every tunable of the coin cache. Defaults match production behaviour."""

    data_source: str = "coingecko"
    upstream_url: str = COINGECKO_MARKETS_URL
    upstream_api_key: str | None = None
    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    upstream_timeout: float = 5.0
    page_count: int = 4
    page_size: int = 250
    cache_key: str = COINS_CACHE_KEY
    cache_ttl: int = CACHE_EXPIRATION
    refresh_interval: float = float(CACHE_EXPIRATION)
    coalesce_builds: bool = True
    redis_url: str | None = None
    redis_password: str | None = None
    default_page: int = 1
    default_item: int = 10
    port: int = 5000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CoinSettings:
        """Build settings from `environ` (defaults to os.environ).

        Malformed numeric values are logged and replaced by their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        cache_ttl = _int(env, "CACHE_EXPIRATION", defaults.cache_ttl)
        return cls(
            data_source=_str(env, "MARKET_DATA_SOURCE") or defaults.data_source,
            upstream_url=_str(env, "COINGECKO_URL") or defaults.upstream_url,
            upstream_api_key=_str(env, "COINGECKO_API_KEY"),
            vs_currency=_str(env, "COINS_VS_CURRENCY") or defaults.vs_currency,
            order=_str(env, "COINS_ORDER") or defaults.order,
            upstream_timeout=_float(env, "UPSTREAM_TIMEOUT", defaults.upstream_timeout),
            page_count=_int(env, "COINS_PAGE_COUNT", defaults.page_count),
            page_size=_int(env, "COINS_PAGE_SIZE", defaults.page_size),
            cache_ttl=cache_ttl,
            # The refresh period follows the TTL unless set explicitly
            refresh_interval=_float(env, "REFRESH_INTERVAL", float(cache_ttl)),
            coalesce_builds=_bool(env, "COINS_COALESCE_BUILDS", defaults.coalesce_builds),
            redis_url=_str(env, "REDIS_URL"),
            redis_password=_str(env, "REDIS_PASSWORD"),
            port=_int(env, "PORT", defaults.port),
        )


def _str(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(name, "").strip()
    return value or None


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _str(env, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring non-positive %s=%r, using %d", name, raw, default)
        return default
    return value


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _str(env, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %.1f", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %.1f", name, raw, default)
        return default
    return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _str(env, name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    logger.warning("Ignoring unrecognised %s=%r, using %s", name, raw, default)
    return default
