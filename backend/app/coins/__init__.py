"""Coin snapshot cache for CoinCache.

Public API:
    CoinSettings        - Environment-driven settings
    CoinService         - get_page / ensure_fresh core
    SnapshotBuilder     - Upstream sweep into one cached snapshot
    RefreshScheduler    - Periodic background rebuild
    PageRequest         - Normalized page/item pair
    PageResult          - One page of the snapshot
    CacheStore          - Abstract key-value store with TTL
    UpstreamSource      - Abstract paged data provider
    create_coin_service - Factory that wires the above from settings
    create_coins_router - FastAPI router factory for the HTTP endpoints
"""

from .builder import SnapshotBuilder
from .config import CoinSettings
from .errors import CacheError, CoinCacheError, UpstreamError
from .factory import create_coin_service
from .interface import CacheStore, UpstreamSource
from .models import PageRequest, PageResult
from .routes import create_coins_router
from .scheduler import RefreshScheduler
from .service import CoinService

__all__ = [
    "CoinSettings",
    "CoinService",
    "SnapshotBuilder",
    "RefreshScheduler",
    "PageRequest",
    "PageResult",
    "CacheStore",
    "UpstreamSource",
    "CacheError",
    "CoinCacheError",
    "UpstreamError",
    "create_coin_service",
    "create_coins_router",
]
