"""CoinGecko markets API client for real coin listings."""

from __future__ import annotations

import asyncio
import logging

import requests

from .errors import UpstreamError
from .interface import Record, UpstreamSource

logger = logging.getLogger(__name__)


class CoinGeckoSource(UpstreamSource):
    """UpstreamSource backed by the CoinGecko /coins/markets endpoint.

    One call per page: GET {url}?vs_currency=usd&order=market_cap_desc
    &per_page=250&page=N, which returns a JSON array of coin objects.

    Rate limits:
      - Public API: roughly 10-30 req/min, so a 4-page sweep every 10 minutes
        stays well inside it
      - Demo/paid keys are sent in the x-cg-demo-api-key header
    """

    def __init__(
        self,
        url: str,
        vs_currency: str = "usd",
        order: str = "market_cap_desc",
        timeout: float = 5.0,
        api_key: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._url = url
        self._vs_currency = vs_currency
        self._order = order
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if api_key:
            self._session.headers["x-cg-demo-api-key"] = api_key

    async def fetch_page(self, page_index: int, page_size: int) -> list[Record]:
        # requests is synchronous, run it in a thread to avoid blocking the event loop
        return await asyncio.to_thread(self._fetch_page_sync, page_index, page_size)

    async def close(self) -> None:
        self._session.close()

    def _fetch_page_sync(self, page_index: int, page_size: int) -> list[Record]:
        """Synchronous call to the markets endpoint. Runs in a thread."""
        params = {
            "vs_currency": self._vs_currency,
            "order": self._order,
            "per_page": page_size,
            "page": page_index,
        }
        try:
            response = self._session.get(self._url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise UpstreamError(page_index, f"timed out after {self._timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise UpstreamError(page_index, f"HTTP {status}") from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(page_index, type(e).__name__) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(page_index, "response body is not JSON") from e

        if not isinstance(payload, list):
            raise UpstreamError(page_index, f"expected a JSON array, got {type(payload).__name__}")

        logger.debug("CoinGecko page %d: %d records", page_index, len(payload))
        return payload
