"""HTTP endpoints for paginated coin listings."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .service import CoinService

logger = logging.getLogger(__name__)


def create_coins_router(service: CoinService) -> APIRouter:
    """Create the coins router bound to `service`.

    This factory pattern lets us inject the CoinService without globals.
    """
    router = APIRouter(tags=["coins"])

    @router.get("/")
    async def index() -> dict:
        """Liveness placeholder."""
        return {"message": "how u doin"}

    @router.get("/coins")
    async def list_coins(page: str | None = None, item: str | None = None) -> JSONResponse:
        """One page of the coin snapshot.

        Query values are accepted as raw strings and normalized by the service,
        so `?page=abc` serves page 1 instead of failing validation.
        """
        try:
            result = await service.get_page(page, item)
        except Exception:
            logger.exception("Failed to serve /coins page=%s item=%s", page, item)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch data"})
        return JSONResponse(content=result.to_dict())

    return router
