"""Deterministic slicing of a snapshot into pages."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .interface import Record
from .models import PageRequest, PageResult


def paginate(
    records: Sequence[Record],
    request: PageRequest,
    source: str = "cache",
    degraded: bool = False,
) -> PageResult:
    """Slice `records` for `request`.

    Out-of-range pages yield an empty item list, never an error. total_pages is
    ceil(len / per_page), so an empty snapshot has zero pages.
    """
    total = len(records)
    return PageResult(
        total_items=total,
        total_pages=math.ceil(total / request.per_page),
        current_page=request.page,
        per_page=request.per_page,
        items=list(records[request.start : request.end]),
        source=source,
        degraded=degraded,
    )
