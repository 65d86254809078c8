"""Data models for the coin snapshot cache."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import DeserializationError
from .interface import Record

DEFAULT_PAGE = 1
DEFAULT_ITEMS_PER_PAGE = 10


def _positive_int(value: Any, default: int) -> int:
    """Coerce a raw query value to an int >= 1, or return `default`."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True, slots=True)
class PageRequest:
    """A validated page request. Both fields are always >= 1."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_ITEMS_PER_PAGE

    @classmethod
    def from_query(
        cls,
        page: Any = None,
        item: Any = None,
        default_page: int = DEFAULT_PAGE,
        default_item: int = DEFAULT_ITEMS_PER_PAGE,
    ) -> PageRequest:
        """Normalize caller-supplied values.

        Non-numeric, missing or non-positive values fall back to the defaults
        rather than being rejected, so the endpoint stays available.
        """
        return cls(
            page=_positive_int(page, default_page),
            per_page=_positive_int(item, default_item),
        )

    @property
    def start(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def end(self) -> int:
        return self.start + self.per_page


@dataclass(frozen=True, slots=True)
class DecodedSnapshot:
    """Tagged result of decoding a cached payload.

    status is 'ok' for a well-formed snapshot (possibly genuinely empty) and
    'degraded' when the payload could not be decoded; a degraded snapshot has
    no records and carries the reason.
    """

    records: tuple[Record, ...] = ()
    status: str = "ok"
    reason: str | None = None

    @property
    def degraded(self) -> bool:
        return self.status == "degraded"

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class PageResult:
    """One page sliced out of a snapshot."""

    total_items: int
    total_pages: int
    current_page: int
    per_page: int
    items: list[Record] = field(default_factory=list)
    source: str = "cache"  # 'cache' or 'upstream'; not part of the wire body
    degraded: bool = False

    def to_dict(self) -> dict:
        """Serialize for the JSON response body."""
        return {
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "perPage": self.per_page,
            "coins": self.items,
        }


def serialize_snapshot(records: list[Record] | tuple[Record, ...]) -> str:
    """Encode a snapshot as the JSON array stored in the cache."""
    return json.dumps(list(records), separators=(",", ":"))


def _decode(payload: str | bytes) -> tuple[Record, ...]:
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationError(f"payload is not UTF-8: {e}") from e
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DeserializationError(f"payload is not JSON: {e}") from e
    if not isinstance(data, list):
        raise DeserializationError(f"expected a JSON array, got {type(data).__name__}")
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise DeserializationError(f"item {index} is {type(item).__name__}, not an object")
    return tuple(data)


def deserialize_snapshot(payload: str | bytes) -> DecodedSnapshot:
    """Decode a cached payload. Never raises; malformed payloads come back degraded."""
    try:
        return DecodedSnapshot(records=_decode(payload))
    except DeserializationError as e:
        return DecodedSnapshot(status="degraded", reason=e.detail)
