"""Query parameters for catalog listings.

Both objects parse raw request values leniently: anything malformed means
"use the default" or "no filter", never an error.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Self

import structlog

from drones.domain.value_objects import DroneStatus

logger = structlog.get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _lenient_decimal(name: str, value: Any) -> Decimal | None:
    text = _clean_text(value)
    if text is None:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        logger.debug("filter_ignored", filter=name, value=text, reason="not a number")
        return None
    if not number.is_finite():
        logger.debug("filter_ignored", filter=name, value=text, reason="not finite")
        return None
    return number


def parse_status(value: Any) -> DroneStatus | None:
    """Return the listing status named by ``value``, or None if unknown."""
    text = _clean_text(value)
    if text is None:
        return None
    try:
        return DroneStatus(text.lower())
    except ValueError:
        logger.debug("filter_ignored", filter="status", value=text, reason="unknown status")
        return None


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @classmethod
    def from_params(
        cls,
        page: Any = None,
        limit: Any = None,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int | None = None,
    ) -> Self:
        size = _positive_int(limit, default_limit)
        if max_limit is not None:
            size = min(size, max_limit)
        return cls(page=_positive_int(page, DEFAULT_PAGE), limit=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class DroneFilters:
    """Conjunctive listing filters. ``None`` fields impose no constraint."""

    text: str | None = None
    category: str | None = None
    condition: str | None = None
    location: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None
    status: DroneStatus | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> Self:
        return cls(
            text=_clean_text(params.get("q")),
            category=_clean_text(params.get("category")),
            condition=_clean_text(params.get("condition")),
            location=_clean_text(params.get("location")),
            price_min=_lenient_decimal("price_min", params.get("price_min")),
            price_max=_lenient_decimal("price_max", params.get("price_max")),
            status=parse_status(params.get("status")),
        )
