"""Filtering, sorting and pagination over a trade snapshot.

All functions are pure: they never mutate the trades they are given, so the
same filter applied twice to the same snapshot gives the same result.
"""

import math
from datetime import datetime
from typing import Any, Generic, Literal, TypeVar

from pydantic import field_validator, model_validator

from journal.models.trade import Direction, JournalModel, Trade, TradeStatus, trade_status, utcnow
from journal.utils.constants import DATE_WINDOWS

T = TypeVar("T")

SORT_FIELDS = (
    "trade_date",
    "symbol",
    "lot_size",
    "entry_price",
    "profit_loss",
    "rr_ratio",
    "created_at",
)

# Compact keys used by the history page, e.g. "date-desc"
_SORT_ALIASES = {
    "date": "trade_date",
    "tradedate": "trade_date",
    "pair": "symbol",
    "profit": "profit_loss",
    "profitloss": "profit_loss",
    "lot": "lot_size",
    "lotsize": "lot_size",
    "rr": "rr_ratio",
    "rrratio": "rr_ratio",
    "entry": "entry_price",
    "created": "created_at",
}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TradeFilter(JournalModel):
    symbol: str | None = None
    direction: Direction | None = None
    timeframe: str | None = None
    result: TradeStatus | None = None
    date: Literal["today", "week", "month", "last3months"] | None = None
    sort_by: str = "trade_date"
    order: Literal["asc", "desc"] = "desc"

    @field_validator("symbol", "direction", "timeframe", "result", mode="before")
    @classmethod
    def _normalize_label(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_window(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="before")
    @classmethod
    def _split_compact_sort(cls, data: Any) -> Any:
        # "date-desc" -> sort_by="trade_date", order="desc"
        if isinstance(data, dict):
            key = "sortBy" if "sortBy" in data else "sort_by"
            raw = data.get(key)
            if isinstance(raw, str) and "-" in raw:
                field, _, order = raw.rpartition("-")
                if order.lower() in ("asc", "desc"):
                    data = {**data, key: field, "order": order.lower()}
        return data

    @field_validator("sort_by", mode="before")
    @classmethod
    def _resolve_sort_field(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is None:
            return "trade_date"
        key = str(value).strip()
        if key in SORT_FIELDS:
            return key
        compact = key.lower().replace("_", "")
        if compact in _SORT_ALIASES:
            return _SORT_ALIASES[compact]
        allowed = ", ".join(SORT_FIELDS)
        raise ValueError(f"must be one of: {allowed}")


def matches(trade: Trade, spec: TradeFilter, now: datetime) -> bool:
    if spec.symbol is not None and trade.symbol != spec.symbol:
        return False
    if spec.direction is not None and trade.direction != spec.direction:
        return False
    if spec.timeframe is not None and trade.timeframe != spec.timeframe:
        return False
    if spec.result is not None and trade_status(trade) != spec.result:
        return False
    if spec.date is not None and trade.trade_date < now - DATE_WINDOWS[spec.date]:
        return False
    return True


def sort_trades(trades: list[Trade], sort_by: str = "trade_date", order: str = "desc") -> list[Trade]:
    """Stable sort; trades lacking the key (e.g. open trades by profit) go last."""
    present = [t for t in trades if getattr(t, sort_by, None) is not None]
    missing = [t for t in trades if getattr(t, sort_by, None) is None]
    present = sorted(present, key=lambda t: getattr(t, sort_by), reverse=(order == "desc"))
    return present + missing


def filter_trades(
    trades: list[Trade],
    spec: TradeFilter | None = None,
    now: datetime | None = None,
) -> list[Trade]:
    spec = spec or TradeFilter()
    now = now or utcnow()
    selected = [t for t in trades if matches(t, spec, now)]
    return sort_trades(selected, spec.sort_by, spec.order)


class Page(JournalModel, Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def paginate(items: list[T], page_size: int, page: int) -> Page[T]:
    """1-indexed page; out-of-range pages are empty rather than an error."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    if page < 1 or page > total_pages:
        chunk = []
    else:
        start = (page - 1) * page_size
        chunk = items[start:start + page_size]
    return Page(
        items=chunk,
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )
