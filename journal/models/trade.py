"""Trade records: open and closed variants of a journal entry."""

import secrets
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel


class Direction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(str, Enum):
    OPEN = "OPEN"
    WIN = "WIN"
    LOSS = "LOSS"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def generate_id() -> str:
    """Millisecond timestamp plus a random suffix, e.g. ``1718012345678k3f9a2c1d0``."""
    return f"{int(time.time() * 1000)}{secrets.token_hex(5)}"


class JournalModel(BaseModel):
    """Base for everything persisted; stored JSON uses camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _TradeBase(JournalModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    trade_date: datetime
    symbol: str
    timeframe: str | None = None
    direction: Direction
    lot_size: float = Field(gt=0)
    entry_price: float = Field(gt=0)
    stop_loss: float = Field(gt=0)
    take_profit: float = Field(gt=0)
    emotions: list[str] = Field(default_factory=list)
    notes: str = ""
    screenshot: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("trade_date", "created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("emotions")
    @classmethod
    def _unique_emotions(cls, value: list[str]) -> list[str]:
        # Tags form a set; keep a canonical order so equal sets compare equal.
        return sorted({tag.strip() for tag in value if tag.strip()})

    @property
    def is_closed(self) -> bool:
        return self.exit_price is not None

    @property
    def status(self) -> TradeStatus:
        return trade_status(self)


class OpenTrade(_TradeBase):
    """A trade without an exit. Carries no derived fields."""

    exit_price: None = None


class ClosedTrade(_TradeBase):
    """A trade with an exit price and all derived figures."""

    exit_price: float = Field(gt=0)
    profit_loss: float
    rr_ratio: float | None = None  # None when the stop-loss distance is zero pips
    sl_pips: float
    tp_pips: float


def _trade_kind(value: Any) -> str:
    if isinstance(value, dict):
        exit_price = value.get("exitPrice", value.get("exit_price"))
    else:
        exit_price = getattr(value, "exit_price", None)
    return "closed" if exit_price is not None else "open"


Trade = Annotated[
    Union[
        Annotated[OpenTrade, Tag("open")],
        Annotated[ClosedTrade, Tag("closed")],
    ],
    Discriminator(_trade_kind),
]

trade_adapter: TypeAdapter[Trade] = TypeAdapter(Trade)
trade_list_adapter: TypeAdapter[list[Trade]] = TypeAdapter(list[Trade])


def trade_status(trade: OpenTrade | ClosedTrade) -> TradeStatus:
    """Derive the tri-state status.

    A closed trade with exactly zero profit counts as a LOSS.
    """
    if not isinstance(trade, ClosedTrade):
        return TradeStatus.OPEN
    if trade.profit_loss > 0:
        return TradeStatus.WIN
    return TradeStatus.LOSS
