"""Pydantic schemas for trade input.

These only check shapes and normalize text. Business rules (required fields,
directional stop/target ordering) live in journal.services.validation so they
run in a fixed order and report which rule failed.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from journal.models.trade import Direction, JournalModel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TradeCreate(JournalModel):
    trade_date: datetime | None = None
    symbol: str | None = Field(default=None, max_length=32)
    timeframe: str | None = Field(default=None, max_length=16)
    direction: Direction | None = None
    lot_size: float | None = None
    entry_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    exit_price: float | None = None
    emotions: list[str] = Field(default_factory=list)
    notes: str = ""
    screenshot: str | None = None

    @field_validator(
        "trade_date", "lot_size", "entry_price", "stop_loss",
        "take_profit", "exit_price", "screenshot", mode="before",
    )
    @classmethod
    def _empty_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("exit_price")
    @classmethod
    def _zero_exit_is_open(cls, value: float | None) -> float | None:
        # A zero exit price is an unfilled form field, not a fill at 0.
        return value or None

    @field_validator("symbol", "timeframe", mode="before")
    @classmethod
    def _normalize_label(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, value: Any) -> Any:
        return "" if value is None else value


class TradeUpdate(TradeCreate):
    """Partial update; only fields the caller actually sent are merged.

    Sending ``exitPrice: null`` reopens a closed trade.
    """


class CloseTradeRequest(JournalModel):
    exit_price: float = Field(gt=0)
