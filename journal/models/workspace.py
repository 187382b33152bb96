"""Side records kept next to the trade collection: drafts, templates, profile, settings."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from journal.models.trade import Direction, JournalModel, as_utc, generate_id, utcnow


class Draft(JournalModel):
    """An unvalidated, partially filled trade. Never carries derived fields."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=generate_id)
    saved_at: datetime = Field(default_factory=utcnow)
    trade_date: datetime | None = None
    symbol: str | None = None
    timeframe: str | None = None
    direction: Direction | None = None
    lot_size: float | None = None
    entry_price: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    exit_price: float | None = None
    emotions: list[str] = Field(default_factory=list)
    notes: str = ""
    screenshot: str | None = None

    @field_validator("saved_at", "trade_date")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class TradeTemplate(JournalModel):
    """Reusable order preset; dates and notes are never part of a template."""

    symbol: str
    timeframe: str | None = None
    direction: Direction | None = None
    lot_size: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    saved_at: datetime = Field(default_factory=utcnow)


class UserProfile(JournalModel):
    username: str = Field(min_length=3, max_length=64)
    created_at: datetime = Field(default_factory=utcnow)
    last_login: datetime = Field(default_factory=utcnow)


class JournalSettings(JournalModel):
    starting_balance: float = Field(default=10000.0, gt=0)
    page_size: int = Field(default=10, ge=1, le=500)
    max_risk_percent: float = Field(default=10.0, gt=0, le=100)
