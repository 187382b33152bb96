"""Journal models."""

from journal.models.blob import StoredBlob
from journal.models.trade import (
    ClosedTrade,
    Direction,
    OpenTrade,
    Trade,
    TradeStatus,
    trade_status,
)
from journal.models.workspace import Draft, JournalSettings, TradeTemplate, UserProfile

__all__ = [
    "StoredBlob",
    "ClosedTrade",
    "Direction",
    "OpenTrade",
    "Trade",
    "TradeStatus",
    "trade_status",
    "Draft",
    "JournalSettings",
    "TradeTemplate",
    "UserProfile",
]
