"""CSV and JSON export of the journal.

Both functions return strings; writing files or serving downloads is up to
the caller.
"""

import json
from datetime import datetime

from pydantic import TypeAdapter

from journal.models.trade import ClosedTrade, Trade, trade_list_adapter, trade_status, utcnow
from journal.models.workspace import Draft, JournalSettings, TradeTemplate, UserProfile
from journal.utils.constants import EXPORT_FORMAT_VERSION

CSV_HEADERS = [
    "ID", "Date", "Symbol", "Timeframe", "Direction", "LotSize",
    "EntryPrice", "StopLoss", "TakeProfit", "ExitPrice", "ProfitLoss",
    "RRRatio", "PipsSL", "PipsTP", "Emotions", "Notes", "Screenshot", "Status",
]

_drafts_adapter = TypeAdapter(list[Draft])
_templates_adapter = TypeAdapter(list[TradeTemplate])


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        text = value.isoformat()
    else:
        text = str(value)
    if any(ch in text for ch in (",", '"', "\n", "\r")):
        return _quote(text)
    return text


def _row(trade: Trade) -> list[str]:
    closed = isinstance(trade, ClosedTrade)
    return [
        _cell(trade.id),
        _cell(trade.trade_date),
        _cell(trade.symbol),
        _cell(trade.timeframe),
        _cell(trade.direction.value),
        _cell(trade.lot_size),
        _cell(trade.entry_price),
        _cell(trade.stop_loss),
        _cell(trade.take_profit),
        _cell(trade.exit_price),
        _cell(trade.profit_loss if closed else None),
        _cell(trade.rr_ratio if closed else None),
        _cell(trade.sl_pips if closed else None),
        _cell(trade.tp_pips if closed else None),
        _cell(";".join(trade.emotions)),
        _quote(trade.notes or ""),  # notes are always quoted
        _cell(trade.screenshot),
        trade_status(trade).value,
    ]


def to_csv(trades: list[Trade]) -> str:
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(_row(t)) for t in trades)
    return "\n".join(lines) + "\n"


def to_json(
    trades: list[Trade],
    user: UserProfile | None = None,
    settings: JournalSettings | None = None,
    drafts: list[Draft] | None = None,
    templates: list[TradeTemplate] | None = None,
    exported_at: datetime | None = None,
) -> str:
    """Whole journal state with a format version tag and export timestamp."""
    payload = {
        "version": EXPORT_FORMAT_VERSION,
        "exportedAt": (exported_at or utcnow()).isoformat(),
        "trades": trade_list_adapter.dump_python(trades, mode="json", by_alias=True),
        "user": user.model_dump(mode="json", by_alias=True) if user else None,
        "settings": settings.model_dump(mode="json", by_alias=True) if settings else None,
        "drafts": _drafts_adapter.dump_python(drafts or [], mode="json", by_alias=True),
        "templates": _templates_adapter.dump_python(templates or [], mode="json", by_alias=True),
    }
    return json.dumps(payload, indent=2)
