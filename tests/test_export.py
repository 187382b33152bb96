"""Tests for CSV and JSON export."""

import json

from journal.models.workspace import Draft, JournalSettings, TradeTemplate, UserProfile
from journal.services.export import CSV_HEADERS, to_csv, to_json
from trade_factories import NOW, closed_trade, open_trade

HEADER_LINE = (
    "ID,Date,Symbol,Timeframe,Direction,LotSize,EntryPrice,StopLoss,TakeProfit,"
    "ExitPrice,ProfitLoss,RRRatio,PipsSL,PipsTP,Emotions,Notes,Screenshot,Status"
)


class TestCsv:
    def test_header_only_for_empty_journal(self):
        assert to_csv([]) == HEADER_LINE + "\n"
        assert len(CSV_HEADERS) == 18

    def test_closed_trade_row(self):
        trade = closed_trade(25.0, day=10).model_copy(update={"emotions": ["calm", "confident"]})
        row = to_csv([trade]).splitlines()[1].split(",")
        assert row[0] == trade.id
        assert row[1] == "2024-06-10T10:00:00+00:00"
        assert row[2:5] == ["EURUSD", "H1", "BUY"]
        assert row[9] == "1.105"
        assert row[10] == "25.0"
        assert row[11] == "2.0"
        assert row[14] == "calm;confident"
        assert row[-1] == "WIN"

    def test_open_trade_leaves_derived_cells_empty(self):
        row = to_csv([open_trade(day=11)]).splitlines()[1].split(",")
        assert row[9:14] == ["", "", "", "", ""]
        assert row[-1] == "OPEN"

    def test_zero_profit_exports_as_loss(self):
        assert to_csv([closed_trade(0.0, day=1)]).splitlines()[1].endswith(",LOSS")

    def test_notes_are_quoted_and_escaped(self):
        trade = closed_trade(5.0, day=1).model_copy(update={"notes": 'Took "early" exit, then re-entered'})
        line = to_csv([trade]).splitlines()[1]
        assert '"Took ""early"" exit, then re-entered"' in line

    def test_empty_notes_still_quoted(self):
        line = to_csv([open_trade(day=1)]).splitlines()[1]
        assert ',"",' in line

    def test_one_line_per_trade(self):
        trades = [closed_trade(1.0, day=d) for d in range(1, 6)]
        assert len(to_csv(trades).splitlines()) == 6


class TestJson:
    def test_envelope(self):
        payload = json.loads(to_json([], exported_at=NOW))
        assert payload["version"] == "1.0"
        assert payload["exportedAt"] == "2024-06-15T12:00:00+00:00"
        assert payload["trades"] == []
        assert payload["user"] is None
        assert payload["drafts"] == []
        assert payload["templates"] == []

    def test_trades_use_camel_case(self):
        payload = json.loads(to_json([closed_trade(25.0, day=10), open_trade(day=11)], exported_at=NOW))
        closed, opened = payload["trades"]
        assert closed["profitLoss"] == 25.0
        assert closed["exitPrice"] == 1.105
        assert closed["tradeDate"].startswith("2024-06-10T10:00:00")
        assert opened["exitPrice"] is None
        assert "profitLoss" not in opened

    def test_full_state(self):
        payload = json.loads(to_json(
            [],
            user=UserProfile(username="alice", created_at=NOW, last_login=NOW),
            settings=JournalSettings(page_size=20),
            drafts=[Draft(id="d1", symbol="EURUSD", saved_at=NOW)],
            templates=[TradeTemplate(symbol="XAUUSD", saved_at=NOW)],
            exported_at=NOW,
        ))
        assert payload["user"]["username"] == "alice"
        assert payload["settings"]["pageSize"] == 20
        assert payload["drafts"][0]["id"] == "d1"
        assert payload["templates"][0]["symbol"] == "XAUUSD"
