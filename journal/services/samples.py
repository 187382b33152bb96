"""Demo trade set for a fresh journal."""

from datetime import datetime, timedelta

from journal.models.trade import utcnow


def demo_trades(now: datetime | None = None) -> list[dict]:
    """Eight trades over the last three weeks across forex, gold and crypto."""
    now = (now or utcnow()).replace(second=0, microsecond=0)

    def ago(days: int, hours: int = 0) -> datetime:
        return now - timedelta(days=days, hours=hours)

    return [
        {
            "trade_date": ago(20), "symbol": "EURUSD", "timeframe": "H1", "direction": "BUY",
            "lot_size": 0.1, "entry_price": 1.0850, "stop_loss": 1.0820,
            "take_profit": 1.0910, "exit_price": 1.0875,
            "emotions": ["confident"], "notes": "London open breakout",
        },
        {
            "trade_date": ago(18), "symbol": "XAUUSD", "timeframe": "H4", "direction": "SELL",
            "lot_size": 0.05, "entry_price": 2025.50, "stop_loss": 2035.00,
            "take_profit": 2005.00, "exit_price": 2018.00,
            "emotions": ["patient"], "notes": "Rejection at weekly high",
        },
        {
            "trade_date": ago(15), "symbol": "GBPUSD", "timeframe": "H1", "direction": "SELL",
            "lot_size": 0.2, "entry_price": 1.2710, "stop_loss": 1.2740,
            "take_profit": 1.2650, "exit_price": 1.2740,
            "emotions": ["fomo"], "notes": "Entered late, stopped out",
        },
        {
            "trade_date": ago(12), "symbol": "BTCUSD", "timeframe": "D1", "direction": "BUY",
            "lot_size": 0.01, "entry_price": 64000, "stop_loss": 62500,
            "take_profit": 68000, "exit_price": 63100,
            "emotions": ["greedy", "impatient"], "notes": "Cut early before news",
        },
        {
            "trade_date": ago(9), "symbol": "USDJPY", "timeframe": "M15", "direction": "BUY",
            "lot_size": 0.1, "entry_price": 151.20, "stop_loss": 150.90,
            "take_profit": 151.80, "exit_price": 151.20,
            "emotions": ["calm"], "notes": "Moved stop to break-even",
        },
        {
            "trade_date": ago(6), "symbol": "EURUSD", "timeframe": "H4", "direction": "SELL",
            "lot_size": 0.3, "entry_price": 1.0920, "stop_loss": 1.0950,
            "take_profit": 1.0860, "exit_price": 1.0870,
            "emotions": ["confident", "disciplined"], "notes": "Trend continuation",
        },
        {
            "trade_date": ago(3), "symbol": "XAUUSD", "timeframe": "H1", "direction": "BUY",
            "lot_size": 0.1, "entry_price": 2030.00, "stop_loss": 2022.00,
            "take_profit": 2046.00, "exit_price": 2044.50,
            "emotions": ["patient"], "notes": "",
        },
        {
            "trade_date": ago(0, hours=2), "symbol": "ETHUSD", "timeframe": "H4", "direction": "BUY",
            "lot_size": 0.5, "entry_price": 3150, "stop_loss": 3080,
            "take_profit": 3300, "exit_price": None,
            "emotions": ["hopeful"], "notes": "Still running",
        },
    ]
