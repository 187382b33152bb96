"""Statistics for the dashboard and history summary.

Everything is derived from a trade snapshot (optionally pre-filtered) and uses
the same status rule as the filter engine: WIN iff profit > 0, LOSS iff
closed with profit <= 0, OPEN iff no exit.
"""

from collections import Counter
from datetime import datetime

from pydantic import Field

from journal.models.trade import ClosedTrade, JournalModel, Trade, TradeStatus, trade_status, utcnow

UNSPECIFIED_TIMEFRAME = "N/A"


class SymbolStats(JournalModel):
    trade_count: int = 0
    wins: int = 0
    losses: int = 0
    open_count: int = 0
    profit_sum: float = 0.0


class TimeframeStats(JournalModel):
    trade_count: int = 0
    profit_sum: float = 0.0
    win_rate: float = 0.0


class TradingStats(JournalModel):
    total_trades: int = 0
    closed_trades: int = 0
    open_trades: int = 0
    total_wins: int = 0
    total_losses: int = 0
    win_rate: float = 0.0
    total_profit: float = 0.0
    avg_trade: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0
    avg_rr: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0
    monthly_profit: float = 0.0
    symbol_stats: dict[str, SymbolStats] = Field(default_factory=dict)
    timeframe_stats: dict[str, TimeframeStats] = Field(default_factory=dict)


class EquityPoint(JournalModel):
    label: str
    trade_id: str | None = None
    trade_date: datetime | None = None
    equity: float


class MonthlyBucket(JournalModel):
    month: str  # "YYYY-MM"
    profit: float
    trades: int


def _win_rate(wins: int, closed: int) -> float:
    return round(wins / closed * 100, 1) if closed else 0.0


def by_date(trades: list[Trade]) -> list[Trade]:
    """Oldest first; stable for equal dates."""
    return sorted(trades, key=lambda t: t.trade_date)


def consecutive_streaks(trades: list[Trade]) -> tuple[int, int]:
    """(max wins in a row, max losses in a row) over closed trades in date order."""
    streak = 0
    max_wins = 0
    max_losses = 0
    for trade in by_date(trades):
        status = trade_status(trade)
        if status == TradeStatus.OPEN:
            continue
        if status == TradeStatus.WIN:
            streak = streak + 1 if streak > 0 else 1
            max_wins = max(max_wins, streak)
        else:
            streak = streak - 1 if streak < 0 else -1
            max_losses = max(max_losses, -streak)
    return max_wins, max_losses


def symbol_breakdown(trades: list[Trade]) -> dict[str, SymbolStats]:
    result: dict[str, SymbolStats] = {}
    for trade in trades:
        stats = result.setdefault(trade.symbol, SymbolStats())
        stats.trade_count += 1
        status = trade_status(trade)
        if status == TradeStatus.OPEN:
            stats.open_count += 1
            continue
        if status == TradeStatus.WIN:
            stats.wins += 1
        else:
            stats.losses += 1
        stats.profit_sum = round(stats.profit_sum + trade.profit_loss, 2)
    return result


def timeframe_breakdown(trades: list[Trade]) -> dict[str, TimeframeStats]:
    result: dict[str, TimeframeStats] = {}
    tallies: dict[str, tuple[int, int]] = {}
    for trade in trades:
        key = trade.timeframe or UNSPECIFIED_TIMEFRAME
        stats = result.setdefault(key, TimeframeStats())
        stats.trade_count += 1
        if isinstance(trade, ClosedTrade):
            stats.profit_sum = round(stats.profit_sum + trade.profit_loss, 2)
            wins, closed = tallies.get(key, (0, 0))
            tallies[key] = (wins + (trade.profit_loss > 0), closed + 1)
    for key, (wins, closed) in tallies.items():
        result[key].win_rate = _win_rate(wins, closed)
    return result


def compute_stats(trades: list[Trade], now: datetime | None = None) -> TradingStats:
    now = now or utcnow()
    closed = [t for t in trades if isinstance(t, ClosedTrade)]
    profits = [t.profit_loss for t in closed]
    wins = sum(1 for p in profits if p > 0)
    total_profit = sum(profits)

    rr_values = [t.rr_ratio for t in closed if t.rr_ratio is not None]
    max_wins, max_losses = consecutive_streaks(closed)
    monthly = sum(
        t.profit_loss
        for t in closed
        if t.trade_date.year == now.year and t.trade_date.month == now.month
    )

    return TradingStats(
        total_trades=len(trades),
        closed_trades=len(closed),
        open_trades=len(trades) - len(closed),
        total_wins=wins,
        total_losses=len(closed) - wins,
        win_rate=_win_rate(wins, len(closed)),
        total_profit=round(total_profit, 2),
        avg_trade=round(total_profit / len(closed), 2) if closed else 0.0,
        best_trade=max(profits) if profits else 0.0,
        worst_trade=min(profits) if profits else 0.0,
        avg_rr=round(sum(rr_values) / len(rr_values), 2) if rr_values else 0.0,
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
        monthly_profit=round(monthly, 2),
        symbol_stats=symbol_breakdown(trades),
        timeframe_stats=timeframe_breakdown(trades),
    )


def equity_curve(trades: list[Trade], starting_balance: float = 10000.0) -> list[EquityPoint]:
    """Running balance after each closed trade, oldest first."""
    equity = starting_balance
    points = [EquityPoint(label="Start", equity=round(equity, 2))]
    closed = [t for t in by_date(trades) if isinstance(t, ClosedTrade)]
    for n, trade in enumerate(closed, start=1):
        equity += trade.profit_loss
        points.append(EquityPoint(
            label=f"Trade {n}",
            trade_id=trade.id,
            trade_date=trade.trade_date,
            equity=round(equity, 2),
        ))
    return points


def monthly_breakdown(trades: list[Trade], timeframe: str | None = None) -> list[MonthlyBucket]:
    """Profit and trade count per calendar month, optionally for one timeframe.

    Open trades count towards ``trades`` but add nothing to ``profit``.
    """
    buckets: dict[str, MonthlyBucket] = {}
    for trade in trades:
        if timeframe is not None and trade.timeframe != timeframe:
            continue
        month = trade.trade_date.strftime("%Y-%m")
        bucket = buckets.setdefault(month, MonthlyBucket(month=month, profit=0.0, trades=0))
        bucket.trades += 1
        if isinstance(trade, ClosedTrade):
            bucket.profit = round(bucket.profit + trade.profit_loss, 2)
    return [buckets[m] for m in sorted(buckets)]


def symbol_distribution(trades: list[Trade], limit: int = 5) -> list[tuple[str, int]]:
    """Most traded symbols by count; ties keep first-seen order."""
    return Counter(t.symbol for t in trades).most_common(limit)


def recent_trades(trades: list[Trade], limit: int = 5) -> list[Trade]:
    return sorted(trades, key=lambda t: t.trade_date, reverse=True)[:limit]
