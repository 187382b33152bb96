"""Dashboard API — summary stats, equity curve and breakdowns."""

import logging

from fastapi import APIRouter, Depends, Query

from journal.api.deps import get_profile_service, get_repository
from journal.api.trades import build_filter, trade_view
from journal.services.filters import TradeFilter, filter_trades
from journal.services.profile import ProfileService
from journal.services.repository import TradeRepository
from journal.services.statistics import (
    compute_stats,
    equity_curve,
    monthly_breakdown,
    recent_trades,
    symbol_distribution,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary")
def dashboard_summary(
    spec: TradeFilter = Depends(build_filter),
    repo: TradeRepository = Depends(get_repository),
):
    """Aggregated stats, optionally over a filtered subset."""
    trades = filter_trades(repo.get_all(), spec)
    return compute_stats(trades).model_dump(by_alias=True)


@router.get("/equity")
def dashboard_equity_curve(
    repo: TradeRepository = Depends(get_repository),
    profile: ProfileService = Depends(get_profile_service),
):
    """Running balance after each closed trade."""
    starting_balance = profile.get_settings().starting_balance
    points = equity_curve(repo.get_all(), starting_balance=starting_balance)
    return [p.model_dump(mode="json", by_alias=True) for p in points]


@router.get("/monthly")
def dashboard_monthly(
    timeframe: str | None = None,
    repo: TradeRepository = Depends(get_repository),
):
    buckets = monthly_breakdown(repo.get_all(), timeframe=timeframe.upper() if timeframe else None)
    return [b.model_dump(by_alias=True) for b in buckets]


@router.get("/symbols")
def dashboard_symbols(
    limit: int = Query(5, ge=1, le=50),
    repo: TradeRepository = Depends(get_repository),
):
    """Most traded symbols by count."""
    return [
        {"symbol": symbol, "count": count}
        for symbol, count in symbol_distribution(repo.get_all(), limit=limit)
    ]


@router.get("/recent")
def dashboard_recent(
    limit: int = Query(5, ge=1, le=50),
    repo: TradeRepository = Depends(get_repository),
):
    return [trade_view(t) for t in recent_trades(repo.get_all(), limit=limit)]
