"""Trade journal API — CRUD, closing, filtering and pagination."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from journal.api.deps import get_profile_service, get_repository
from journal.errors import TradeNotFoundError, TradeValidationError
from journal.models.trade import Trade
from journal.schemas.trade import CloseTradeRequest, TradeCreate, TradeUpdate
from journal.services.filters import TradeFilter, filter_trades, paginate
from journal.services.profile import ProfileService
from journal.services.repository import TradeRepository
from journal.services.samples import demo_trades

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trades", tags=["trades"])


def trade_view(trade: Trade) -> dict:
    """Stored fields plus the derived status."""
    data = trade.model_dump(mode="json", by_alias=True)
    data["status"] = trade.status.value
    return data


def build_filter(
    symbol: str | None = None,
    direction: str | None = None,
    timeframe: str | None = None,
    result: str | None = None,
    date: str | None = None,
    sort_by: str = Query("trade_date", alias="sortBy"),
    order: str = "desc",
) -> TradeFilter:
    """Query-string filter shared by the history and dashboard endpoints."""
    try:
        return TradeFilter(
            symbol=symbol,
            direction=direction,
            timeframe=timeframe,
            result=result,
            date=date,
            sort_by=sort_by,
            order=order,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


@router.get("")
def list_trades(
    page: int = 1,
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=500),
    spec: TradeFilter = Depends(build_filter),
    repo: TradeRepository = Depends(get_repository),
    profile: ProfileService = Depends(get_profile_service),
):
    size = page_size or profile.get_settings().page_size
    result = paginate(filter_trades(repo.get_all(), spec), page_size=size, page=page)
    body = result.model_dump(by_alias=True, exclude={"items"})
    body["items"] = [trade_view(t) for t in result.items]
    return body


@router.post("", status_code=201)
def create_trade(data: TradeCreate, repo: TradeRepository = Depends(get_repository)):
    try:
        trade = repo.create(data)
    except TradeValidationError as e:
        raise HTTPException(status_code=422, detail={"rule": e.rule, "reason": e.reason})
    return trade_view(trade)


@router.delete("")
def delete_all_trades(repo: TradeRepository = Depends(get_repository)):
    """Irreversible. Clients confirm with the user before calling this."""
    return {"deleted": repo.delete_all()}


@router.post("/samples", status_code=201)
def load_sample_trades(repo: TradeRepository = Depends(get_repository)):
    created = repo.load_samples(demo_trades())
    return [trade_view(t) for t in created]


@router.get("/{trade_id}")
def get_trade(trade_id: str, repo: TradeRepository = Depends(get_repository)):
    try:
        return trade_view(repo.get_by_id(trade_id))
    except TradeNotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")


@router.put("/{trade_id}")
def update_trade(
    trade_id: str,
    data: TradeUpdate,
    repo: TradeRepository = Depends(get_repository),
):
    try:
        trade = repo.update(trade_id, data)
    except TradeNotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")
    except TradeValidationError as e:
        raise HTTPException(status_code=422, detail={"rule": e.rule, "reason": e.reason})
    return trade_view(trade)


@router.post("/{trade_id}/close")
def close_trade(
    trade_id: str,
    body: CloseTradeRequest,
    repo: TradeRepository = Depends(get_repository),
):
    try:
        trade = repo.close(trade_id, body.exit_price)
    except TradeNotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")
    except TradeValidationError as e:
        raise HTTPException(status_code=422, detail={"rule": e.rule, "reason": e.reason})
    return trade_view(trade)


@router.delete("/{trade_id}", status_code=204)
def delete_trade(trade_id: str, repo: TradeRepository = Depends(get_repository)):
    try:
        repo.delete(trade_id)
    except TradeNotFoundError:
        raise HTTPException(status_code=404, detail="Trade not found")
