"""Calculator API — live order preview and position sizing."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from journal.api.deps import get_profile_service
from journal.errors import TradeValidationError
from journal.models.trade import Direction, JournalModel
from journal.services import pricing
from journal.services.profile import ProfileService

router = APIRouter(prefix="/api/calculator", tags=["calculator"])


class PreviewRequest(JournalModel):
    symbol: str = ""
    direction: Direction = Direction.BUY
    lot_size: float = 0.0
    entry_price: float = 0.0
    stop_loss: float = 0.0
    take_profit: float = 0.0
    exit_price: float | None = None


class PositionSizeRequest(JournalModel):
    balance: float = Field(default=0.0, ge=0)
    risk_percent: float = Field(default=0.0, ge=0)
    stop_loss_pips: float = Field(default=0.0, ge=0)
    symbol: str = "EURUSD"


@router.post("/preview")
def preview_trade(body: PreviewRequest):
    """Pips, RR and (with an exit) P&L for an order that is not saved yet."""
    try:
        result = pricing.preview(
            entry=body.entry_price,
            stop_loss=body.stop_loss,
            take_profit=body.take_profit,
            lot_size=body.lot_size,
            direction=body.direction,
            symbol=body.symbol.strip().upper(),
            exit=body.exit_price,
        )
    except TradeValidationError as e:
        raise HTTPException(status_code=422, detail={"rule": e.rule, "reason": e.reason})
    return {
        "assetClass": result.asset_class.value,
        "slPips": result.sl_pips,
        "tpPips": result.tp_pips,
        "rrRatio": result.rr_ratio,
        "profitLoss": result.profit_loss,
    }


@router.post("/position-size")
def position_size(
    body: PositionSizeRequest,
    profile: ProfileService = Depends(get_profile_service),
):
    max_risk = profile.get_settings().max_risk_percent
    try:
        result = pricing.position_size(
            balance=body.balance,
            risk_percent=body.risk_percent,
            stop_loss_pips=body.stop_loss_pips,
            symbol=body.symbol.strip().upper(),
            max_risk_percent=max_risk,
        )
    except TradeValidationError as e:
        raise HTTPException(status_code=422, detail={"rule": e.rule, "reason": e.reason})
    return {
        "riskAmount": result.risk_amount,
        "pipValue": result.pip_value,
        "lotSize": result.lot_size,
        "positionSize": result.position_size,
        "positionUnit": result.position_unit,
        "riskPerPip": result.risk_per_pip,
    }
