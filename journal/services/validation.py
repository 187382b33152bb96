"""Trade validation rules.

Rules run in order and the first failure wins:

1. required   - trade_date, symbol, direction, entry_price, stop_loss,
                take_profit and lot_size are present and non-zero
2. lot_size   - lot_size > 0
3. entry_price - entry_price > 0
4. stop_loss  - stop_loss > 0
5. take_profit - take_profit > 0
6. direction  - BUY: stop_loss < entry < take_profit
                SELL: stop_loss > entry > take_profit
7. exit_price - a given exit price is > 0
"""

from journal.errors import TradeValidationError
from journal.models.trade import Direction
from journal.schemas.trade import TradeCreate

REQUIRED_FIELDS = (
    "trade_date",
    "symbol",
    "direction",
    "entry_price",
    "stop_loss",
    "take_profit",
    "lot_size",
)


def validate_trade(candidate: TradeCreate) -> None:
    """Raise TradeValidationError for the first broken rule; never touches storage."""
    missing = [name for name in REQUIRED_FIELDS if not getattr(candidate, name)]
    if missing:
        raise TradeValidationError(
            f"Missing required field(s): {', '.join(missing)}", rule="required"
        )

    if candidate.lot_size <= 0:
        raise TradeValidationError("Lot size must be greater than 0", rule="lot_size")

    if candidate.entry_price <= 0:
        raise TradeValidationError("Entry price must be greater than 0", rule="entry_price")

    if candidate.stop_loss <= 0:
        raise TradeValidationError("Stop loss must be greater than 0", rule="stop_loss")

    if candidate.take_profit <= 0:
        raise TradeValidationError("Take profit must be greater than 0", rule="take_profit")

    entry = candidate.entry_price
    if candidate.direction == Direction.BUY:
        if candidate.stop_loss >= entry:
            raise TradeValidationError(
                "Stop loss must be below entry price for BUY", rule="direction"
            )
        if candidate.take_profit <= entry:
            raise TradeValidationError(
                "Take profit must be above entry price for BUY", rule="direction"
            )
    else:
        if candidate.stop_loss <= entry:
            raise TradeValidationError(
                "Stop loss must be above entry price for SELL", rule="direction"
            )
        if candidate.take_profit >= entry:
            raise TradeValidationError(
                "Take profit must be below entry price for SELL", rule="direction"
            )

    if candidate.exit_price is not None and candidate.exit_price <= 0:
        raise TradeValidationError("Exit price must be greater than 0", rule="exit_price")
