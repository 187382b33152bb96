"""Pip, profit/loss and risk calculations.

Pure functions. The asset-class rules are simplified journal heuristics, not
broker-accurate pip values:

    class   pip size   contract size   pip value per lot
    Forex   0.0001     100000          $10
    Gold    0.01       100             $0.01
    Crypto  0.01       1               $1
"""

import logging
import warnings
from dataclasses import dataclass
from enum import Enum

from journal.errors import DegenerateRatioWarning, TradeValidationError
from journal.models.trade import Direction

logger = logging.getLogger(__name__)


class AssetClass(str, Enum):
    FOREX = "FOREX"
    GOLD = "GOLD"
    CRYPTO = "CRYPTO"


# Checked in this order; the first match wins and anything else is Forex.
GOLD_MARKERS = ("XAU", "GOLD")
CRYPTO_MARKERS = ("BTC", "ETH", "BNB", "XRP", "ADA", "CRYPTO")

PIP_SIZE: dict[AssetClass, float] = {
    AssetClass.FOREX: 0.0001,
    AssetClass.GOLD: 0.01,
    AssetClass.CRYPTO: 0.01,
}

CONTRACT_SIZE: dict[AssetClass, float] = {
    AssetClass.FOREX: 100_000,
    AssetClass.GOLD: 100,
    AssetClass.CRYPTO: 1,
}

PIP_VALUE_PER_LOT: dict[AssetClass, float] = {
    AssetClass.FOREX: 10.0,
    AssetClass.GOLD: 0.01,
    AssetClass.CRYPTO: 1.0,
}

POSITION_UNITS: dict[AssetClass, str] = {
    AssetClass.FOREX: "units",
    AssetClass.GOLD: "ounce",
    AssetClass.CRYPTO: "coins",
}


def classify(symbol: str) -> AssetClass:
    """Gold before Crypto before Forex: ``XAUBTC`` is Gold."""
    s = symbol.upper()
    if any(m in s for m in GOLD_MARKERS):
        return AssetClass.GOLD
    if any(m in s for m in CRYPTO_MARKERS):
        return AssetClass.CRYPTO
    return AssetClass.FOREX


def pip_size(asset_class: AssetClass) -> float:
    return PIP_SIZE[asset_class]


def contract_size(asset_class: AssetClass) -> float:
    return CONTRACT_SIZE[asset_class]


def pips(entry: float, exit: float, symbol: str) -> float:
    """Unsigned pip distance between two prices."""
    return round(abs(exit - entry) / pip_size(classify(symbol)), 2)


def profit_loss(
    entry: float,
    exit: float,
    lot_size: float,
    direction: Direction | str,
    symbol: str,
) -> float:
    """Signed P&L in account currency, rounded to cents.

    Forex is priced through the $10-per-pip-per-standard-lot convention;
    Gold and Crypto use the raw price delta times contract size.
    """
    asset_class = classify(symbol)
    delta = exit - entry if Direction(direction) == Direction.BUY else entry - exit

    if asset_class == AssetClass.FOREX:
        profit = delta / pip_size(asset_class) * PIP_VALUE_PER_LOT[asset_class] * lot_size
    else:
        profit = delta * contract_size(asset_class) * lot_size
    return round(profit, 2)


def risk_reward(sl_pips: float, tp_pips: float) -> float | None:
    """Take-profit pips per stop-loss pip.

    A zero stop distance emits DegenerateRatioWarning and returns None.
    """
    if sl_pips == 0:
        warnings.warn(
            "risk/reward requested with a zero stop-loss distance",
            DegenerateRatioWarning,
            stacklevel=2,
        )
        logger.warning(f"Degenerate risk/reward: sl_pips=0, tp_pips={tp_pips}")
        return None
    return round(tp_pips / sl_pips, 2)


@dataclass(frozen=True)
class Derived:
    profit_loss: float
    rr_ratio: float | None
    sl_pips: float
    tp_pips: float


def derive(
    entry: float,
    stop_loss: float,
    take_profit: float,
    exit: float,
    lot_size: float,
    direction: Direction | str,
    symbol: str,
) -> Derived:
    """All derived figures for a closed trade."""
    sl = pips(entry, stop_loss, symbol)
    tp = pips(entry, take_profit, symbol)
    return Derived(
        profit_loss=profit_loss(entry, exit, lot_size, direction, symbol),
        rr_ratio=risk_reward(sl, tp),
        sl_pips=sl,
        tp_pips=tp,
    )


@dataclass(frozen=True)
class Preview:
    asset_class: AssetClass
    sl_pips: float
    tp_pips: float
    rr_ratio: float | None
    profit_loss: float | None


def preview(
    entry: float,
    stop_loss: float,
    take_profit: float,
    lot_size: float,
    direction: Direction | str,
    symbol: str,
    exit: float | None = None,
) -> Preview:
    """Live figures for an unsaved order; P&L only once an exit is known."""
    if not symbol or not entry or not stop_loss or not take_profit or not lot_size:
        raise TradeValidationError("Fill in all required fields", rule="required")
    sl = pips(entry, stop_loss, symbol)
    tp = pips(entry, take_profit, symbol)
    return Preview(
        asset_class=classify(symbol),
        sl_pips=sl,
        tp_pips=tp,
        rr_ratio=risk_reward(sl, tp),
        profit_loss=profit_loss(entry, exit, lot_size, direction, symbol) if exit else None,
    )


@dataclass(frozen=True)
class PositionSize:
    risk_amount: float
    pip_value: float
    lot_size: float
    position_size: float
    position_unit: str
    risk_per_pip: float


def position_size(
    balance: float,
    risk_percent: float,
    stop_loss_pips: float,
    symbol: str,
    max_risk_percent: float = 10.0,
) -> PositionSize:
    """Lot size that risks ``risk_percent`` of ``balance`` over the stop distance."""
    if not balance or not risk_percent or not stop_loss_pips:
        raise TradeValidationError("Balance, risk percent and stop-loss pips are required", rule="required")
    if balance < 0 or risk_percent < 0 or stop_loss_pips < 0:
        raise TradeValidationError("Calculator inputs must be positive", rule="positive")
    if risk_percent > max_risk_percent:
        raise TradeValidationError(
            f"Risk must not exceed {max_risk_percent:g}% per trade", rule="max_risk"
        )

    asset_class = classify(symbol)
    risk_amount = balance * risk_percent / 100
    pip_value = PIP_VALUE_PER_LOT[asset_class]
    lots = risk_amount / (stop_loss_pips * pip_value)
    return PositionSize(
        risk_amount=round(risk_amount, 2),
        pip_value=pip_value,
        lot_size=round(lots, 2),
        position_size=round(lots * contract_size(asset_class), 2),
        position_unit=_position_unit(symbol, asset_class),
        risk_per_pip=round(risk_amount / stop_loss_pips, 2),
    )


def _position_unit(symbol: str, asset_class: AssetClass) -> str:
    s = symbol.upper()
    if asset_class == AssetClass.CRYPTO:
        if "BTC" in s:
            return "BTC"
        if "ETH" in s:
            return "ETH"
    return POSITION_UNITS[asset_class]
