"""Trade repository: owns the canonical trade collection.

The whole collection lives in one "trades" blob. Every mutation is a
read-modify-write of that blob under a single lock, so two mutations never
interleave. Nothing is cached: if a save fails, the stored collection (and
therefore every later read) is exactly what it was before the call.
"""

import logging
import threading
from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import ValidationError

from journal.errors import TradeNotFoundError, TradeValidationError
from journal.models.trade import (
    ClosedTrade,
    OpenTrade,
    Trade,
    generate_id,
    trade_list_adapter,
    utcnow,
)
from journal.schemas.trade import TradeCreate, TradeUpdate
from journal.services.pricing import derive
from journal.services.storage import KeyValueStore, load_blob, save_blob
from journal.services.validation import validate_trade
from journal.utils.constants import TRADES_KEY

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = set(TradeCreate.model_fields)


def build_trade(
    candidate: TradeCreate,
    *,
    trade_id: str,
    created_at: datetime,
    updated_at: datetime,
) -> Trade:
    """Turn a validated candidate into an OpenTrade or a fully derived ClosedTrade."""
    fields = candidate.model_dump(exclude={"exit_price"})
    if candidate.exit_price is None:
        return OpenTrade(id=trade_id, created_at=created_at, updated_at=updated_at, **fields)

    derived = derive(
        entry=candidate.entry_price,
        stop_loss=candidate.stop_loss,
        take_profit=candidate.take_profit,
        exit=candidate.exit_price,
        lot_size=candidate.lot_size,
        direction=candidate.direction,
        symbol=candidate.symbol,
    )
    return ClosedTrade(
        id=trade_id,
        created_at=created_at,
        updated_at=updated_at,
        exit_price=candidate.exit_price,
        profit_loss=derived.profit_loss,
        rr_ratio=derived.rr_ratio,
        sl_pips=derived.sl_pips,
        tp_pips=derived.tp_pips,
        **fields,
    )


class TradeRepository:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.Lock()

    # -- reads ---------------------------------------------------------------

    def get_all(self) -> list[Trade]:
        return self._load()

    def get_by_id(self, trade_id: str) -> Trade:
        for trade in self._load():
            if trade.id == trade_id:
                return trade
        raise TradeNotFoundError(trade_id)

    # -- mutations -----------------------------------------------------------

    def create(
        self,
        data: TradeCreate | dict,
        *,
        trade_id: str | None = None,
        created_at: datetime | None = None,
    ) -> Trade:
        candidate = _as_candidate(data, TradeCreate)
        validate_trade(candidate)

        with self._lock:
            trades = self._load()
            trade_id = trade_id or generate_id()
            if any(t.id == trade_id for t in trades):
                raise TradeValidationError(f"Trade id {trade_id} already exists", rule="id")
            now = utcnow()
            trade = build_trade(
                candidate,
                trade_id=trade_id,
                created_at=created_at or now,
                updated_at=now,
            )
            trades.append(trade)
            self._save(trades)

        logger.info(f"Created trade {trade.id}: {trade.symbol} {trade.direction.value} [{trade.status.value}]")
        return trade

    def update(self, trade_id: str, data: TradeUpdate | dict) -> Trade:
        changes = _as_candidate(data, TradeUpdate).model_dump(exclude_unset=True)

        with self._lock:
            trades = self._load()
            index = _index_of(trades, trade_id)
            current = trades[index]

            # Validate the full merged record so partial updates cannot bypass cross-field rules.
            merged = {**current.model_dump(include=_EDITABLE_FIELDS), **changes}
            candidate = TradeCreate.model_validate(merged)
            validate_trade(candidate)

            now = utcnow()
            if now <= current.updated_at:
                now = current.updated_at + timedelta(microseconds=1)
            trade = build_trade(
                candidate,
                trade_id=current.id,
                created_at=current.created_at,
                updated_at=now,
            )
            trades[index] = trade
            self._save(trades)

        logger.info(f"Updated trade {trade.id} ({', '.join(sorted(changes)) or 'no fields'})")
        return trade

    def close(self, trade_id: str, exit_price: float) -> Trade:
        return self.update(trade_id, {"exit_price": exit_price})

    def delete(self, trade_id: str) -> None:
        with self._lock:
            trades = self._load()
            index = _index_of(trades, trade_id)
            del trades[index]
            self._save(trades)
        logger.info(f"Deleted trade {trade_id}")

    def delete_all(self) -> int:
        """Remove every trade. Irreversible; confirmation belongs to the caller."""
        with self._lock:
            count = len(self._load())
            self._save([])
        logger.warning(f"Deleted all trades ({count})")
        return count

    def load_samples(self, samples: Iterable[TradeCreate | dict]) -> list[Trade]:
        """Bulk-create a demo set with a single save; any invalid sample aborts the load."""
        candidates = [_as_candidate(sample, TradeCreate) for sample in samples]
        for candidate in candidates:
            validate_trade(candidate)

        with self._lock:
            trades = self._load()
            now = utcnow()
            created = [
                build_trade(candidate, trade_id=generate_id(), created_at=now, updated_at=now)
                for candidate in candidates
            ]
            trades.extend(created)
            self._save(trades)

        logger.info(f"Loaded {len(created)} sample trades")
        return created

    # -- storage -------------------------------------------------------------

    def _load(self) -> list[Trade]:
        return load_blob(self.store, TRADES_KEY, trade_list_adapter, [])

    def _save(self, trades: list[Trade]) -> None:
        save_blob(self.store, TRADES_KEY, trade_list_adapter, trades)


def _as_candidate(data, schema: type[TradeCreate]) -> TradeCreate:
    if isinstance(data, schema):
        return data
    if isinstance(data, TradeCreate):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "trade"
        raise TradeValidationError(f"{field}: {first['msg']}", rule="schema") from e


def _index_of(trades: list[Trade], trade_id: str) -> int:
    for i, trade in enumerate(trades):
        if trade.id == trade_id:
            return i
    raise TradeNotFoundError(trade_id)
