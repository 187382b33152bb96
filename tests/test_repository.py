"""Tests for the trade repository and its storage backends."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from unittest.mock import patch

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import journal.models  # noqa: F401
from journal.errors import StorageError, TradeNotFoundError, TradeValidationError
from journal.models.trade import ClosedTrade, OpenTrade, TradeStatus
from journal.services.repository import TradeRepository
from journal.services.samples import demo_trades
from journal.services.statistics import compute_stats
from journal.services.storage import InMemoryStore, SQLStore
from trade_factories import eurusd_buy


def _sqlite_engine(create_tables: bool = True):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_tables:
        SQLModel.metadata.create_all(engine)
    return engine


# ---------------------------------------------------------------------------
# 1. Create / read
# ---------------------------------------------------------------------------

class TestCreate:
    def test_create_assigns_id_and_timestamps(self, repo):
        trade = repo.create(eurusd_buy())
        assert trade.id
        assert trade.created_at == trade.updated_at
        assert isinstance(trade, OpenTrade)
        assert trade.status == TradeStatus.OPEN

    def test_round_trip(self, repo):
        data = eurusd_buy()
        trade = repo.create(data)
        fetched = repo.get_by_id(trade.id)
        assert fetched == trade
        for field in ("symbol", "timeframe", "lot_size", "entry_price", "stop_loss",
                      "take_profit", "emotions", "notes", "trade_date"):
            assert getattr(fetched, field) == data[field]

    def test_ids_are_unique(self, repo):
        ids = {repo.create(eurusd_buy()).id for _ in range(20)}
        assert len(ids) == 20

    def test_closed_trade_gets_derived_fields(self, repo):
        trade = repo.create(eurusd_buy(exit_price=1.0875))
        assert isinstance(trade, ClosedTrade)
        assert trade.profit_loss == 25.0
        assert trade.sl_pips == 30.0
        assert trade.tp_pips == 60.0
        assert trade.rr_ratio == 2.0
        assert trade.status == TradeStatus.WIN

    def test_caller_supplied_derived_values_ignored(self, repo):
        trade = repo.create(eurusd_buy(exit_price=1.0875, profit_loss=9999.0, rr_ratio=7))
        assert trade.profit_loss == 25.0
        assert trade.rr_ratio == 2.0

    def test_invalid_candidate_not_persisted(self, repo):
        with pytest.raises(TradeValidationError):
            repo.create(eurusd_buy(stop_loss=1.0900))
        assert repo.get_all() == []

    def test_bad_direction_value_is_validation_error(self, repo):
        with pytest.raises(TradeValidationError) as exc:
            repo.create(eurusd_buy(direction="HOLD"))
        assert exc.value.rule == "schema"

    def test_explicit_id_must_be_unique(self, repo):
        repo.create(eurusd_buy(), trade_id="abc")
        with pytest.raises(TradeValidationError):
            repo.create(eurusd_buy(), trade_id="abc")

    def test_get_missing_raises(self, repo):
        with pytest.raises(TradeNotFoundError):
            repo.get_by_id("nope")


# ---------------------------------------------------------------------------
# 2. Update / close
# ---------------------------------------------------------------------------

class TestUpdate:
    def test_update_merges_fields_and_bumps_updated_at(self, repo):
        trade = repo.create(eurusd_buy())
        updated = repo.update(trade.id, {"notes": "moved stop"})
        assert updated.notes == "moved stop"
        assert updated.id == trade.id
        assert updated.created_at == trade.created_at
        assert updated.updated_at > trade.updated_at
        assert updated.symbol == trade.symbol
        assert updated.emotions == trade.emotions
        assert repo.get_by_id(trade.id) == updated

    def test_close_recomputes_derived_fields(self, repo):
        trade = repo.create(eurusd_buy())
        closed = repo.close(trade.id, 1.0820)
        assert isinstance(closed, ClosedTrade)
        assert closed.profit_loss == -30.0
        assert closed.status == TradeStatus.LOSS

    def test_changing_exit_recomputes(self, repo):
        trade = repo.create(eurusd_buy(exit_price=1.0875))
        updated = repo.update(trade.id, {"exit_price": 1.0900})
        assert updated.profit_loss == 50.0

    def test_clearing_exit_reopens(self, repo):
        trade = repo.create(eurusd_buy(exit_price=1.0875))
        reopened = repo.update(trade.id, {"exit_price": None})
        assert isinstance(reopened, OpenTrade)
        assert not hasattr(reopened, "profit_loss")

    def test_update_cannot_break_direction_rule(self, repo):
        trade = repo.create(eurusd_buy())
        with pytest.raises(TradeValidationError):
            repo.update(trade.id, {"direction": "SELL"})
        assert repo.get_by_id(trade.id) == trade

    def test_update_missing_raises(self, repo):
        with pytest.raises(TradeNotFoundError):
            repo.update("nope", {"notes": "x"})


# ---------------------------------------------------------------------------
# 3. Delete
# ---------------------------------------------------------------------------

class TestDelete:
    def test_delete_one(self, repo):
        a = repo.create(eurusd_buy())
        b = repo.create(eurusd_buy())
        repo.delete(a.id)
        assert [t.id for t in repo.get_all()] == [b.id]

    def test_delete_missing_raises(self, repo):
        with pytest.raises(TradeNotFoundError):
            repo.delete("nope")

    def test_delete_all_then_stats_are_zero(self, repo):
        repo.load_samples(demo_trades())
        assert repo.delete_all() == 8
        assert repo.get_all() == []
        stats = compute_stats(repo.get_all())
        assert stats.total_trades == 0
        assert stats.win_rate == 0
        assert stats.total_profit == 0
        assert stats.symbol_stats == {}


# ---------------------------------------------------------------------------
# 4. Storage behaviour
# ---------------------------------------------------------------------------

class TestStorage:
    def test_failed_save_leaves_collection_unchanged(self, store, repo):
        existing = repo.create(eurusd_buy())
        with patch.object(store, "save", side_effect=StorageError("quota exceeded")):
            with pytest.raises(StorageError):
                repo.create(eurusd_buy(symbol="GBPUSD"))
            with pytest.raises(StorageError):
                repo.delete_all()
        assert repo.get_all() == [existing]

    def test_corrupt_blob_raises_storage_error(self, store, repo):
        store.save("trades", "{not json")
        with pytest.raises(StorageError):
            repo.get_all()

    def test_stored_json_uses_camel_case(self, store, repo):
        repo.create(eurusd_buy(exit_price=1.0875))
        raw = store.load("trades")
        assert '"tradeDate"' in raw
        assert '"profitLoss":25.0' in raw

    def test_missing_key_is_empty(self):
        assert TradeRepository(InMemoryStore()).get_all() == []

    def test_sql_store_round_trip(self):
        repo = TradeRepository(SQLStore(_sqlite_engine()))
        trade = repo.create(eurusd_buy(exit_price=1.0875))
        assert repo.get_by_id(trade.id) == trade
        repo.delete_all()
        assert repo.get_all() == []

    def test_sql_store_errors_are_wrapped(self):
        store = SQLStore(_sqlite_engine(create_tables=False))
        with pytest.raises(StorageError):
            store.load("trades")

    def test_samples_load(self, repo):
        created = repo.load_samples(demo_trades())
        assert len(created) == 8
        assert sum(1 for t in created if t.status == TradeStatus.OPEN) == 1
        dates = [t.trade_date for t in created]
        assert max(dates) - min(dates) <= timedelta(days=21)

    def test_samples_load_is_all_or_nothing(self, repo):
        samples = demo_trades()
        samples[5] = {**samples[5], "stop_loss": -1.0}
        with pytest.raises(TradeValidationError):
            repo.load_samples(samples)
        assert repo.get_all() == []

    def test_samples_failed_save_stores_nothing(self, store, repo):
        with patch.object(store, "save", side_effect=StorageError("disk full")):
            with pytest.raises(StorageError):
                repo.load_samples(demo_trades())
        assert repo.get_all() == []

    def test_samples_saved_once(self, store, repo):
        with patch.object(store, "save", wraps=store.save) as save:
            repo.load_samples(demo_trades())
        assert save.call_count == 1


# ---------------------------------------------------------------------------
# 5. Concurrent mutations
# ---------------------------------------------------------------------------

class TestConcurrency:
    def test_parallel_creates_are_all_kept(self, repo):
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(lambda n: repo.create(eurusd_buy(notes=f"trade {n}")), range(50)))
        stored = repo.get_all()
        assert len(stored) == 50
        assert {t.id for t in stored} == {t.id for t in created}

    def test_parallel_updates_on_distinct_trades_all_survive(self, repo):
        ids = [repo.create(eurusd_buy()).id for _ in range(20)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda trade_id: repo.update(trade_id, {"notes": f"edited {trade_id}"}), ids))
        assert {t.id: t.notes for t in repo.get_all()} == {i: f"edited {i}" for i in ids}

    def test_parallel_close_and_create(self, repo):
        ids = [repo.create(eurusd_buy()).id for _ in range(10)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            closes = [pool.submit(repo.close, trade_id, 1.0875) for trade_id in ids]
            creates = [pool.submit(repo.create, eurusd_buy()) for _ in range(10)]
            for future in closes + creates:
                future.result()
        stored = repo.get_all()
        assert len(stored) == 20
        assert sum(1 for t in stored if t.status == TradeStatus.WIN) == 10
