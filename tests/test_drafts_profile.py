"""Tests for drafts, templates, the user profile and settings."""

from typing import get_type_hints

import pytest
from pydantic import ValidationError

from journal.errors import DraftNotFoundError, TemplateNotFoundError
from journal.models.workspace import Draft, JournalSettings, TradeTemplate
from journal.services.drafts import DraftStore, TemplateStore
from journal.services.profile import ProfileService


# ---------------------------------------------------------------------------
# 1. Drafts
# ---------------------------------------------------------------------------

class TestDrafts:
    def test_collection_annotations_use_builtin_list(self):
        assert get_type_hints(DraftStore.get_all)["return"] == list[Draft]
        assert get_type_hints(DraftStore._load)["return"] == list[Draft]
        assert get_type_hints(TemplateStore.get_all)["return"] == list[TradeTemplate]

    def test_save_and_get(self, store):
        drafts = DraftStore(store)
        saved = drafts.save({"symbol": "EURUSD", "entryPrice": 1.085})
        assert drafts.get(saved.id).entry_price == 1.085
        assert saved.stop_loss is None

    def test_list_is_newest_first(self, store):
        drafts = DraftStore(store)
        ids = [drafts.save(Draft(id=f"d{i}", symbol="EURUSD")).id for i in range(3)]
        assert [d.id for d in drafts.get_all()] == list(reversed(ids))

    def test_cap_evicts_oldest(self, store):
        drafts = DraftStore(store, limit=10)
        for i in range(12):
            drafts.save(Draft(id=f"d{i}", symbol="EURUSD"))
        kept = drafts.get_all()
        assert len(kept) == 10
        assert kept[0].id == "d11"
        assert kept[-1].id == "d2"
        with pytest.raises(DraftNotFoundError):
            drafts.get("d0")

    def test_resaving_replaces_in_place(self, store):
        drafts = DraftStore(store)
        drafts.save(Draft(id="a", symbol="EURUSD"))
        drafts.save(Draft(id="b", symbol="GBPUSD"))
        drafts.save(Draft(id="a", symbol="XAUUSD"))
        assert [(d.id, d.symbol) for d in drafts.get_all()] == [("a", "XAUUSD"), ("b", "GBPUSD")]

    def test_unknown_fields_are_dropped(self, store):
        draft = DraftStore(store).save({"symbol": "EURUSD", "profitLoss": 99.0})
        assert "profit_loss" not in draft.model_dump()

    def test_delete(self, store):
        drafts = DraftStore(store)
        drafts.save(Draft(id="a"))
        drafts.delete("a")
        assert drafts.get_all() == []

    def test_delete_unknown_raises(self, store):
        with pytest.raises(DraftNotFoundError):
            DraftStore(store).delete("missing")

    def test_clear(self, store):
        drafts = DraftStore(store)
        drafts.save(Draft(id="a"))
        drafts.clear()
        assert drafts.get_all() == []

    def test_limit_must_be_positive(self, store):
        with pytest.raises(ValueError):
            DraftStore(store, limit=0)


# ---------------------------------------------------------------------------
# 2. Templates
# ---------------------------------------------------------------------------

class TestTemplates:
    def test_save_list_delete(self, store):
        templates = TemplateStore(store)
        templates.save({"symbol": "XAUUSD", "direction": "SELL", "lotSize": 0.05})
        templates.save({"symbol": "EURUSD", "timeframe": "H1"})
        assert [t.symbol for t in templates.get_all()] == ["XAUUSD", "EURUSD"]

        templates.delete(0)
        assert [t.symbol for t in templates.get_all()] == ["EURUSD"]

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_delete_out_of_range(self, store, index):
        templates = TemplateStore(store)
        templates.save({"symbol": "EURUSD"})
        with pytest.raises(TemplateNotFoundError):
            templates.delete(index)


# ---------------------------------------------------------------------------
# 3. Profile and settings
# ---------------------------------------------------------------------------

class TestProfile:
    def test_no_user_by_default(self, store):
        assert ProfileService(store).get_user() is None

    def test_set_user_trims_name(self, store):
        user = ProfileService(store).set_user("  alice  ")
        assert user.username == "alice"

    def test_same_name_keeps_created_at(self, store):
        profile = ProfileService(store)
        first = profile.set_user("alice")
        second = profile.set_user("alice")
        assert second.created_at == first.created_at
        assert second.last_login >= first.last_login

    def test_new_name_starts_fresh(self, store):
        profile = ProfileService(store)
        profile.set_user("alice")
        assert profile.set_user("bob").username == "bob"

    def test_short_name_rejected(self, store):
        with pytest.raises(ValidationError):
            ProfileService(store).set_user("ab")

    def test_clear_user(self, store):
        profile = ProfileService(store)
        profile.set_user("alice")
        profile.clear_user()
        assert profile.get_user() is None


class TestSettings:
    def test_defaults(self, store):
        settings = ProfileService(store).get_settings()
        assert settings.starting_balance == 10000.0
        assert settings.page_size == 10
        assert settings.max_risk_percent == 10.0

    def test_partial_update_persists(self, store):
        ProfileService(store).update_settings({"page_size": 25})
        settings = ProfileService(store).get_settings()
        assert settings.page_size == 25
        assert settings.starting_balance == 10000.0

    def test_invalid_update_leaves_settings_unchanged(self, store):
        profile = ProfileService(store)
        with pytest.raises(ValidationError):
            profile.update_settings({"page_size": 0})
        assert profile.get_settings().page_size == 10

    def test_configured_defaults_used_until_saved(self, store):
        profile = ProfileService(store, defaults=JournalSettings(page_size=25))
        assert profile.get_settings().page_size == 25
        profile.update_settings({"starting_balance": 2500.0})
        assert profile.get_settings().page_size == 25
        assert ProfileService(store).get_settings().starting_balance == 2500.0
