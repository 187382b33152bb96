"""Tests for the admin CLI commands."""

import json
from unittest.mock import patch

import pytest

from journal import cli
from journal.config import settings
from journal.services.repository import TradeRepository
from trade_factories import eurusd_buy


@pytest.fixture
def cli_store(store):
    with patch.object(cli, "_store", return_value=store):
        yield store


class TestExportJson:
    def test_uses_configured_page_size(self, cli_store, capsys, monkeypatch):
        monkeypatch.setattr(settings, "default_page_size", 25)
        cli.export_json(None)
        payload = json.loads(capsys.readouterr().out)
        assert payload["settings"]["pageSize"] == 25

    def test_includes_trades(self, cli_store, capsys):
        TradeRepository(cli_store).create(eurusd_buy())
        cli.export_json(None)
        assert len(json.loads(capsys.readouterr().out)["trades"]) == 1


class TestSeedAndClear:
    def test_seed_demo(self, cli_store, capsys):
        cli.seed_demo()
        assert "Loaded 8 demo trades" in capsys.readouterr().out
        assert len(TradeRepository(cli_store).get_all()) == 8

    def test_clear_trades_needs_confirmation(self, cli_store, monkeypatch):
        cli.seed_demo()
        monkeypatch.setattr("builtins.input", lambda prompt: "no")
        cli.clear_trades()
        assert len(TradeRepository(cli_store).get_all()) == 8

        monkeypatch.setattr("builtins.input", lambda prompt: "yes")
        cli.clear_trades()
        assert TradeRepository(cli_store).get_all() == []
