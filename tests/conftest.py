"""Shared fixtures."""

import pytest

from journal.services.repository import TradeRepository
from journal.services.storage import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def repo(store) -> TradeRepository:
    return TradeRepository(store)
