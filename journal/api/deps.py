"""Shared API dependencies.

Services are cached per store so that every request touching the same store
shares one repository, and therefore one mutation lock.
"""

from functools import lru_cache

from fastapi import Depends

from journal.config import settings
from journal.database import engine
from journal.models.workspace import JournalSettings
from journal.services.drafts import DraftStore, TemplateStore
from journal.services.profile import ProfileService
from journal.services.repository import TradeRepository
from journal.services.storage import KeyValueStore, SQLStore

_sql_store = SQLStore(engine)


def get_store() -> KeyValueStore:
    """Storage backend; tests override this with an InMemoryStore."""
    return _sql_store


@lru_cache(maxsize=None)
def _repository_for(store: KeyValueStore) -> TradeRepository:
    return TradeRepository(store)


@lru_cache(maxsize=None)
def _drafts_for(store: KeyValueStore) -> DraftStore:
    return DraftStore(store, limit=settings.draft_limit)


@lru_cache(maxsize=None)
def _templates_for(store: KeyValueStore) -> TemplateStore:
    return TemplateStore(store)


@lru_cache(maxsize=None)
def _profile_for(store: KeyValueStore) -> ProfileService:
    return ProfileService(store, defaults=JournalSettings(page_size=settings.default_page_size))


def get_repository(store: KeyValueStore = Depends(get_store)) -> TradeRepository:
    return _repository_for(store)


def get_draft_store(store: KeyValueStore = Depends(get_store)) -> DraftStore:
    return _drafts_for(store)


def get_template_store(store: KeyValueStore = Depends(get_store)) -> TemplateStore:
    return _templates_for(store)


def get_profile_service(store: KeyValueStore = Depends(get_store)) -> ProfileService:
    return _profile_for(store)
