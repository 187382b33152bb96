"""Drafts and order templates.

Drafts are capped (10 by default); saving past the cap evicts the oldest
draft. Templates are an append-only list of presets addressed by position.
"""

import logging
import threading

from pydantic import TypeAdapter

from journal.errors import DraftNotFoundError, TemplateNotFoundError
from journal.models.workspace import Draft, TradeTemplate
from journal.services.storage import KeyValueStore, load_blob, save_blob
from journal.utils.constants import DRAFTS_KEY, TEMPLATES_KEY

logger = logging.getLogger(__name__)

_drafts_adapter = TypeAdapter(list[Draft])
_templates_adapter = TypeAdapter(list[TradeTemplate])


class DraftStore:
    def __init__(self, store: KeyValueStore, limit: int = 10):
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.store = store
        self.limit = limit
        self._lock = threading.Lock()

    def get_all(self) -> list[Draft]:
        """Newest first."""
        return list(reversed(self._load()))

    def get(self, draft_id: str) -> Draft:
        for draft in self._load():
            if draft.id == draft_id:
                return draft
        raise DraftNotFoundError(draft_id)

    def save(self, draft: Draft | dict) -> Draft:
        if isinstance(draft, dict):
            draft = Draft.model_validate(draft)
        with self._lock:
            drafts = [d for d in self._load() if d.id != draft.id]
            drafts.append(draft)
            evicted = drafts[:-self.limit]
            drafts = drafts[-self.limit:]
            save_blob(self.store, DRAFTS_KEY, _drafts_adapter, drafts)
        if evicted:
            logger.info(f"Draft limit {self.limit} reached, evicted {[d.id for d in evicted]}")
        return draft

    def delete(self, draft_id: str) -> None:
        with self._lock:
            drafts = self._load()
            remaining = [d for d in drafts if d.id != draft_id]
            if len(remaining) == len(drafts):
                raise DraftNotFoundError(draft_id)
            save_blob(self.store, DRAFTS_KEY, _drafts_adapter, remaining)

    def clear(self) -> None:
        with self._lock:
            save_blob(self.store, DRAFTS_KEY, _drafts_adapter, [])

    def _load(self) -> list[Draft]:
        return load_blob(self.store, DRAFTS_KEY, _drafts_adapter, [])


class TemplateStore:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.Lock()

    def get_all(self) -> list[TradeTemplate]:
        return load_blob(self.store, TEMPLATES_KEY, _templates_adapter, [])

    def save(self, template: TradeTemplate | dict) -> TradeTemplate:
        if isinstance(template, dict):
            template = TradeTemplate.model_validate(template)
        with self._lock:
            templates = self.get_all()
            templates.append(template)
            save_blob(self.store, TEMPLATES_KEY, _templates_adapter, templates)
        return template

    def delete(self, index: int) -> None:
        with self._lock:
            templates = self.get_all()
            if not 0 <= index < len(templates):
                raise TemplateNotFoundError(index)
            del templates[index]
            save_blob(self.store, TEMPLATES_KEY, _templates_adapter, templates)
