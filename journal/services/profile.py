"""User profile and journal settings blobs.

The profile is personalization only (a display name and login times); it is
not a security boundary and holds no credentials.
"""

import logging
import threading

from pydantic import TypeAdapter

from journal.models.trade import utcnow
from journal.models.workspace import JournalSettings, UserProfile
from journal.services.storage import KeyValueStore, load_blob, save_blob
from journal.utils.constants import SETTINGS_KEY, USER_KEY

logger = logging.getLogger(__name__)

_user_adapter = TypeAdapter(UserProfile)
_settings_adapter = TypeAdapter(JournalSettings)


class ProfileService:
    def __init__(self, store: KeyValueStore, defaults: JournalSettings | None = None):
        self.store = store
        self.defaults = defaults or JournalSettings()
        self._lock = threading.Lock()

    def get_user(self) -> UserProfile | None:
        return load_blob(self.store, USER_KEY, _user_adapter, None)

    def set_user(self, username: str) -> UserProfile:
        """Record a login; the first login for a name also sets created_at."""
        name = username.strip()
        with self._lock:
            current = self.get_user()
            if current is not None and current.username == name:
                profile = current.model_copy(update={"last_login": utcnow()})
            else:
                profile = UserProfile(username=name)
            save_blob(self.store, USER_KEY, _user_adapter, profile)
        logger.info(f"Profile set for {profile.username}")
        return profile

    def clear_user(self) -> None:
        self.store.delete(USER_KEY)

    def get_settings(self) -> JournalSettings:
        return load_blob(self.store, SETTINGS_KEY, _settings_adapter, self.defaults)

    def update_settings(self, changes: dict) -> JournalSettings:
        with self._lock:
            merged = {**self.get_settings().model_dump(), **changes}
            updated = JournalSettings.model_validate(merged)
            save_blob(self.store, SETTINGS_KEY, _settings_adapter, updated)
        return updated
