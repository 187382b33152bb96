"""Shared constants and defaults for the journal."""

from datetime import timedelta

# Relative windows for the history date filter
DATE_WINDOWS: dict[str, timedelta] = {
    "today": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "last3months": timedelta(days=90),
}

# Blob keys in the key-value store
TRADES_KEY = "trades"
USER_KEY = "user"
SETTINGS_KEY = "settings"
DRAFTS_KEY = "drafts"
TEMPLATES_KEY = "templates"

EXPORT_FORMAT_VERSION = "1.0"
