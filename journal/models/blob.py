"""StoredBlob model — one serialized collection per key."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class StoredBlob(SQLModel, table=True):
    __tablename__ = "stored_blob"

    key: str = Field(primary_key=True, max_length=64)  # "trades", "user", "settings", ...
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
