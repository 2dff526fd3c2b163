from __future__ import annotations

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class KeyValueEntry(SQLModel, table=True):
    """One durable document per key; the value is an opaque string."""

    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
