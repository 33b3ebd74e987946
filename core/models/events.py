"""Event model -- the message format published by the quote refresher."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field


class Event(BaseModel):
    """A typed event that flows through the in-process bus."""

    id: str = Field(default_factory=lambda: f"evt_{uuid4().hex[:12]}")
    type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str
    payload: dict = Field(default_factory=dict)


# -- Event type constants --

class EventTypes:
    """Well-known event type strings."""

    PRICES_UPDATED = "prices.updated"
    REFRESH_FAILED = "prices.refresh_failed"
