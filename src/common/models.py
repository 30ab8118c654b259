"""Shared Pydantic record models for the admin dashboard.

These models define the row shapes read from the hosted data store.
Every field is optional because each query selects only the columns it
needs. Rows are validated here, at the fetch boundary, and the rest of the
code works with typed records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# === Known status values ===

class PostStatus:
    """Blog post status values the dashboard buckets on."""
    PUBLISHED = "published"
    DRAFT = "draft"


class CommentStatus:
    """Comment moderation status values the dashboard buckets on."""
    APPROVED = "approved"
    PENDING = "pending"


# === Collections ===

BLOG_POSTS = "blog_posts"
COMMENTS = "comments"
EVENTS = "events"
RSVPS = "rsvps"


class _Record(BaseModel):
    """Base for store rows. Unknown columns are ignored."""

    model_config = {"extra": "ignore"}


class BlogPost(_Record):
    """A row from `blog_posts`.

    `status` is kept as a free string: values outside PostStatus are valid
    rows that simply fall outside every status bucket.
    """
    id: Optional[str] = None
    title: str = ""
    category: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if v is not None else None

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, v: Any) -> Any:
        return "" if v is None else v


class Comment(_Record):
    """A row from `comments`."""
    id: Optional[str] = None
    status: Optional[str] = None
    blog_post_id: Optional[str] = None

    @field_validator("id", "blog_post_id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if v is not None else None


class Event(_Record):
    """A row from `events`."""
    id: Optional[str] = None
    title: str = ""
    date: Optional[str] = None  # ISO date, used only for ordering
    registered: int = Field(default=0, description="Number of registrations")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if v is not None else None

    @field_validator("registered", mode="before")
    @classmethod
    def _null_registered(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("title", mode="before")
    @classmethod
    def _null_title(cls, v: Any) -> Any:
        return "" if v is None else v


class Registration(_Record):
    """A row from `rsvps` joined with its event's title."""
    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    created_at: Optional[datetime] = None
    event_id: Optional[str] = None
    event_title: str = ""

    @model_validator(mode="before")
    @classmethod
    def _flatten_event(cls, data: Any) -> Any:
        """Lift the embedded `events { title }` object into `event_title`."""
        if isinstance(data, dict) and "events" in data:
            data = dict(data)
            joined = data.pop("events") or {}
            if isinstance(joined, list):
                joined = joined[0] if joined else {}
            data.setdefault("event_title", joined.get("title") or "")
        return data

    @field_validator("id", "event_id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return str(v) if v is not None else None

    @field_validator("phone", "email", "name", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Any) -> Any:
        if v is None:
            return ""
        return str(v) if isinstance(v, (int, float)) else v

    @property
    def registered_on(self) -> str:
        """Registration date (YYYY-MM-DD) for display, or empty."""
        return self.created_at.date().isoformat() if self.created_at else ""
