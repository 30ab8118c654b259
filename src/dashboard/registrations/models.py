"""Data models for the registrations view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from src.common.models import Registration

ALL_EVENTS = "all"

PERMISSION_DENIED_MESSAGE = "You do not have permission to access this page."
EMPTY_MESSAGE = "No registrations found"


@dataclass(frozen=True)
class AdminContext:
    """Caller identity and capability, passed in explicitly by the host."""
    user_id: Optional[str] = None
    is_admin: bool = False


@dataclass
class EventOption:
    """An entry in the event filter drop-down."""
    id: str
    title: str


@dataclass
class Notice:
    """A transient user-facing notification."""
    title: str
    description: str
    variant: str = "default"  # default, destructive


@dataclass
class RegistrationsPage:
    """Everything the registrations view renders."""
    selected_event: str = ALL_EVENTS
    events: list[EventOption] = field(default_factory=list)
    registrations: list[Registration] = field(default_factory=list)
    filtered: list[Registration] = field(default_factory=list)
    notices: list[Notice] = field(default_factory=list)
    permission_denied: bool = False

    @property
    def message(self) -> str:
        """Placeholder text when there are no rows to show, else empty."""
        if self.permission_denied:
            return PERMISSION_DENIED_MESSAGE
        if not self.filtered:
            return EMPTY_MESSAGE
        return ""

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "selected_event": self.selected_event,
            "permission_denied": self.permission_denied,
            "message": self.message,
            "events": [{"id": e.id, "title": e.title} for e in self.events],
            "registrations": [
                {
                    "id": r.id,
                    "event_id": r.event_id,
                    "event": r.event_title,
                    "name": r.name,
                    "email": r.email,
                    "phone": r.phone,
                    "registered": r.registered_on,
                }
                for r in self.filtered
            ],
            "notices": [
                {"title": n.title, "description": n.description, "variant": n.variant}
                for n in self.notices
            ],
        }
