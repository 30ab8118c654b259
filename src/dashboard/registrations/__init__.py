# Registrations — admin table of event RSVPs
"""
Registrations view for the admin dashboard.

Admin-gated list of RSVPs joined with their event title, filterable by
event.
"""

from .models import (
    ALL_EVENTS,
    AdminContext,
    EventOption,
    Notice,
    RegistrationsPage,
)
from .service import RegistrationsView, filter_registrations

__all__ = [
    "ALL_EVENTS",
    "AdminContext",
    "EventOption",
    "Notice",
    "RegistrationsPage",
    "RegistrationsView",
    "filter_registrations",
]
