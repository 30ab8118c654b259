"""Registrations View — admin-only table of event RSVPs.

Loads event options and registrations concurrently and filters the rows by
event in memory. Failures here are surfaced: a failed registrations load
adds a destructive Notice to the page. A failed event-options load is only
logged, leaving the filter with just "all".
"""

from __future__ import annotations

from typing import Iterable, Optional

from src.common.logging import setup_logging
from src.common.models import EVENTS, RSVPS, Event, Registration
from src.dashboard.fetcher import FetchScope, QueryError, RowOrder, SupabaseReader

from .models import ALL_EVENTS, AdminContext, EventOption, Notice, RegistrationsPage

logger = setup_logging(module_name="registrations_view")

RSVP_SELECT = "*, events(title)"


def filter_registrations(
    rows: Iterable[Registration],
    selected_event: str = ALL_EVENTS,
) -> list[Registration]:
    """Rows for one event, or every row for "all"."""
    if selected_event == ALL_EVENTS:
        return list(rows)
    return [r for r in rows if r.event_id == selected_event]


class RegistrationsView:
    """Loads the registrations table for admins."""

    def __init__(
        self,
        reader: SupabaseReader,
        auth: AdminContext,
        scope: Optional[FetchScope] = None,
    ):
        self.reader = reader
        self.auth = auth
        self.scope = scope or FetchScope("registrations")

    async def fetch_event_options(self) -> list[EventOption]:
        """Events for the filter, newest first. Empty on failure."""
        try:
            events = await self.reader.fetch_records(
                Event, EVENTS, ["id", "title"], order=RowOrder("date", descending=True)
            )
        except QueryError as e:
            logger.error("Error fetching events: %s", e)
            return []
        return [EventOption(id=e.id, title=e.title) for e in events if e.id is not None]

    async def fetch_registrations(self) -> tuple[list[Registration], list[Notice]]:
        """All registrations, newest first, plus any notice to show."""
        try:
            rows = await self.reader.fetch_records(
                Registration, RSVPS, RSVP_SELECT, order=RowOrder("created_at", descending=True)
            )
        except QueryError as e:
            logger.error("Error fetching RSVPs: %s", e)
            notice = Notice(
                title="Error",
                description="Failed to load RSVPs",
                variant="destructive",
            )
            return [], [notice]
        return rows, []

    async def load(self, selected_event: str = ALL_EVENTS) -> RegistrationsPage:
        """Build the page for `selected_event` ("all" or an event id)."""
        if not self.auth.is_admin:
            logger.warning("Registrations requested without admin rights (user=%s)", self.auth.user_id)
            return RegistrationsPage(selected_event=selected_event, permission_denied=True)

        events, (rows, notices) = await self.scope.gather(
            self.fetch_event_options(),
            self.fetch_registrations(),
        )
        filtered = filter_registrations(rows, selected_event)
        logger.info(
            "Loaded %d registrations (%d shown for %s)", len(rows), len(filtered), selected_event
        )
        return RegistrationsPage(
            selected_event=selected_event,
            events=events,
            registrations=rows,
            filtered=filtered,
            notices=notices,
        )

    def select_event(self, page: RegistrationsPage, selected_event: str) -> RegistrationsPage:
        """Re-filter an already loaded page without fetching again."""
        page.selected_event = selected_event
        page.filtered = filter_registrations(page.registrations, selected_event)
        return page

    async def aclose(self) -> None:
        """Cancel any fetch still in flight."""
        await self.scope.aclose()

    async def __aenter__(self) -> RegistrationsView:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
