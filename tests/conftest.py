"""Shared test fixtures for the admin dashboard."""

import asyncio
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.dashboard.fetcher.client import QueryError, validate_rows


class FakeReader:
    """In-memory stand-in for SupabaseReader.

    Serves rows from `tables`, applying equality filters, ordering, limit and
    column projection like the real store. `fail_on` decides per call whether
    to raise QueryError; `delay_for` decides how long each call sleeps.
    """

    def __init__(
        self,
        tables: dict[str, list[dict]],
        fail_on: Optional[Callable[[str, tuple], bool]] = None,
        delay_for: Optional[Callable[[str, tuple], float]] = None,
    ):
        self.tables = tables
        self.fail_on = fail_on
        self.delay_for = delay_for
        self.calls: list[tuple[str, tuple]] = []

    async def read_rows(self, collection, fields, filters=(), order=None, limit=None):
        filters = tuple(filters)
        self.calls.append((collection, filters))
        if self.delay_for is not None:
            await asyncio.sleep(self.delay_for(collection, filters))
        else:
            await asyncio.sleep(0)
        if self.fail_on is not None and self.fail_on(collection, filters):
            raise QueryError(collection, "permission denied")

        rows = [
            r for r in self.tables.get(collection, [])
            if all(r.get(f.field) == f.value for f in filters)
        ]
        if order is not None:
            rows = sorted(rows, key=lambda r: r.get(order.field) or "", reverse=order.descending)
        if limit is not None:
            rows = rows[:limit]
        if isinstance(fields, str):
            return [dict(r) for r in rows]
        return [{k: r[k] for k in fields if k in r} for r in rows]

    async def fetch_records(self, model, collection, fields, filters=(), order=None, limit=None):
        rows = await self.read_rows(collection, fields, filters, order, limit)
        return validate_rows(model, collection, rows)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_tables() -> dict[str, list[dict]]:
    """A small blog with posts, comments, events and RSVPs."""
    return {
        "blog_posts": [
            {"id": "p1", "title": "Spring Retreat Recap", "category": "News",
             "status": "published", "created_at": "2026-03-01T10:00:00+00:00"},
            {"id": "p2", "title": "Volunteer Spotlight", "category": "Community",
             "status": "published", "created_at": "2026-03-05T10:00:00+00:00"},
            {"id": "p3", "title": "Board Minutes", "category": "News",
             "status": "published", "created_at": "2026-02-20T10:00:00+00:00"},
            {"id": "p4", "title": "Untitled Draft", "category": "News",
             "status": "draft", "created_at": "2026-03-06T10:00:00+00:00"},
            {"id": "p5", "title": "Gala Planning", "category": "Events",
             "status": "draft", "created_at": "2026-03-07T10:00:00+00:00"},
        ],
        "comments": [
            {"id": "c1", "status": "approved", "blog_post_id": "p1"},
            {"id": "c2", "status": "approved", "blog_post_id": "p1"},
            {"id": "c3", "status": "pending", "blog_post_id": "p1"},
            {"id": "c4", "status": "approved", "blog_post_id": "p2"},
            {"id": "c5", "status": "pending", "blog_post_id": "p3"},
            {"id": "c6", "status": "spam", "blog_post_id": "p3"},
        ],
        "events": [
            {"id": "e1", "title": "Spring Retreat", "date": "2026-04-10", "registered": 10},
            {"id": "e2", "title": "Gala", "date": "2026-06-01", "registered": 5},
            {"id": "e3", "title": "Workshop", "date": "2026-05-15", "registered": 0},
        ],
        "rsvps": [
            {"id": "r1", "name": "Ana Lima", "email": "ana@example.org", "phone": "555-0101",
             "created_at": "2026-03-02T09:00:00+00:00", "event_id": "e1",
             "events": {"title": "Spring Retreat"}},
            {"id": "r2", "name": "Ben Osei", "email": "ben@example.org", "phone": None,
             "created_at": "2026-03-04T12:30:00+00:00", "event_id": "e2",
             "events": {"title": "Gala"}},
            {"id": "r3", "name": "Chen Wu", "email": "chen@example.org", "phone": "555-0199",
             "created_at": "2026-03-03T18:15:00+00:00", "event_id": "e1",
             "events": {"title": "Spring Retreat"}},
        ],
    }


@pytest.fixture
def make_reader(sample_tables):
    """Factory for FakeReader over the sample tables."""

    def _make(tables=None, fail_on=None, delay_for=None) -> FakeReader:
        return FakeReader(tables if tables is not None else sample_tables, fail_on, delay_for)

    return _make

