"""Supabase Reader — read-only row access for the dashboard views.

Wraps the async supabase-py client behind a single generic capability:
read rows from a collection, optionally filtered on equality, ordered and
limited. Every store, network or timeout failure surfaces as QueryError.

Usage:
    reader = SupabaseReader()
    rows = await reader.read_rows(
        "blog_posts",
        ["id", "title"],
        filters=[RowFilter("status", "published")],
        order=RowOrder("created_at", descending=True),
        limit=5,
    )
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, TypeVar

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError

from src.common.config import get_supabase_credentials, settings

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class QueryError(Exception):
    """A read against the data store failed (network, permission, timeout)."""

    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")
        self.collection = collection
        self.message = message


class RecordValidationError(QueryError):
    """A fetched row did not match the expected record shape."""


@dataclass(frozen=True)
class RowFilter:
    """Equality filter: `field == value`."""
    field: str
    value: Any


@dataclass(frozen=True)
class RowOrder:
    """Sort order for a read."""
    field: str
    descending: bool = False


def _select_clause(fields: Iterable[str] | str) -> str:
    if isinstance(fields, str):
        return fields
    return ",".join(fields)


class SupabaseReader:
    """Reads rows from a Supabase project.

    The client is created lazily from environment credentials unless one is
    injected (tests, or a caller sharing a client across views).
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        client: Any = None,
        timeout: Optional[float] = None,
    ):
        self._supabase_url = supabase_url
        self._supabase_key = supabase_key
        self._client = client
        self._timeout = timeout if timeout is not None else settings.dashboard.request_timeout
        self._client_lock = asyncio.Lock()

    async def _get_client(self):
        """Lazy-initialize the async Supabase client."""
        if self._client is not None:
            return self._client
        async with self._client_lock:
            if self._client is None:
                url, key = self._supabase_url, self._supabase_key
                if not url or not key:
                    env_url, env_key = get_supabase_credentials()
                    url, key = url or env_url, key or env_key
                from supabase import acreate_client

                self._client = await acreate_client(url, key)
                logger.info("Connected to Supabase: %s", url)
        return self._client

    async def read_rows(
        self,
        collection: str,
        fields: Iterable[str] | str,
        filters: Sequence[RowFilter] = (),
        order: Optional[RowOrder] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Read rows matching every filter.

        Args:
            collection: Table name.
            fields: Columns to select, or a raw PostgREST select string
                    (used for embedded joins such as `*, events(title)`).
            filters: Equality filters, ANDed together.
            order: Optional sort order.
            limit: Optional maximum row count.

        Returns:
            List of row dictionaries (possibly empty).

        Raises:
            QueryError: On store, network or timeout failure.
        """
        client = await self._get_client()
        query = client.table(collection).select(_select_clause(fields))
        for f in filters:
            query = query.eq(f.field, f.value)
        if order is not None:
            query = query.order(order.field, desc=order.descending)
        if limit is not None:
            query = query.limit(limit)

        try:
            response = await asyncio.wait_for(query.execute(), timeout=self._timeout)
        except APIError as e:
            logger.error("Query on %s rejected: %s", collection, e.message)
            raise QueryError(collection, str(e.message)) from e
        except httpx.HTTPError as e:
            logger.error("Query on %s failed: %s", collection, e)
            raise QueryError(collection, str(e)) from e
        except asyncio.TimeoutError as e:
            logger.error("Query on %s timed out after %.1fs", collection, self._timeout)
            raise QueryError(collection, f"timed out after {self._timeout}s") from e

        rows = response.data or []
        logger.debug("Read %d rows from %s", len(rows), collection)
        return list(rows)

    async def fetch_records(
        self,
        model: type[RecordT],
        collection: str,
        fields: Iterable[str] | str,
        filters: Sequence[RowFilter] = (),
        order: Optional[RowOrder] = None,
        limit: Optional[int] = None,
    ) -> list[RecordT]:
        """Read rows and validate each into `model`."""
        rows = await self.read_rows(collection, fields, filters, order, limit)
        return validate_rows(model, collection, rows)


def validate_rows(model: type[RecordT], collection: str, rows: Iterable[dict]) -> list[RecordT]:
    """Validate raw rows into typed records.

    Raises:
        RecordValidationError: If any row does not fit the model.
    """
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        logger.error("Invalid %s row: %s", collection, e)
        raise RecordValidationError(collection, str(e)) from e
