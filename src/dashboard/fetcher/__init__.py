# Fetcher — read-only access to the hosted data store
"""
Data fetcher for the dashboard views.

Provides the SupabaseReader read capability, its QueryError failure kind
and the FetchScope that ties in-flight reads to a view's lifetime.
"""

from .client import (
    QueryError,
    RecordValidationError,
    RowFilter,
    RowOrder,
    SupabaseReader,
    validate_rows,
)
from .scope import FetchScope

__all__ = [
    "FetchScope",
    "QueryError",
    "RecordValidationError",
    "RowFilter",
    "RowOrder",
    "SupabaseReader",
    "validate_rows",
]
