"""Aggregator — derived statistics over already-fetched row sets.

Pure functions: no I/O and no state between calls. Rows may be mappings
(raw store rows) or attribute objects (validated records).

top_engaged_posts is the one coroutine here: it drives an injected
per-post lookup and joins on all of them before assembling its result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable, Optional, Sequence

from src.common.models import CommentStatus, PostStatus
from src.dashboard.fetcher.client import QueryError
from src.dashboard.fetcher.scope import FetchScope

from .models import AnalyticsSummary, CategoryShare, EngagedPost, StatCard, StatusPartition

logger = logging.getLogger(__name__)

_MISSING = object()


def _field_value(row: Any, field: str, default: Any = None) -> Any:
    if isinstance(row, Mapping):
        return row.get(field, default)
    return getattr(row, field, default)


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest integer, .5 going up.

    Works in integer arithmetic; both arguments must be non-negative and the
    denominator non-zero.
    """
    return (2 * numerator + denominator) // (2 * denominator)


def partition_by_status(
    rows: Iterable[Any],
    field: str,
    categories: Sequence[str],
) -> StatusPartition:
    """Count rows per exact `field` value.

    Args:
        rows: Row set to partition.
        field: Name of the status-like field.
        categories: Recognized values, in display order.

    Returns:
        StatusPartition with one count per category. Rows with any other
        value count toward the total only.
    """
    counts = {c: 0 for c in categories}
    total = 0
    for row in rows:
        total += 1
        value = _field_value(row, field)
        if value in counts:
            counts[value] += 1
    return StatusPartition(total=total, counts=counts)


def sum_field(rows: Iterable[Any], field: str) -> int:
    """Sum a numeric field across rows. Missing or null values add nothing."""
    return sum(_field_value(row, field) or 0 for row in rows)


def select_recent_published(posts: Iterable[Any], k: int) -> list[Any]:
    """The k most recently created published posts, newest first.

    Sorting is stable: posts with equal timestamps keep their input order.
    Posts without a creation time sort after all dated ones.
    """
    published = [p for p in posts if _field_value(p, "status") == PostStatus.PUBLISHED]
    dated = [p for p in published if _field_value(p, "created_at") is not None]
    undated = [p for p in published if _field_value(p, "created_at") is None]
    dated.sort(key=lambda p: _as_datetime(_field_value(p, "created_at")), reverse=True)
    return (dated + undated)[:max(k, 0)]


def _as_datetime(value: Any) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


async def top_engaged_posts(
    posts: Sequence[Any],
    k: int,
    comments_by_post_id: Callable[[Any], Awaitable[int]],
    scope: Optional[FetchScope] = None,
) -> list[EngagedPost]:
    """Approved-comment counts for the first k posts.

    All lookups are issued at once and awaited together; the result keeps
    the order of `posts`, not the order lookups finish in. A lookup failing
    with QueryError counts as zero comments for that post. Any other
    failure cancels the remaining lookups and propagates.

    Lookups run as tasks of `scope` when given, else of a private scope
    closed before returning.
    """
    selected = list(posts)[:max(k, 0)]

    async def _count(post: Any) -> int:
        post_id = _field_value(post, "id")
        try:
            return await comments_by_post_id(post_id)
        except QueryError as e:
            logger.warning("Comment count for post %s unavailable: %s", post_id, e)
            return 0

    if scope is not None:
        counts = await scope.gather(*(_count(p) for p in selected))
    else:
        async with FetchScope("top_posts") as local:
            counts = await local.gather(*(_count(p) for p in selected))
    return [
        EngagedPost(title=_field_value(p, "title") or "", comments=count)
        for p, count in zip(selected, counts)
    ]


def group_by_category_with_percentage(posts: Iterable[Any]) -> list[CategoryShare]:
    """Published post count and percentage share per category.

    Rows carrying a status other than published are skipped; rows with no
    status field at all are taken as already filtered. Categories are matched
    exactly and returned in first-seen order.
    """
    groups: dict[Any, int] = {}
    total = 0
    for post in posts:
        status = _field_value(post, "status", _MISSING)
        if status is not _MISSING and status is not None and status != PostStatus.PUBLISHED:
            continue
        key = _field_value(post, "category")
        groups[key] = groups.get(key, 0) + 1
        total += 1

    if total == 0:
        return []

    return [
        CategoryShare(name=name, count=count, percentage=round_half_up(100 * count, total))
        for name, count in groups.items()
    ]


def build_stat_cards(summary: AnalyticsSummary) -> list[StatCard]:
    """Headline cards shown above the tables."""
    blog, comments, events = summary.blog_stats, summary.comment_stats, summary.event_stats
    return [
        StatCard(
            title="Published Posts",
            value=str(blog.get(PostStatus.PUBLISHED)),
            subtitle=f"{blog.get(PostStatus.DRAFT)} drafts",
        ),
        StatCard(
            title="Total Comments",
            value=str(comments.total),
            subtitle=f"{comments.get(CommentStatus.PENDING)} pending",
        ),
        StatCard(
            title="Event Registrations",
            value=str(events.total_registrations),
            subtitle=f"{events.total} events",
        ),
        StatCard(
            title="Total Content",
            value=str(blog.total + events.total),
            subtitle="Blog posts & events",
        ),
    ]
