"""Analytics Dashboard — fetch, aggregate and assemble the summary view.

Runs five independent fetch sequences concurrently. Each one handles its
own QueryError: the failure is logged, the section keeps its zero value and
its name is added to `summary.errors`. No failure is surfaced to the user
beyond that list.

Usage:
    async with AnalyticsDashboard(SupabaseReader()) as dashboard:
        summary = await dashboard.load()
"""

from __future__ import annotations

from typing import Optional

from src.common.config import DashboardSettings, settings
from src.common.logging import setup_logging
from src.common.models import (
    BLOG_POSTS,
    COMMENTS,
    EVENTS,
    BlogPost,
    Comment,
    CommentStatus,
    Event,
    PostStatus,
)
from src.dashboard.fetcher import FetchScope, QueryError, RowFilter, RowOrder, SupabaseReader

from .aggregator import (
    group_by_category_with_percentage,
    partition_by_status,
    select_recent_published,
    sum_field,
    top_engaged_posts,
)
from .models import AnalyticsSummary, CategoryShare, EngagedPost, EventStats, StatusPartition

logger = setup_logging(module_name="analytics_dashboard")


class AnalyticsDashboard:
    """Loads the analytics summary for the admin dashboard."""

    def __init__(
        self,
        reader: SupabaseReader,
        config: Optional[DashboardSettings] = None,
        scope: Optional[FetchScope] = None,
    ):
        """Initialize the dashboard.

        Args:
            reader: Read capability against the data store.
            config: Dashboard tunables. Defaults to the loaded settings.
            scope: Fetch scope owning in-flight reads. A private one is
                   created when omitted.
        """
        self.reader = reader
        self.config = config or settings.dashboard
        self.scope = scope or FetchScope("analytics")

    # --- Sections ---

    async def fetch_blog_stats(self) -> StatusPartition:
        """Post counts by status."""
        posts = await self.reader.fetch_records(BlogPost, BLOG_POSTS, ["status"])
        return partition_by_status(posts, "status", self.config.post_statuses)

    async def fetch_comment_stats(self) -> StatusPartition:
        """Comment counts by moderation status."""
        comments = await self.reader.fetch_records(Comment, COMMENTS, ["status"])
        return partition_by_status(comments, "status", self.config.comment_statuses)

    async def fetch_event_stats(self) -> EventStats:
        """Event count and total registrations."""
        events = await self.reader.fetch_records(Event, EVENTS, ["registered"])
        return EventStats(total=len(events), total_registrations=sum_field(events, "registered"))

    async def count_approved_comments(self, post_id: str) -> int:
        """Number of approved comments on one post."""
        rows = await self.reader.read_rows(
            COMMENTS,
            ["id"],
            filters=[
                RowFilter("blog_post_id", post_id),
                RowFilter("status", CommentStatus.APPROVED),
            ],
        )
        return len(rows)

    async def fetch_top_posts(self) -> list[EngagedPost]:
        """Most recent published posts with their approved-comment counts."""
        k = self.config.top_posts_limit
        posts = await self.reader.fetch_records(
            BlogPost,
            BLOG_POSTS,
            ["id", "title", "category", "status", "created_at"],
            filters=[RowFilter("status", PostStatus.PUBLISHED)],
            order=RowOrder("created_at", descending=True),
            limit=k,
        )
        # Stable re-sort: equal timestamps keep the store's order
        posts = select_recent_published(posts, k)
        return await top_engaged_posts(posts, k, self.count_approved_comments, scope=self.scope)

    async def fetch_category_performance(self) -> list[CategoryShare]:
        """Published post share per category."""
        posts = await self.reader.fetch_records(
            BlogPost,
            BLOG_POSTS,
            ["category", "status"],
            filters=[RowFilter("status", PostStatus.PUBLISHED)],
        )
        return group_by_category_with_percentage(posts)

    # --- Summary ---

    async def load(self) -> AnalyticsSummary:
        """Fetch every section concurrently and assemble the summary.

        Returns:
            AnalyticsSummary; failed sections keep zero values and are named
            in `errors`.
        """
        summary = AnalyticsSummary(
            blog_stats=StatusPartition.empty(self.config.post_statuses),
            comment_stats=StatusPartition.empty(self.config.comment_statuses),
        )
        sections = [
            ("blog_stats", self.fetch_blog_stats),
            ("comment_stats", self.fetch_comment_stats),
            ("event_stats", self.fetch_event_stats),
            ("top_posts", self.fetch_top_posts),
            ("category_performance", self.fetch_category_performance),
        ]
        results = await self.scope.gather(*(self._guarded(name, fetch) for name, fetch in sections))

        for (name, _), result in zip(sections, results):
            if result is None:
                summary.errors.append(name)
            else:
                setattr(summary, name, result)

        if summary.errors:
            logger.warning("Analytics loaded with failed sections: %s", ", ".join(summary.errors))
        else:
            logger.info(
                "Analytics loaded: %d posts, %d comments, %d events",
                summary.blog_stats.total,
                summary.comment_stats.total,
                summary.event_stats.total,
            )
        return summary

    async def _guarded(self, name: str, fetch):
        """Run one section; a QueryError yields None instead of propagating."""
        try:
            return await fetch()
        except QueryError as e:
            logger.error("Error fetching %s: %s", name, e)
            return None

    # --- Lifecycle ---

    async def aclose(self) -> None:
        """Cancel any fetch still in flight."""
        await self.scope.aclose()

    async def __aenter__(self) -> AnalyticsDashboard:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
