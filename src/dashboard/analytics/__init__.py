# Analytics — blog, comment and event summary
"""
Analytics view for the admin dashboard.

Fetches post, comment and event rows and derives status partitions,
registration totals, the most engaged recent posts and category shares.
"""

from .aggregator import (
    build_stat_cards,
    group_by_category_with_percentage,
    partition_by_status,
    round_half_up,
    select_recent_published,
    sum_field,
    top_engaged_posts,
)
from .models import (
    AnalyticsSummary,
    CategoryShare,
    EngagedPost,
    EventStats,
    StatCard,
    StatusPartition,
)
from .service import AnalyticsDashboard

__all__ = [
    "AnalyticsDashboard",
    "AnalyticsSummary",
    "CategoryShare",
    "EngagedPost",
    "EventStats",
    "StatCard",
    "StatusPartition",
    "build_stat_cards",
    "group_by_category_with_percentage",
    "partition_by_status",
    "round_half_up",
    "select_recent_published",
    "sum_field",
    "top_engaged_posts",
]
