"""Data models for the analytics dashboard summary."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class StatusPartition:
    """Row count split by exact status value.

    Rows whose status matches no known category count toward `total` only,
    so `categorized` may be less than `total`.
    """
    total: int = 0
    counts: dict[str, int] = field(default_factory=dict)

    def get(self, category: str) -> int:
        return self.counts.get(category, 0)

    @property
    def categorized(self) -> int:
        """Rows that landed in some bucket."""
        return sum(self.counts.values())

    @classmethod
    def empty(cls, categories: list[str] | tuple[str, ...] = ()) -> StatusPartition:
        return cls(total=0, counts={c: 0 for c in categories})

    def to_dict(self) -> dict:
        return {"total": self.total, **self.counts}


@dataclass
class EventStats:
    """Event count and summed registrations."""
    total: int = 0
    total_registrations: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "total_registrations": self.total_registrations}


@dataclass
class EngagedPost:
    """A recent published post with its approved-comment count."""
    title: str
    comments: int = 0

    def to_dict(self) -> dict:
        return {"title": self.title, "comments": self.comments}


@dataclass
class CategoryShare:
    """Published post count for one category and its share of the total."""
    name: str | None
    count: int = 0
    percentage: int = 0  # 0-100, rounded half up

    def to_dict(self) -> dict:
        return {"name": self.name, "count": self.count, "percentage": self.percentage}


@dataclass
class StatCard:
    """A headline figure for the top of the dashboard."""
    title: str
    value: str
    subtitle: str

    def to_dict(self) -> dict:
        return {"title": self.title, "value": self.value, "subtitle": self.subtitle}


@dataclass
class AnalyticsSummary:
    """Everything the analytics view renders.

    Sections that failed to load keep their zero values and are named in
    `errors`.
    """
    blog_stats: StatusPartition = field(default_factory=StatusPartition)
    comment_stats: StatusPartition = field(default_factory=StatusPartition)
    event_stats: EventStats = field(default_factory=EventStats)
    top_posts: list[EngagedPost] = field(default_factory=list)
    category_performance: list[CategoryShare] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "blog_stats": self.blog_stats.to_dict(),
            "comment_stats": self.comment_stats.to_dict(),
            "event_stats": self.event_stats.to_dict(),
            "top_posts": [p.to_dict() for p in self.top_posts],
            "category_performance": [c.to_dict() for c in self.category_performance],
            "errors": list(self.errors),
        }
