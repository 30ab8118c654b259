"""Admin dashboard CLI — print the analytics summary or the registrations table.

Usage:
    python -m src.dashboard.main analytics --top 5
    python -m src.dashboard.main registrations --event all
    python -m src.dashboard.main registrations --event <event-id> --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from src.common.config import settings
from src.common.models import CommentStatus, PostStatus
from src.dashboard.analytics import AnalyticsDashboard, AnalyticsSummary, build_stat_cards
from src.dashboard.fetcher import SupabaseReader
from src.dashboard.registrations import (
    ALL_EVENTS,
    AdminContext,
    RegistrationsPage,
    RegistrationsView,
)

# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------

def _print_analytics(summary: AnalyticsSummary) -> None:
    """Print a human-readable analytics summary."""
    print(f"\n{'=' * 60}")
    print("  Analytics")
    print(f"{'=' * 60}")
    for card in build_stat_cards(summary):
        print(f"  {card.title:<22} {card.value:>8}  ({card.subtitle})")
    print()

    print("  Recent Activity")
    activity = [
        ("Total Blog Posts", summary.blog_stats.total),
        ("Published", summary.blog_stats.get(PostStatus.PUBLISHED)),
        ("Drafts", summary.blog_stats.get(PostStatus.DRAFT)),
        ("Approved Comments", summary.comment_stats.get(CommentStatus.APPROVED)),
        ("Pending Comments", summary.comment_stats.get(CommentStatus.PENDING)),
    ]
    for label, value in activity:
        print(f"    {label:<22} {value:>6}")
    print()

    print("  Most Engaged Posts")
    if not summary.top_posts:
        print("    No posts available")
    for post in summary.top_posts:
        title = post.title if len(post.title) <= 48 else post.title[:45] + "..."
        print(f"    {title:<50} {post.comments:>4}")
    print()

    print("  Category Performance")
    if not summary.category_performance:
        print("    No category data available")
    for share in summary.category_performance:
        bar = "#" * (share.percentage // 5)
        print(f"    {str(share.name):<20} {share.count:>4} posts  {share.percentage:>3}%  {bar}")
    print()

    if summary.errors:
        print(f"  Unavailable: {', '.join(summary.errors)}")
        print()


def _print_registrations(page: RegistrationsPage) -> None:
    """Print the registrations table."""
    print(f"\n{'=' * 60}")
    print(f"  Event Registrations ({page.selected_event})")
    print(f"{'=' * 60}")
    for notice in page.notices:
        print(f"  [{notice.title}] {notice.description}")
    if page.message:
        print(f"  {page.message}")
        print()
        return

    print(f"  {'Event':<24} {'Name':<20} {'Email':<28} {'Phone':<14} {'Registered':<10}")
    print(f"  {'-' * 24} {'-' * 20} {'-' * 28} {'-' * 14} {'-' * 10}")
    for r in page.filtered:
        print(
            f"  {r.event_title[:24]:<24} {r.name[:20]:<20} {r.email[:28]:<28} "
            f"{r.phone[:14]:<14} {r.registered_on:<10}"
        )
    print()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

async def run_analytics(reader: SupabaseReader, top: int | None, as_json: bool) -> AnalyticsSummary:
    config = settings.dashboard
    if top is not None:
        config = config.model_copy(update={"top_posts_limit": top})
    async with AnalyticsDashboard(reader, config=config) as dashboard:
        summary = await dashboard.load()
    if as_json:
        data = summary.to_dict()
        data["cards"] = [c.to_dict() for c in build_stat_cards(summary)]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        _print_analytics(summary)
    return summary


async def run_registrations(
    reader: SupabaseReader,
    auth: AdminContext,
    selected_event: str,
    as_json: bool,
) -> RegistrationsPage:
    async with RegistrationsView(reader, auth) as view:
        page = await view.load(selected_event)
    if as_json:
        print(json.dumps(page.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_registrations(page)
    return page


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Admin dashboard — analytics summary and event registrations",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analytics = sub.add_parser("analytics", help="Blog, comment and event summary")
    analytics.add_argument(
        "--top",
        type=int,
        default=None,
        help=f"Number of recent published posts to rank (default: {settings.dashboard.top_posts_limit})",
    )
    analytics.add_argument("--json", action="store_true", default=False, help="Print JSON")

    registrations = sub.add_parser("registrations", help="Event registrations table")
    registrations.add_argument(
        "--event",
        type=str,
        default=ALL_EVENTS,
        help="Event id to filter by, or 'all' (default)",
    )
    registrations.add_argument(
        "--admin",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Run with admin rights (default: on)",
    )
    registrations.add_argument("--user", type=str, default=None, help="Acting user id for the log")
    registrations.add_argument("--json", action="store_true", default=False, help="Print JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Ensure UTF-8 output on Windows consoles
    if sys.stdout.encoding and sys.stdout.encoding.lower() != "utf-8":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Keep stdout clean for JSON output
    if args.json:
        for name in ("analytics_dashboard", "registrations_view"):
            for handler in logging.getLogger(name).handlers:
                if isinstance(handler, logging.StreamHandler):
                    handler.setStream(sys.stderr)

    reader = SupabaseReader()
    if args.command == "analytics":
        asyncio.run(run_analytics(reader, args.top, args.json))
    else:
        auth = AdminContext(user_id=args.user, is_admin=args.admin)
        asyncio.run(run_registrations(reader, auth, args.event, args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
