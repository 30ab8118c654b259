"""Tests for shared common modules — record models, config, logging."""

import logging
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.common.config import (
    DashboardSettings,
    Settings,
    SupabaseSettings,
    get_supabase_credentials,
)
from src.common.logging import setup_logging
from src.common.models import BlogPost, Comment, Event, PostStatus, Registration


class TestBlogPost:
    def test_create_post(self):
        post = BlogPost(
            id="p1",
            title="Spring Retreat Recap",
            category="News",
            status=PostStatus.PUBLISHED,
            created_at="2026-03-01T10:00:00+00:00",
        )
        assert post.status == "published"
        assert post.created_at == datetime(2026, 3, 1, 10, tzinfo=timezone.utc)

    def test_unknown_status_is_accepted(self):
        post = BlogPost.model_validate({"status": "archived"})
        assert post.status == "archived"

    def test_partial_row(self):
        post = BlogPost.model_validate({"status": "draft"})
        assert post.id is None
        assert post.title == ""
        assert post.category is None

    def test_numeric_id_becomes_string(self):
        post = BlogPost.model_validate({"id": 42, "title": None})
        assert post.id == "42"
        assert post.title == ""

    def test_extra_columns_ignored(self):
        post = BlogPost.model_validate({"status": "draft", "body": "..."})
        assert not hasattr(post, "body")

    def test_bad_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            BlogPost.model_validate({"created_at": "not a date"})


class TestComment:
    def test_ids_to_string(self):
        comment = Comment.model_validate({"id": 7, "blog_post_id": 3, "status": "approved"})
        assert comment.id == "7"
        assert comment.blog_post_id == "3"


class TestEvent:
    def test_registered_default(self):
        assert Event.model_validate({}).registered == 0

    def test_null_registered_is_zero(self):
        assert Event.model_validate({"registered": None}).registered == 0

    def test_registered_not_clamped(self):
        assert Event.model_validate({"registered": -2}).registered == -2

    def test_non_numeric_registered_rejected(self):
        with pytest.raises(ValidationError):
            Event.model_validate({"registered": "many"})


class TestRegistration:
    def test_flattens_joined_event(self):
        rsvp = Registration.model_validate({
            "id": "r1",
            "name": "Ana Lima",
            "email": "ana@example.org",
            "phone": "555-0101",
            "created_at": "2026-03-02T09:00:00+00:00",
            "event_id": "e1",
            "events": {"title": "Spring Retreat"},
        })
        assert rsvp.event_title == "Spring Retreat"
        assert rsvp.registered_on == "2026-03-02"

    def test_missing_join(self):
        rsvp = Registration.model_validate({"id": "r1", "events": None})
        assert rsvp.event_title == ""
        assert rsvp.registered_on == ""

    def test_join_as_list(self):
        rsvp = Registration.model_validate({"id": "r1", "events": [{"title": "Gala"}]})
        assert rsvp.event_title == "Gala"

    def test_null_phone(self):
        rsvp = Registration.model_validate({"id": "r1", "phone": None})
        assert rsvp.phone == ""

    def test_numeric_phone_becomes_string(self):
        rsvp = Registration.model_validate({"id": "r1", "phone": 5550101})
        assert rsvp.phone == "5550101"


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.dashboard.top_posts_limit == 5
        assert s.dashboard.post_statuses == ["published", "draft"]
        assert s.dashboard.comment_statuses == ["approved", "pending"]
        assert s.supabase.url_env == "SUPABASE_URL"

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("dashboard:\n  top_posts_limit: 3\n  request_timeout: 2.5\n", encoding="utf-8")
        s = Settings.load(path)
        assert s.dashboard.top_posts_limit == 3
        assert s.dashboard.request_timeout == 2.5
        assert s.dashboard.post_statuses == ["published", "draft"]

    def test_load_missing_file(self, tmp_path):
        s = Settings.load(tmp_path / "nope.yaml")
        assert s == Settings()

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert Settings.load(path) == Settings()

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            DashboardSettings(top_posts_limit=-1)

    def test_project_settings_file_loads(self, project_root):
        s = Settings.load(project_root / "config" / "settings.yaml")
        assert s.dashboard.top_posts_limit == 5


class TestCredentials:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("SUPABASE_URL", "SUPABASE_KEY", "SUPABASE_SERVICE_KEY", "SUPABASE_ANON_KEY"):
            monkeypatch.delenv(name, raising=False)

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "key")
        assert get_supabase_credentials(SupabaseSettings()) == ("https://test.supabase.co", "key")

    def test_fallback_key(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        assert get_supabase_credentials(SupabaseSettings())[1] == "anon"

    def test_missing_raises(self):
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            get_supabase_credentials(SupabaseSettings())


class TestLogging:
    def test_no_duplicate_handlers(self):
        first = setup_logging(module_name="test_dashboard_logger")
        second = setup_logging(module_name="test_dashboard_logger")
        assert first is second
        assert len(second.handlers) == 1

    def test_level_applied(self):
        logger = setup_logging(level=logging.DEBUG, module_name="test_dashboard_debug")
        assert logger.level == logging.DEBUG

    def test_does_not_propagate_to_root(self):
        logger = setup_logging(module_name="test_dashboard_propagate")
        assert logger.propagate is False
