"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class SupabaseSettings(BaseModel):
    """Names of the environment variables holding Supabase credentials."""
    url_env: str = "SUPABASE_URL"
    key_env: str = "SUPABASE_KEY"
    fallback_key_envs: list[str] = Field(
        default_factory=lambda: ["SUPABASE_SERVICE_KEY", "SUPABASE_ANON_KEY"]
    )


class DashboardSettings(BaseModel):
    """Tunables for the admin dashboard views."""
    top_posts_limit: int = Field(default=5, ge=0)
    request_timeout: float = Field(default=10.0, gt=0)
    post_statuses: list[str] = Field(default_factory=lambda: ["published", "draft"])
    comment_statuses: list[str] = Field(default_factory=lambda: ["approved", "pending"])


class Settings(BaseModel):
    """Top-level application settings."""
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    dashboard: DashboardSettings = Field(default_factory=DashboardSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


def get_supabase_credentials(cfg: SupabaseSettings | None = None) -> tuple[str, str]:
    """Get the Supabase project URL and API key from environment."""
    cfg = cfg or settings.supabase
    url = os.getenv(cfg.url_env, "")
    key = os.getenv(cfg.key_env, "")
    for env_name in cfg.fallback_key_envs:
        if key:
            break
        key = os.getenv(env_name, "")
    if not url or not key:
        raise ValueError(
            f"{cfg.url_env} / {cfg.key_env} must be set in environment. "
            f"See config/.env.example."
        )
    return url, key


# Singleton settings instance
settings = Settings.load()
