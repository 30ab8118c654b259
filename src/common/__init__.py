# Common utilities and shared modules
"""
Shared components used by the dashboard views:
- Record models (Pydantic schemas) for store rows
- Logging configuration
- Project configuration
"""

from .config import settings, PROJECT_ROOT, get_supabase_credentials
from .logging import setup_logging

__all__ = [
    "settings",
    "PROJECT_ROOT",
    "get_supabase_credentials",
    "setup_logging",
]
