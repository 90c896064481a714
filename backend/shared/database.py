"""
Supabase client factory.

Two kinds of client are handed out:

- the service-role client, shared by the whole process. It bypasses row
  level security, so callers must apply ownership and share checks
  themselves (see modules/todos/permissions.py).
- anon-key clients for Supabase Auth flows. Sign-in and refresh store the
  resulting session on the client, so each call gets its own instance.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_service_client: Optional[Client] = None


def _connect(key_name: str) -> Client:
    settings = get_settings()
    key = getattr(settings, key_name)
    if not settings.supabase_url or not key:
        raise RuntimeError(
            f"Supabase is not configured: set SUPABASE_URL and {key_name.upper()}."
        )
    return create_client(settings.supabase_url, key)


def get_supabase_client() -> Client:
    """The shared service-role client, created on first use."""
    global _service_client

    if _service_client is None:
        _service_client = _connect("supabase_service_role_key")
    return _service_client


def get_supabase_anon_client() -> Client:
    """A new anon-key client for a single auth call."""
    return _connect("supabase_anon_key")


def reset_client_cache() -> None:
    """Drop the shared client; the next call reconnects with current settings."""
    global _service_client
    _service_client = None
