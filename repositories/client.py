"""
Store client initialization.

This module contains *only* configuration loading and the construction of the
key-value store used by the lead repository.

Environment variables (read from the process environment and from a `.env`
file in the project root):
- LEAD_STORE_BACKEND: "memory" (default) or "supabase"
- SUPABASE_URL: Your Supabase project URL (supabase backend only)
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
- SUPABASE_KV_TABLE: table holding the key/value rows (default "kv_store")
- ADMIN_PASSWORD: password for the admin endpoints (empty disables the check)
- LOG_LEVEL: root log level (default "INFO")
- CORS_ALLOW_ORIGINS: comma-separated allowed origins (default "*")
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from repositories.kv_store import InMemoryKeyValueStore, KeyValueStore, SupabaseKeyValueStore

logger = logging.getLogger(__name__)

_ENV_PATH = Path(__file__).parent.parent / ".env"

SUPPORTED_BACKENDS = ("memory", "supabase")


@dataclass(frozen=True, slots=True)
class Settings:
    store_backend: str = "memory"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_table: str = "kv_store"
    admin_password: str = ""
    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        backend = env.get("LEAD_STORE_BACKEND", "memory").strip().lower() or "memory"
        if backend not in SUPPORTED_BACKENDS:
            raise RuntimeError(
                f"Unsupported LEAD_STORE_BACKEND {backend!r}. "
                f"Use one of: {', '.join(SUPPORTED_BACKENDS)}."
            )

        origins = tuple(
            origin.strip()
            for origin in env.get("CORS_ALLOW_ORIGINS", "*").split(",")
            if origin.strip()
        )

        return cls(
            store_backend=backend,
            supabase_url=env.get("SUPABASE_URL") or None,
            supabase_key=env.get("SUPABASE_KEY") or None,
            supabase_table=env.get("SUPABASE_KV_TABLE", "kv_store") or "kv_store",
            admin_password=env.get("ADMIN_PASSWORD", ""),
            log_level=env.get("LOG_LEVEL", "INFO").upper() or "INFO",
            cors_allow_origins=origins or ("*",),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""

    load_dotenv(dotenv_path=_ENV_PATH)
    return Settings.from_env()


def create_store(settings: Settings) -> KeyValueStore:
    """
    Build the key-value store selected by `settings.store_backend`.

    Raises RuntimeError when the supabase backend is selected without
    credentials.
    """

    if settings.store_backend == "memory":
        logger.info("Using in-memory lead store")
        return InMemoryKeyValueStore()

    if not settings.supabase_url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )
    if not settings.supabase_key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    # Imported here so the memory backend works without network configuration.
    from supabase import create_client  # type: ignore[import-not-found]

    logger.info("Using Supabase lead store (table %s)", settings.supabase_table)
    client = create_client(settings.supabase_url, settings.supabase_key)
    return SupabaseKeyValueStore(client, table=settings.supabase_table)


__all__ = ["Settings", "create_store", "get_settings"]
