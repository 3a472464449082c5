"""
Tests for `repositories/client.py` (settings and store construction).
"""

import pytest

from repositories.client import Settings, create_store
from repositories.kv_store import InMemoryKeyValueStore


def test_defaults() -> None:
    settings = Settings.from_env({})

    assert settings.store_backend == "memory"
    assert settings.admin_password == ""
    assert settings.log_level == "INFO"
    assert settings.cors_allow_origins == ("*",)
    assert settings.supabase_table == "kv_store"


def test_values_are_parsed() -> None:
    settings = Settings.from_env({
        "LEAD_STORE_BACKEND": " Supabase ",
        "SUPABASE_URL": "https://example.supabase.co",
        "SUPABASE_KEY": "key",
        "LOG_LEVEL": "debug",
        "CORS_ALLOW_ORIGINS": "https://a.example, https://b.example,",
    })

    assert settings.store_backend == "supabase"
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")


def test_unsupported_backend() -> None:
    with pytest.raises(RuntimeError, match="Unsupported LEAD_STORE_BACKEND"):
        Settings.from_env({"LEAD_STORE_BACKEND": "redis"})


def test_memory_store() -> None:
    assert isinstance(create_store(Settings()), InMemoryKeyValueStore)


def test_supabase_requires_credentials() -> None:
    with pytest.raises(RuntimeError, match="SUPABASE_URL"):
        create_store(Settings(store_backend="supabase"))
    with pytest.raises(RuntimeError, match="SUPABASE_KEY"):
        create_store(Settings(store_backend="supabase", supabase_url="https://example.supabase.co"))
