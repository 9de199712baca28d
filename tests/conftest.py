"""Shared test fixtures and configuration for the RecycleHub service tests."""

from __future__ import annotations

import os


# Select the test YAML overrides before any settings are loaded
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from recyclehub.core.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Rebuild settings per test so monkeypatched environment values apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
