"""
Shared test fixtures for monday-cli tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import os
import sys

import pytest

# Add project root to path so imports work without installing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or leaking runtime flags."""
    from monday_cli import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "API_TOKEN", "fake-token")
    monkeypatch.setattr(config, "API_URL", "https://api.example.test/v2")
    monkeypatch.setattr(config, "API_VERSION", "2024-01")
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "HTTP_LOG_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(config, "HTTP_MAX_RETRIES", 2)
    monkeypatch.setattr(config, "HTTP_RETRY_BASE_SECONDS", 0)
    monkeypatch.setattr(config, "HTTP_MAX_RESPONSE_BYTES", 5_000_000)
    monkeypatch.setattr(config, "ITEMS_PAGE_LIMIT", 100)
    monkeypatch.setattr(config, "RUNTIME_QUIET", False)
    monkeypatch.setattr(config, "RUNTIME_VERBOSE", False)
    monkeypatch.setattr(config, "RUNTIME_DRY_RUN", False)
