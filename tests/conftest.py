"""
Pytest configuration for clawslack tests
"""
import pytest

from clawslack.config.loader import invalidate_config_cache


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep ambient tokens and cached config out of every test."""
    monkeypatch.delenv("SLACK_BOT_TOKEN", raising=False)
    invalidate_config_cache()
    yield
    invalidate_config_cache()
