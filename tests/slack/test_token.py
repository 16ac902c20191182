"""Unit tests for Slack token resolution."""

import pytest

from clawslack.slack.errors import MissingCredentialError
from clawslack.slack.token import normalize_slack_token, resolve_slack_bot_token


def test_normalize_slack_token():
    assert normalize_slack_token("  xoxb-1  ") == "xoxb-1"
    assert normalize_slack_token("   ") is None
    assert normalize_slack_token(None) is None


def test_explicit_token_wins(monkeypatch):
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-env")
    config = {"slack": {"botToken": "xoxb-config"}}
    assert resolve_slack_bot_token("xoxb-explicit", config) == "xoxb-explicit"


def test_env_token_before_config(monkeypatch):
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-env")
    config = {"slack": {"botToken": "xoxb-config"}}
    assert resolve_slack_bot_token(None, config) == "xoxb-env"


def test_config_token_fallback():
    assert resolve_slack_bot_token(None, {"slack": {"botToken": " xoxb-config "}}) == "xoxb-config"


def test_channels_section_fallback():
    config = {"channels": {"slack": {"botToken": "xoxb-nested"}}}
    assert resolve_slack_bot_token(None, config) == "xoxb-nested"


def test_blank_explicit_token_is_ignored():
    assert resolve_slack_bot_token("  ", {"slack": {"botToken": "xoxb-config"}}) == "xoxb-config"


def test_missing_token_raises():
    with pytest.raises(MissingCredentialError, match="SLACK_BOT_TOKEN or slack.botToken"):
        resolve_slack_bot_token(None, {})
