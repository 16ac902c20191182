"""Slack bot token resolution."""

from __future__ import annotations

import os
from typing import Any, Optional

from .errors import MissingCredentialError

SLACK_BOT_TOKEN_ENV = "SLACK_BOT_TOKEN"


def normalize_slack_token(raw: Optional[str]) -> Optional[str]:
    """Trim a token candidate; blank values count as missing."""
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    return trimmed or None


def resolve_slack_bot_token(explicit: Optional[str], config: Optional[dict[str, Any]] = None) -> str:
    """Resolve the bot token used for Slack sends.

    Precedence is the explicit value, then ``SLACK_BOT_TOKEN``, then
    ``slack.botToken`` from config.

    Raises:
        MissingCredentialError: If no candidate yields a token
    """
    slack_config = slack_section(config)
    for candidate in (
        explicit,
        os.environ.get(SLACK_BOT_TOKEN_ENV),
        slack_config.get("botToken") or slack_config.get("bot_token"),
    ):
        token = normalize_slack_token(candidate)
        if token:
            return token
    raise MissingCredentialError()


def slack_section(config: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Return the ``slack`` config block (top level or under ``channels``)."""
    if not config:
        return {}
    section = config.get("slack")
    if not isinstance(section, dict):
        section = (config.get("channels") or {}).get("slack")
    return section if isinstance(section, dict) else {}
