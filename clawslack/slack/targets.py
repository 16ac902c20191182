"""Slack recipient parsing and destination resolution.

A raw address such as ``user:U123``, ``<@U123>``, ``#C123`` or a bare id is
parsed into a typed recipient. User recipients are then turned into a DM
channel id through ``conversations.open``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .errors import SLACK_CALL_ERRORS, DestinationResolutionError, InvalidRecipientError

logger = logging.getLogger(__name__)

_MENTION_RE = re.compile(r"^<@([A-Z0-9]+)>$", re.IGNORECASE)
_ID_RE = re.compile(r"^[A-Z0-9]+$", re.IGNORECASE)


@dataclass(frozen=True)
class SlackUserRecipient:
    """A Slack user, addressed by member id."""

    id: str
    kind: Literal["user"] = field(default="user", init=False)


@dataclass(frozen=True)
class SlackChannelRecipient:
    """A Slack channel (or any conversation id)."""

    id: str
    kind: Literal["channel"] = field(default="channel", init=False)


SlackRecipient = Union[SlackUserRecipient, SlackChannelRecipient]


@dataclass(frozen=True)
class SlackDestination:
    """Concrete conversation id accepted by chat/files calls."""

    channel_id: str
    is_dm: bool = False


def parse_slack_recipient(raw: str) -> SlackRecipient:
    """Parse a Slack address into a user or channel recipient.

    Args:
        raw: Address string (``<@U1>``, ``user:U1``, ``channel:C1``,
            ``slack:U1``, ``@U1``, ``#C1`` or a bare channel id)

    Returns:
        SlackUserRecipient or SlackChannelRecipient

    Raises:
        InvalidRecipientError: If the address is empty or a ``@``/``#``
            shorthand does not carry an alphanumeric id
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        raise InvalidRecipientError("Recipient is required for Slack sends")

    mention = _MENTION_RE.match(trimmed)
    if mention:
        return SlackUserRecipient(mention.group(1))
    if trimmed.startswith("user:"):
        return SlackUserRecipient(trimmed[len("user:"):])
    if trimmed.startswith("channel:"):
        return SlackChannelRecipient(trimmed[len("channel:"):])
    if trimmed.startswith("slack:"):
        return SlackUserRecipient(trimmed[len("slack:"):])
    if trimmed.startswith("@"):
        candidate = trimmed[1:]
        if not _ID_RE.match(candidate):
            raise InvalidRecipientError("Slack DMs require a user id (use user:<id> or <@id>)")
        return SlackUserRecipient(candidate)
    if trimmed.startswith("#"):
        candidate = trimmed[1:]
        if not _ID_RE.match(candidate):
            raise InvalidRecipientError("Slack channels require a channel id (use channel:<id>)")
        return SlackChannelRecipient(candidate)
    return SlackChannelRecipient(trimmed)


async def resolve_slack_destination(client: Any, recipient: SlackRecipient) -> SlackDestination:
    """Resolve a recipient to the conversation id messages are posted to.

    Channels resolve to themselves. Users get a DM opened via
    ``conversations.open``.

    Raises:
        DestinationResolutionError: If the DM could not be opened
    """
    if isinstance(recipient, SlackChannelRecipient):
        return SlackDestination(channel_id=recipient.id)
    if not isinstance(recipient, SlackUserRecipient):
        raise TypeError(f"Unsupported Slack recipient: {recipient!r}")

    logger.debug(f"[slack] Opening DM with user {recipient.id}")
    try:
        response = await client.conversations_open(users=recipient.id)
    except SLACK_CALL_ERRORS as e:
        raise DestinationResolutionError(
            f"Failed to open Slack DM channel: {_slack_error_code(e)}",
            user_id=recipient.id,
        ) from e

    channel = response.get("channel") or {}
    channel_id = channel.get("id") if isinstance(channel, dict) else None
    if not channel_id:
        raise DestinationResolutionError(user_id=recipient.id)
    return SlackDestination(channel_id=channel_id, is_dm=True)


def _slack_error_code(err: Exception) -> str:
    response = getattr(err, "response", None)
    if response is not None:
        try:
            code = response.get("error")
        except AttributeError:
            code = None
        if code:
            return str(code)
    return str(err) or type(err).__name__
