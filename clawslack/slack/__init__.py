"""Slack outbound messaging"""

from .errors import (
    DestinationResolutionError,
    EmptyContentError,
    InvalidRecipientError,
    MediaFetchError,
    MissingCredentialError,
    RemoteCallError,
    SlackSendError,
    SlackSendErrorCode,
)
from .send import (
    SLACK_TEXT_LIMIT,
    SlackSendOptions,
    SlackSendResult,
    resolve_upload_file_id,
    send_message_slack,
)
from .targets import (
    SlackChannelRecipient,
    SlackDestination,
    SlackRecipient,
    SlackUserRecipient,
    parse_slack_recipient,
    resolve_slack_destination,
)
from .token import resolve_slack_bot_token

__all__ = [
    "SLACK_TEXT_LIMIT",
    "DestinationResolutionError",
    "EmptyContentError",
    "InvalidRecipientError",
    "MediaFetchError",
    "MissingCredentialError",
    "RemoteCallError",
    "SlackChannelRecipient",
    "SlackDestination",
    "SlackRecipient",
    "SlackSendError",
    "SlackSendErrorCode",
    "SlackSendOptions",
    "SlackSendResult",
    "SlackUserRecipient",
    "parse_slack_recipient",
    "resolve_slack_bot_token",
    "resolve_slack_destination",
    "resolve_upload_file_id",
    "send_message_slack",
]
