"""Slack send error taxonomy."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any

import aiohttp
from slack_sdk.errors import SlackClientError


# Failures raised by AsyncWebClient calls: API errors, request errors, transport
SLACK_CALL_ERRORS = (SlackClientError, aiohttp.ClientError, asyncio.TimeoutError)


class SlackSendErrorCode(str, Enum):
    INVALID_RECIPIENT = "INVALID_RECIPIENT"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    DESTINATION_RESOLUTION_FAILED = "DESTINATION_RESOLUTION_FAILED"
    MEDIA_FETCH_FAILED = "MEDIA_FETCH_FAILED"
    REMOTE_CALL_FAILED = "REMOTE_CALL_FAILED"


class SlackSendError(Exception):
    def __init__(
        self,
        message: str,
        error_code: SlackSendErrorCode,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error_code.value,
            "message": str(self),
            "details": self.details,
        }


class InvalidRecipientError(SlackSendError, ValueError):
    def __init__(self, message: str | None = None):
        msg = message or "Invalid Slack recipient"
        super().__init__(msg, SlackSendErrorCode.INVALID_RECIPIENT)


class MissingCredentialError(SlackSendError):
    def __init__(self, message: str | None = None):
        msg = message or "SLACK_BOT_TOKEN or slack.botToken is required for Slack sends"
        super().__init__(msg, SlackSendErrorCode.MISSING_CREDENTIAL)


class EmptyContentError(SlackSendError, ValueError):
    def __init__(self, message: str | None = None):
        msg = message or "Slack send requires text or media"
        super().__init__(msg, SlackSendErrorCode.EMPTY_CONTENT)


class DestinationResolutionError(SlackSendError):
    def __init__(self, message: str | None = None, user_id: str | None = None):
        msg = message or "Failed to open Slack DM channel"
        details = {"user_id": user_id} if user_id else None
        super().__init__(msg, SlackSendErrorCode.DESTINATION_RESOLUTION_FAILED, details)


class MediaFetchError(SlackSendError):
    def __init__(self, message: str | None = None, media_url: str | None = None):
        msg = message or "Failed to load media for Slack upload"
        details = {"media_url": media_url} if media_url else None
        super().__init__(msg, SlackSendErrorCode.MEDIA_FETCH_FAILED, details)


class RemoteCallError(SlackSendError):
    def __init__(
        self,
        message: str | None = None,
        method: str | None = None,
        slack_error: str | None = None,
    ):
        msg = message or "Slack API call failed"
        details: dict[str, Any] = {}
        if method:
            details["method"] = method
        if slack_error:
            details["slack_error"] = slack_error
        super().__init__(msg, SlackSendErrorCode.REMOTE_CALL_FAILED, details)
        self.method = method
        self.slack_error = slack_error
