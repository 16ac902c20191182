"""Slack message sending.

Delivers text and optional media to a Slack user or channel through the
Slack Web API. Long text is split into chunks; with media, the first chunk
becomes the upload's comment and the rest follow as thread-aware posts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from slack_sdk.web.async_client import AsyncWebClient

from ..auto_reply.chunk import chunk_markdown_text, resolve_text_chunk_limit
from ..media.loader import load_web_media
from ..media.mime import extension_for_mime
from .errors import SLACK_CALL_ERRORS, EmptyContentError, MediaFetchError, RemoteCallError
from .targets import parse_slack_recipient, resolve_slack_destination
from .token import resolve_slack_bot_token, slack_section

logger = logging.getLogger(__name__)

# Slack API limits
SLACK_TEXT_LIMIT = 4000

UNKNOWN_MESSAGE_ID = "unknown"


@dataclass
class SlackSendOptions:
    """Options for sending Slack messages."""

    token: Optional[str] = None
    media_url: Optional[str] = None
    client: Optional[Any] = None  # AsyncWebClient or compatible stub
    thread_ts: Optional[str] = None
    verbose: bool = False


@dataclass
class SlackSendResult:
    """Result of sending a Slack message."""

    message_id: str
    channel_id: str


def resolve_upload_file_id(response: Any) -> str:
    """Pick the identifier of an uploaded file from a files.uploadV2 reply.

    Checks ``files[0].id``, ``file.id``, ``files[0].name``, ``file.name``
    in that order.
    """
    files = _get(response, "files")
    first = files[0] if isinstance(files, list) and files else None
    single = _get(response, "file")
    for candidate in (
        _get(first, "id"),
        _get(single, "id"),
        _get(first, "name"),
        _get(single, "name"),
    ):
        if candidate:
            return str(candidate)
    return UNKNOWN_MESSAGE_ID


def resolve_media_max_bytes(config: Optional[dict[str, Any]]) -> Optional[int]:
    """Convert ``slack.mediaMaxMb`` to a byte cap, if configured."""
    max_mb = slack_section(config).get("mediaMaxMb")
    if isinstance(max_mb, (int, float)) and not isinstance(max_mb, bool):
        return int(max_mb * 1024 * 1024)
    return None


def split_slack_text(text: str, config: Optional[dict[str, Any]]) -> list[str]:
    """Chunk already-trimmed text using min(configured limit, Slack limit)."""
    chunk_limit = min(resolve_text_chunk_limit(config, "slack"), SLACK_TEXT_LIMIT)
    return chunk_markdown_text(text, chunk_limit)


async def send_message_slack(
    to: str,
    message: str,
    opts: Optional[SlackSendOptions] = None,
    config: Optional[dict] = None,
) -> SlackSendResult:
    """Send a message via the Slack Web API.

    Args:
        to: Recipient (``user:U1``, ``<@U1>``, ``@U1``, ``slack:U1``,
            ``channel:C1``, ``#C1`` or a bare channel id)
        message: Message text (caption when media is attached)
        opts: Send options
        config: Optional configuration dict (camelCase keys)

    Returns:
        Send result with the last delivered message/file id and channel id

    Raises:
        EmptyContentError: If there is neither text nor media
        MissingCredentialError: If no bot token is available
        InvalidRecipientError: If ``to`` is malformed
        DestinationResolutionError: If a DM could not be opened
        MediaFetchError: If the attachment could not be loaded
        RemoteCallError: If an upload or post fails
    """
    if opts is None:
        opts = SlackSendOptions()

    trimmed_message = (message or "").strip()
    if not trimmed_message and not opts.media_url:
        raise EmptyContentError()

    if config is None:
        from clawslack.config.loader import load_config

        config = load_config(as_dict=True)

    token = resolve_slack_bot_token(opts.token, config)
    client = opts.client if opts.client is not None else AsyncWebClient(token=token)
    recipient = parse_slack_recipient(to)
    destination = await resolve_slack_destination(client, recipient)
    channel_id = destination.channel_id

    chunks = split_slack_text(trimmed_message, config)

    if opts.media_url:
        caption = chunks[0] if chunks else None
        last_message_id = await _upload_slack_file(
            client,
            channel_id=channel_id,
            media_url=opts.media_url,
            caption=caption,
            thread_ts=opts.thread_ts,
            max_bytes=resolve_media_max_bytes(config),
        )
        if opts.verbose:
            logger.info(f"[slack] Uploaded file {last_message_id} to {channel_id}")
        last_message_id = await _post_chunks(
            client, channel_id, chunks[1:], opts.thread_ts, last_message_id, opts.verbose
        )
    else:
        last_message_id = await _post_chunks(
            client, channel_id, chunks or [""], opts.thread_ts, "", opts.verbose
        )

    return SlackSendResult(
        message_id=last_message_id or UNKNOWN_MESSAGE_ID,
        channel_id=channel_id,
    )


async def _post_chunks(
    client: Any,
    channel_id: str,
    chunks: list[str],
    thread_ts: Optional[str],
    last_message_id: str,
    verbose: bool = False,
) -> str:
    """Post chunks in order, returning the latest message ts seen."""
    for index, chunk in enumerate(chunks):
        try:
            response = await client.chat_postMessage(
                channel=channel_id,
                text=chunk,
                thread_ts=thread_ts,
            )
        except SLACK_CALL_ERRORS as e:
            raise _remote_call_error("chat.postMessage", e, delivered=index) from e
        ts = _get(response, "ts")
        if ts:
            last_message_id = str(ts)
        if verbose:
            logger.info(f"[slack] Sent message {ts} to {channel_id}")
    return last_message_id


async def _upload_slack_file(
    client: Any,
    channel_id: str,
    media_url: str,
    caption: Optional[str] = None,
    thread_ts: Optional[str] = None,
    max_bytes: Optional[int] = None,
) -> str:
    """Load media and upload it with files.uploadV2, returning the file id."""
    try:
        media = await load_web_media(media_url, max_bytes)
    except (ValueError, OSError, httpx.HTTPError) as e:
        raise MediaFetchError(f"Failed to load Slack media: {e}", media_url=media_url) from e

    file_name = media.file_name
    if not file_name:
        file_name = f"file{extension_for_mime(media.content_type) or '.bin'}"

    payload: dict[str, Any] = {
        "channel": channel_id,
        "file": media.buffer,
        "filename": file_name,
    }
    if caption:
        payload["initial_comment"] = caption
    if media.content_type:
        payload["filetype"] = media.content_type
    if thread_ts:
        payload["thread_ts"] = thread_ts

    logger.debug(f"[slack] Uploading {file_name} ({len(media.buffer)} bytes) to {channel_id}")
    try:
        response = await client.files_upload_v2(**payload)
    except SLACK_CALL_ERRORS as e:
        raise _remote_call_error("files.uploadV2", e) from e
    return resolve_upload_file_id(response)


def _remote_call_error(method: str, err: Exception, delivered: int | None = None) -> RemoteCallError:
    response = getattr(err, "response", None)
    slack_error = _get(response, "error")
    error = RemoteCallError(
        f"Slack {method} failed: {slack_error or str(err) or type(err).__name__}",
        method=method,
        slack_error=str(slack_error) if slack_error else None,
    )
    if delivered is not None:
        error.details["delivered_posts"] = delivered
    return error


def _get(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    getter = getattr(obj, "get", None)
    if callable(getter):
        return getter(key)
    return getattr(obj, key, None)
