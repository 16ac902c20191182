"""
Media loader

Loads outbound attachments from files, URLs, and data URLs.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from .mime import (
    MediaKind,
    detect_mime,
    media_kind_from_mime,
    normalize_header_mime,
)

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:([^;,]+)?;base64,(.+)$", re.IGNORECASE | re.DOTALL)


@dataclass
class MediaResult:
    """
    Media load result.
    Attributes:
        buffer: Media data
        content_type: MIME type
        kind: Media kind (image/audio/video/document)
        file_name: Original file name
    """
    buffer: bytes
    content_type: str | None
    kind: MediaKind
    file_name: str | None = None


class MediaLoader:
    """
    Media loader supporting multiple sources.
    Supports:
    - Local files (file:// or absolute/relative paths)
    - HTTP/HTTPS URLs
    - Data URLs (data:image/png;base64,...)
    - Size limits
    - MIME detection
    """
    def __init__(
        self,
        max_bytes: int | None = None,
        allow_remote: bool = True,
        timeout: float = 30.0,
    ):
        self.max_bytes = max_bytes
        self.allow_remote = allow_remote
        self.timeout = timeout

    async def load(self, source: str) -> MediaResult:
        """
        Load media from source.

        Args:
            source: File path, URL, or data URL

        Returns:
            MediaResult

        Raises:
            ValueError: If source is invalid, not allowed, or over the size limit
            FileNotFoundError: If file not found
            httpx.HTTPError: If HTTP request fails
        """
        source = source.strip()
        if not source:
            raise ValueError("Media source is required")

        if source.startswith("data:"):
            return self._load_data_url(source)

        if source.startswith("http://") or source.startswith("https://"):
            if not self.allow_remote:
                raise ValueError("Remote URLs not allowed in this context")
            return await self._load_http_url(source)

        if source.startswith("file://"):
            source = unquote(source[7:])

        return self._load_file(source)

    def _check_size(self, size: int, what: str) -> None:
        if self.max_bytes and size > self.max_bytes:
            raise ValueError(f"{what} exceeds size limit: {size} > {self.max_bytes}")

    def _load_data_url(self, data_url: str) -> MediaResult:
        match = _DATA_URL_RE.match(data_url)
        if not match:
            raise ValueError("Invalid data URL format")

        mime_type = (match.group(1) or "application/octet-stream").lower()
        try:
            buffer = base64.b64decode(match.group(2), validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 data: {e}") from e

        self._check_size(len(buffer), "Data URL")
        return MediaResult(
            buffer=buffer,
            content_type=mime_type,
            kind=media_kind_from_mime(mime_type),
            file_name=None,
        )

    async def _load_http_url(self, url: str) -> MediaResult:
        async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
            response = await client.get(url)
            response.raise_for_status()

            declared = response.headers.get("content-length")
            if declared and declared.isdigit():
                self._check_size(int(declared), "Remote media")

            buffer = response.content
            self._check_size(len(buffer), "Remote media")

            content_type = normalize_header_mime(response.headers.get("content-type"))
            if not content_type or content_type == "application/octet-stream":
                content_type = detect_mime(file_path=urlparse(url).path, buffer=buffer) or content_type

            parsed = urlparse(str(response.url))
            file_name = unquote(Path(parsed.path).name) if parsed.path else None

            logger.debug(f"Fetched {len(buffer)} bytes from {url} ({content_type})")
            return MediaResult(
                buffer=buffer,
                content_type=content_type,
                kind=media_kind_from_mime(content_type),
                file_name=file_name or None,
            )

    def _load_file(self, file_path: str) -> MediaResult:
        path = Path(file_path).expanduser()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValueError(f"Not a file: {path}")

        self._check_size(path.stat().st_size, f"File {path}")
        buffer = path.read_bytes()

        content_type = detect_mime(file_path=path, buffer=buffer)
        return MediaResult(
            buffer=buffer,
            content_type=content_type,
            kind=media_kind_from_mime(content_type),
            file_name=path.name,
        )


async def load_web_media(source: str, max_bytes: int | None = None) -> MediaResult:
    """
    Load media from any source (convenience function).
    Args:
        source: File path, URL, or data URL
        max_bytes: Maximum size in bytes
    Returns:
        MediaResult
    """
    return await MediaLoader(max_bytes=max_bytes).load(source)
