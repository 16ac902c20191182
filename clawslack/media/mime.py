"""
MIME type detection and utilities
"""
from __future__ import annotations

import mimetypes
from enum import Enum
from pathlib import Path

import filetype


class MediaKind(str, Enum):
    """Media type classification."""
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    UNKNOWN = "unknown"


EXT_BY_MIME = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "audio/ogg": ".ogg",
    "audio/mpeg": ".mp3",
    "audio/mp4": ".m4a",
    "video/mp4": ".mp4",
    "video/quicktime": ".mov",
    "application/pdf": ".pdf",
    "application/json": ".json",
    "application/zip": ".zip",
    "application/gzip": ".gz",
    "text/csv": ".csv",
    "text/plain": ".txt",
    "text/markdown": ".md",
}

MIME_BY_EXT = {ext: mime for mime, ext in EXT_BY_MIME.items()}
MIME_BY_EXT[".jpeg"] = "image/jpeg"

_DOCUMENT_MIMES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "text/markdown",
    "text/csv",
}


def normalize_header_mime(mime: str | None) -> str | None:
    """Normalize a Content-Type header value (drop parameters, lowercase)."""
    if not mime:
        return None
    cleaned = mime.split(";")[0].strip().lower()
    return cleaned if cleaned else None


def extension_for_mime(mime: str | None) -> str | None:
    """Get file extension (with dot) for a MIME type."""
    if not mime:
        return None
    return EXT_BY_MIME.get(mime.lower().strip()) or mimetypes.guess_extension(mime)


def mime_for_extension(ext: str) -> str | None:
    """Get MIME type for file extension (with or without dot)."""
    if not ext.startswith("."):
        ext = f".{ext}"
    ext_lower = ext.lower()
    if ext_lower in MIME_BY_EXT:
        return MIME_BY_EXT[ext_lower]
    mime, _ = mimetypes.guess_type(f"file{ext_lower}")
    return mime


def detect_mime(file_path: Path | str | None = None, buffer: bytes | None = None) -> str | None:
    """
    Detect MIME type from buffer contents, falling back to the file extension.
    """
    if buffer:
        kind = filetype.guess(buffer)
        if kind:
            return kind.mime
    if file_path:
        ext = Path(file_path).suffix
        if ext:
            return mime_for_extension(ext)
    return None


def media_kind_from_mime(mime: str | None) -> MediaKind:
    """Classify a MIME type."""
    if not mime:
        return MediaKind.UNKNOWN
    mime_lower = mime.lower().strip()
    if mime_lower.startswith("image/"):
        return MediaKind.IMAGE
    if mime_lower.startswith("audio/"):
        return MediaKind.AUDIO
    if mime_lower.startswith("video/"):
        return MediaKind.VIDEO
    if mime_lower in _DOCUMENT_MIMES:
        return MediaKind.DOCUMENT
    return MediaKind.UNKNOWN
