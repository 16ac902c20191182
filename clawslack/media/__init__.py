"""Media handling for outbound attachments"""

from .loader import MediaLoader, MediaResult, load_web_media
from .mime import (
    MediaKind,
    detect_mime,
    extension_for_mime,
    media_kind_from_mime,
    mime_for_extension,
)

__all__ = [
    "MediaLoader",
    "MediaResult",
    "load_web_media",
    "MediaKind",
    "detect_mime",
    "extension_for_mime",
    "media_kind_from_mime",
    "mime_for_extension",
]
