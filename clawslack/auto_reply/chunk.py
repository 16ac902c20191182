"""Outbound text chunking.

Splits long replies into pieces that fit a channel's message limit,
preferring newline and whitespace boundaries and keeping fenced code
blocks intact (or closed and reopened across chunks).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_CHUNK_LIMIT = 4000

DEFAULT_CHUNK_LIMIT_BY_SURFACE = {
    "slack": 4000,
    "telegram": 4000,
    "whatsapp": 4000,
    "signal": 4000,
    "imessage": 4000,
    "webchat": 4000,
    "discord": 2000,
}

_FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")


@dataclass
class FenceSpan:
    """A fenced code block located in a text."""

    start: int
    end: int
    open_line: str
    marker: str


def resolve_text_chunk_limit(config: Optional[dict[str, Any]], surface: Optional[str]) -> int:
    """Resolve the chunk limit for a surface.

    A positive ``<surface>.textChunkLimit`` (top level or under
    ``channels``) wins, then the surface default, then 4000.
    """
    if surface and config:
        section = config.get(surface)
        if not isinstance(section, dict):
            section = (config.get("channels") or {}).get(surface)
        if isinstance(section, dict):
            override = section.get("textChunkLimit", section.get("text_chunk_limit"))
            if isinstance(override, int) and not isinstance(override, bool) and override > 0:
                return override
    if surface and surface in DEFAULT_CHUNK_LIMIT_BY_SURFACE:
        return DEFAULT_CHUNK_LIMIT_BY_SURFACE[surface]
    return DEFAULT_CHUNK_LIMIT


def parse_fence_spans(text: str) -> list[FenceSpan]:
    """Locate fenced code blocks; an unclosed fence runs to the end."""
    spans: list[FenceSpan] = []
    open_fence: Optional[tuple[int, str, str]] = None
    offset = 0
    for line in text.split("\n"):
        match = _FENCE_RE.match(line)
        if match:
            marker = match.group(2)
            if open_fence is None:
                open_fence = (offset, line, marker)
            else:
                start, open_line, open_marker = open_fence
                if (
                    marker[0] == open_marker[0]
                    and len(marker) >= len(open_marker)
                    and not match.group(3).strip()
                ):
                    spans.append(FenceSpan(start, offset + len(line), open_line, open_marker))
                    open_fence = None
        offset += len(line) + 1
    if open_fence is not None:
        start, open_line, open_marker = open_fence
        spans.append(FenceSpan(start, len(text), open_line, open_marker))
    return spans


def chunk_markdown_text(text: str, limit: int) -> list[str]:
    """Split markdown without breaking fenced code blocks where avoidable.

    When a break has to land inside a fence, the chunk is closed with the
    fence marker and the next chunk reopens it with the original opening
    line. Every returned chunk is at most ``limit`` characters.
    """
    if not text:
        return []
    if limit <= 0 or len(text) <= limit:
        return [text]

    chunks: list[str] = []
    remaining = text
    while len(remaining) > limit:
        spans = parse_fence_spans(remaining)
        window = remaining[:limit]

        break_idx = _last_safe_break(window, spans)
        if break_idx > 0:
            chunk = remaining[:break_idx].rstrip()
            if chunk:
                chunks.append(chunk)
            if remaining[break_idx] == "\n":
                remaining = remaining[break_idx:].lstrip("\n")
            else:
                remaining = remaining[break_idx + 1:].lstrip(" \t")
            continue

        fence = _fence_at(spans, limit)
        if fence is not None and _can_split_fence(fence, limit):
            closing = "\n" + fence.marker
            max_idx = limit - len(closing)
            body_start = fence.start + len(fence.open_line) + 1
            split_idx = remaining.rfind("\n", body_start, max_idx)
            if split_idx <= body_start:
                split_idx = max_idx
            if split_idx > body_start:
                chunks.append(remaining[:split_idx].rstrip("\n") + closing)
                rest = remaining[split_idx:].lstrip("\n")
                remaining = fence.open_line + "\n" + rest
                continue

        chunk = remaining[:limit].rstrip()
        if chunk:
            chunks.append(chunk)
        remaining = remaining[limit:].lstrip("\n")
    if remaining:
        chunks.append(remaining)
    return chunks


def _inside_fence(spans: list[FenceSpan], idx: int) -> bool:
    return any(span.start < idx < span.end for span in spans)


def _fence_at(spans: list[FenceSpan], idx: int) -> Optional[FenceSpan]:
    for span in spans:
        if span.start < idx < span.end:
            return span
    return None


def _last_safe_break(window: str, spans: list[FenceSpan]) -> int:
    for idx in range(len(window) - 1, 0, -1):
        if window[idx] == "\n" and not _inside_fence(spans, idx):
            return idx
    for idx in range(len(window) - 1, 0, -1):
        if window[idx].isspace() and not _inside_fence(spans, idx):
            return idx
    return -1


def _can_split_fence(fence: FenceSpan, limit: int) -> bool:
    # room for the reopened fence line, one body line and the closing marker
    return len(fence.open_line) + len(fence.marker) + 3 < limit
