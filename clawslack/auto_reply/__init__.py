"""Outbound reply helpers"""

from .chunk import chunk_markdown_text, resolve_text_chunk_limit

__all__ = ["chunk_markdown_text", "resolve_text_chunk_limit"]
