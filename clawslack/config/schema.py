"""Configuration schema (pydantic)."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SlackConfig(BaseModel):
    """Slack channel settings."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    enabled: bool = True
    bot_token: Optional[str] = Field(default=None, alias="botToken")
    text_chunk_limit: Optional[int] = Field(default=None, alias="textChunkLimit", gt=0)
    media_max_mb: Optional[float] = Field(default=None, alias="mediaMaxMb", gt=0)


class ClawSlackConfig(BaseModel):
    """Top-level configuration.

    Slack settings may live at ``slack`` or ``channels.slack``; both are
    merged into ``slack`` with the top-level block winning per key.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    slack: SlackConfig = Field(default_factory=SlackConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_channels_slack(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        channels = data.get("channels")
        nested = channels.get("slack") if isinstance(channels, dict) else None
        if not isinstance(nested, dict):
            return data
        top = data.get("slack")
        merged = dict(nested)
        if isinstance(top, dict):
            merged.update(top)
        return {**data, "slack": merged}
