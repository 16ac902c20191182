"""Configuration loader for clawslack.

Loads configuration from files and environment variables:
- JSON5 parsing (comments, trailing commas, unquoted keys)
- $include directives: {"$include": "./extra.json"}
- ${ENV_VAR} environment variable substitution
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional, Union

import json5
from pydantic import ValidationError

from .schema import ClawSlackConfig

logger = logging.getLogger(__name__)

_cached_config: Optional[ClawSlackConfig] = None
_cached_path: Optional[Path] = None

_MAX_INCLUDE_DEPTH = 10

# ---------------------------------------------------------------------------
# $include + env-var substitution
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _substitute_env_vars(obj: Any) -> Any:
    """Recursively replace ${VAR} with os.environ values (unset vars stay as-is)."""
    if isinstance(obj, str):

        def _replace(m: re.Match) -> str:
            return os.environ.get(m.group(1), m.group(0))

        return _ENV_VAR_RE.sub(_replace, obj)
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(v) for v in obj]
    return obj


def _resolve_includes(obj: Any, base_dir: Path, depth: int = 0) -> Any:
    """Resolve {"$include": "./path.json"} directives recursively."""
    if depth > _MAX_INCLUDE_DEPTH:
        raise ValueError("$include depth limit exceeded (circular?)")

    if isinstance(obj, dict):
        if "$include" in obj and len(obj) == 1:
            include_path = base_dir / obj["$include"]
            if not include_path.exists():
                logger.warning(f"$include target not found: {include_path}")
                return {}
            included = json5.loads(include_path.read_text(encoding="utf-8"))
            return _resolve_includes(included, include_path.parent, depth + 1)
        return {k: _resolve_includes(v, base_dir, depth) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_resolve_includes(v, base_dir, depth) for v in obj]
    return obj


# ---------------------------------------------------------------------------
# Core load
# ---------------------------------------------------------------------------

def _config_candidates() -> list[Path]:
    return [
        Path.cwd() / "clawslack.json",
        Path.cwd() / "clawslack.json5",
        Path.cwd() / "config" / "clawslack.json",
        Path.home() / ".clawslack" / "config.json",
        Path.home() / ".clawslack" / "config.json5",
    ]


def _resolve_config_path(config_path: Optional[str | Path]) -> Optional[Path]:
    if config_path:
        return Path(config_path)
    for candidate in _config_candidates():
        if candidate.exists():
            return candidate
    return None


def load_config_raw(path: Path) -> dict[str, Any]:
    """
    Load a config file with JSON5 parsing, $include resolution, and env-var substitution.

    Returns the resolved config dict (ready for schema validation).
    """
    obj = json5.loads(path.read_text(encoding="utf-8"))
    obj = _resolve_includes(obj, path.parent)
    obj = _substitute_env_vars(obj)
    return obj if isinstance(obj, dict) else {}


def load_config(
    config_path: Optional[str | Path] = None,
    as_dict: bool = False,
) -> Union[ClawSlackConfig, dict[str, Any]]:
    """Load clawslack configuration.

    Args:
        config_path: Optional path to config file.  Supports JSON5.
        as_dict: If True, return a camelCase dict instead of ClawSlackConfig.

    Returns:
        Configuration object (ClawSlackConfig) or dictionary if as_dict=True.
    """
    global _cached_config, _cached_path

    path = _resolve_config_path(config_path)
    # cache is keyed by the resolved file
    if _cached_config is not None and _cached_path == path:
        return _dump(_cached_config) if as_dict else _cached_config

    config_dict: dict[str, Any] = {}

    if path and path.exists():
        try:
            config_dict = load_config_raw(path)
            logger.debug(f"Loaded config from {path}")
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to load config from {path}: {exc}")

    try:
        config_obj = ClawSlackConfig.model_validate(config_dict)
    except ValidationError as exc:
        logger.warning(f"Failed to parse config: {exc}")
        config_obj = ClawSlackConfig()

    _cached_config = config_obj
    _cached_path = path
    return _dump(config_obj) if as_dict else config_obj


def invalidate_config_cache() -> None:
    """Invalidate the in-process config cache so the next load_config() re-reads disk."""
    global _cached_config, _cached_path
    _cached_config = None
    _cached_path = None


def get_config_path() -> Path:
    """Get the path to the active configuration file.

    Returns the first existing well-known location, else the default
    user-level path (``~/.clawslack/config.json``) even if it does not
    yet exist.
    """
    for candidate in _config_candidates():
        if candidate.exists():
            return candidate
    return Path.home() / ".clawslack" / "config.json"


def _dump(config: ClawSlackConfig) -> dict[str, Any]:
    return config.model_dump(by_alias=True, exclude_none=True)
