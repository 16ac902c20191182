"""Unit tests for configuration loader"""

from pathlib import Path

from clawslack.config.loader import (
    get_config_path,
    invalidate_config_cache,
    load_config,
)
from clawslack.config.schema import ClawSlackConfig
from clawslack.slack.send import split_slack_text
from clawslack.slack.token import resolve_slack_bot_token


def test_get_config_path(tmp_path, monkeypatch):
    """Falls back to the user-level path when nothing exists."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")

    assert get_config_path() == tmp_path / "home" / ".clawslack" / "config.json"

    (tmp_path / "clawslack.json").write_text("{}")
    assert get_config_path() == tmp_path / "clawslack.json"


def test_load_config_default(tmp_path):
    """Test loading default config when file doesn't exist"""
    config = load_config(tmp_path / "nonexistent.json")

    assert isinstance(config, ClawSlackConfig)
    assert config.slack.bot_token is None
    assert config.slack.enabled is True


def test_load_json5_with_aliases(tmp_path):
    config_path = tmp_path / "clawslack.json5"
    config_path.write_text(
        """
        {
          // Slack settings
          slack: {
            botToken: "xoxb-file",
            textChunkLimit: 1500,
            mediaMaxMb: 8,
          },
        }
        """
    )

    config = load_config(config_path)

    assert config.slack.bot_token == "xoxb-file"
    assert config.slack.text_chunk_limit == 1500
    assert config.slack.media_max_mb == 8


def test_load_config_as_dict_uses_camel_case(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"slack": {"botToken": "xoxb-file"}}')

    config = load_config(config_path, as_dict=True)

    assert config["slack"]["botToken"] == "xoxb-file"
    assert "textChunkLimit" not in config["slack"]


def test_env_var_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("TEST_SLACK_TOKEN", "xoxb-from-env")
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"slack": {"botToken": "${TEST_SLACK_TOKEN}"}}')

    config = load_config(config_path)

    assert config.slack.bot_token == "xoxb-from-env"


def test_include_directive(tmp_path):
    (tmp_path / "slack.json").write_text('{"botToken": "xoxb-included", "mediaMaxMb": 2}')
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"slack": {"$include": "./slack.json"}}')

    config = load_config(config_path)

    assert config.slack.bot_token == "xoxb-included"
    assert config.slack.media_max_mb == 2


def test_invalid_values_fall_back_to_defaults(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"slack": {"textChunkLimit": -1}}')

    config = load_config(config_path)

    assert config.slack.text_chunk_limit is None


def test_unparseable_file_falls_back_to_defaults(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text("{not valid json5")

    config = load_config(config_path)

    assert isinstance(config, ClawSlackConfig)


def test_config_is_cached_until_invalidated(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"slack": {"botToken": "xoxb-one"}}')
    assert load_config(config_path).slack.bot_token == "xoxb-one"

    config_path.write_text('{"slack": {"botToken": "xoxb-two"}}')
    assert load_config(config_path).slack.bot_token == "xoxb-one"

    invalidate_config_cache()
    assert load_config(config_path).slack.bot_token == "xoxb-two"


def test_explicit_path_is_not_shadowed_by_cache(tmp_path):
    first = tmp_path / "first.json"
    first.write_text('{"slack": {"botToken": "xoxb-first"}}')
    second = tmp_path / "second.json"
    second.write_text('{"slack": {"botToken": "xoxb-second"}}')

    assert load_config(first).slack.bot_token == "xoxb-first"
    assert load_config(second).slack.bot_token == "xoxb-second"


def test_channels_slack_block_reaches_send_path(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text('{"channels": {"slack": {"botToken": "xoxb-cfg", "textChunkLimit": 5}}}')

    config = load_config(config_path, as_dict=True)

    assert config["slack"]["botToken"] == "xoxb-cfg"
    assert config["slack"]["textChunkLimit"] == 5
    assert resolve_slack_bot_token(None, config) == "xoxb-cfg"
    assert split_slack_text("aaa bbb ccc", config) == ["aaa", "bbb", "ccc"]


def test_top_level_slack_block_wins_over_channels(tmp_path):
    config_path = tmp_path / "clawslack.json"
    config_path.write_text(
        '{"slack": {"botToken": "xoxb-top"},'
        ' "channels": {"slack": {"botToken": "xoxb-nested", "mediaMaxMb": 2}}}'
    )

    config = load_config(config_path)

    assert config.slack.bot_token == "xoxb-top"
    assert config.slack.media_max_mb == 2
