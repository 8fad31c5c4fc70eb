"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from media_tidy.config import DEFAULT_DELETE_SUFFIX, DEFAULT_TRIM_PATTERNS, TidyConfig, parse_bool


class TestParseBool:
    """Tests for boolean parsing helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("TRUE", True),
            ("yes", True),
            ("on", True),
            ("1", True),
            ("false", False),
            ("no", False),
            ("off", False),
            ("0", False),
            ("random", False),
            ("", False),
        ],
    )
    def test_parse_bool_values(self, value: bool | str, expected: bool) -> None:
        """Test parsing various boolean representations."""
        assert parse_bool(value, False) == expected

    def test_parse_bool_none_uses_default(self) -> None:
        """Test that None returns the default value."""
        assert parse_bool(None, True) is True
        assert parse_bool(None, False) is False

    def test_parse_bool_integer(self) -> None:
        """Test parsing integer values."""
        assert parse_bool(1, False) is True
        assert parse_bool(0, True) is False


class TestTidyConfigDefaults:
    """Tests for default configuration values."""

    def test_default_values(self) -> None:
        """Test that defaults match the built-in behaviour."""
        config = TidyConfig()

        assert config.trash_dir_name == "trash"
        assert config.delete_suffix == DEFAULT_DELETE_SUFFIX == "(1).mp4"
        assert config.trim_patterns == list(DEFAULT_TRIM_PATTERNS)
        assert config.extra_trim_patterns == []
        assert config.trim_override is None
        assert config.workers is None
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.log_walk_errors is False

    def test_default_patterns(self) -> None:
        """Test the built-in pattern list is complete and ordered."""
        assert len(DEFAULT_TRIM_PATTERNS) == 11
        assert DEFAULT_TRIM_PATTERNS[3] == "【海量资源：666java.com】"
        assert DEFAULT_TRIM_PATTERNS[-1] == "【IT视频学习网-www.itspxx.com】"

    def test_instances_do_not_share_pattern_lists(self) -> None:
        """Test that mutating one config's patterns leaves others alone."""
        first = TidyConfig()
        second = TidyConfig()
        first.trim_patterns.append("extra")

        assert "extra" not in second.trim_patterns

    def test_resolved_workers_falls_back_to_cpu_count(self) -> None:
        """Test that unset workers resolves to a positive count."""
        assert TidyConfig().resolved_workers >= 1
        assert TidyConfig(workers=3).resolved_workers == 3

    def test_active_patterns_append_extras(self) -> None:
        """Test extra patterns come after the base patterns."""
        config = TidyConfig(trim_patterns=["a", "b"], extra_trim_patterns=["c"])
        assert config.active_trim_patterns() == ["a", "b", "c"]


class TestTidyConfigLoad:
    """Tests for loading configuration from YAML."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """Test that a missing config file yields the default config."""
        config = TidyConfig.load(tmp_path / "missing.yaml")
        assert config == TidyConfig()

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        """Test that an empty YAML file yields the default config."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        assert TidyConfig.load(config_path) == TidyConfig()

    def test_load_full_config(self, tmp_path: Path) -> None:
        """Test loading every supported key."""
        config_path = tmp_path / "config.yaml"
        data = {
            "trash_dir": "quarantine",
            "delete_suffix": "(2).mkv",
            "workers": 4,
            "trim": {"patterns": ["[ad]"], "extra_patterns": ["[promo]"]},
            "logging": {"level": "debug", "file": "~/tidy.log", "walk_errors": "yes"},
        }
        config_path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")

        config = TidyConfig.load(config_path)

        assert config.trash_dir_name == "quarantine"
        assert config.delete_suffix == "(2).mkv"
        assert config.workers == 4
        assert config.trim_patterns == ["[ad]"]
        assert config.extra_trim_patterns == ["[promo]"]
        assert config.active_trim_patterns() == ["[ad]", "[promo]"]
        assert config.log_level == "DEBUG"
        assert config.log_file == Path.home() / "tidy.log"
        assert config.log_walk_errors is True

    def test_partial_config_keeps_defaults(self, tmp_path: Path) -> None:
        """Test that unspecified keys keep their defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.dump({"trim": {"extra_patterns": ["【额外】"]}}, allow_unicode=True),
            encoding="utf-8",
        )

        config = TidyConfig.load(config_path)

        assert config.trim_patterns == list(DEFAULT_TRIM_PATTERNS)
        assert config.active_trim_patterns()[-1] == "【额外】"
        assert config.trash_dir_name == "trash"
        assert config.workers is None

    def test_default_config_path(self) -> None:
        """Test the default config location."""
        assert TidyConfig.get_config_path() == Path.home() / ".config/media-tidy/config.yaml"
