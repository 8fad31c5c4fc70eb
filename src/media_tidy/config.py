"""Configuration management for media-tidy."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Promotional markers stamped into downloaded course file names
DEFAULT_TRIM_PATTERNS: tuple[str, ...] = (
    "海量资源尽在：666java.com【海量资源： www.666java.com】",
    "【更多资源访问：  666java.com】",
    "【666资源站：666 java.com】",
    "【海量资源：666java.com】",
    "【海量一手：666java .com】",
    "【海量一手：666java.com】",
    "【666资源站：666java.com】",
    "海量资源尽在：666java.com",
    "海量资源：666java.com",
    "更多资源： www.666java.com",
    "【IT视频学习网-www.itspxx.com】",
)

# Suffix left behind by browsers when a download is duplicated
DEFAULT_DELETE_SUFFIX = "(1).mp4"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})


def parse_bool(value: Any, default: bool) -> bool:
    """Parse a loosely typed YAML value as a boolean.

    Args:
        value: Raw value from the config file.
        default: Returned when value is None.

    Returns:
        Parsed boolean.

    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class TidyConfig:
    """Configuration for a media-tidy run."""

    # Name of the quarantine directory created under the root
    trash_dir_name: str = "trash"

    # Files ending with this suffix are moved to the trash by "del"
    delete_suffix: str = DEFAULT_DELETE_SUFFIX

    # Ordered substrings removed from file names by "trim"
    trim_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_TRIM_PATTERNS))
    extra_trim_patterns: list[str] = field(default_factory=list)

    # Pattern given on the command line, tried before all others
    trim_override: str | None = None

    # Worker pool size (None = number of CPUs)
    workers: int | None = None

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None
    log_walk_errors: bool = False

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default configuration file path."""
        return Path.home() / ".config/media-tidy/config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> TidyConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Uses default if None.

        Returns:
            Loaded configuration.

        """
        if config_path is None:
            config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> TidyConfig:
        """Create config from dictionary."""
        config = cls()

        if "trash_dir" in data:
            config.trash_dir_name = str(data["trash_dir"])
        if "delete_suffix" in data:
            config.delete_suffix = str(data["delete_suffix"])
        if data.get("workers") is not None:
            config.workers = int(data["workers"])

        # Trim patterns
        if "trim" in data:
            trim = data["trim"] or {}
            if "patterns" in trim:
                config.trim_patterns = [str(p) for p in trim["patterns"] or []]
            if "extra_patterns" in trim:
                config.extra_trim_patterns = [str(p) for p in trim["extra_patterns"] or []]

        # Logging
        if "logging" in data:
            logging_cfg = data["logging"] or {}
            if "level" in logging_cfg:
                config.log_level = str(logging_cfg["level"]).upper()
            if logging_cfg.get("file"):
                config.log_file = Path(os.path.expanduser(logging_cfg["file"]))
            config.log_walk_errors = parse_bool(logging_cfg.get("walk_errors"), config.log_walk_errors)

        return config

    def active_trim_patterns(self) -> list[str]:
        """Built-in (or configured) patterns followed by the extra ones."""
        return [*self.trim_patterns, *self.extra_trim_patterns]

    @property
    def resolved_workers(self) -> int:
        """Worker pool size, falling back to the CPU count."""
        return self.workers if self.workers is not None else (os.cpu_count() or 1)
