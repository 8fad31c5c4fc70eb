"""Strip promotional markers out of file names."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .base import OperationResult

if TYPE_CHECKING:
    from ..config import TidyConfig
    from ..walker import FileEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameAttempt:
    """What happened when one pattern was tried against one file."""

    matched: bool
    destination: Path | None = None
    error: str | None = None


def build_trim_patterns(override: str | None, defaults: Iterable[str]) -> tuple[str, ...]:
    """Resolve the ordered pattern list once, before any worker starts.

    The override (if any) goes first so it always wins. Duplicates and
    empty patterns are dropped, keeping the first occurrence.

    Args:
        override: Pattern given on the command line.
        defaults: Built-in or configured patterns.

    Returns:
        Immutable ordered pattern tuple.

    """
    if override is not None and not override.strip():
        logger.warning("Ignoring empty trim pattern")
        override = None

    candidates = [override, *defaults] if override is not None else list(defaults)
    return tuple(dict.fromkeys(p for p in candidates if p))


def trimmed_name(name: str, pattern: str) -> str:
    """Remove every occurrence of ``pattern`` and strip the ends."""
    return name.replace(pattern, "").strip()


def try_rename(entry: FileEntry, pattern: str, log: logging.Logger | None = None) -> RenameAttempt:
    """Rename a file in place if its name contains ``pattern``.

    Never overwrites an existing file. Failures are logged and returned,
    not raised. The exists check and the rename are two steps, so
    concurrent callers must serialize calls that can share a target.
    """
    log = log or logger
    if pattern not in entry.name:
        return RenameAttempt(matched=False)

    new_name = trimmed_name(entry.name, pattern)
    if not new_name:
        error = "name would be empty after trimming"
        log.error("rename: %s error: %s", entry.name, error)
        return RenameAttempt(matched=True, error=error)

    destination = entry.path.with_name(new_name)
    if destination.exists():
        error = f"{new_name} already exists"
        log.error("rename: %s error: %s", entry.name, error)
        return RenameAttempt(matched=True, error=error)

    try:
        entry.path.rename(destination)
    except OSError as e:
        log.error("rename: %s error: %s", entry.name, e)
        return RenameAttempt(matched=True, error=str(e))

    return RenameAttempt(matched=True, destination=destination)


def rename_file(entry: FileEntry, pattern: str, log: logging.Logger | None = None) -> bool:
    """Trim ``pattern`` out of the file name.

    Returns:
        True if the name contained the pattern, whether or not the
        rename itself succeeded.

    """
    return try_rename(entry, pattern, log).matched


class TrimOperation:
    """Renames files by removing the first matching trim pattern."""

    OPERATION_NAME: str = "trim"

    def __init__(self, config: TidyConfig, logger: logging.Logger, trash_dir: Path | None = None) -> None:
        self.config = config
        self.logger = logger
        self.patterns = build_trim_patterns(config.trim_override, config.active_trim_patterns())
        # Held across the exists check and the rename of each match
        self._rename_lock = threading.Lock()

    def apply(self, entry: FileEntry) -> OperationResult:
        """Try each pattern in priority order and stop at the first match.

        A match counts as a success even if the rename failed; the failure
        is carried in ``error``.
        """
        for pattern in self.patterns:
            if pattern not in entry.name:
                continue
            with self._rename_lock:
                attempt = try_rename(entry, pattern, self.logger)
            if attempt.error is not None:
                return OperationResult(
                    path=entry.path,
                    success=True,
                    action="matched",
                    error=attempt.error,
                )
            self.logger.debug("Renamed: %s -> %s", entry.path, attempt.destination)
            return OperationResult(
                path=entry.path,
                success=True,
                action="renamed",
                destination=attempt.destination,
            )

        return OperationResult(path=entry.path, success=False, action="unmatched")
